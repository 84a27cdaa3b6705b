"""Render changelog tag messages from commit ranges.

Each commit is rendered through a template containing ``{{token}}``
placeholders. Tokens are resolved from :data:`TOKEN_RESOLVERS` in one
left-to-right pass; substituted text is never scanned again, and unknown
placeholders are copied through unchanged.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

if typ.TYPE_CHECKING:
    from .github import Commit

__all__ = [
    "DEFAULT_TEMPLATE",
    "TOKEN_RESOLVERS",
    "render_changelog",
    "render_commit",
]

DEFAULT_TEMPLATE = "**1) {{message}}** {{author}}\n(SHA: {{sha}})\n"

_OPEN = "{{"
_CLOSE = "}}"

TOKEN_RESOLVERS: dict[str, cabc.Callable[[Commit], str]] = {
    "message": lambda commit: commit.message,
    "messageHeadline": lambda commit: commit.headline,
    "author": lambda commit: commit.author_login or "",
    "sha": lambda commit: commit.sha,
}


def render_commit(template: str, commit: Commit) -> str:
    """Return ``template`` with every recognised token replaced for ``commit``.

    Examples
    --------
    >>> from autotag.github import Commit
    >>> render_commit("{{sha}}: {{messageHeadline}}", Commit("abc", "fix\\nmore"))
    'abc: fix'
    """
    parts: list[str] = []
    position = 0
    while (start := template.find(_OPEN, position)) != -1:
        name_start = start + len(_OPEN)
        end = template.find(_CLOSE, name_start)
        if end == -1:
            break
        resolver = TOKEN_RESOLVERS.get(template[name_start:end])
        if resolver is None:
            # Not a token; keep the braces and resume just after them.
            parts.append(template[position:name_start])
            position = name_start
            continue
        parts.append(template[position:start])
        parts.append(resolver(commit))
        position = end + len(_CLOSE)
    parts.append(template[position:])
    return "".join(parts)


def render_changelog(
    commits: cabc.Iterable[Commit], template: str | None = None
) -> str:
    """Render each commit and join the blocks with newlines."""
    structure = template or DEFAULT_TEMPLATE
    return "\n".join(render_commit(structure, commit) for commit in commits)
