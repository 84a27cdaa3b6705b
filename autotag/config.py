"""Resolve action inputs and the runner environment.

GitHub Actions forwards ``with:`` inputs as ``INPUT_*`` strings. The CLI
collects them through cyclopts and hands the raw values to
:meth:`ActionConfig.from_inputs`, which applies the defaults and fallbacks.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import os
from pathlib import Path

from .errors import ConfigError, MissingTokenError

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TAG_PREFIX",
    "TOKEN_ENV_FALLBACKS",
    "ActionConfig",
    "RuntimeContext",
    "parse_overwrite",
    "resolve_token",
]

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TAG_PREFIX = "v"
TOKEN_ENV_FALLBACKS = ("GITHUB_TOKEN", "INPUT_GITHUB_TOKEN")


def parse_overwrite(value: str | None) -> bool:
    """Return True only for a case-insensitive ``"true"``.

    Examples
    --------
    >>> parse_overwrite("TRUE")
    True
    >>> parse_overwrite("yes")
    False
    >>> parse_overwrite(None)
    False
    """
    if not value:
        return False
    return value.strip().lower() == "true"


def resolve_token(
    github_token: str | None, environ: cabc.Mapping[str, str] | None = None
) -> str:
    """Return the token from the input or the environment fallbacks.

    Raises
    ------
    MissingTokenError
        When neither the input nor any fallback variable holds a token.
    """
    if github_token:
        return github_token
    env = os.environ if environ is None else environ
    for name in TOKEN_ENV_FALLBACKS:
        if token := env.get(name):
            return token
    msg = "Invalid or missing github token."
    raise MissingTokenError(msg)


@dc.dataclass(frozen=True, slots=True)
class ActionConfig:
    """Normalised action inputs.

    Attributes
    ----------
    token : str
        Token used to authenticate against the GitHub API.
    package_root : str
        Directory, relative to the workspace, holding ``package.json``.
    overwrite : bool
        Whether an existing tag of the same name is replaced.
    tag_prefix, tag_suffix : str
        Text placed around the manifest version to form the tag name.
    tag_message : str
        Explicit tag message; empty triggers changelog synthesis.
    changelog_structure : str
        Template override for changelog entries; empty selects the default.
    """

    token: str
    package_root: str = ""
    overwrite: bool = False
    tag_prefix: str = DEFAULT_TAG_PREFIX
    tag_suffix: str = ""
    tag_message: str = ""
    changelog_structure: str = ""

    @classmethod
    def from_inputs(  # noqa: PLR0913
        cls,
        *,
        github_token: str = "",
        package_root: str = "",
        overwrite: str = "",
        tag_prefix: str = "",
        tag_suffix: str = "",
        tag_message: str = "",
        changelog_structure: str = "",
        environ: cabc.Mapping[str, str] | None = None,
    ) -> ActionConfig:
        """Build a configuration from raw input strings.

        Surrounding whitespace is trimmed from every input, as the Actions
        toolkit does when reading ``with:`` values.
        """
        return cls(
            token=resolve_token(github_token.strip(), environ),
            package_root=package_root.strip(),
            overwrite=parse_overwrite(overwrite),
            tag_prefix=tag_prefix.strip() or DEFAULT_TAG_PREFIX,
            tag_suffix=tag_suffix.strip(),
            tag_message=tag_message.strip(),
            changelog_structure=changelog_structure.strip(),
        )

    def tag_name(self, version: str) -> str:
        """Return the tag name for ``version``."""
        return f"{self.tag_prefix}{version}{self.tag_suffix}"


@dc.dataclass(frozen=True, slots=True)
class RuntimeContext:
    """Values the runner exports for the triggering event."""

    workspace: Path
    sha: str | None = None
    repository: str | None = None
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls, environ: cabc.Mapping[str, str] | None = None) -> RuntimeContext:
        """Read the runner context from ``environ`` (default: ``os.environ``)."""
        env = os.environ if environ is None else environ
        workspace = env.get("GITHUB_WORKSPACE")
        return cls(
            workspace=Path(workspace) if workspace else Path.cwd(),
            sha=env.get("GITHUB_SHA") or None,
            repository=env.get("GITHUB_REPOSITORY") or None,
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
        )

    def owner_repo(self) -> tuple[str, str]:
        """Split ``GITHUB_REPOSITORY`` into owner and repository name."""
        if not self.repository:
            msg = "GITHUB_REPOSITORY is not set."
            raise ConfigError(msg)
        parts = self.repository.split("/")
        if len(parts) != 2 or not all(parts):  # noqa: PLR2004
            msg = f"Repository '{self.repository}' must be in owner/repo form."
            raise ConfigError(msg)
        return parts[0], parts[1]
