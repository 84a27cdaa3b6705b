"""Command-line entry point for the autotag action.

Examples
--------
Tag the current checkout using the runner's environment::

    export GITHUB_WORKSPACE="$(pwd)" GITHUB_REPOSITORY=owner/repo
    export GITHUB_SHA="$(git rev-parse HEAD)" GITHUB_OUTPUT="$(mktemp)"
    INPUT_GITHUB_TOKEN=ghp_... INPUT_TAG_PREFIX=release- uv run autotag
"""

from __future__ import annotations

import cyclopts
from cyclopts import App

from . import output
from .config import ActionConfig, RuntimeContext
from .errors import FatalError
from .pipeline import describe_workspace, run

app: App = App(
    help="Tag the commit with the version declared in package.json.",
    config=cyclopts.config.Env("INPUT_", command=False),
)


@app.default
def main(  # noqa: PLR0913
    *,
    github_token: str = "",
    package_root: str = "",
    overwrite: str = "false",
    tag_prefix: str = "v",
    tag_suffix: str = "",
    tag_message: str = "",
    changelog_structure: str = "",
) -> None:
    """Ensure a tag exists for the version in ``package.json``.

    Parameters
    ----------
    github_token
        Token for the GitHub API; falls back to ``GITHUB_TOKEN``.
    package_root
        Directory, relative to the workspace, containing ``package.json``.
    overwrite
        ``true`` to replace an existing tag with the same name.
    tag_prefix
        Text placed before the version in the tag name.
    tag_suffix
        Text placed after the version in the tag name.
    tag_message
        Tag message; left empty, a changelog is generated from commits.
    changelog_structure
        Template for each changelog entry. Supports ``{{message}}``,
        ``{{messageHeadline}}``, ``{{author}}`` and ``{{sha}}``.

    Raises
    ------
    SystemExit
        Raised with exit code ``1`` when the token or manifest is missing, or
        when the tag or its reference cannot be created.
    """
    runtime = RuntimeContext.from_env()
    describe_workspace(runtime)
    try:
        config = ActionConfig.from_inputs(
            github_token=github_token,
            package_root=package_root,
            overwrite=overwrite,
            tag_prefix=tag_prefix,
            tag_suffix=tag_suffix,
            tag_message=tag_message,
            changelog_structure=changelog_structure,
        )
        run(config, runtime)
    except FatalError as exc:
        output.error(str(exc))
        raise SystemExit(1) from exc


if __name__ == "__main__":
    app()
