"""Tag a repository with the version declared in its ``package.json``.

The package reads the manifest version, checks the remote tags through the
GitHub REST API, and creates an annotated tag and reference, optionally with
a changelog message built from the commits since the previous tag.
"""

from __future__ import annotations

from .changelog import DEFAULT_TEMPLATE, render_changelog, render_commit
from .config import ActionConfig, RuntimeContext
from .errors import (
    AutotagError,
    ConfigError,
    FatalError,
    GitHubAPIError,
    InvalidManifestError,
    ManifestError,
    MissingTokenError,
    RefCreationError,
    TagCreationError,
)
from .github import Commit, GitHubClient, Reference, Tag, TagObject
from .pipeline import TagResult, run

__all__ = [
    "DEFAULT_TEMPLATE",
    "ActionConfig",
    "AutotagError",
    "Commit",
    "ConfigError",
    "FatalError",
    "GitHubAPIError",
    "GitHubClient",
    "InvalidManifestError",
    "ManifestError",
    "MissingTokenError",
    "Reference",
    "RefCreationError",
    "RuntimeContext",
    "Tag",
    "TagCreationError",
    "TagObject",
    "TagResult",
    "render_changelog",
    "render_commit",
    "run",
]
