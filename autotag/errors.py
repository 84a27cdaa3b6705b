"""Error types shared across the autotag package.

Errors deriving from :class:`FatalError` stop the run and fail the workflow
step. Everything else is either recovered from locally or lands in the
catch-all, which blanks the tag outputs and reports a warning.
"""

from __future__ import annotations

__all__ = [
    "AutotagError",
    "ConfigError",
    "FatalError",
    "GitHubAPIError",
    "InvalidManifestError",
    "ManifestError",
    "MissingTokenError",
    "RefCreationError",
    "TagCreationError",
]


class AutotagError(RuntimeError):
    """Base class for errors raised by the tagging run."""


class FatalError(AutotagError):
    """Raised when the run must stop and report a failed step."""


class MissingTokenError(FatalError):
    """Raised when no GitHub token can be resolved."""


class ManifestError(FatalError):
    """Raised when ``package.json`` does not exist."""


class TagCreationError(FatalError):
    """Raised when the annotated tag object cannot be created."""


class RefCreationError(FatalError):
    """Raised when the tag reference cannot be created."""


class ConfigError(AutotagError):
    """Raised when the runtime environment is incomplete."""


class InvalidManifestError(AutotagError):
    """Raised when ``package.json`` exists but cannot be read or parsed."""


class GitHubAPIError(AutotagError):
    """Raised when a GitHub REST call fails."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
