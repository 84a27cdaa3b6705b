"""Read the package version from ``package.json``."""

from __future__ import annotations

import json
from pathlib import Path

from .errors import InvalidManifestError, ManifestError

__all__ = ["MANIFEST_NAME", "manifest_path", "read_manifest_version"]

MANIFEST_NAME = "package.json"


def manifest_path(workspace: Path, package_root: str = "") -> Path:
    """Return the manifest location under ``workspace``."""
    return workspace / package_root / MANIFEST_NAME


def read_manifest_version(path: Path) -> str:
    """Return the ``version`` field of the manifest at ``path``.

    Numeric versions are converted to text, so ``{"version": 1}`` yields
    ``"1"``.

    Raises
    ------
    ManifestError
        When the file does not exist. This is the only fatal manifest error.
    InvalidManifestError
        When the file cannot be read or decoded, is not a JSON object, or has
        no usable ``version``.
    """
    if not path.is_file():
        msg = f"{MANIFEST_NAME} does not exist."
        raise ManifestError(msg)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"Unable to parse {path}: {exc}"
        raise InvalidManifestError(msg) from exc

    if not isinstance(data, dict):
        msg = f"{path} does not contain a JSON object."
        raise InvalidManifestError(msg)

    version = data.get("version")
    if isinstance(version, bool) or not isinstance(version, str | int | float):
        msg = f"Could not read version from {path}."
        raise InvalidManifestError(msg)
    return str(version)
