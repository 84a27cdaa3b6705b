"""Shared fixtures for the autotag tests."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

import pytest

from autotag.config import ActionConfig, RuntimeContext

from ._helpers import TEST_SHA, TEST_TOKEN, FakeGitHub, write_manifest


class Workspace(typ.NamedTuple):
    """Paths prepared for a pipeline run."""

    root: Path
    output: Path


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Workspace:
    """Create a workspace with ``package.json`` at version ``1.2.3``."""
    root = tmp_path / "workspace"
    write_manifest(root, "1.2.3")
    output = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    return Workspace(root=root, output=output)


@pytest.fixture
def runtime(workspace: Workspace) -> RuntimeContext:
    """Runtime context pointing at the prepared workspace."""
    return RuntimeContext(
        workspace=workspace.root, sha=TEST_SHA, repository="owner/repo"
    )


@pytest.fixture
def make_config() -> cabc.Callable[..., ActionConfig]:
    """Return a factory for configurations carrying a test token."""

    def _make(**overrides: typ.Any) -> ActionConfig:  # noqa: ANN401
        return ActionConfig(token=TEST_TOKEN, **overrides)

    return _make


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Recording GitHub double with no tags."""
    return FakeGitHub()
