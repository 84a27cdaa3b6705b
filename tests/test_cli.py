"""Tests for the :mod:`autotag.cli` entry point."""

from __future__ import annotations

import typing as typ

import pytest

from autotag import cli
from autotag.errors import TagCreationError

from ._helpers import parse_github_output

if typ.TYPE_CHECKING:
    from autotag.config import ActionConfig, RuntimeContext

    from .conftest import Workspace


@pytest.fixture
def captured_runs(monkeypatch: pytest.MonkeyPatch) -> list[ActionConfig]:
    """Replace the pipeline with a recorder of the configurations it receives."""
    configs: list[ActionConfig] = []

    def fake_run(config: ActionConfig, runtime: RuntimeContext) -> None:
        configs.append(config)

    monkeypatch.setattr(cli, "run", fake_run)
    return configs


def test_main_builds_config(captured_runs: list[ActionConfig]) -> None:
    """Keyword inputs are normalised into an ActionConfig."""
    cli.main(
        github_token="tok",
        overwrite="TRUE",
        tag_prefix="",
        tag_suffix="-rc",
        tag_message="notes",
    )

    (config,) = captured_runs
    assert config.token == "tok"  # noqa: S105
    assert config.overwrite is True
    assert config.tag_name("1.0.0") == "v1.0.0-rc"
    assert config.tag_message == "notes"


def test_inputs_are_read_from_environment(
    monkeypatch: pytest.MonkeyPatch, captured_runs: list[ActionConfig]
) -> None:
    """``INPUT_*`` variables feed the cyclopts parameters."""
    monkeypatch.setenv("INPUT_GITHUB_TOKEN", "env-token")
    monkeypatch.setenv("INPUT_TAG_PREFIX", "release-")
    monkeypatch.setenv("INPUT_PACKAGE_ROOT", "web")
    monkeypatch.setenv("INPUT_OVERWRITE", "true")

    cli.app([])

    (config,) = captured_runs
    assert config.token == "env-token"  # noqa: S105
    assert config.tag_prefix == "release-"
    assert config.package_root == "web"
    assert config.overwrite is True


def test_token_falls_back_to_github_token(
    monkeypatch: pytest.MonkeyPatch, captured_runs: list[ActionConfig]
) -> None:
    """GITHUB_TOKEN is used when the input is empty."""
    monkeypatch.setenv("GITHUB_TOKEN", "fallback")

    cli.main()

    assert captured_runs[0].token == "fallback"  # noqa: S105


def test_missing_token_fails_step(
    capsys: pytest.CaptureFixture[str], captured_runs: list[ActionConfig]
) -> None:
    """A missing token reports an error and exits with status 1."""
    with pytest.raises(SystemExit) as info:
        cli.main()

    assert info.value.code == 1
    assert "::error::Invalid or missing github token." in capsys.readouterr().err
    assert captured_runs == []


def test_missing_manifest_fails_step(
    monkeypatch: pytest.MonkeyPatch,
    workspace: Workspace,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """The pipeline's fatal manifest error becomes a failed step."""
    monkeypatch.setenv("GITHUB_WORKSPACE", str(workspace.root))

    with pytest.raises(SystemExit) as info:
        cli.main(github_token="tok", package_root="missing")

    assert info.value.code == 1
    assert "::error::package.json does not exist." in capsys.readouterr().err
    assert not workspace.output.exists()


def test_fatal_pipeline_error_fails_step(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Fatal errors raised by the run are reported once as errors."""

    def fake_run(config: ActionConfig, runtime: RuntimeContext) -> None:
        msg = "Resource not accessible by integration"
        raise TagCreationError(msg)

    monkeypatch.setattr(cli, "run", fake_run)

    with pytest.raises(SystemExit):
        cli.main(github_token="tok")

    err = capsys.readouterr().err
    assert err.count("::error::") == 1
    assert "::error::Resource not accessible by integration" in err
    assert "::warning::" not in err


def test_unparseable_manifest_does_not_fail_step(
    monkeypatch: pytest.MonkeyPatch,
    workspace: Workspace,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A manifest that cannot be parsed warns and leaves the step green."""
    (workspace.root / "package.json").write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("GITHUB_WORKSPACE", str(workspace.root))
    monkeypatch.setenv("GITHUB_REPOSITORY", "owner/repo")

    cli.main(github_token="tok")

    err = capsys.readouterr().err
    assert "::warning::Unable to parse" in err
    assert "::error::" not in err
    assert parse_github_output(workspace.output)["tagname"] == ""


def test_workspace_is_listed_before_token_check(
    monkeypatch: pytest.MonkeyPatch,
    workspace: Workspace,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """The debug listing is emitted even when the token is missing."""
    monkeypatch.setenv("GITHUB_WORKSPACE", str(workspace.root))

    with pytest.raises(SystemExit):
        cli.main()

    err = capsys.readouterr().err
    assert err.index("::debug:: Working Directory:") < err.index("::error::")
    assert "package.json" in err
