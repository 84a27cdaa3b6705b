"""Workflow commands and ``GITHUB_OUTPUT`` helpers.

Diagnostics are printed as GitHub workflow commands so the runner renders
them as annotations. Step outputs are appended to the file named by
``GITHUB_OUTPUT``.
"""

from __future__ import annotations

import collections.abc as cabc
import os
import sys
import typing as typ
import uuid
from pathlib import Path

__all__ = [
    "TAG_OUTPUT_KEYS",
    "debug",
    "error",
    "escape_data",
    "set_output",
    "set_outputs",
    "warning",
]

TAG_OUTPUT_KEYS: tuple[str, ...] = (
    "tagname",
    "tagsha",
    "taguri",
    "tagmessage",
    "tagref",
)


def escape_data(value: str) -> str:
    """Escape ``value`` for use as workflow command data."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _command(name: str, message: str, *, stream: typ.TextIO | None = None) -> None:
    target = stream if stream is not None else sys.stderr
    print(f"::{name}::{escape_data(message)}", file=target)


def debug(message: str, *, stream: typ.TextIO | None = None) -> None:
    """Emit a debug message, shown when step debug logging is enabled."""
    _command("debug", message, stream=stream)


def warning(message: str, *, stream: typ.TextIO | None = None) -> None:
    """Emit a warning annotation."""
    _command("warning", message, stream=stream)


def error(message: str, *, stream: typ.TextIO | None = None) -> None:
    """Emit an error annotation."""
    _command("error", message, stream=stream)


def _format_output(key: str, value: str) -> str:
    """Format one output entry; multi-line values use heredoc syntax."""
    if "\n" not in value and "\r" not in value:
        return f"{key}={value}\n"
    delimiter = f"gh_{key.upper()}_{uuid.uuid4().hex}"
    return f"{key}<<{delimiter}\n{value}\n{delimiter}\n"


def set_outputs(values: cabc.Mapping[str, str]) -> None:
    """Append ``values`` to ``GITHUB_OUTPUT``; a no-op when it is unset."""
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        for key, value in values.items():
            handle.write(_format_output(key, value))


def set_output(name: str, value: str) -> None:
    """Append a single output variable for downstream steps."""
    set_outputs({name: value})
