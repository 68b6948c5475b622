"""
Common utilities shared across CLI commands.

This module provides:
- Per-invocation CLI state (output config and Eagle connection settings)
- Factory function for the Eagle client
- Output helpers that route every result through the render pipeline
- Error reporting that maps failures to exit codes
"""

import logging
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, NoReturn

import typer

from eagle_eye.config import EagleSettings, get_settings
from eagle_eye.eagle import EagleClient, EagleError
from eagle_eye.exit_codes import ExitCode
from eagle_eye.output import OutputConfig, OutputError, output_error, render, render_lines, render_plain
from eagle_eye.query import FilterError
from eagle_eye.utils.stdin import IdInputError
from eagle_eye.utils.ui import ui

__all__ = [
    "CLIState",
    "batch_exit_code",
    "emit",
    "emit_lines",
    "emit_plain",
    "fail",
    "get_eagle_client",
    "get_state",
    "handle_errors",
    "logger",
    "split_csv",
    "ui",
]

logger = logging.getLogger(__name__)

# Errors that carry their own exit code and a user-facing message
HANDLED_ERRORS = (EagleError, OutputError, FilterError, IdInputError)


@dataclass
class CLIState:
    """State resolved once by the root callback and shared by all commands."""

    output: OutputConfig = field(default_factory=OutputConfig)
    eagle: EagleSettings = field(default_factory=lambda: get_settings().eagle)


def get_state(ctx: typer.Context) -> CLIState:
    """Return the CLIState stored on the root context (created if missing)."""
    root = ctx.find_root()
    if not isinstance(root.obj, CLIState):
        root.obj = CLIState()
    return root.obj


def get_eagle_client(ctx: typer.Context) -> EagleClient:
    """Get an Eagle client configured from settings and global flags.

    Returns:
        EagleClient instance (use as a context manager)
    """
    eagle = get_state(ctx).eagle
    return EagleClient(host=eagle.host, port=eagle.port, timeout=eagle.timeout, token=eagle.token)


def fail(ctx: typer.Context, message: str, exit_code: int = ExitCode.ERROR) -> NoReturn:
    """Report an error on stderr and exit.

    With an explicit JSON-family format the error is printed as a JSON
    object so scripted consumers can parse it.
    """
    if get_state(ctx).output.structured:
        output_error(message, json_mode=True)
    else:
        ui.error(message)
    raise typer.Exit(int(exit_code))


@contextmanager
def handle_errors(ctx: typer.Context) -> Generator[None]:
    """Convert client, output and filter errors into a message and exit code."""
    try:
        yield
    except HANDLED_ERRORS as e:
        logger.debug("Command failed: %s", e, exc_info=True)
        fail(ctx, e.message, e.exit_code)


def emit(ctx: typer.Context, value: Any) -> None:
    """Render a command result with the invocation's output config."""
    render(value, get_state(ctx).output)


def emit_lines(ctx: typer.Context, lines: Sequence[str]) -> None:
    """Render derived strings (paths, names) with the invocation's output config."""
    render_lines(lines, get_state(ctx).output)


def emit_plain(ctx: typer.Context, text: str) -> None:
    """Render a single string: plain text by default, JSON when requested."""
    config = get_state(ctx).output
    if config.structured or config.jq is not None or config.count:
        render(text, config)
    else:
        render_plain(text)


def split_csv(value: str | None) -> list[str] | None:
    """Split a comma-separated option into trimmed, non-empty parts."""
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def batch_exit_code(succeeded: int, failed: int) -> int:
    """Exit code for a batch: all ok 0, all failed 1, mixed 4."""
    if failed == 0:
        return int(ExitCode.SUCCESS)
    if succeeded == 0:
        return int(ExitCode.ERROR)
    return int(ExitCode.PARTIAL)
