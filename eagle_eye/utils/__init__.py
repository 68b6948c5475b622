"""Shared utilities."""

from .stdin import parse_ids_input, read_ids_from_stdin
from .ui import Icons, UIHelper, console, set_quiet, ui

__all__ = [
    "Icons",
    "UIHelper",
    "console",
    "parse_ids_input",
    "read_ids_from_stdin",
    "set_quiet",
    "ui",
]
