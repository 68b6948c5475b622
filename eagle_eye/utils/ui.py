"""
Rich UI utilities for diagnostic console output.

Everything here prints to stderr so stdout stays reserved for rendered data.

Usage:
    from eagle_eye.utils.ui import console, ui

    ui.success("Folder created")
    ui.error("Something went wrong", details="Connection refused")
    ui.dry_run("move 3 item(s) to trash")

    with ui.spinner("Fetching items..."):
        fetch()
"""

from collections.abc import Generator
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape
from rich.status import Status
from rich.text import Text
from rich.theme import Theme

# =============================================================================
# Custom Theme
# =============================================================================

EAGLE_THEME = Theme(
    {
        # Status colors
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "debug": "dim",
        "muted": "dim white",
        # Data types
        "item.id": "cyan",
        "folder.name": "bold blue",
        "tag": "magenta",
    }
)

# =============================================================================
# Global Console
# =============================================================================

console = Console(theme=EAGLE_THEME, stderr=True, highlight=False)


class Icons:
    """Unicode icons for consistent visual feedback."""

    SUCCESS = "✓"
    WARNING = "⚠"


# =============================================================================
# UI Helper Class
# =============================================================================


class UIHelper:
    """Central UI helper for consistent stderr output."""

    def __init__(self, console: Console, quiet: bool = False):
        self.console = console
        self.quiet = quiet
        self.icons = Icons

    # -------------------------------------------------------------------------
    # Status Messages
    # -------------------------------------------------------------------------

    def success(self, message: str, details: str | None = None, prefix: str = Icons.SUCCESS) -> None:
        """Print a success message (suppressed when quiet)."""
        if self.quiet:
            return
        text = Text()
        text.append(f"{prefix} ", style="success")
        text.append_text(Text.from_markup(message))
        if details:
            text.append(f"\n   {details}", style="muted")
        self.console.print(text)

    def error(self, message: str, details: str | None = None) -> None:
        """Print an error line. Never suppressed."""
        text = Text()
        text.append("Error: ", style="error")
        text.append(message)
        if details:
            text.append(f"\n   {details}", style="muted")
        self.console.print(text, soft_wrap=True)

    def warning(self, message: str, details: str | None = None, prefix: str = Icons.WARNING) -> None:
        """Print a warning message."""
        text = Text()
        text.append(f"{prefix} ", style="warning")
        text.append_text(Text.from_markup(message))
        if details:
            text.append(f"\n   {details}", style="muted")
        self.console.print(text)

    def dry_run(self, action: str) -> None:
        """Announce what a mutating command would have done."""
        self.console.print(f"dry-run: would {escape(action)}", style="warning", soft_wrap=True)

    # -------------------------------------------------------------------------
    # Progress & Spinners
    # -------------------------------------------------------------------------

    @contextmanager
    def spinner(
        self,
        message: str,
        spinner_name: str = "dots",
        style: str = "info",
    ) -> Generator[Status | None]:
        """Context manager for a spinner; yields None when quiet or not a terminal."""
        if self.quiet or not self.console.is_terminal:
            yield None
            return
        with self.console.status(f"[{style}]{message}[/{style}]", spinner=spinner_name) as status:
            yield status


# Global UI helper instance
ui = UIHelper(console)


def set_quiet(quiet: bool) -> None:
    """Toggle suppression of non-essential messages."""
    ui.quiet = quiet
