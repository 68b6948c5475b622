#!/usr/bin/env python3
"""
CLI for the Eagle asset manager.

Talks to Eagle's local HTTP API and prints results as JSON, tables, CSV or
plain lines. Data goes to stdout; messages, errors and logs go to stderr.

This is the main entry point that assembles all subcommands from
the eagle_eye/cli/ modules.
"""

import typer
from rich.traceback import install

from eagle_eye import __version__
from eagle_eye.cli import app_app, folder_app, item_app, library_app, tag_app
from eagle_eye.cli.common import CLIState
from eagle_eye.config import get_settings
from eagle_eye.eagle import configure_logging, get_logger
from eagle_eye.output import OutputFormat, resolve_config
from eagle_eye.utils.ui import console, set_quiet

# Install Rich traceback handler for better error display
install(console=console, show_locals=False, width=120, word_wrap=True)

# Create main app
app = typer.Typer(
    name="eagle-eye",
    help="Command-line client for the Eagle asset manager",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

# Register sub-apps
app.add_typer(app_app, name="app")
app.add_typer(folder_app, name="folder")
app.add_typer(item_app, name="item")
app.add_typer(library_app, name="library")
app.add_typer(tag_app, name="tag")

logger = get_logger("cli")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"eagle-eye {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Shorthand for --output json"),
    output: OutputFormat | None = typer.Option(
        None,
        "--output",
        "-o",
        case_sensitive=False,
        help="Output format (default: table on a terminal, json when piped)",
    ),
    fields: str | None = typer.Option(None, "--fields", help="Comma-separated fields to keep"),
    count: bool = typer.Option(False, "--count", help="Print the number of records instead of the records"),
    no_header: bool = typer.Option(False, "--no-header", help="Omit table and CSV headers"),
    print0: bool = typer.Option(False, "--print0", help="Separate line output with NUL instead of newline"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what mutating commands would do"),
    quiet: bool = typer.Option(False, "--quiet", help="Suppress non-essential messages"),
    jq: str | None = typer.Option(None, "--jq", help="Filter expression applied to the result (jq syntax)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
    debug: bool = typer.Option(False, "--debug", help="Log HTTP and pipeline details to stderr"),
    host: str | None = typer.Option(None, "--host", help="Eagle API host (overrides EAGLE_HOST)"),
    port: int | None = typer.Option(None, "--port", help="Eagle API port (overrides EAGLE_PORT)"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show eagle-eye version"
    ),
):
    """Eagle asset manager from the command line."""
    settings = get_settings()

    if debug or settings.debug:
        level = "debug"
    elif verbose or settings.verbose:
        level = "info"
    else:
        level = "warning"
    configure_logging(level=level, file_path=settings.log_file)
    set_quiet(quiet)

    overrides = {key: value for key, value in (("host", host), ("port", port)) if value is not None}
    eagle = settings.eagle.model_copy(update=overrides)

    config = resolve_config(
        json_flag=json_output,
        output=output,
        fields=fields,
        count=count,
        no_header=no_header,
        print0=print0,
        dry_run=dry_run,
        quiet=quiet,
        jq=jq,
    )
    ctx.obj = CLIState(output=config, eagle=eagle)
    logger.debug("Using Eagle API at http://%s:%s", eagle.host, eagle.port)


if __name__ == "__main__":
    app()
