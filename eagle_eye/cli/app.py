"""
Eagle application commands.

- info: Show Eagle version and platform details
- version: Print the running Eagle version
"""

import typer

from eagle_eye.cli.common import emit, emit_plain, get_eagle_client, handle_errors

# Create application sub-app
app_app = typer.Typer(help="Eagle application commands")


@app_app.command("info")
def app_info(ctx: typer.Context):
    """Show Eagle application info."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.application_info())


@app_app.command("version")
def app_version(ctx: typer.Context):
    """Print the running Eagle version."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        info = client.application_info() or {}
        emit_plain(ctx, str(info.get("version", "")))
