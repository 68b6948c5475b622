"""
Library commands.

- info: Library metadata, or one section of it
- history: Recently opened libraries
- switch: Open another library (honors --dry-run)
- current: Name and path of the open library
"""

import typer

from eagle_eye.cli.common import emit, emit_plain, fail, get_eagle_client, get_state, handle_errors, ui
from eagle_eye.exit_codes import ExitCode

# Create library sub-app
library_app = typer.Typer(help="Library commands")

# --flag -> key in the library info payload
INFO_SECTIONS = {
    "folders": "folders",
    "smart_folders": "smartFolders",
    "quick_access": "quickAccess",
    "tags_groups": "tagsGroups",
    "modification_time": "modificationTime",
}


@library_app.command("info")
def library_info(
    ctx: typer.Context,
    folders: bool = typer.Option(False, "--folders", "-f", help="Show folders only"),
    smart_folders: bool = typer.Option(False, "--smart-folders", "-s", help="Show smart folders only"),
    quick_access: bool = typer.Option(False, "--quick-access", "-q", help="Show quick access only"),
    tags_groups: bool = typer.Option(False, "--tags-groups", "-g", help="Show tag groups only"),
    modification_time: bool = typer.Option(False, "--modification-time", "-m", help="Show modification time only"),
):
    """Show library info."""
    flags = {
        "folders": folders,
        "smart_folders": smart_folders,
        "quick_access": quick_access,
        "tags_groups": tags_groups,
        "modification_time": modification_time,
    }
    selected = [name for name, enabled in flags.items() if enabled]
    if len(selected) > 1:
        fail(ctx, "Choose at most one section flag", ExitCode.USAGE)

    with handle_errors(ctx), get_eagle_client(ctx) as client:
        data = client.library_info() or {}
        emit(ctx, data.get(INFO_SECTIONS[selected[0]]) if selected else data)


@library_app.command("history")
def library_history(ctx: typer.Context):
    """List recently opened libraries."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.library_history())


@library_app.command("switch")
def library_switch(ctx: typer.Context, library_path: str = typer.Argument(..., help="Path to a .library folder")):
    """Switch to another library."""
    if get_state(ctx).output.dry_run:
        ui.dry_run(f"switch library to {library_path}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        result = client.library_switch(library_path)
        ui.success("Library switched")
        emit(ctx, result if result is not None else {"libraryPath": library_path})


@library_app.command("current")
def library_current(
    ctx: typer.Context,
    path: bool = typer.Option(False, "--path", "-p", help="Print only the library path"),
    name: bool = typer.Option(False, "--name", "-n", help="Print only the library name"),
):
    """Show the open library."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        library = client.library_details().library
        if path:
            emit_plain(ctx, library.path)
        elif name:
            emit_plain(ctx, library.name)
        else:
            emit(ctx, library)
