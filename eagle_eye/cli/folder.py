"""
Folder commands.

- list: Folder names, flattened or indented as a tree
- recent: Recently used folders
- create / rename / update: Folder mutations (honor --dry-run)
"""

from collections.abc import Iterator
from typing import Any

import typer
from rich.markup import escape

from eagle_eye.cli.common import emit, emit_lines, get_eagle_client, get_state, handle_errors, ui

# Create folder sub-app
folder_app = typer.Typer(help="Folder commands")


def walk_folders(folders: list[dict[str, Any]], depth: int = 0) -> Iterator[tuple[int, dict[str, Any]]]:
    """Yield (depth, folder) pairs depth-first, parents before children."""
    for folder in folders:
        yield depth, folder
        yield from walk_folders(folder.get("children") or [], depth + 1)


def folder_lines(folders: list[dict[str, Any]], tree: bool = False, recursive: bool = False) -> list[str]:
    """
    Derive display lines from the folder tree.

    Args:
        folders: Top-level folders as returned by the API
        tree: Indent children two spaces per depth level (implies recursive)
        recursive: Include nested folders

    Returns:
        One folder name per line
    """
    if not (tree or recursive):
        return [folder.get("name", "") for folder in folders]
    indent = "  " if tree else ""
    return [f"{indent * depth}{folder.get('name', '')}" for depth, folder in walk_folders(folders)]


@folder_app.command("list")
def folder_list(
    ctx: typer.Context,
    tree: bool = typer.Option(False, "--tree", "-t", help="Indent nested folders"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Include nested folders"),
):
    """List folders."""
    config = get_state(ctx).output
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        with ui.spinner("Fetching folders..."):
            folders = client.folder_list() or []
        if config.explicit:
            emit(ctx, folders)
        else:
            emit_lines(ctx, folder_lines(folders, tree=tree, recursive=recursive))


@folder_app.command("recent")
def folder_recent(ctx: typer.Context):
    """List recently used folders."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.folder_list_recent())


@folder_app.command("create")
def folder_create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="New folder name"),
    parent: str | None = typer.Option(None, "--parent", "-p", help="Parent folder ID"),
):
    """Create a folder."""
    if get_state(ctx).output.dry_run:
        where = f" under {parent}" if parent else ""
        ui.dry_run(f"create folder {name!r}{where}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        created = client.folder_create(name, parent=parent)
        ui.success(f"Created folder [bold]{escape(name)}[/bold]")
        emit(ctx, created)


@folder_app.command("rename")
def folder_rename(
    ctx: typer.Context,
    folder_id: str = typer.Argument(..., help="Folder ID"),
    new_name: str = typer.Argument(..., help="New folder name"),
):
    """Rename a folder."""
    if get_state(ctx).output.dry_run:
        ui.dry_run(f"rename folder {folder_id} to {new_name!r}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.folder_rename(folder_id, new_name))


@folder_app.command("update")
def folder_update(
    ctx: typer.Context,
    folder_id: str = typer.Argument(..., help="Folder ID"),
    name: str | None = typer.Option(None, "--name", help="New name"),
    description: str | None = typer.Option(None, "--description", help="New description"),
    color: str | None = typer.Option(None, "--color", help="New color (red, orange, green, yellow, aqua, blue, purple, pink)"),
):
    """Update a folder's name, description or color."""
    if get_state(ctx).output.dry_run:
        ui.dry_run(f"update folder {folder_id}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.folder_update(folder_id, new_name=name, new_description=description, new_color=color))
