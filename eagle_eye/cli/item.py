"""
Item commands.

Commands for browsing and editing library items:
- list: Item file paths (or item objects with an explicit format)
- info / thumbnail: Single item details
- update: Edit tags, annotation, URL or rating, for one ID or many via --stdin
- move-to-trash: Trash items (requires --force)
- add-from-url / add-from-urls / add-from-path / add-bookmark: Import new items
- refresh-thumbnail / refresh-palette: Regenerate derived data
"""

import json
import sys
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urlparse

import typer
from rich.markup import escape

from eagle_eye.cli.common import (
    batch_exit_code,
    emit,
    emit_lines,
    emit_plain,
    fail,
    get_eagle_client,
    get_state,
    handle_errors,
    split_csv,
    ui,
)
from eagle_eye.eagle import EagleConnectionError, EagleError
from eagle_eye.exit_codes import ExitCode
from eagle_eye.utils.stdin import read_ids_from_stdin

# Create item sub-app
item_app = typer.Typer(help="Item commands")


def item_file_path(library_path: str | Path, item: dict[str, Any], thumbnails: bool = False) -> Path:
    """
    Locate an item's file inside the library.

    Files live at `<library>/images/<id>.info/<name>.<ext>`. With
    `thumbnails`, the `<name>_thumbnail.png` next to it is preferred when it
    exists on disk.
    """
    item_dir = Path(library_path) / "images" / f"{item['id']}.info"
    name = item.get("name", "")
    if thumbnails:
        thumbnail = item_dir / f"{name}_thumbnail.png"
        if thumbnail.exists():
            return thumbnail
    return item_dir / f"{name}.{item.get('ext', '')}"


def _collect_ids(ctx: typer.Context, ids: str | None, stdin: bool) -> list[str]:
    if stdin:
        with handle_errors(ctx):
            collected = read_ids_from_stdin()
    else:
        collected = split_csv(ids) or []
    if not collected:
        fail(ctx, "No item IDs provided (pass IDs or use --stdin)", ExitCode.USAGE)
    return collected


def _default_name(url: str) -> str:
    return PurePosixPath(urlparse(url).path).stem or url


def _parse_url_items(ctx: typer.Context, text: str) -> list[dict[str, Any]]:
    """Validate a JSON array of `{"url": ..., ...}` objects, filling in missing names."""
    try:
        items = json.loads(text)
    except json.JSONDecodeError as e:
        fail(ctx, f"Invalid JSON: {e.msg}", ExitCode.USAGE)
    if not isinstance(items, list) or not items:
        fail(ctx, "Expected a non-empty JSON array of items", ExitCode.USAGE)
    for index, item in enumerate(items):
        if not isinstance(item, dict) or not isinstance(item.get("url"), str):
            fail(ctx, f'Item {index} must be an object with a "url" string', ExitCode.USAGE)
    return [{**item, "name": item.get("name") or _default_name(item["url"])} for item in items]


@item_app.command("list")
def item_list(
    ctx: typer.Context,
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum number of items"),
    offset: int | None = typer.Option(None, "--offset", "-O", help="Page offset"),
    order_by: str | None = typer.Option(None, "--order-by", help="Sort field, e.g. CREATEDATE or -NAME"),
    keyword: str | None = typer.Option(None, "--keyword", "-k", help="Filter by keyword in file name"),
    ext: str | None = typer.Option(None, "--ext", "-e", help="Filter by extension"),
    tags: str | None = typer.Option(None, "--tags", "-t", help="Comma-separated tags (OR)"),
    folders: str | None = typer.Option(None, "--folders", "-f", help="Comma-separated folder IDs (OR)"),
    url: str | None = typer.Option(None, "--url", "-u", help="Only items whose URL contains KEYWORD"),
    thumbnails: bool = typer.Option(False, "--thumbnails", "-T", help="Show thumbnail paths when available"),
):
    """List items as file paths."""
    config = get_state(ctx).output
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        with ui.spinner("Fetching items..."):
            items = client.item_list(
                limit=limit,
                offset=offset,
                order_by=order_by,
                keyword=keyword,
                ext=ext,
                tags=split_csv(tags),
                folders=split_csv(folders),
            )
            items = items or []
            library_path = None if config.explicit else client.library_details().library.path

        if url:
            items = [item for item in items if url in (item.get("url") or "")]

        if library_path is None:
            emit(ctx, items)
        else:
            emit_lines(ctx, [str(item_file_path(library_path, item, thumbnails)) for item in items])


@item_app.command("info")
def item_info(ctx: typer.Context, item_id: str = typer.Argument(..., help="Item ID")):
    """Show item details."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.item_info(item_id))


@item_app.command("thumbnail")
def item_thumbnail(ctx: typer.Context, item_id: str = typer.Argument(..., help="Item ID")):
    """Print the thumbnail path of an item."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit_plain(ctx, str(client.item_thumbnail(item_id)))


@item_app.command("update")
def item_update(
    ctx: typer.Context,
    item_id: str | None = typer.Argument(None, help="Item ID (omit when using --stdin)"),
    tags: str | None = typer.Option(None, "--tags", help="Comma-separated tags (replaces existing tags)"),
    annotation: str | None = typer.Option(None, "--annotation", help="Annotation text"),
    url: str | None = typer.Option(None, "--url", help="Source URL"),
    star: int | None = typer.Option(None, "--star", min=0, max=5, help="Star rating (0-5)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read item IDs from stdin (JSON array or one per line)"),
):
    """Update item properties."""
    ids = _collect_ids(ctx, item_id, stdin)

    if get_state(ctx).output.dry_run:
        ui.dry_run(f"update {len(ids)} item(s): {', '.join(ids)}")
        return

    updated: list[Any] = []
    failed: list[str] = []
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        for current in ids:
            try:
                updated.append(
                    client.item_update(current, tags=split_csv(tags), annotation=annotation, url=url, star=star)
                )
            except EagleConnectionError:
                raise
            except EagleError as e:
                ui.error(f"Failed to update {current}: {e.message}")
                failed.append(current)

    with handle_errors(ctx):
        if len(updated) == 1:
            emit(ctx, updated[0])
        elif updated:
            emit(ctx, updated)

    code = batch_exit_code(len(updated), len(failed))
    if failed and updated:
        ui.warning(f"Updated {len(updated)} of {len(ids)} item(s)")
    if code:
        raise typer.Exit(code)


@item_app.command("move-to-trash")
def item_move_to_trash(
    ctx: typer.Context,
    item_ids: str | None = typer.Argument(None, help="Comma-separated item IDs"),
    force: bool = typer.Option(False, "--force", help="Required to confirm this destructive operation"),
    stdin: bool = typer.Option(False, "--stdin", help="Read item IDs from stdin"),
):
    """Move items to the trash."""
    if not force:
        fail(ctx, "move-to-trash is destructive. Use --force to confirm.", ExitCode.USAGE)
    ids = _collect_ids(ctx, item_ids, stdin)

    if get_state(ctx).output.dry_run:
        ui.dry_run(f"move {len(ids)} item(s) to trash: {', '.join(ids)}")
        return

    with handle_errors(ctx), get_eagle_client(ctx) as client:
        result = client.item_move_to_trash(ids)
        ui.success(f"Moved {len(ids)} item(s) to trash")
        # Eagle answers this endpoint without a data member
        emit(ctx, result if result is not None else {"itemIds": ids})


@item_app.command("add-from-url")
def item_add_from_url(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Image URL"),
    name: str | None = typer.Option(None, "--name", help="Item name (default: file name from URL)"),
    website: str | None = typer.Option(None, "--website", help="Source web page"),
    tags: str | None = typer.Option(None, "--tags", help="Comma-separated tags"),
    annotation: str | None = typer.Option(None, "--annotation", help="Annotation text"),
    folder: str | None = typer.Option(None, "--folder", help="Target folder ID"),
):
    """Add an item from a URL."""
    name = name or _default_name(url)
    if get_state(ctx).output.dry_run:
        ui.dry_run(f"add {url} as {name!r}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        result = client.item_add_from_url(
            url, name, website=website, tags=split_csv(tags), annotation=annotation, folder_id=folder
        )
        ui.success(f"Added [bold]{escape(name)}[/bold]")
        emit(ctx, result)


@item_app.command("add-from-urls")
def item_add_from_urls(
    ctx: typer.Context,
    items_json: str = typer.Argument(
        ..., metavar="JSON", help='JSON array of items, each with "url" and optional "name", "tags", ... ("-" reads stdin)'
    ),
    folder: str | None = typer.Option(None, "--folder", "--folder-id", help="Target folder ID for all items"),
):
    """Add several items from URLs in one request."""
    items = _parse_url_items(ctx, sys.stdin.read() if items_json == "-" else items_json)
    if get_state(ctx).output.dry_run:
        ui.dry_run(f"add {len(items)} item(s): {', '.join(item['url'] for item in items)}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        result = client.item_add_from_urls(items, folder_id=folder)
        ui.success(f"Added {len(items)} item(s)")
        # Eagle answers this endpoint without a data member
        emit(ctx, result if result is not None else {"count": len(items)})


@item_app.command("add-from-path")
def item_add_from_path(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Local file to import"),
    name: str | None = typer.Option(None, "--name", help="Item name (default: file stem)"),
    website: str | None = typer.Option(None, "--website", help="Source web page"),
    tags: str | None = typer.Option(None, "--tags", help="Comma-separated tags"),
    annotation: str | None = typer.Option(None, "--annotation", help="Annotation text"),
    folder: str | None = typer.Option(None, "--folder", help="Target folder ID"),
):
    """Add an item from a local file."""
    name = name or path.stem
    if get_state(ctx).output.dry_run:
        ui.dry_run(f"add {path} as {name!r}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        result = client.item_add_from_path(
            str(path.expanduser().resolve()),
            name,
            website=website,
            tags=split_csv(tags),
            annotation=annotation,
            folder_id=folder,
        )
        ui.success(f"Added [bold]{escape(name)}[/bold]")
        emit(ctx, result)


@item_app.command("add-bookmark")
def item_add_bookmark(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Bookmark URL"),
    name: str | None = typer.Option(None, "--name", help="Bookmark name (default: the URL)"),
    base64: str | None = typer.Option(None, "--base64", help="Thumbnail as a base64 data URL"),
    tags: str | None = typer.Option(None, "--tags", help="Comma-separated tags"),
    folder: str | None = typer.Option(None, "--folder", help="Target folder ID"),
):
    """Save a bookmark."""
    name = name or url
    if get_state(ctx).output.dry_run:
        ui.dry_run(f"bookmark {url}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        result = client.item_add_bookmark(url, name, base64=base64, tags=split_csv(tags), folder_id=folder)
        ui.success(f"Bookmarked [bold]{escape(name)}[/bold]")
        emit(ctx, result)


@item_app.command("refresh-thumbnail")
def item_refresh_thumbnail(ctx: typer.Context, item_id: str = typer.Argument(..., help="Item ID")):
    """Regenerate an item's thumbnail."""
    if get_state(ctx).output.dry_run:
        ui.dry_run(f"refresh the thumbnail of {item_id}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.item_refresh_thumbnail(item_id))


@item_app.command("refresh-palette")
def item_refresh_palette(ctx: typer.Context, item_id: str = typer.Argument(..., help="Item ID")):
    """Recompute an item's color palette."""
    if get_state(ctx).output.dry_run:
        ui.dry_run(f"refresh the palette of {item_id}")
        return
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.item_refresh_palette(item_id))
