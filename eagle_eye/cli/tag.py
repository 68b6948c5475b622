"""
Tag commands.

- list: All tags
- recent: Recently used tags
- groups: Tag groups
- all: Tags, recent tags and groups in one object
"""

import typer

from eagle_eye.cli.common import emit, get_eagle_client, handle_errors

# Create tag sub-app
tag_app = typer.Typer(help="Tag commands")


@tag_app.command("list")
def tag_list(ctx: typer.Context):
    """List all tags."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.tag_list())


@tag_app.command("recent")
def tag_recent(ctx: typer.Context):
    """List recently used tags."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.tag_list_recent())


@tag_app.command("groups")
def tag_groups(ctx: typer.Context):
    """List tag groups."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.tag_groups())


@tag_app.command("all")
def tag_all(ctx: typer.Context):
    """Show tags, recent tags and tag groups together."""
    with handle_errors(ctx), get_eagle_client(ctx) as client:
        emit(ctx, client.tag_all())
