"""
CLI command modules.

Each module exposes a Typer sub-app registered by the root `cli.py`.
"""

from .app import app_app
from .folder import folder_app
from .item import item_app
from .library import library_app
from .tag import tag_app

__all__ = ["app_app", "folder_app", "item_app", "library_app", "tag_app"]
