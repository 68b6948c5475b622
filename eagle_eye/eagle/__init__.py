"""
Eagle API client module.
"""

from .client import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    EagleAPIError,
    EagleClient,
    EagleConnectionError,
    EagleError,
    EagleNotFoundError,
)
from .logging import configure_logging, get_logger
from .models import EagleResponse, LibraryInfo, LibraryRef

__all__ = [
    # Client
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "EagleClient",
    # Exceptions
    "EagleError",
    "EagleAPIError",
    "EagleConnectionError",
    "EagleNotFoundError",
    # Models
    "EagleResponse",
    "LibraryInfo",
    "LibraryRef",
    # Logging
    "configure_logging",
    "get_logger",
]
