"""
Eagle local HTTP API client.

Endpoints follow `http://<host>:<port>/api/<resource>/<action>` and answer
with a `{"status": "success", "data": ...}` envelope.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from eagle_eye.exit_codes import ExitCode

from .models import EagleResponse, LibraryInfo

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 41595


class EagleError(Exception):
    """Base exception for Eagle API errors."""

    exit_code = int(ExitCode.ERROR)

    def __init__(self, message: str, status_code: int | None = None, response: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        return self.message


class EagleConnectionError(EagleError):
    """Eagle is not running or did not answer in time."""

    exit_code = int(ExitCode.CONNECTION)


class EagleNotFoundError(EagleError):
    """Resource not found error."""

    pass


class EagleAPIError(EagleError):
    """Eagle answered with an error status."""

    pass


def _csv(values: list[str] | str | None) -> str | None:
    if values is None:
        return None
    if isinstance(values, str):
        return values
    return ",".join(values)


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


class EagleClient:
    """
    Eagle API client.

    Every public method returns the decoded `data` member of the response.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float = 30.0,
        token: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the Eagle client.

        Args:
            host: Hostname Eagle listens on
            port: Eagle API port
            timeout: Request timeout in seconds
            token: Optional API token (sent as the `token` query parameter)
            transport: Custom httpx transport (tests)
        """
        self.host = host
        self.port = port
        self.base_url = f"http://{host}:{port}"
        self.timeout = timeout
        self.token = token

        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def _request(
        self,
        method: str,
        resource: str,
        action: str,
        params: dict | None = None,
        json: dict | None = None,
    ) -> Any:
        """
        Make an API request.

        Args:
            method: HTTP method
            resource: API resource (e.g., "item")
            action: Resource action (e.g., "list")
            params: Query parameters (None values dropped)
            json: JSON body (None values dropped)

        Returns:
            The `data` member of the response envelope

        Raises:
            EagleError: On API errors
        """
        url = f"/api/{resource}/{action}"
        params = _drop_none(params or {})
        if self.token:
            params["token"] = self.token
        body = _drop_none(json) if json is not None else None

        logger.debug("Eagle API request: %s %s params=%s", method, url, params)

        try:
            response = self._client.request(method=method, url=url, params=params or None, json=body)
        except httpx.ConnectError as e:
            logger.debug("Eagle connection error: %s", e)
            raise EagleConnectionError(f"Failed to connect to Eagle at {self.base_url}. Is Eagle running?") from e
        except httpx.TimeoutException as e:
            logger.debug("Eagle timeout: %s", e)
            raise EagleConnectionError(f"Request timed out: {e}") from e

        if response.status_code == 404:
            logger.debug("Eagle resource not found: %s", url)
            raise EagleNotFoundError(f"Resource not found: {url}", status_code=404)
        if response.status_code >= 400:
            logger.debug("Eagle API error: %d for %s", response.status_code, url)
            raise EagleAPIError(
                f"API error: {response.status_code} for {url}",
                status_code=response.status_code,
                response=response.text or None,
            )

        logger.debug("Eagle API response: %d", response.status_code)

        try:
            envelope = EagleResponse.model_validate(response.json())
        except ValueError as e:
            # ValidationError is a ValueError too
            preview = response.text[:200] if response.text else "(empty)"
            logger.debug("Eagle returned an unexpected response: %s", e)
            raise EagleAPIError(
                f"Eagle returned an invalid response for {url}: {preview}",
                status_code=response.status_code,
            ) from e

        if not envelope.ok:
            raise EagleAPIError(
                envelope.message or f"Eagle reported status {envelope.status!r} for {url}",
                status_code=response.status_code,
                response=envelope.model_dump(),
            )
        return envelope.data

    def _get(self, resource: str, action: str, params: dict | None = None) -> Any:
        """Make a GET request."""
        return self._request("GET", resource, action, params=params)

    def _post(self, resource: str, action: str, json: dict | None = None) -> Any:
        """Make a POST request."""
        return self._request("POST", resource, action, json=json or {})

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "EagleClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =====================
    # Application
    # =====================

    def application_info(self) -> dict:
        """Get Eagle version and platform details."""
        return self._get("application", "info")

    # =====================
    # Folders
    # =====================

    def folder_list(self) -> list[dict]:
        """Get the folder tree."""
        return self._get("folder", "list")

    def folder_list_recent(self) -> list[dict]:
        """Get recently used folders."""
        return self._get("folder", "listRecent")

    def folder_create(self, name: str, parent: str | None = None) -> dict:
        """Create a folder, optionally under a parent folder ID."""
        return self._post("folder", "create", {"folderName": name, "parent": parent})

    def folder_rename(self, folder_id: str, new_name: str) -> dict:
        return self._post("folder", "rename", {"folderId": folder_id, "newName": new_name})

    def folder_update(
        self,
        folder_id: str,
        new_name: str | None = None,
        new_description: str | None = None,
        new_color: str | None = None,
    ) -> dict:
        """Update folder name, description or color."""
        return self._post(
            "folder",
            "update",
            {
                "folderId": folder_id,
                "newName": new_name,
                "newDescription": new_description,
                "newColor": new_color,
            },
        )

    # =====================
    # Items
    # =====================

    def item_list(
        self,
        limit: int | None = None,
        offset: int | None = None,
        order_by: str | None = None,
        keyword: str | None = None,
        ext: str | None = None,
        tags: list[str] | str | None = None,
        folders: list[str] | str | None = None,
    ) -> list[dict]:
        """
        List items matching the given filters.

        Args:
            limit: Maximum items to return
            offset: Page offset
            order_by: Sort field, e.g. "CREATEDATE" or "-NAME"
            keyword: Match against file names
            ext: File extension filter
            tags: Tags (OR semantics)
            folders: Folder IDs (OR semantics)
        """
        params = {
            "limit": limit,
            "offset": offset,
            "orderBy": order_by,
            "keyword": keyword,
            "ext": ext,
            "tags": _csv(tags),
            "folders": _csv(folders),
        }
        return self._get("item", "list", params)

    def item_info(self, item_id: str) -> dict:
        return self._get("item", "info", {"id": item_id})

    def item_thumbnail(self, item_id: str) -> str:
        """Get the thumbnail file path of an item."""
        return self._get("item", "thumbnail", {"id": item_id})

    def item_update(
        self,
        item_id: str,
        tags: list[str] | None = None,
        annotation: str | None = None,
        url: str | None = None,
        star: int | None = None,
    ) -> dict:
        """Update item metadata; omitted fields are left unchanged."""
        return self._post(
            "item",
            "update",
            {"id": item_id, "tags": tags, "annotation": annotation, "url": url, "star": star},
        )

    def item_move_to_trash(self, item_ids: list[str]) -> Any:
        return self._post("item", "moveToTrash", {"itemIds": list(item_ids)})

    def item_add_from_url(
        self,
        url: str,
        name: str,
        website: str | None = None,
        tags: list[str] | None = None,
        annotation: str | None = None,
        folder_id: str | None = None,
    ) -> Any:
        """Download an image from a URL into the library."""
        return self._post(
            "item",
            "addFromURL",
            {
                "url": url,
                "name": name,
                "website": website,
                "tags": tags,
                "annotation": annotation,
                "folderId": folder_id,
            },
        )

    def item_add_from_urls(self, items: list[dict[str, Any]], folder_id: str | None = None) -> Any:
        """Download several images in one request. Each item needs a `url`."""
        return self._post("item", "addFromURLs", {"items": list(items), "folderId": folder_id})

    def item_add_from_path(
        self,
        path: str,
        name: str,
        website: str | None = None,
        tags: list[str] | None = None,
        annotation: str | None = None,
        folder_id: str | None = None,
    ) -> Any:
        """Import a local file into the library."""
        return self._post(
            "item",
            "addFromPath",
            {
                "path": path,
                "name": name,
                "website": website,
                "tags": tags,
                "annotation": annotation,
                "folderId": folder_id,
            },
        )

    def item_add_bookmark(
        self,
        url: str,
        name: str,
        base64: str | None = None,
        tags: list[str] | None = None,
        folder_id: str | None = None,
    ) -> Any:
        """Save a bookmark item."""
        return self._post(
            "item",
            "addBookmark",
            {"url": url, "name": name, "base64": base64, "tags": tags, "folderId": folder_id},
        )

    def item_refresh_thumbnail(self, item_id: str) -> Any:
        return self._post("item", "refreshThumbnail", {"id": item_id})

    def item_refresh_palette(self, item_id: str) -> Any:
        return self._post("item", "refreshPalette", {"id": item_id})

    # =====================
    # Library
    # =====================

    def library_info(self) -> dict:
        """Get folders, smart folders, tag groups and the open library."""
        return self._get("library", "info")

    def library_details(self) -> LibraryInfo:
        """Library info validated into a model."""
        try:
            return LibraryInfo.model_validate(self.library_info())
        except ValidationError as e:
            raise EagleAPIError(f"Unexpected library info response: {e}") from e

    def library_history(self) -> list[str]:
        """Get recently opened library paths."""
        return self._get("library", "history")

    def library_switch(self, library_path: str) -> Any:
        return self._post("library", "switch", {"libraryPath": library_path})

    # =====================
    # Tags
    # =====================

    def tag_list(self) -> list[Any]:
        return self._get("tag", "list")

    def tag_list_recent(self) -> list[Any]:
        return self._get("tag", "listRecent")

    def tag_groups(self) -> list[Any]:
        return self._get("tag", "groups")

    def tag_all(self) -> dict[str, Any]:
        """Tags, recently used tags and tag groups in one object."""
        return {
            "tags": self.tag_list(),
            "recent": self.tag_list_recent(),
            "groups": self.tag_groups(),
        }
