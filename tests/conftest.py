"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock, patch

import httpx
import pytest

from eagle_eye.eagle.client import EagleClient
from eagle_eye.output import OutputConfig, OutputFormat


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user config files and EAGLE_* variables out of tests."""
    for key in ("EAGLE_HOST", "EAGLE_PORT", "EAGLE_TIMEOUT", "EAGLE_TOKEN"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    import eagle_eye.config as config_module

    monkeypatch.setattr(config_module, "_settings", None)


# ============================================================================
# Sample data
# ============================================================================


@pytest.fixture
def records() -> list[dict[str, Any]]:
    """Two homogeneous records."""
    return [{"id": "a", "name": "Alpha"}, {"id": "b", "name": "Beta"}]


@pytest.fixture
def make_config() -> Callable[..., OutputConfig]:
    """Build an explicit OutputConfig for a format."""

    def _make(fmt: OutputFormat = OutputFormat.JSON, **kwargs: Any) -> OutputConfig:
        return OutputConfig(format=fmt, explicit=True, **kwargs)

    return _make


# ============================================================================
# Eagle client mocks
# ============================================================================


def eagle_transport(routes: dict[str, Any], status: str = "success") -> httpx.MockTransport:
    """
    Transport answering `/api/<resource>/<action>` paths from a dict.

    Values are wrapped in the {status, data} envelope; callables receive the
    request and return an httpx.Response themselves.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"status": "error"})
        if callable(route):
            return route(request)
        return httpx.Response(200, content=json.dumps({"status": status, "data": route}))

    return httpx.MockTransport(handler)


@pytest.fixture
def make_client() -> Callable[..., EagleClient]:
    """Build a real EagleClient on top of a MockTransport."""

    def _make(routes: dict[str, Any], **kwargs: Any) -> EagleClient:
        return EagleClient(transport=eagle_transport(routes), **kwargs)

    return _make


@pytest.fixture
def mock_eagle_client():
    """
    Patch the client used by CLI commands.

    Yields the MagicMock instance commands receive from `get_eagle_client`.
    """
    client = MagicMock(spec=EagleClient)
    client.__enter__.return_value = client
    with patch("eagle_eye.cli.common.EagleClient", return_value=client):
        yield client
