# Test configuration
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

from catalog_mcp.catalog import CatalogClient  # noqa: E402
from catalog_mcp.config import CatalogClientConfig  # noqa: E402
from catalog_mcp.tools import ToolDispatcher  # noqa: E402

BASE_URL = "https://catalog.test/v1/catalog"


class FakeUpstream:
    """Stands in for the catalog service and records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._reply: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={})
        )

    def reply_json(self, data: Any, status_code: int = 200) -> None:
        self._reply = lambda request: httpx.Response(status_code, json=data)

    def reply_content(self, content: bytes, status_code: int = 200, content_type: str = "") -> None:
        headers = {"Content-Type": content_type} if content_type else {}
        self._reply = lambda request: httpx.Response(status_code, content=content, headers=headers)

    def raise_error(self, exc: Exception) -> None:
        def reply(request: httpx.Request) -> httpx.Response:
            raise exc

        self._reply = reply

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._reply(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client_config() -> CatalogClientConfig:
    return CatalogClientConfig(
        api_key="test-key",
        api_domain="https://catalog.test/",
        api_base_path="v1/catalog",
    )


@pytest.fixture
def catalog_client(client_config, upstream) -> CatalogClient:
    return CatalogClient(client_config, transport=upstream.transport)


@pytest.fixture
def dispatcher(catalog_client) -> ToolDispatcher:
    return ToolDispatcher(catalog_client)
