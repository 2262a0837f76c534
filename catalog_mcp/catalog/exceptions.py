"""Exceptions raised by the catalog API client."""

from typing import Any

from catalog_mcp.exceptions import CatalogMCPError


class CatalogAPIError(CatalogMCPError):
    """Base exception for failures talking to the catalog service."""
    pass


class UpstreamHTTPError(CatalogAPIError):
    """Raised when the catalog service answers with a non-2xx status.

    Attributes:
        method: HTTP method of the failed request.
        url: Full URL of the failed request.
        status_code: HTTP status code from the service.
        body: Decoded response body (JSON when possible, otherwise text).
    """

    def __init__(self, method: str, url: str, status_code: int, body: Any = None):
        super().__init__(
            message=f"Request failed with status code {status_code}",
            code="UPSTREAM_HTTP_ERROR",
        )
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body


class UpstreamTimeoutError(CatalogAPIError):
    """Raised when the catalog service doesn't respond in time.

    Attributes:
        url: URL of the request that timed out.
    """

    def __init__(self, url: str):
        super().__init__(
            message=f"Request to '{url}' timed out",
            code="UPSTREAM_TIMEOUT",
        )
        self.url = url


class UpstreamUnavailableError(CatalogAPIError):
    """Raised when the catalog service is unreachable.

    Attributes:
        url: URL of the unreachable endpoint.
        reason: Description of the connection failure.
    """

    def __init__(self, url: str, reason: str = "Connection failed"):
        super().__init__(
            message=f"Catalog service at '{url}' is unavailable: {reason}",
            code="UPSTREAM_UNAVAILABLE",
        )
        self.url = url
        self.reason = reason
