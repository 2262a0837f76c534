"""Catalog module - HTTP client for the catalog service REST API."""

from .client import CatalogClient, build_headers
from .exceptions import (
    CatalogAPIError,
    UpstreamHTTPError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)


__all__ = [
    "CatalogClient",
    "build_headers",
    "CatalogAPIError",
    "UpstreamHTTPError",
    "UpstreamTimeoutError",
    "UpstreamUnavailableError",
]
