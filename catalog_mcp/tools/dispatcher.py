"""Tool dispatch: precondition, lookup, validation, invocation, envelope."""

import json
import time
from typing import Any

import structlog
from pydantic import ValidationError

from catalog_mcp.catalog.client import CatalogClient
from catalog_mcp.catalog.exceptions import (
    UpstreamHTTPError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from catalog_mcp.mcp_transport.schemas import MCPContent, MCPTool, MCPToolCallResult
from .exceptions import (
    ErrorKind,
    MissingAPIKeyError,
    ToolError,
    ToolValidationError,
    UnknownToolError,
)
from .registry import ToolRegistry, ToolSpec, registry as default_registry

logger = structlog.get_logger(__name__)


def error_result(error: ToolError) -> MCPToolCallResult:
    """Render a tagged tool error into the host-visible envelope.

    Args:
        error: The failure to report.

    Returns:
        Result with ``isError`` set and the upstream body appended when known.
    """
    text = f"Error: {error.message}"
    if error.upstream_payload is not None:
        text += f"\nAPI Response: {json.dumps(error.upstream_payload, ensure_ascii=False)}"
    return MCPToolCallResult(content=[MCPContent(type="text", text=text)], isError=True)


def to_tool_error(exc: Exception) -> ToolError:
    """Classify an exception raised while invoking a tool handler."""
    if isinstance(exc, ToolError):
        return exc
    if isinstance(exc, UpstreamHTTPError):
        return ToolError(ErrorKind.UPSTREAM_HTTP, exc.message, upstream_payload=exc.body)
    if isinstance(exc, (UpstreamTimeoutError, UpstreamUnavailableError)):
        return ToolError(ErrorKind.UPSTREAM_UNAVAILABLE, exc.message)
    if isinstance(exc, OSError):
        return ToolError(ErrorKind.LOCAL_IO, str(exc))
    return ToolError(ErrorKind.INTERNAL, str(exc) or exc.__class__.__name__)


class ToolDispatcher:
    """Executes one tool call per request against the catalog client.

    Holds no state between calls; concurrent calls are independent.
    """

    def __init__(self, client: CatalogClient, registry: ToolRegistry | None = None) -> None:
        self.client = client
        self.registry = registry if registry is not None else default_registry

    def list_tools(self) -> list[MCPTool]:
        return [MCPTool(**spec.describe()) for spec in self.registry]

    def _resolve(self, name: str, arguments: dict[str, Any] | None) -> tuple[ToolSpec, Any]:
        if not self.client.config.has_api_key:
            raise MissingAPIKeyError()

        spec = self.registry.get(name)
        if spec is None:
            raise UnknownToolError(name)

        try:
            args = spec.arguments.model_validate(arguments or {})
        except ValidationError as e:
            raise ToolValidationError(name, e)
        return spec, args

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> MCPToolCallResult:
        """Run a tool and wrap its outcome.

        Never raises for tool failures: every error becomes an envelope
        with ``isError=True``.

        Args:
            name: Tool name requested by the host.
            arguments: Raw argument bag from the host.

        Returns:
            Text result envelope.
        """
        start = time.perf_counter()
        try:
            spec, args = self._resolve(name, arguments)
            text = await spec.handler(self.client, args)
        except Exception as e:
            error = to_tool_error(e)
            details = {}
            if isinstance(error, ToolValidationError):
                details["validation_errors"] = error.details
            logger.warning(
                "tool_call_failed",
                tool_name=name,
                kind=error.kind.value,
                error=error.message,
                duration_ms=int((time.perf_counter() - start) * 1000),
                exc_info=error.kind is ErrorKind.INTERNAL,
                **details,
            )
            return error_result(error)

        logger.info(
            "tool_call_completed",
            tool_name=name,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )
        return MCPToolCallResult(content=[MCPContent(type="text", text=text)], isError=False)
