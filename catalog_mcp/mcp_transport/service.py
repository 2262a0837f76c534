"""JSON-RPC routing: MCP methods onto the tool dispatcher."""

import json
from typing import Any

import structlog
from pydantic import ValidationError

from catalog_mcp import __version__
from catalog_mcp.tools import ToolDispatcher

from .schemas import (
    MCPErrorCodes,
    MCPInitializeParams,
    MCPInitializeResult,
    MCPJSONRPCRequest,
    MCPJSONRPCResponse,
    MCPServerInfo,
    MCPToolCallParams,
    MCPToolCallResult,
    MCPToolListResult,
)

logger = structlog.get_logger(__name__)

SERVER_NAME = "catalog-server"
SUPPORTED_PROTOCOL_VERSIONS = ("2024-11-05", "2025-03-26", "2025-06-18")
LATEST_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[-1]


async def handle_initialize(params: MCPInitializeParams) -> MCPInitializeResult:
    """Handle initialize request.

    Args:
        params: Initialize parameters from client.

    Returns:
        Negotiated protocol version, capabilities and server identity.
    """
    version = params.protocolVersion
    if version not in SUPPORTED_PROTOCOL_VERSIONS:
        version = LATEST_PROTOCOL_VERSION
    return MCPInitializeResult(
        protocolVersion=version,
        serverInfo=MCPServerInfo(name=SERVER_NAME, version=__version__),
    )


async def handle_tools_list(dispatcher: ToolDispatcher) -> MCPToolListResult:
    """Handle tools/list request.

    Args:
        dispatcher: Dispatcher holding the static catalog.

    Returns:
        Every tool the server exposes.
    """
    return MCPToolListResult(tools=dispatcher.list_tools())


async def handle_tools_call(
    dispatcher: ToolDispatcher,
    name: str,
    arguments: dict[str, Any] | None,
) -> MCPToolCallResult:
    """Handle tools/call request.

    Args:
        dispatcher: Tool dispatcher.
        name: Tool name to invoke.
        arguments: Tool arguments.

    Returns:
        Tool execution result; failures come back with ``isError`` set.
    """
    return await dispatcher.call_tool(name, arguments)


def _error_response(request_id: str | int | None, code: int, message: str) -> MCPJSONRPCResponse:
    return MCPJSONRPCResponse(id=request_id, error={"code": code, "message": message})


async def handle_request(
    dispatcher: ToolDispatcher,
    request: MCPJSONRPCRequest,
) -> MCPJSONRPCResponse | None:
    """Route one JSON-RPC message to its handler.

    Args:
        dispatcher: Tool dispatcher.
        request: Parsed JSON-RPC request or notification.

    Returns:
        The response, or ``None`` for notifications.
    """
    method = request.method
    params = request.params or {}

    if request.is_notification:
        # notifications/initialized, notifications/cancelled, ...
        logger.debug("mcp_notification", method=method)
        return None

    try:
        if method == "initialize":
            result = await handle_initialize(MCPInitializeParams(**params))
            return MCPJSONRPCResponse(id=request.id, result=result.model_dump())

        elif method == "ping":
            return MCPJSONRPCResponse(id=request.id, result={})

        elif method == "tools/list":
            result = await handle_tools_list(dispatcher)
            return MCPJSONRPCResponse(id=request.id, result=result.model_dump())

        elif method == "tools/call":
            call_params = MCPToolCallParams(**params)
            result = await handle_tools_call(dispatcher, call_params.name, call_params.arguments)
            return MCPJSONRPCResponse(id=request.id, result=result.model_dump())

        else:
            return _error_response(
                request.id, MCPErrorCodes.METHOD_NOT_FOUND, f"Method not found: {method}"
            )

    except ValidationError as e:
        return _error_response(request.id, MCPErrorCodes.INVALID_PARAMS, f"Invalid params: {e}")
    except Exception as e:
        logger.error("mcp_internal_error", method=method, error=str(e), exc_info=True)
        return _error_response(
            request.id, MCPErrorCodes.INTERNAL_ERROR, f"Internal error: {str(e)}"
        )


async def handle_message(dispatcher: ToolDispatcher, raw: str | bytes) -> dict[str, Any] | None:
    """Decode, route and serialize one wire message.

    Args:
        dispatcher: Tool dispatcher.
        raw: One JSON-RPC message as received from the transport.

    Returns:
        Wire-ready response payload, or ``None`` when nothing is sent back.
    """
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return _error_response(None, MCPErrorCodes.PARSE_ERROR, f"Parse error: {e}").to_wire()
    return await handle_payload(dispatcher, body)


async def handle_payload(dispatcher: ToolDispatcher, body: Any) -> dict[str, Any] | None:
    """Route an already-decoded JSON-RPC payload."""
    if not isinstance(body, dict):
        return _error_response(
            None, MCPErrorCodes.INVALID_REQUEST, "Invalid request: expected a JSON object"
        ).to_wire()

    if "method" not in body:
        # A response from the host to a server request; this server sends none.
        return None

    try:
        request = MCPJSONRPCRequest(**body)
    except ValidationError as e:
        request_id = body.get("id") if isinstance(body.get("id"), (str, int)) else None
        return _error_response(
            request_id, MCPErrorCodes.INVALID_REQUEST, f"Invalid request: {e}"
        ).to_wire()

    response = await handle_request(dispatcher, request)
    return response.to_wire() if response is not None else None
