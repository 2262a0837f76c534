"""Pydantic models for the MCP JSON-RPC messages this server speaks."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class MCPInitializeParams(BaseModel):
    """Parameters for initialize request."""

    protocolVersion: str = Field(description="MCP protocol version")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    clientInfo: dict[str, Any] = Field(default_factory=dict)


class MCPServerInfo(BaseModel):
    """Identity reported to the host during initialize."""

    name: str
    version: str


class MCPToolsCapability(BaseModel):
    # The catalog is fixed for the life of the process.
    listChanged: bool = False


class MCPServerCapabilities(BaseModel):
    tools: MCPToolsCapability = Field(default_factory=MCPToolsCapability)


class MCPInitializeResult(BaseModel):
    """Result for initialize."""

    protocolVersion: str
    capabilities: MCPServerCapabilities = Field(default_factory=MCPServerCapabilities)
    serverInfo: MCPServerInfo


class MCPTool(BaseModel):
    """One catalog entry as advertised by tools/list."""

    name: str
    description: str
    inputSchema: dict[str, Any]


class MCPToolListResult(BaseModel):
    """Result for tools/list."""

    tools: list[MCPTool]


class MCPToolCallParams(BaseModel):
    """Parameters for tools/call."""

    name: str
    arguments: dict[str, Any] | None = Field(default_factory=dict)


class MCPContent(BaseModel):
    """Text block of a tool result; the server only produces text."""

    type: Literal["text"] = "text"
    text: str


class MCPToolCallResult(BaseModel):
    """Result for tools/call."""

    content: list[MCPContent]
    isError: bool = False


class MCPJSONRPCRequest(BaseModel):
    """Generic JSON-RPC 2.0 request or notification."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    method: str
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        # An explicit "id": null is still a request.
        return "id" not in self.model_fields_set


class MCPJSONRPCResponse(BaseModel):
    """Generic JSON-RPC 2.0 response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    result: Any | None = None
    error: dict[str, Any] | None = None

    def to_wire(self) -> dict[str, Any]:
        """Serialize with exactly one of ``result`` or ``error``."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error
        else:
            payload["result"] = self.result if self.result is not None else {}
        return payload


class MCPErrorCodes:
    """Standard JSON-RPC error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
