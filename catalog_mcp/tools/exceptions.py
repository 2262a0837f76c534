"""Tagged errors produced while dispatching a tool call."""

from enum import Enum
from typing import Any

from pydantic import ValidationError

from catalog_mcp.exceptions import CatalogMCPError

MAX_VALIDATION_ERRORS = 5

API_KEY_MISSING_MESSAGE = (
    "DATALOG_API_KEY is not set. Please configure your API key in settings "
    "or as an environment variable."
)


class ErrorKind(str, Enum):
    """Failure categories reported back to the host."""

    PRECONDITION = "precondition"
    UNKNOWN_TOOL = "unknown_tool"
    VALIDATION = "validation"
    UPSTREAM_HTTP = "upstream_http"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    LOCAL_IO = "local_io"
    INTERNAL = "internal"


class ToolError(CatalogMCPError):
    """A tool call failure, rendered into the error envelope at dispatch.

    Attributes:
        kind: Failure category.
        upstream_payload: Raw response body from the catalog service, if any.
    """

    def __init__(self, kind: ErrorKind, message: str, upstream_payload: Any = None):
        super().__init__(message=message, code=kind.value.upper())
        self.kind = kind
        self.upstream_payload = upstream_payload


class MissingAPIKeyError(ToolError):
    """Raised when no API key is configured."""

    def __init__(self):
        super().__init__(ErrorKind.PRECONDITION, API_KEY_MISSING_MESSAGE)


class UnknownToolError(ToolError):
    """Raised when the requested tool is not in the catalog.

    Attributes:
        tool_name: Name of the tool that was requested.
    """

    def __init__(self, tool_name: str):
        super().__init__(ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class ToolValidationError(ToolError):
    """Raised when tool arguments don't match the declared input schema.

    Attributes:
        tool_name: Tool whose arguments were rejected.
        details: Simplified validation errors (loc, msg, type).
    """

    def __init__(self, tool_name: str, exc: ValidationError):
        self.details = format_validation_errors(exc)
        problems = "; ".join(
            f"{'.'.join(str(part) for part in item['loc']) or '<root>'}: {item['msg']}"
            for item in self.details
        )
        super().__init__(
            ErrorKind.VALIDATION,
            f"Invalid arguments for {tool_name}: {problems}",
        )
        self.tool_name = tool_name


def format_validation_errors(exc: ValidationError) -> list[dict[str, object]]:
    """Simplify pydantic validation errors for display.

    Args:
        exc: Validation error instance.

    Returns:
        Limited list of simplified error details.
    """
    details: list[dict[str, object]] = []
    for item in exc.errors()[:MAX_VALIDATION_ERRORS]:
        details.append(
            {
                "loc": list(item.get("loc", [])),
                "msg": item.get("msg", "Invalid value"),
                "type": item.get("type", "value_error"),
            }
        )
    return details
