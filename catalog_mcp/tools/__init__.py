"""Tools module - catalog, argument schemas and dispatch."""

from .registry import ToolName, ToolRegistry, ToolSpec, registry
from . import handlers  # noqa: F401 - registers every tool on import
from .exceptions import (
    ErrorKind,
    ToolError,
    MissingAPIKeyError,
    UnknownToolError,
    ToolValidationError,
)
from .dispatcher import ToolDispatcher, error_result


__all__ = [
    # Registry
    "ToolName",
    "ToolRegistry",
    "ToolSpec",
    "registry",
    # Exceptions
    "ErrorKind",
    "ToolError",
    "MissingAPIKeyError",
    "UnknownToolError",
    "ToolValidationError",
    # Dispatch
    "ToolDispatcher",
    "error_result",
]
