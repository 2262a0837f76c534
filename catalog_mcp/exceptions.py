"""Base exception for the catalog MCP server."""


class CatalogMCPError(Exception):
    """Base exception for all catalog MCP server errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ConfigurationError(CatalogMCPError):
    """Raised when process configuration cannot be loaded."""

    def __init__(self, message: str):
        super().__init__(message=message, code="CONFIGURATION_ERROR")
