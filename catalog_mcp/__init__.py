"""MCP server exposing the catalog service as tools."""

__version__ = "1.0.0"
