"""MCP transport module - JSON-RPC handling over stdio and HTTP."""
