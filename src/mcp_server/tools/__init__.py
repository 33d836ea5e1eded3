"""MCP tools package."""

from src.mcp_server.tools.property import register_property_tools

__all__ = ["register_property_tools"]
