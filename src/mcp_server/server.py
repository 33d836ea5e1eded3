"""MCP server entrypoint using official mcp.server.fastmcp."""

from collections.abc import Callable

from mcp.server.fastmcp import FastMCP

from src.config import get_settings
from src.config.logging import configure_logging
from src.mcp_server.tools.property import register_property_tools

ToolRegistrar = Callable[[FastMCP], None]
ToolRegistration = tuple[ToolRegistrar, tuple[str, ...]]

TOOL_REGISTRATIONS: tuple[ToolRegistration, ...] = (
    (register_property_tools, ("search_properties", "get_property")),
)

VALID_MCP_TOOL_NAMES = frozenset(
    tool_name for _, tool_names in TOOL_REGISTRATIONS for tool_name in tool_names
)


def create_mcp_server(enabled_tools: list[str] | None = None) -> FastMCP:
    """Build the catalog MCP server, keeping only allowlisted tools if configured."""

    server = FastMCP(get_settings().app_name, json_response=True)

    for register_tools, _ in TOOL_REGISTRATIONS:
        register_tools(server)

    configured_tools = (
        get_settings().mcp_enabled_tools if enabled_tools is None else enabled_tools
    )
    allowlist = {str(name).strip().lower() for name in configured_tools} - {""}
    if not allowlist:
        return server

    invalid_tools = sorted(allowlist - VALID_MCP_TOOL_NAMES)
    if invalid_tools:
        raise ValueError(
            f"Invalid MCP_ENABLED_TOOLS entries: {', '.join(invalid_tools)}. "
            f"Valid values are: {', '.join(sorted(VALID_MCP_TOOL_NAMES))}"
        )

    for tool_name in sorted(VALID_MCP_TOOL_NAMES - allowlist):
        server.remove_tool(tool_name)

    return server


mcp = create_mcp_server()


def main() -> None:
    """Run MCP server via stdio transport."""

    configure_logging()
    mcp.run()


if __name__ == "__main__":
    main()
