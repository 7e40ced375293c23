"""
Live MCP server discovery.

Connects to a running server with the fastmcp client, lists its tools and
converts them to ToolDefinitions. http:// and https:// targets use the
HTTP transport; anything else is treated as a command line to launch over
STDIO.
"""

import asyncio
import logging
from typing import Any

from fastmcp import Client
from fastmcp.client.transports import StdioTransport

from mcp_validator.errors import ServerDiscoveryError
from mcp_validator.schema import SourceType, ToolAnnotations, ToolDefinition, ToolSource


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0  # seconds


def is_http_server(server: str) -> bool:
    return server.startswith(("http://", "https://"))


def create_client(server: str) -> Client:
    """Build a fastmcp client for a URL or a command line."""
    if is_http_server(server):
        return Client(server)

    parts = server.split()
    if not parts:
        raise ServerDiscoveryError("Empty server command", server)
    return Client(StdioTransport(command=parts[0], args=parts[1:]))


def _dump(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump(by_alias=True, exclude_none=True)
    return value


def to_tool_definition(tool: Any, server: str) -> ToolDefinition:
    """Convert a tool returned by list_tools into a ToolDefinition."""
    annotations = _dump(getattr(tool, "annotations", None))
    return ToolDefinition(
        name=tool.name,
        description=tool.description,
        input_schema=tool.inputSchema,
        annotations=ToolAnnotations.model_validate(annotations) if annotations else None,
        source=ToolSource(type=SourceType.SERVER, location=server, raw=_dump(tool)),
    )


async def list_server_tools(server: str, timeout: float = DEFAULT_TIMEOUT) -> list[ToolDefinition]:
    """
    Connect to a server and list its tools.

    Raises:
        ServerDiscoveryError: if connecting or listing fails or takes
            longer than `timeout` seconds.
    """
    client = create_client(server)

    async def _list() -> list[Any]:
        async with client:
            return await client.list_tools()

    try:
        tools = await asyncio.wait_for(_list(), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise ServerDiscoveryError(f"Connection to MCP server timed out after {timeout:g}s", server) from e
    except Exception as e:
        raise ServerDiscoveryError(f"Failed to list tools from MCP server: {e}", server) from e

    logger.debug("Discovered %d tools from %s", len(tools), server)
    return [to_tool_definition(tool, server) for tool in tools]


def fetch_tools_from_server(server: str, timeout: float = DEFAULT_TIMEOUT) -> list[ToolDefinition]:
    """Synchronous wrapper around list_server_tools."""
    return asyncio.run(list_server_tools(server, timeout))
