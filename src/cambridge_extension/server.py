"""MCP server exposing the language server command to an embedding host."""
import asyncio
import json
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server import stdio
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions

from cambridge_extension.config import load_config
from cambridge_extension.errors import ExtensionError, UnsupportedPlatformError, log_error
from cambridge_extension.host import LocalHost
from cambridge_extension.logging import configure_logging, get_logger
from cambridge_extension.platforms import is_platform_supported
from cambridge_extension.resolver import BinaryResolver

logger = get_logger("server")

SERVER_NAME = "cambridge-extension"
SERVER_VERSION = "0.1.0"

tools = [
    types.Tool(
        name="cambridge_lsp_command",
        description="Locate or download the Cambridge language server and return the command to spawn it",
        inputSchema={
            "type": "object",
            "properties": {
                "language_server_id": {
                    "type": "string",
                    "description": "Language server identifier used for status reporting",
                }
            },
        },
    ),
    types.Tool(
        name="cambridge_lsp_status",
        description="Report platform support, resolution strategy and installation status",
        inputSchema={
            "type": "object",
            "properties": {
                "language_server_id": {
                    "type": "string",
                    "description": "Language server identifier whose installation status is reported",
                }
            },
        },
    ),
]


def resolver_status(
    resolver: BinaryResolver, language_server_id: Optional[str] = None
) -> Dict[str, Any]:
    try:
        key = resolver.host.current_platform()
    except UnsupportedPlatformError:
        key = None

    statuses = getattr(resolver.host, "statuses", {})
    last_status = statuses.get(language_server_id or resolver.config.language_server_id)
    return {
        "platform": str(key) if key else None,
        "supported": bool(key) and is_platform_supported(key),
        "strategy": resolver.config.strategy.value,
        "cached_binary_path": resolver.cached_binary_path,
        "installation_status": last_status.value if last_status else None,
    }


async def handle_tool_call(
    resolver: BinaryResolver, name: str, arguments: Dict[str, Any]
) -> Dict[str, Any]:
    """Dispatch a tool call; failures become {"success": False, "error": ...}."""
    try:
        if name == "cambridge_lsp_command":
            command = await resolver.language_server_command(arguments.get("language_server_id"))
            return {"success": True, "data": command.to_dict()}

        if name == "cambridge_lsp_status":
            return {
                "success": True,
                "data": resolver_status(resolver, arguments.get("language_server_id")),
            }

    except ExtensionError as e:
        log_error(e, {"tool": name})
        return {"success": False, "error": str(e)}

    return {"success": False, "error": f"Unknown tool: {name}"}


def init_server(resolver: BinaryResolver) -> Server:
    logger.info({"event": "registered_tools", "tools": [t.name for t in tools]})

    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        logger.debug({"event": "tool_call", "tool": name, "arguments": arguments})
        try:
            result = await handle_tool_call(resolver, name, arguments or {})
        except Exception as e:
            result = {"success": False, "error": str(e)}
        return [types.TextContent(type="text", text=json.dumps(result))]

    return server


async def serve() -> None:
    config = load_config()
    configure_logging(config.log_level)
    logger.info({"event": "server_starting", "strategy": config.strategy.value})

    resolver = BinaryResolver(LocalHost(), config)
    server = init_server(resolver)
    async with stdio.stdio_server() as (read_stream, write_stream):
        init_options = InitializationOptions(
            server_name=SERVER_NAME,
            server_version=SERVER_VERSION,
            capabilities=types.ServerCapabilities(
                tools=types.ToolsCapability(listChanged=False),
                logging=types.LoggingCapability(),
            ),
        )
        await server.run(read_stream, write_stream, init_options)


def main() -> None:
    """Run the MCP server."""
    asyncio.run(serve())
