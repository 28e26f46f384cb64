"""STDIO transport MCP server."""

import logging
from typing import Optional
from mcp.server.stdio import stdio_server

from core.config import AppConfig
from core.dependencies import get_app_config
from protocol.base_server import BaseMCPServer
from tools.handlers import default_handlers
from tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class StdioMCPServer(BaseMCPServer):
    """MCP server using STDIO transport."""

    async def run(self):
        """Run the STDIO MCP server."""
        logger.info("Starting STDIO MCP server")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


async def run_stdio_server(app_config: Optional[AppConfig] = None):
    """Run STDIO MCP server with the default tool set.

    Args:
        app_config: App configuration (optional, defaults to env)
    """
    app_config = app_config or get_app_config()
    registry = ToolRegistry(default_handlers(server_name=app_config.server_name))

    server = StdioMCPServer(registry, app_config.server_name)
    await server.run()
