"""Base MCP server - Transport-agnostic MCP protocol implementation.

Serves the tools of a ``ToolRegistry``; every call goes through the
registry's wrapped handlers, so the protocol layer never sees an exception
from tool code.
"""

import logging
from typing import Any, Dict, Optional
from mcp.server import Server
from mcp.types import CallToolResult

from core.dependencies import get_app_config
from tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class BaseMCPServer:
    """Base MCP server providing core protocol functionality.

    This class encapsulates the MCP protocol logic independent of
    the transport mechanism.
    """

    def __init__(self, registry: ToolRegistry, server_name: str = None):
        """Initialize base MCP server.

        Args:
            registry: Registry holding the wrapped tool handlers
            server_name: Name of the MCP server
        """
        self.registry = registry
        if server_name is None:
            server_name = get_app_config().server_name
        self.server = Server(server_name)
        self._setup_handlers()
        logger.info(f"Initialized {server_name} MCP server with {len(registry.handlers)} tools")

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        """Run a tool call through the registry and convert it to the MCP result type."""
        result = await self.registry.handle_tool(name, arguments)
        return CallToolResult.model_validate(result)

    def _setup_handlers(self):
        """Setup MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools():
            """List all available tools."""
            return self.registry.list_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict):
            """Handle tool execution."""
            return await self.dispatch(name, arguments)

        @self.server.list_prompts()
        async def list_prompts():
            """List available prompts (currently none)."""
            return []

        @self.server.list_resources()
        async def list_resources():
            """List available resources (currently none)."""
            return []
