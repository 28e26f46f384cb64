"""Tool registry for routing MCP tool calls to wrapped handlers."""

import logging
from typing import Any, Dict, Iterable, List, Optional
from mcp.types import Tool

from core.error_handling import error_result
from tools.base import ToolHandler
from tools.types import ToolResult, WrappedHandler

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Central registry for MCP tool handlers.

    Routes tool calls to wrapped handlers based on tool name.
    """

    def __init__(self, handlers: Optional[Iterable[ToolHandler]] = None):
        self.handlers: Dict[str, WrappedHandler] = {}
        self.definitions: Dict[str, Tool] = {}
        for handler in handlers or []:
            self.register_handler(handler)

    def register(self, tool: Tool, wrapped: WrappedHandler) -> None:
        """Register a single wrapped handler under its tool definition."""
        if tool.name in self.handlers:
            logger.warning(f"Tool {tool.name} already registered, replacing")
        self.definitions[tool.name] = tool
        self.handlers[tool.name] = wrapped
        logger.debug(f"Registered {tool.name}")

    def register_handler(self, handler: ToolHandler) -> None:
        """Register every tool of a handler group."""
        wrapped_handlers = handler.wrapped_handlers()
        for tool in handler.definitions:
            if tool.name not in wrapped_handlers:
                raise ValueError(f"{handler.__class__.__name__} has no handler for tool {tool.name}")
            self.register(tool, wrapped_handlers[tool.name])

        logger.info(f"✅ Registered {len(handler.definitions)} MCP tools from {handler.__class__.__name__}")

    def list_tools(self) -> List[Tool]:
        return list(self.definitions.values())

    async def handle_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """
        Route tool call to its wrapped handler.

        Args:
            name: Tool name from the MCP request
            arguments: Raw tool arguments

        Returns:
            Tool execution result, or an error result for unknown tools
        """
        wrapped = self.handlers.get(name)
        if wrapped is None:
            logger.warning(f"Unknown tool requested: {name}")
            return error_result(f"Unknown tool: {name}")

        logger.debug(f"Routing {name}")
        return await wrapped(arguments or {})

    def is_tool_registered(self, tool_name: str) -> bool:
        """Check if a tool has a registered handler."""
        return tool_name in self.handlers
