"""Base classes for MCP tool handlers."""

from abc import ABC, abstractmethod
from typing import Dict, List
from mcp.types import Tool

from tools.types import WrappedHandler


class ToolHandler(ABC):
    """Abstract base class for a group of MCP tools.

    Subclasses declare their tool definitions and return one wrapped
    handler per tool, built with ``with_handler_wrapper`` or
    ``with_simple_wrapper``.
    """

    @property
    @abstractmethod
    def definitions(self) -> List[Tool]:
        """Return MCP tool definitions this handler serves."""
        pass

    @abstractmethod
    def wrapped_handlers(self) -> Dict[str, WrappedHandler]:
        """
        Build the wrapped handlers for this group.

        Returns:
            Mapping of tool name to wrapped handler
        """
        pass

    @property
    def tool_names(self) -> List[str]:
        """Return list of tool names this handler supports."""
        return [tool.name for tool in self.definitions]
