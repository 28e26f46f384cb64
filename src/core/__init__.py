"""Core modules for the MCP handler kit."""

from .exceptions import (
    MCPToolError,
    ToolExecutionError,
    ConfigurationError,
    UpstreamApiFault,
    GenericFault,
    classify_fault
)

__all__ = [
    "MCPToolError",
    "ToolExecutionError",
    "ConfigurationError",
    "UpstreamApiFault",
    "GenericFault",
    "classify_fault"
]
