"""Built-in diagnostic tools."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from mcp.types import Tool

from core.dependencies import get_app_config
from tools.base import ToolHandler
from tools.types import HandlerContext, HandlerOptions, WrappedHandler
from tools.validators import FieldValidators, create_validator
from tools.wrapper import with_handler_wrapper, with_simple_wrapper

logger = logging.getLogger(__name__)

TOOL_HEALTH_CHECK = "health_check"
TOOL_ECHO = "echo"


class DiagnosticsHandler(ToolHandler):
    """Handler for server health and connectivity checks."""

    def __init__(self, server_name: str = None, **collaborators: Any):
        self.server_name = server_name or get_app_config().server_name
        self.collaborators = collaborators

    @property
    def definitions(self) -> List[Tool]:
        return [
            Tool(
                name=TOOL_HEALTH_CHECK,
                description="Report server status and version information.",
                inputSchema={"type": "object", "properties": {}, "required": []}
            ),
            Tool(
                name=TOOL_ECHO,
                description="Echo a message back, optionally repeated. Useful to verify tool plumbing.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "message": {"type": "string", "description": "Text to echo"},
                        "times": {"type": "integer", "description": "Repeat count (1-10)"}
                    },
                    "required": ["message"]
                }
            ),
        ]

    def wrapped_handlers(self) -> Dict[str, WrappedHandler]:
        echo_validator = create_validator({
            "message": FieldValidators.all_of(
                FieldValidators.required("message"),
                FieldValidators.string("message", 1, 2000)
            ),
            "times": FieldValidators.integer("times", 1, 10),
        })

        return {
            TOOL_HEALTH_CHECK: with_simple_wrapper(
                "health check", TOOL_HEALTH_CHECK, self._health_check, **self.collaborators
            ),
            TOOL_ECHO: with_handler_wrapper(
                HandlerContext(operation="echo message", tool=TOOL_ECHO),
                echo_validator,
                self._echo,
                HandlerOptions(log_performance=False),
                **self.collaborators
            ),
        }

    async def _health_check(self, args: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "server": self.server_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def _echo(self, args: Dict[str, Any]) -> str:
        times = int(args.get("times", 1))
        return "\n".join([args["message"]] * times)
