"""Structured logging for tool handler lifecycles.

``ToolLogger`` is the port the handler wrappers log through. The default
``StructuredToolLogger`` writes to the standard ``logging`` module; tests
inject a fake that records calls.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from core.config import LoggingConfig

logger = logging.getLogger(__name__)

HANDLER_LOGGER_NAME = "mcp.handlers"

# Keys removed from a context's "metadata" entry before it is logged
_METADATA_SENSITIVE_KEYS = ("password", "token", "apiKey", "secret")


class ToolLogger(Protocol):
    """Logging port consumed by the handler wrappers."""

    def log_request(self, operation: str, meta: Dict[str, Any]) -> None: ...

    def log_response(self, operation: str, duration_ms: int, meta: Dict[str, Any]) -> None: ...

    def log_error(self, operation: str, error: BaseException, meta: Dict[str, Any]) -> None: ...

    def log_performance(self, operation: str, duration_ms: int, meta: Optional[Dict[str, Any]] = None) -> None: ...

    def warn(self, message: str, meta: Optional[Dict[str, Any]] = None) -> None: ...


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class StructuredToolLogger:
    """Default ``ToolLogger`` backed by the ``logging`` module."""

    def __init__(self, name: str = HANDLER_LOGGER_NAME, slow_operation_ms: int = 5000):
        self._logger = logging.getLogger(name)
        self.slow_operation_ms = slow_operation_ms

    @staticmethod
    def sanitize_context(context: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Return a copy of the context with sensitive metadata keys dropped."""
        sanitized = dict(context or {})
        metadata = sanitized.get("metadata")
        if isinstance(metadata, dict):
            sanitized["metadata"] = {
                key: value for key, value in metadata.items()
                if key not in _METADATA_SENSITIVE_KEYS
            }
        return sanitized

    def _log(self, level: int, message: str, context: Optional[Dict[str, Any]], exc_info=None) -> None:
        self._logger.log(
            level,
            message,
            extra={"context": self.sanitize_context(context)},
            exc_info=exc_info
        )

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, context)

    def warn(self, message: str, meta: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, meta)

    warning = warn

    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, context)

    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, context)

    def log_request(self, operation: str, meta: Dict[str, Any]) -> None:
        self.info(f"Starting {operation}", {**meta, "operation": operation, "timestamp": _timestamp()})

    def log_response(self, operation: str, duration_ms: int, meta: Dict[str, Any]) -> None:
        self.info(f"Completed {operation}", {
            **meta,
            "operation": operation,
            "duration": duration_ms,
            "timestamp": _timestamp(),
        })

    def log_error(self, operation: str, error: BaseException, meta: Dict[str, Any]) -> None:
        context = {
            **meta,
            "operation": operation,
            "errorMessage": str(error),
            "timestamp": _timestamp(),
        }
        self._log(logging.ERROR, f"Failed {operation}", context, exc_info=error)

    def log_performance(self, operation: str, duration_ms: int, meta: Optional[Dict[str, Any]] = None) -> None:
        message = f"Performance: {operation} took {duration_ms}ms"
        context = {**(meta or {}), "operation": operation, "duration": duration_ms}
        if duration_ms > self.slow_operation_ms:
            self.warn(message, {**context, "performanceIssue": True})
        else:
            self.info(message, context)

    def log_tool_call(self, tool_name: str, user_id: Optional[str] = None,
                      metadata: Optional[Dict[str, Any]] = None) -> None:
        self.info(f"Tool called: {tool_name}", {
            "tool": tool_name,
            "userId": user_id,
            "metadata": metadata,
            "timestamp": _timestamp(),
        })

    def log_security(self, event: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.warn(f"Security event: {event}", {
            **(context or {}),
            "securityEvent": True,
            "timestamp": _timestamp(),
        })


class ContextFormatter(logging.Formatter):
    """Formatter that appends a record's structured context."""

    def __init__(self, fmt: Optional[str] = None, as_json: bool = False):
        super().__init__(fmt or '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        self.as_json = as_json

    def format(self, record: logging.LogRecord) -> str:
        if self.as_json:
            payload = {
                "timestamp": self.formatTime(record),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            context = getattr(record, "context", None)
            if context:
                payload.update(context)
            if record.exc_info:
                payload["errorStack"] = self.formatException(record.exc_info)
            return json.dumps(payload, ensure_ascii=False, default=str)

        text = super().format(record)
        context = getattr(record, "context", None)
        if context:
            compact = {key: value for key, value in context.items() if value is not None}
            text += f" | {json.dumps(compact, ensure_ascii=False, default=str)}"
        return text


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure the root logger.

    Logs go to stderr because stdout carries the MCP stdio protocol.
    """
    config = config or LoggingConfig.from_env()
    as_json = config.log_format == "json"

    handlers = []
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(ContextFormatter(as_json=as_json))
    handlers.append(console)

    if config.is_production:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        error_file = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
        error_file.setLevel(logging.ERROR)
        error_file.setFormatter(ContextFormatter(as_json=True))
        handlers.append(error_file)

        combined_file = logging.FileHandler(log_dir / "combined.log", encoding="utf-8")
        combined_file.setFormatter(ContextFormatter(as_json=True))
        handlers.append(combined_file)

    logging.basicConfig(level=config.level, handlers=handlers, force=True)
    logger.debug(f"Logging configured (level={config.level}, format={config.log_format})")
