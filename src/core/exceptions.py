"""Custom exceptions and fault classification for the MCP handler kit."""

import math
import numbers
from typing import Any, Optional


class MCPToolError(Exception):
    """Base exception for all handler kit errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class ToolExecutionError(MCPToolError):
    """Exception raised when tool execution fails."""
    pass


class ConfigurationError(MCPToolError):
    """Exception raised when configuration is invalid."""
    pass


class UpstreamApiFault(MCPToolError):
    """An upstream HTTP/API call failed with a status code.

    Handlers may raise this directly; exceptions from HTTP client libraries
    that expose ``response.status`` or ``response.status_code`` are
    classified into it at the wrapper boundary.
    """

    def __init__(self, status: int, body: Any = None, message: str = "", cause: Optional[BaseException] = None):
        self.status = status
        self.body = body
        self.cause = cause
        super().__init__(message or f"Request failed with status code {status}", {"status": status})

    @classmethod
    def from_exception(cls, error: BaseException) -> Optional["UpstreamApiFault"]:
        """Build a fault from an exception carrying an HTTP response, if it has one."""
        if isinstance(error, cls):
            return error

        response = getattr(error, "response", None)
        if response is None:
            return None

        status = _response_status(response)
        if not status:
            return None

        return cls(status, _response_body(response), str(error), cause=error)


class GenericFault(MCPToolError):
    """Any other failure raised by a validator or handler."""

    UNKNOWN_MESSAGE = "An unknown error occurred"

    def __init__(self, message: str = "", cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message or self.UNKNOWN_MESSAGE)

    @classmethod
    def from_exception(cls, error: BaseException) -> "GenericFault":
        if isinstance(error, cls):
            return error
        message = getattr(error, "message", None)
        if not isinstance(message, str) or not message:
            message = str(error)
        return cls(message, cause=error)


def _response_status(response: Any) -> Optional[int]:
    if isinstance(response, dict):
        status = response.get("status") or response.get("status_code")
    else:
        status = getattr(response, "status", None) or getattr(response, "status_code", None)
    # JSON-decoded statuses may arrive as floats
    if isinstance(status, bool) or not isinstance(status, numbers.Real):
        return None
    if not math.isfinite(status) or status <= 0:
        return None
    return int(status)


def _response_body(response: Any) -> Any:
    if isinstance(response, dict):
        return response.get("data") or response.get("body")
    for attr in ("data", "body"):
        body = getattr(response, attr, None)
        if body is not None:
            return body
    # httpx / requests responses
    json_method = getattr(response, "json", None)
    if callable(json_method):
        try:
            return json_method()
        except ValueError:
            pass
        except Exception:
            # e.g. an unread streamed body
            return None
        try:
            return getattr(response, "text", None)
        except Exception:
            return None
    return None


def classify_fault(error: BaseException) -> MCPToolError:
    """Classify an exception into ``UpstreamApiFault`` or ``GenericFault``."""
    upstream = UpstreamApiFault.from_exception(error)
    if upstream is not None:
        return upstream
    return GenericFault.from_exception(error)
