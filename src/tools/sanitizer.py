"""Redaction of sensitive fields from tool responses."""

import json
from typing import Any, Optional

from core.tool_logger import ToolLogger

SENSITIVE_KEYS = ("password", "token", "apiKey", "secret", "authorization", "credentials")
REDACTED = "[REDACTED]"


def sanitize_object(obj: Any) -> Any:
    """Return a copy of ``obj`` with sensitive keys redacted at every level.

    Keys match exactly. A sensitive key's value is replaced wholesale, so
    nothing below it is visited. The input is never mutated.
    """
    if isinstance(obj, (list, tuple)):
        return [sanitize_object(item) for item in obj]

    if not isinstance(obj, dict):
        return obj

    sanitized = dict(obj)
    for key in SENSITIVE_KEYS:
        if key in sanitized:
            sanitized[key] = REDACTED

    for key, value in sanitized.items():
        if isinstance(value, (dict, list, tuple)):
            sanitized[key] = sanitize_object(value)

    return sanitized


def sanitize_response_text(text: str, logger: Optional[ToolLogger] = None) -> str:
    """Redact a JSON document, returning ``text`` unchanged if it can't be parsed."""
    try:
        data = json.loads(text)
    except ValueError:
        if logger is None:
            from core.dependencies import get_tool_logger
            logger = get_tool_logger()
        logger.warn("Failed to parse response for sanitization", {
            "operation": "response-sanitization",
        })
        return text

    return json.dumps(sanitize_object(data), indent=2, ensure_ascii=False)
