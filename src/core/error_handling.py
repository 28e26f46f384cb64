"""Error formatting for MCP tool results.

Provides the default error formatter for upstream API faults and the default
builder for validation failure results. Both are injectable into the handler
wrappers.
"""

import logging
from typing import Any, Dict, List

from core.exceptions import UpstreamApiFault

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    401: "Authentication failed. Please check your API token and email.",
    403: "Access forbidden. Your API token may not have the required permissions.",
    404: "Resource not found. Please check the ID or key provided.",
    429: "Rate limit exceeded. Please try again later.",
}


def error_result(text: str) -> Dict[str, Any]:
    """Create an MCP tool result flagged as an error."""
    return {
        "content": [{
            "type": "text",
            "text": text
        }],
        "isError": True
    }


def _body_message(body: Any) -> str:
    """Pull a human-readable message out of an API error body."""
    if isinstance(body, str):
        return body
    if not isinstance(body, dict):
        return ""

    if body.get("message"):
        return str(body["message"])

    # Atlassian style: {"errorMessages": [...], "errors": {"field": "msg"}}
    messages = [str(m) for m in body.get("errorMessages") or []]
    errors = body.get("errors")
    if isinstance(errors, dict):
        messages.extend(f"{field}: {msg}" for field, msg in errors.items())
    return "; ".join(messages)


def format_api_error(error: BaseException) -> str:
    """Format an upstream API fault as text for the tool caller.

    Args:
        error: ``UpstreamApiFault`` or any exception exposing a response status

    Returns:
        Human-readable error message
    """
    fault = UpstreamApiFault.from_exception(error)
    if fault is None:
        return str(error) or "An unknown error occurred"

    if fault.status in STATUS_MESSAGES:
        return STATUS_MESSAGES[fault.status]

    detail = _body_message(fault.body) or fault.message
    return f"API Error ({fault.status}): {detail}"


def create_validation_error(errors: List[str], operation: str, domain: str = "jira") -> Dict[str, Any]:
    """Create the tool result returned when argument validation fails.

    Args:
        errors: Validation failure messages, in order
        operation: Operation name of the wrapped handler
        domain: Domain tag shown in the heading (e.g. ``jira``, ``confluence``)

    Returns:
        MCP tool result with ``isError`` set
    """
    details = ", ".join(errors) if errors else "unknown"
    text = (
        f"**Error in {domain.upper()}**\n\n"
        f"**Operation**: {operation}\n"
        f"**Category**: validation\n"
        f"**Details**: {details}\n\n"
        f"**Suggestions**:\n"
        f"- Check the required parameters and their formats\n"
        f"- Correct the arguments and try again"
    )
    logger.debug(f"Validation error result built for {operation}: {details}")
    return error_result(text)
