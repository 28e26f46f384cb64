"""Request lifecycle wrappers for MCP tool handlers.

Every tool handler is exposed through ``with_handler_wrapper`` (or its
no-validation form ``with_simple_wrapper``), which composes:

- request logging
- input validation
- handler execution and timing
- response formatting and sanitization
- error classification

The returned coroutine function never raises; all failures become tool
results with ``isError`` set. ``with_performance_monitoring`` is the one
exception: it times internals and re-raises so an enclosing wrapper handles
the failure.
"""

import functools
import inspect
import json
import logging
import time
from datetime import date, datetime
from typing import Any, Callable, List, Mapping, Optional

from pydantic import BaseModel

from core.error_handling import create_validation_error, error_result, format_api_error
from core.exceptions import GenericFault, UpstreamApiFault, classify_fault
from core.tool_logger import ToolLogger
from tools.sanitizer import sanitize_response_text
from tools.types import (
    HandlerContext,
    HandlerFunction,
    HandlerOptions,
    PreShaped,
    Raw,
    ToolResult,
    ValidationResult,
    ValidatorFunction,
    WrappedHandler,
    text_result,
)

_fallback_logger = logging.getLogger(__name__)

ErrorFormatter = Callable[[BaseException], str]
ValidationErrorBuilder = Callable[[List[str], str, str], ToolResult]


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_pretty_json(value: Any) -> str:
    """Serialize a handler result as indented JSON."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=_json_default)


def _default_logger() -> ToolLogger:
    from core.dependencies import get_tool_logger
    return get_tool_logger()


def _default_domain() -> str:
    from core.dependencies import get_app_config
    return get_app_config().wrapper.default_domain


def _default_options() -> HandlerOptions:
    from core.dependencies import get_app_config
    return HandlerOptions(sanitize_response=get_app_config().wrapper.sanitize_response)


def _failure_result(error: Exception, format_error: ErrorFormatter) -> ToolResult:
    try:
        fault = classify_fault(error)
        if isinstance(fault, UpstreamApiFault):
            return error_result(format_error(error))
        return error_result(fault.message)
    except Exception:
        _fallback_logger.exception("Failed to format error for tool result")
        return error_result(str(error) or GenericFault.UNKNOWN_MESSAGE)


def format_handler_result(result: Any, options: HandlerOptions, logger: ToolLogger) -> ToolResult:
    """Shape a handler's return value into a tool result."""
    if isinstance(result, Raw):
        result = result.value
    elif isinstance(result, PreShaped):
        return result.result

    if options.return_structured_data:
        return text_result(to_pretty_json(result))

    if isinstance(result, str):
        return text_result(result)

    # Handlers that build their own result dicts
    if isinstance(result, Mapping) and "content" in result:
        return dict(result)

    response_text = to_pretty_json(result)
    if options.sanitize_response:
        response_text = sanitize_response_text(response_text, logger)
    return text_result(response_text)


def with_handler_wrapper(
    context: HandlerContext,
    validator: ValidatorFunction,
    handler: HandlerFunction,
    options: Optional[HandlerOptions] = None,
    *,
    logger: Optional[ToolLogger] = None,
    error_formatter: Optional[ErrorFormatter] = None,
    validation_error_builder: Optional[ValidationErrorBuilder] = None,
    domain: Optional[str] = None,
) -> WrappedHandler:
    """
    Wrap a tool handler with validation, logging, timing and error handling.

    Args:
        context: Operation/tool identifiers for this registration
        validator: Gate deciding whether raw arguments reach the handler;
            may be sync or async
        handler: Async function receiving the validated arguments
        options: Response shaping and logging options
        logger: Logging port (defaults to the process-wide tool logger)
        error_formatter: Formats upstream API faults (defaults to ``format_api_error``)
        validation_error_builder: Builds the validation failure result
            (defaults to ``create_validation_error``)
        domain: Domain tag for validation failures (defaults to config)

    Returns:
        Async function ``(args) -> tool result`` that never raises
    """
    options = options or _default_options()
    format_error = error_formatter or format_api_error
    build_validation_error = validation_error_builder or create_validation_error
    operation = context.operation
    meta = context.meta()

    @functools.wraps(handler)
    async def wrapped(args: Any) -> ToolResult:
        start = time.perf_counter()
        log = logger

        try:
            if log is None:
                log = _default_logger()
            log.log_request(operation, dict(meta))

            outcome = validator(args)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            validation = ValidationResult.coerce(outcome)

            if not validation.is_valid:
                # Validation failures are not timed: no response or performance event
                errors = validation.errors
                log.log_error(
                    f"{operation}-validation",
                    ValueError(f"Validation failed: {', '.join(errors)}"),
                    {**meta, "validationErrors": errors}
                )
                return build_validation_error(errors, operation, domain or _default_domain())

            result = await handler(validation.validated_args)
            duration = _elapsed_ms(start)

            log.log_response(operation, duration, dict(meta))
            if options.log_performance:
                log.log_performance(operation, duration, dict(meta))

            return format_handler_result(result, options, log)

        except Exception as e:
            duration = _elapsed_ms(start)
            error_meta = {**meta, "duration": duration, "errorType": type(e).__name__}
            if log is None:
                # The tool logger itself could not be built
                _fallback_logger.error("Failed %s", operation, exc_info=e, extra={"context": error_meta})
            else:
                log.log_error(operation, e, error_meta)
            return _failure_result(e, format_error)

    return wrapped


def _accept_all(args: Any) -> ValidationResult:
    return ValidationResult(is_valid=True, validated_args=args)


def with_simple_wrapper(
    operation: str,
    tool: str,
    handler: HandlerFunction,
    options: Optional[HandlerOptions] = None,
    **collaborators: Any,
) -> WrappedHandler:
    """Wrap a handler that needs no argument validation."""
    return with_handler_wrapper(
        HandlerContext(operation=operation, tool=tool),
        _accept_all,
        handler,
        options,
        **collaborators
    )


def with_performance_monitoring(
    operation: str,
    func: Callable[..., Any],
    logger: Optional[ToolLogger] = None,
) -> Callable[..., Any]:
    """Time an async callable, logging success or failure.

    Unlike the handler wrappers, failures are re-raised unchanged.
    """

    @functools.wraps(func)
    async def monitored(*args, **kwargs):
        log = logger or _default_logger()
        start = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            log.log_error(operation, e, {"duration": _elapsed_ms(start)})
            raise
        log.log_performance(operation, _elapsed_ms(start))
        return result

    return monitored


def monitor_performance(operation: str, logger: Optional[ToolLogger] = None):
    """Decorator form of ``with_performance_monitoring``.

    Usage:
        @monitor_performance("fetch-page")
        async def fetch_page(page_id: str) -> dict:
            ...
    """
    def decorator(func):
        return with_performance_monitoring(operation, func, logger)
    return decorator


__all__ = [
    "format_handler_result",
    "monitor_performance",
    "to_pretty_json",
    "with_handler_wrapper",
    "with_performance_monitoring",
    "with_simple_wrapper",
]
