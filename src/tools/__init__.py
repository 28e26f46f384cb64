"""MCP tool handler kit: wrappers, validators and registry."""

from tools.base import ToolHandler
from tools.registry import ToolRegistry
from tools.sanitizer import REDACTED, SENSITIVE_KEYS, sanitize_object, sanitize_response_text
from tools.types import (
    HandlerContext,
    HandlerOptions,
    PreShaped,
    Raw,
    ValidationResult,
    text_result,
)
from tools.validators import FieldCheck, FieldValidators, create_validator, validator_from_model
from tools.wrapper import (
    monitor_performance,
    with_handler_wrapper,
    with_performance_monitoring,
    with_simple_wrapper,
)

__all__ = [
    'ToolHandler',
    'ToolRegistry',
    'HandlerContext',
    'HandlerOptions',
    'PreShaped',
    'Raw',
    'ValidationResult',
    'text_result',
    'REDACTED',
    'SENSITIVE_KEYS',
    'sanitize_object',
    'sanitize_response_text',
    'FieldCheck',
    'FieldValidators',
    'create_validator',
    'validator_from_model',
    'monitor_performance',
    'with_handler_wrapper',
    'with_performance_monitoring',
    'with_simple_wrapper',
]
