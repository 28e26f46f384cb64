"""Argument validators for tool handlers.

``create_validator`` builds a ``ValidatorFunction`` from a field schema of
per-field checks; ``validator_from_model`` builds one from a pydantic model.
"""

import logging
import math
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Type

from pydantic import BaseModel, ValidationError

from tools.sanitizer import REDACTED
from tools.types import ValidationResult, ValidatorFunction

logger = logging.getLogger(__name__)

_LOG_SENSITIVE_KEYS = ("password", "token", "apiKey", "secret", "authorization")


class FieldCheck(NamedTuple):
    """Result of checking one argument field."""

    valid: bool
    error: Optional[str] = None
    value: Any = None


FieldValidator = Callable[[Any, Dict[str, Any]], FieldCheck]

_OK = FieldCheck(True)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _sanitize_for_log(args: Any) -> Dict[str, Any]:
    if not isinstance(args, dict):
        return {}
    return {key: REDACTED if key in _LOG_SENSITIVE_KEYS else value for key, value in args.items()}


def create_validator(schema: Dict[str, FieldValidator]) -> ValidatorFunction:
    """
    Build a validator from a mapping of field name to field check.

    Fields that pass are copied into ``validated_args`` (using the check's
    coerced value when it returns one); fields missing from the arguments and
    passing their check are omitted.

    Args:
        schema: Field name -> check taking ``(value, args)``

    Returns:
        Validator returning a ``ValidationResult``
    """
    def validate(args: Any) -> ValidationResult:
        if not isinstance(args, dict):
            return ValidationResult(is_valid=False, errors=["Arguments must be an object"])

        errors: List[str] = []
        validated: Dict[str, Any] = {}

        for key, check in schema.items():
            value = args.get(key)
            result = check(value, args)

            if not result.valid:
                if result.error:
                    errors.append(f"{key}: {result.error}")
            elif result.value is not None:
                validated[key] = result.value
            elif key in args:
                validated[key] = value

        if errors:
            logger.debug(f"Validation failed: {errors} args={_sanitize_for_log(args)}")
            return ValidationResult(is_valid=False, errors=errors)

        return ValidationResult(is_valid=True, validated_args=validated)

    return validate


def validator_from_model(model: Type[BaseModel]) -> ValidatorFunction:
    """Build a validator that parses arguments into a pydantic model."""
    def validate(args: Any) -> ValidationResult:
        try:
            return ValidationResult(is_valid=True, validated_args=model.model_validate(args or {}))
        except ValidationError as e:
            errors = []
            for error in e.errors():
                location = ".".join(str(part) for part in error["loc"])
                errors.append(f"{location}: {error['msg']}" if location else error["msg"])
            return ValidationResult(is_valid=False, errors=errors)

    return validate


class FieldValidators:
    """Common field checks for ``create_validator`` schemas."""

    @staticmethod
    def required(field_name: str) -> FieldValidator:
        def check(value, args=None):
            if _is_blank(value):
                return FieldCheck(False, f"{field_name} is required")
            return _OK
        return check

    @staticmethod
    def optional() -> FieldValidator:
        return lambda value, args=None: _OK

    @staticmethod
    def string(field_name: str, min_length: int = 0, max_length: float = math.inf) -> FieldValidator:
        def check(value, args=None):
            if value is None:
                return _OK
            if not isinstance(value, str):
                return FieldCheck(False, f"{field_name} must be a string")
            if len(value) < min_length:
                return FieldCheck(False, f"{field_name} must be at least {min_length} characters")
            if len(value) > max_length:
                return FieldCheck(False, f"{field_name} must be at most {max_length} characters")
            return FieldCheck(True, value=value.strip())
        return check

    @staticmethod
    def number(field_name: str, minimum: float = -math.inf, maximum: float = math.inf) -> FieldValidator:
        def check(value, args=None):
            if value is None:
                return _OK
            num = value
            if isinstance(value, str):
                try:
                    num = float(value)
                except ValueError:
                    num = None
            if isinstance(num, bool) or not isinstance(num, (int, float)) or math.isnan(num):
                return FieldCheck(False, f"{field_name} must be a number")
            if num < minimum or num > maximum:
                return FieldCheck(False, f"{field_name} must be between {minimum} and {maximum}")
            return FieldCheck(True, value=num)
        return check

    @staticmethod
    def integer(field_name: str, minimum: float = -math.inf, maximum: float = math.inf) -> FieldValidator:
        number_check = FieldValidators.number(field_name, minimum, maximum)

        def check(value, args=None):
            result = number_check(value, args)
            if not result.valid or result.value is None:
                return result
            if not float(result.value).is_integer():
                return FieldCheck(False, f"{field_name} must be an integer")
            return FieldCheck(True, value=int(result.value))
        return check

    @staticmethod
    def boolean(field_name: str) -> FieldValidator:
        def check(value, args=None):
            if value is None or isinstance(value, bool):
                return _OK
            if isinstance(value, str) and value.lower() in ("true", "false"):
                return FieldCheck(True, value=value.lower() == "true")
            return FieldCheck(False, f"{field_name} must be a boolean")
        return check

    @staticmethod
    def enum(field_name: str, allowed_values: Sequence[str]) -> FieldValidator:
        def check(value, args=None):
            if value is None:
                return _OK
            if not isinstance(value, str):
                return FieldCheck(False, f"{field_name} must be a string")
            if value not in allowed_values:
                return FieldCheck(False, f"{field_name} must be one of: {', '.join(allowed_values)}")
            return _OK
        return check

    @staticmethod
    def array(field_name: str, item_validator: Optional[FieldValidator] = None) -> FieldValidator:
        def check(value, args=None):
            if value is None:
                return _OK
            if not isinstance(value, list):
                return FieldCheck(False, f"{field_name} must be an array")
            if item_validator:
                for i, item in enumerate(value):
                    item_result = item_validator(item, args)
                    if not item_result.valid:
                        return FieldCheck(False, f"{field_name}[{i}]: {item_result.error}")
            return _OK
        return check

    @staticmethod
    def object(field_name: str) -> FieldValidator:
        def check(value, args=None):
            if value is None:
                return _OK
            if not isinstance(value, dict):
                return FieldCheck(False, f"{field_name} must be an object")
            return _OK
        return check

    @staticmethod
    def one_of_required(field_name: str, alternatives: Sequence[str]) -> FieldValidator:
        def check(value, args=None):
            args = args or {}
            has_alternative = any(not _is_blank(args.get(alt)) for alt in alternatives)
            if _is_blank(value) and not has_alternative:
                return FieldCheck(
                    False,
                    f"Either {field_name} or one of [{', '.join(alternatives)}] must be provided"
                )
            return _OK
        return check

    @staticmethod
    def all_of(*checks: FieldValidator) -> FieldValidator:
        """Apply checks in order, feeding each coerced value to the next."""
        def check(value, args=None):
            for inner in checks:
                result = inner(value, args)
                if not result.valid:
                    return result
                if result.value is not None:
                    value = result.value
            return FieldCheck(True, value=value)
        return check
