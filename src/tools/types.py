"""Data model shared by the handler wrappers."""

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# MCP CallToolResult wire shape: {"content": [{"type": "text", "text": ...}], "isError"?: bool}
ToolResult = Dict[str, Any]


class HandlerContext(BaseModel):
    """Immutable descriptor of one wrapped handler registration."""

    model_config = ConfigDict(frozen=True)

    operation: str
    tool: str
    user_id: Optional[str] = None
    request_id: Optional[str] = None

    def meta(self) -> Dict[str, Any]:
        """Logging metadata carried by every lifecycle event."""
        return {
            "tool": self.tool,
            "userId": self.user_id,
            "requestId": self.request_id,
        }


class HandlerOptions(BaseModel):
    """Per-handler wrapper behaviour, fixed at wrap time."""

    model_config = ConfigDict(frozen=True)

    return_structured_data: bool = Field(
        default=False,
        description="Serialize the raw result as JSON with no sanitization or shape checks"
    )
    log_performance: bool = Field(default=True, description="Emit a performance event on success")
    sanitize_response: bool = Field(default=True, description="Redact sensitive keys before serializing")


class ValidationResult(BaseModel):
    """Outcome of a validator run."""

    is_valid: bool
    validated_args: Any = None
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def coerce(cls, value: Any) -> "ValidationResult":
        """Accept a ``ValidationResult`` or a mapping with ``isValid``/``validatedArgs``/``errors``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(
                is_valid=bool(value.get("is_valid", value.get("isValid", False))),
                validated_args=value.get("validated_args", value.get("validatedArgs")),
                errors=list(value.get("errors") or []),
            )
        raise TypeError(f"Validator returned {type(value).__name__}, expected ValidationResult")


class Raw:
    """Handler outcome to be serialized by the wrapper."""

    __slots__ = ("value",)

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"Raw({self.value!r})"


class PreShaped:
    """Handler outcome that is already a tool result and is passed through."""

    __slots__ = ("result",)

    def __init__(self, result: ToolResult):
        self.result = result

    def __repr__(self) -> str:
        return f"PreShaped({self.result!r})"


HandlerOutcome = Union[Raw, PreShaped]

ValidatorFunction = Callable[[Any], Union[ValidationResult, Awaitable[ValidationResult]]]
HandlerFunction = Callable[[Any], Awaitable[Any]]
WrappedHandler = Callable[[Any], Awaitable[ToolResult]]


def text_result(text: str) -> ToolResult:
    """Create a successful MCP tool result holding one text item."""
    return {
        "content": [{
            "type": "text",
            "text": text
        }]
    }
