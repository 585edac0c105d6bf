"""PropBind error types with typed error codes.

Error code ranges:
- 1xxx: Input (user-facing, surfaced as invalid argument responses)
- 2xxx: Config
- 9xxx: Internal (caller misuse, never user-facing)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Input (1xxx)
    INVALID_INPUT_ARGUMENT = 1001

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Internal (9xxx)
    INTERNAL_ERROR = 9001
    PROPERTY_NOT_FOUND = 9002
    UNBOUND_TARGET = 9003


@dataclass(frozen=True, slots=True)
class PropBindError(Exception):
    """Base error with structured context for error responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'INVALID_INPUT_ARGUMENT')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class InvalidInputArgumentError(PropBindError):
    """A value is not assignable to the declared type of the target property."""

    @classmethod
    def for_value(cls, value: Any, field: str, type_name: str) -> "InvalidInputArgumentError":
        return cls(
            code=ErrorCode.INVALID_INPUT_ARGUMENT,
            message=f"Invalid input argument `{value}` for field `{field}` on type `{type_name}`",
            details={"value": str(value), "field": field, "type": type_name},
        )


class ConfigError(PropBindError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class InternalError(PropBindError):
    """Internal errors signalling caller misuse or unexpected state."""

    @classmethod
    def property_not_found(cls, name: str, type_name: str) -> "InternalError":
        return cls(
            code=ErrorCode.PROPERTY_NOT_FOUND,
            message=f"No property named `{name}` found on `{type_name}`, "
            "have you checked with has_property()?",
            details={"property": name, "type": type_name},
        )

    @classmethod
    def unbound_target(cls, type_name: str) -> "InternalError":
        return cls(
            code=ErrorCode.UNBOUND_TARGET,
            message=f"Accessor for `{type_name}` is not bound to an instance",
            details={"type": type_name},
        )
