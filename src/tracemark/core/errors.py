"""Tracemark error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parse

The context engine itself never raises: a missing name, an empty file or a
marker with no surrounding code are normal absent results. These errors are
for the layers around it (configuration, grammar loading, the CLI).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Parse (3xxx)
    PARSE_UNSUPPORTED_LANGUAGE = 3001
    PARSE_GRAMMAR_UNAVAILABLE = 3002
    PARSE_UNREADABLE_FILE = 3003


@dataclass(frozen=True, slots=True)
class TracemarkError(Exception):
    """Base error with structured context for JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
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


class ConfigError(TracemarkError):
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


class ParseError(TracemarkError):
    """Errors raised while turning a source file into a syntax tree."""

    @classmethod
    def unsupported_language(cls, path: str, ext: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNSUPPORTED_LANGUAGE,
            message=f"Unsupported file extension: {ext or '<none>'}",
            details={"path": path, "extension": ext},
        )

    @classmethod
    def grammar_unavailable(cls, language: str, module: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_GRAMMAR_UNAVAILABLE,
            message=f"Language not available: {language} (install {module})",
            details={"language": language, "module": module},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNREADABLE_FILE,
            message=f"Cannot read {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )
