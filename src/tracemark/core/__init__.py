"""Core module exports."""

from tracemark.core.errors import (
    ConfigError,
    ErrorCode,
    ParseError,
    TracemarkError,
)
from tracemark.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)
from tracemark.core.progress import progress, status

__all__ = [
    # Errors
    "TracemarkError",
    "ConfigError",
    "ErrorCode",
    "ParseError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
    # Progress
    "progress",
    "status",
]
