"""Config module exports."""

from tracemark.config.loader import TracemarkSettings, load_config
from tracemark.config.models import (
    LoggingConfig,
    LogOutputConfig,
    ScanConfig,
    TracemarkConfig,
)

__all__ = [
    "load_config",
    "TracemarkConfig",
    "TracemarkSettings",
    "LoggingConfig",
    "LogOutputConfig",
    "ScanConfig",
]
