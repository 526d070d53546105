"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (TRACEMARK__SECTION__KEY)
3. Repo YAML (.tracemark/config.yaml)
4. Global YAML (~/.config/tracemark/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    TRACEMARK__<SECTION>__<KEY>=<VALUE>

Examples:
    TRACEMARK__LOGGING__LEVEL=DEBUG
    TRACEMARK__SCAN__MAX_FILE_SIZE_MB=5
    TRACEMARK__SCAN__MARKER_PREFIXES='["REQ", "SRS"]'
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_MARKER_PREFIXES: tuple[str, ...] = ("REQ", "SRS", "HLR", "LLR", "SYS", "SWR")


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        TRACEMARK__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every scanned file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ScanConfig(BaseModel):
    """Marker scanning configuration.

    Env vars:
        TRACEMARK__SCAN__MARKER_PREFIXES: JSON list of identifier prefixes
        TRACEMARK__SCAN__MARKER_REGEX: Full marker regex (overrides prefixes)
        TRACEMARK__SCAN__MAX_FILE_SIZE_MB: Skip files larger than this
    """

    marker_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MARKER_PREFIXES),
        description="Requirement identifier prefixes, e.g. REQ matches REQ-001.",
    )
    marker_regex: str | None = Field(
        default=None,
        description="Custom marker regex. Group 1 (or the whole match) is the marker id.",
    )
    max_file_size_mb: float = Field(
        default=2.0,
        description="Skip source files larger than this (MB).",
    )
    excluded_dirs: list[str] = Field(
        default_factory=list,
        description="Extra directory names to skip in addition to the built-in set.",
    )
    languages: list[str] | None = Field(
        default=None,
        description="Restrict scanning to these language packs. None scans all.",
    )

    @field_validator("marker_prefixes")
    @classmethod
    def validate_prefixes(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one marker prefix is required")
        for prefix in v:
            if not re.fullmatch(r"[A-Za-z][A-Za-z0-9_]*", prefix):
                raise ValueError(f"Marker prefix must be alphanumeric: {prefix!r}")
        return v

    @field_validator("marker_regex")
    @classmethod
    def validate_regex(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid marker regex: {e}") from e
        return v

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_max_size(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"max_file_size_mb must be positive, got {v}")
        return v

    @field_validator("languages")
    @classmethod
    def validate_languages(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        from tracemark.parsing.packs import get_pack

        unknown = [name for name in v if get_pack(name) is None]
        if unknown:
            raise ValueError(f"Unknown languages: {', '.join(unknown)}")
        return v


class TracemarkConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
