"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (APIDIFF__SECTION__KEY)
3. Project YAML (.apidiff/config.yaml)
4. Global YAML (~/.config/apidiff/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    APIDIFF__<SECTION>__<KEY>=<VALUE>

Examples:
    APIDIFF__LOGGING__LEVEL=DEBUG
    APIDIFF__DIFF__SUPPRESS_NEW_DEPRECATED=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


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
        APIDIFF__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG reports per-stage counts of every diff run.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DiffConfig(BaseModel):
    """Reconciliation policy.

    Env vars:
        APIDIFF__DIFF__SUPPRESS_NEW_DEPRECATED: Drop added-but-deprecated elements
        APIDIFF__DIFF__BREAKING_SUMMARY_MAX_NAMES: Names listed in the breaking summary
    """

    suppress_new_deprecated: bool = Field(
        default=True,
        description="Do not report elements that are added already deprecated. "
        "They are expected to be removed before the release.",
    )
    breaking_summary_max_names: int = Field(
        default=5,
        description="Element names listed in the incompatible-changes summary.",
    )

    @field_validator("breaking_summary_max_names")
    @classmethod
    def validate_max_names(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Must be at least 1, got {v}")
        return v


class ApiDiffConfig(BaseModel):
    """Root configuration for apidiff.

    All settings can be configured via:
    1. Environment variables: APIDIFF__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    diff: DiffConfig = Field(default_factory=DiffConfig)
