"""Core module exports."""

from apidiff.core.errors import (
    ApiDiffError,
    ConfigError,
    ErrorCode,
    SnapshotError,
)
from apidiff.core.logging import (
    bind_run_id,
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ApiDiffError",
    "ConfigError",
    "ErrorCode",
    "SnapshotError",
    # Logging
    "bind_run_id",
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
