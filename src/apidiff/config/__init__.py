"""Config module exports."""

from apidiff.config.loader import load_config
from apidiff.config.models import (
    ApiDiffConfig,
    DiffConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "ApiDiffConfig",
    "DiffConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
