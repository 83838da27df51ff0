"""apidiff error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Snapshot (extractor boundary)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Snapshot (3xxx)
    SNAPSHOT_PARSE_ERROR = 3001
    SNAPSHOT_FILE_NOT_FOUND = 3002
    SNAPSHOT_DUPLICATE_ELEMENT = 3003
    SNAPSHOT_INVALID_ELEMENT = 3004
    SNAPSHOT_INVALID_HIERARCHY = 3005


@dataclass(frozen=True, slots=True)
class ApiDiffError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SNAPSHOT_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON reports."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ApiDiffError):
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


class SnapshotError(ApiDiffError):
    """Malformed snapshot input, rejected at the extractor boundary."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_PARSE_ERROR,
            message=f"Failed to parse snapshot at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_FILE_NOT_FOUND,
            message=f"Snapshot file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def duplicate_element(cls, identity: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_DUPLICATE_ELEMENT,
            message=f"Duplicate element in snapshot: {identity}",
            details={"identity": identity},
        )

    @classmethod
    def invalid_element(cls, name: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_INVALID_ELEMENT,
            message=f"Invalid element '{name}': {reason}",
            details={"name": name, "reason": reason},
        )

    @classmethod
    def invalid_hierarchy(cls, type_name: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_INVALID_HIERARCHY,
            message=f"Invalid hierarchy entry for '{type_name}': {reason}",
            details={"type": type_name, "reason": reason},
        )

