"""apidiff - compatibility diffs between versions of a standards-derived API."""

from apidiff.diff import (
    ApiDiffResult,
    ChangeRecord,
    DiffEntry,
    Element,
    ElementKind,
    Obligation,
    Snapshot,
    compute_api_diff,
    diff_snapshot_files,
    diff_snapshots,
)

__version__ = "0.1.0"

__all__ = [
    "ApiDiffResult",
    "ChangeRecord",
    "DiffEntry",
    "Element",
    "ElementKind",
    "Obligation",
    "Snapshot",
    "compute_api_diff",
    "diff_snapshot_files",
    "diff_snapshots",
]
