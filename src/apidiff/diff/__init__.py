"""API surface diff package: reconcile two snapshots into change records.

Public API re-exports for the diff subpackage.
"""

from apidiff.diff.changes import ChangeRecord, trim_package
from apidiff.diff.engine import compute_api_diff
from apidiff.diff.models import (
    DiffEntry,
    Element,
    ElementId,
    ElementKind,
    HierarchyMap,
    Obligation,
    Snapshot,
)
from apidiff.diff.ops import ApiDiffResult, diff_snapshot_files, diff_snapshots
from apidiff.diff.sources import (
    build_snapshot,
    hierarchy_from_snapshot,
    load_snapshot,
    snapshot_from_document,
    validate_hierarchy,
)
from apidiff.diff.summary import build_breaking_summary, build_summary, describe_entry

__all__ = [
    "ApiDiffResult",
    "ChangeRecord",
    "DiffEntry",
    "Element",
    "ElementId",
    "ElementKind",
    "HierarchyMap",
    "Obligation",
    "Snapshot",
    "build_breaking_summary",
    "build_snapshot",
    "build_summary",
    "compute_api_diff",
    "describe_entry",
    "diff_snapshot_files",
    "diff_snapshots",
    "hierarchy_from_snapshot",
    "load_snapshot",
    "snapshot_from_document",
    "trim_package",
    "validate_hierarchy",
]
