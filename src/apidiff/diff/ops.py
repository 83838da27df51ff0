"""Diff operations: snapshots in, sorted changes and summaries out."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from apidiff.config.models import ApiDiffConfig
from apidiff.core.logging import bind_run_id
from apidiff.diff.engine import compute_api_diff
from apidiff.diff.models import DiffEntry, HierarchyMap, Snapshot
from apidiff.diff.sources import hierarchy_from_snapshot, load_snapshot, validate_hierarchy
from apidiff.diff.summary import build_breaking_summary, build_summary

log = structlog.get_logger(__name__)


@dataclass
class ApiDiffResult:
    """Final diff result handed to report renderers."""

    entries: list[DiffEntry]
    summary: str
    breaking_summary: str | None
    old_version: str | None = None
    new_version: str | None = None


def diff_snapshots(
    old: Snapshot,
    new: Snapshot,
    hierarchy: HierarchyMap | None = None,
    *,
    config: ApiDiffConfig | None = None,
    run_id: str | None = None,
) -> ApiDiffResult:
    """Diff two snapshots under the configured policy.

    Args:
        old: Previous version.
        new: New version.
        hierarchy: Type ancestry of the new version. Derived from the type
            elements of ``new`` when omitted.
        config: Policy and logging settings. Defaults apply when omitted.
        run_id: Correlation ID attached to every log event of this run.
            Defaults to the ID already bound by the caller, else a new one.

    Raises:
        SnapshotError: If the hierarchy does not describe ``new``.
    """
    config = config or ApiDiffConfig()
    if hierarchy is None:
        hierarchy = hierarchy_from_snapshot(new)
    validate_hierarchy(new, hierarchy)

    with bind_run_id(run_id):
        log.debug(
            "api_diff_started",
            old_version=old.version,
            new_version=new.version,
            old_elements=len(old),
            new_elements=len(new),
        )
        entries = compute_api_diff(
            old,
            new,
            hierarchy,
            suppress_new_deprecated=config.diff.suppress_new_deprecated,
        )
        result = ApiDiffResult(
            entries=entries,
            summary=build_summary(entries),
            breaking_summary=build_breaking_summary(
                entries, max_names=config.diff.breaking_summary_max_names
            ),
            old_version=old.version,
            new_version=new.version,
        )
        log.info("api_diff_finished", summary=result.summary)
        return result


def diff_snapshot_files(
    old_path: Path,
    new_path: Path,
    *,
    config: ApiDiffConfig | None = None,
) -> ApiDiffResult:
    """Load two snapshot documents and diff them."""
    old = load_snapshot(old_path)
    new = load_snapshot(new_path)
    return diff_snapshots(old, new, config=config)
