"""Short textual summaries of a diff, for logs and report headers."""

from __future__ import annotations

from apidiff.diff.models import DiffEntry

_STATUS_ORDER = ("added", "changed", "removed")


def describe_entry(entry: DiffEntry) -> str:
    """One sentence describing what happened to the element."""
    if entry.changes is None:
        return "Added."
    return entry.changes.render()


def is_incompatible(entry: DiffEntry) -> bool:
    """Removed, made protected, or retyped."""
    changes = entry.changes
    if changes is None:
        return False
    if changes.is_removed or changes.is_public is False:
        return True
    return changes.old_type is not None or changes.new_type is not None


def build_summary(entries: list[DiffEntry]) -> str:
    """Build a human-readable summary of changes."""
    if not entries:
        return "No changes detected"

    counts: dict[str, int] = {}
    for entry in entries:
        counts[entry.status] = counts.get(entry.status, 0) + 1

    return ", ".join(f"{counts[status]} {status}" for status in _STATUS_ORDER if status in counts)


def build_breaking_summary(entries: list[DiffEntry], max_names: int = 5) -> str | None:
    """Build a summary of incompatible changes, or None if none."""
    breaking = [e for e in entries if is_incompatible(e)]
    if not breaking:
        return None

    n = len(breaking)
    names = ", ".join(e.element.display_name for e in breaking[:max_names])
    suffix = f" (and {n - max_names} more)" if n > max_names else ""
    return f"{n} incompatible change{'s' if n != 1 else ''}: {names}{suffix}"
