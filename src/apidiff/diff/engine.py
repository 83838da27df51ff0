"""Pure reconciliation engine for API surface snapshots.

Compares the old and new snapshots of a library and classifies every
element that differs. No I/O: a pure function over its inputs.

Stages, applied in order:
- unchanged elements are pruned from both sides
- elements present on both sides get a ChangeRecord; the rest of the new
  side is "added" (already-deprecated additions are dropped)
- old members that moved to an ancestor type are not reported
- members of added or removed containers are not listed individually
- what is left of the old side is "removed"
- identifiers that moved to a sibling member are attributed to it
- everything is merged and sorted in report order

Each stage builds new collections instead of mutating the previous ones.
"""

from __future__ import annotations

import structlog

from apidiff.diff.changes import ChangeRecord
from apidiff.diff.models import (
    DiffEntry,
    Element,
    ElementId,
    HierarchyMap,
    Snapshot,
)

log = structlog.get_logger(__name__)


def compute_api_diff(
    old: Snapshot,
    new: Snapshot,
    hierarchy: HierarchyMap,
    *,
    suppress_new_deprecated: bool = True,
) -> list[DiffEntry]:
    """Compute the sorted list of changes between two snapshots.

    Args:
        old: API elements of the previous version.
        new: API elements of the new version.
        hierarchy: type canonical name -> parent canonical name, for the new
            version only.
        suppress_new_deprecated: drop added elements that are already
            deprecated.

    Returns:
        Added and changed elements of ``new`` plus removed elements of
        ``old``, in report order.
    """
    old_work, new_work = _prune_unchanged(old, new)

    new_entries, leftovers = _match_elements(old_work, new_work, suppress_new_deprecated)

    removed = [e for e in leftovers if not _is_reparented(e, new_entries, hierarchy)]
    if len(removed) != len(leftovers):
        log.debug("reparented_members_skipped", count=len(leftovers) - len(removed))

    new_entries = _drop_enclosed(new_entries)
    removed_entries = _drop_enclosed([DiffEntry(e, ChangeRecord.removed(e.kind)) for e in removed])

    new_entries = _attribute_uml_moves(new_entries)

    entries = sorted(new_entries + removed_entries, key=lambda entry: entry.element.sort_key())
    log.info(
        "api_diff_computed",
        old_version=old.version,
        new_version=new.version,
        added=sum(1 for e in entries if e.changes is None),
        changed=sum(1 for e in entries if e.changes is not None and not e.changes.is_removed),
        removed=len(removed_entries),
    )
    return entries


def _prune_unchanged(old: Snapshot, new: Snapshot) -> tuple[list[Element], list[Element]]:
    """Remove elements that are fully equal in both versions from both sides."""
    old_elements = set(old)
    unchanged = {e for e in new if e in old_elements}
    old_work = [e for e in old if e not in unchanged]
    new_work = [e for e in new if e not in unchanged]
    log.debug(
        "unchanged_pruned",
        unchanged=len(unchanged),
        old_remaining=len(old_work),
        new_remaining=len(new_work),
    )
    return old_work, new_work


def _match_elements(
    old_work: list[Element],
    new_work: list[Element],
    suppress_new_deprecated: bool,
) -> tuple[list[DiffEntry], list[Element]]:
    """Pair new elements with their old counterpart by identity.

    Returns the new-side entries and the old elements left unmatched.
    """
    old_by_id: dict[ElementId, Element] = {e.identity: e for e in old_work}
    assert len(old_by_id) == len(old_work), "duplicate identity in old snapshot"

    matched: set[ElementId] = set()
    entries: list[DiffEntry] = []
    suppressed = 0

    for element in new_work:
        counterpart = old_by_id.get(element.identity)
        if counterpart is None:
            if suppress_new_deprecated and element.is_deprecated:
                # Deprecated on introduction: expected to go before release
                suppressed += 1
                continue
            entries.append(DiffEntry(element, None))
            continue
        changes = ChangeRecord.between(counterpart, element)
        assert not changes.is_empty, f"unpruned unchanged element: {element.identity}"
        matched.add(element.identity)
        entries.append(DiffEntry(element, changes))

    if suppressed:
        log.debug("new_deprecated_suppressed", count=suppressed)

    leftovers = [e for e in old_work if e.identity not in matched]
    return entries, leftovers


def _is_reparented(old: Element, new_entries: list[DiffEntry], hierarchy: HierarchyMap) -> bool:
    """Whether an old member now lives, under the same name, in an ancestor type."""
    if not old.kind.is_member or old.container_name is None:
        return False
    for entry in new_entries:
        candidate = entry.element
        if not candidate.kind.is_member or candidate.java_name != old.java_name:
            continue
        if candidate.container_name is not None and _is_ancestor_or_self(
            candidate.container_name, old.container_name, hierarchy
        ):
            return True
    return False


def _is_ancestor_or_self(ancestor: str, type_name: str, hierarchy: HierarchyMap) -> bool:
    """Walk parents of ``type_name`` looking for ``ancestor``.

    Bounded by the size of the map, so missing or cyclic entries terminate.
    """
    current: str | None = type_name
    seen: set[str] = set()
    for _ in range(len(hierarchy) + 1):
        if current is None or current in seen:
            return False
        if current == ancestor:
            return True
        seen.add(current)
        current = hierarchy.get(current)
    return False


def _drop_enclosed(entries: list[DiffEntry]) -> list[DiffEntry]:
    """Drop elements enclosed in a container that is itself added or removed.

    Containment is resolved against the whole set before filtering, so
    members of nested added/removed containers are dropped as well.
    """
    wholesale = {
        e.element.identity for e in entries if e.changes is None or e.changes.is_removed
    }
    kept = [e for e in entries if e.element.container not in wholesale]
    if len(kept) != len(entries):
        log.debug("enclosed_elements_dropped", count=len(entries) - len(kept))
    return kept


def _attribute_uml_moves(entries: list[DiffEntry]) -> list[DiffEntry]:
    """Point lost identifiers at the sibling member that now carries them.

    Fires only when exactly one sibling matches; swapped identifiers
    between siblings may be missed.
    """
    result: list[DiffEntry] = []
    for entry in entries:
        element, changes = entry
        if element.kind.is_member and changes is not None and changes.is_uml_removed:
            targets = [
                other.element
                for other in entries
                if other.element.kind.is_member
                and other.element.container == element.container
                and changes.moved_to(other.element)
            ]
            if len(targets) == 1:
                log.debug(
                    "uml_move_detected",
                    source=element.display_name,
                    target=targets[0].display_name,
                    identifier=changes.old_name,
                )
                entry = DiffEntry(element, changes.with_uml_moved_to(targets[0].display_name))
        result.append(entry)
    return result
