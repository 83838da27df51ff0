"""Build validated snapshots at the extractor boundary.

Two source strategies:
- build_snapshot: wraps elements already produced by an extractor
- snapshot_from_document / load_snapshot: reads a nested package/type/member
  document (YAML, or JSON as a YAML subset)

Malformed input is rejected here with SnapshotError; the engine assumes
well-formed snapshots.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any, Literal

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from apidiff.core.errors import SnapshotError
from apidiff.diff.models import (
    Element,
    ElementKind,
    HierarchyMap,
    Obligation,
    Snapshot,
)

log = structlog.get_logger(__name__)


# ============================================================================
# Source 1: Elements from an extractor
# ============================================================================


def build_snapshot(elements: Iterable[Element], version: str | None = None) -> Snapshot:
    """Collect extractor output into a Snapshot, rejecting duplicate identities."""
    snapshot = Snapshot(elements, version=version)
    log.debug("snapshot_built", version=version, elements=len(snapshot))
    return snapshot


def hierarchy_from_snapshot(snapshot: Snapshot) -> dict[str, str]:
    """Map every type with a declared parent to that parent's canonical name."""
    return {
        element.java_name: element.declared_type
        for element in snapshot.types()
        if element.declared_type is not None
    }


def validate_hierarchy(snapshot: Snapshot, hierarchy: HierarchyMap) -> None:
    """Reject hierarchy entries that do not describe a type of the snapshot.

    Parents may lie outside the snapshot (platform types).
    """
    type_names = {element.java_name for element in snapshot.types()}
    for type_name, parent in hierarchy.items():
        if type_name not in type_names:
            raise SnapshotError.invalid_hierarchy(type_name, "not a type of the new snapshot")
        if not parent:
            raise SnapshotError.invalid_hierarchy(type_name, "empty parent name")
        if parent == type_name:
            raise SnapshotError.invalid_hierarchy(type_name, "type is its own parent")


# ============================================================================
# Source 2: Snapshot documents
# ============================================================================


class _MemberRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    kind: Literal["method", "field"] = "method"
    ogc_name: str | None = None
    obligation: Obligation | None = None
    type: str | None = None
    public: bool = True
    deprecated: bool = False


class _TypeRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    kind: Literal["class", "interface"] = "interface"
    ogc_name: str | None = None
    obligation: Obligation | None = None
    parent: str | None = None
    public: bool = True
    deprecated: bool = False
    members: list[_MemberRecord] = Field(default_factory=list)


class _PackageRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    deprecated: bool = False
    types: list[_TypeRecord] = Field(default_factory=list)


class _SnapshotDocument(BaseModel):
    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)

    version: str | None = None
    packages: list[_PackageRecord] = Field(default_factory=list)


def _elements_from_document(document: _SnapshotDocument) -> list[Element]:
    elements: list[Element] = []
    for package in document.packages:
        package_element = Element(
            kind=ElementKind.PACKAGE,
            java_name=package.name,
            is_deprecated=package.deprecated,
        )
        elements.append(package_element)
        for type_record in package.types:
            type_element = Element(
                kind=ElementKind(type_record.kind),
                java_name=type_record.name,
                container=package_element.identity,
                ogc_name=type_record.ogc_name,
                declared_type=type_record.parent,
                obligation=type_record.obligation,
                is_public=type_record.public,
                is_deprecated=type_record.deprecated,
            )
            elements.append(type_element)
            for member in type_record.members:
                elements.append(
                    Element(
                        kind=ElementKind(member.kind),
                        java_name=member.name,
                        container=type_element.identity,
                        ogc_name=member.ogc_name,
                        declared_type=member.type,
                        obligation=member.obligation,
                        is_public=member.public,
                        is_deprecated=member.deprecated,
                    )
                )
    return elements


def snapshot_from_document(data: dict[str, Any], source: str = "<document>") -> Snapshot:
    """Build a Snapshot from a parsed package/type/member document.

    Args:
        data: Parsed document.
        source: Where the document came from, for error messages.

    Raises:
        SnapshotError: On schema violations or duplicate elements.
    """
    try:
        document = _SnapshotDocument.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        location = ".".join(str(loc) for loc in err["loc"])
        raise SnapshotError.parse_error(source, f"{location}: {err['msg']}") from e
    return build_snapshot(_elements_from_document(document), version=document.version)


def load_snapshot(path: Path) -> Snapshot:
    """Load a snapshot document from a YAML or JSON file."""
    if not path.is_file():
        raise SnapshotError.file_not_found(str(path))
    try:
        with path.open("rb") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SnapshotError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise SnapshotError.parse_error(str(path), "top level must be a mapping")
    snapshot = snapshot_from_document(data, source=str(path))
    log.info("snapshot_loaded", path=str(path), version=snapshot.version, elements=len(snapshot))
    return snapshot
