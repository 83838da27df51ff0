"""Data models for API surface diffs.

All models are plain dataclasses / frozen dataclasses. Identity for matching
an element across versions is ``(kind, container, java_name)``; full equality
additionally covers the standard-derived metadata and the visibility flags.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

from apidiff.core.errors import SnapshotError

if TYPE_CHECKING:
    from apidiff.diff.changes import ChangeRecord

# Type canonical name -> direct parent canonical name, from the new snapshot only
HierarchyMap = Mapping[str, str]


class ElementKind(Enum):
    """Kind of API surface element, in report order."""

    PACKAGE = "package"
    CLASS = "class"
    INTERFACE = "interface"
    METHOD = "method"
    FIELD = "field"

    @property
    def is_member(self) -> bool:
        return self in (ElementKind.METHOD, ElementKind.FIELD)

    @property
    def is_type(self) -> bool:
        return self in (ElementKind.CLASS, ElementKind.INTERFACE)

    @property
    def order(self) -> int:
        return _KIND_ORDER[self]


_KIND_ORDER = {kind: i for i, kind in enumerate(ElementKind)}


class Obligation(Enum):
    """Obligation of a property in the governing standard."""

    MANDATORY = "mandatory"
    OPTIONAL = "optional"
    CONDITIONAL = "conditional"


@dataclass(frozen=True, slots=True)
class ElementId:
    """Value-type identity of an element.

    ``container`` is the identity of the enclosing element. It is a lookup
    key into a snapshot, not a reference to the container object.
    """

    kind: ElementKind
    container: ElementId | None
    java_name: str

    def sort_key(self) -> tuple[str, ...]:
        """Container chain from the outermost element, as comparable strings."""
        parts: list[str] = []
        current: ElementId | None = self
        while current is not None:
            parts.append(f"{current.kind.order}:{current.java_name}")
            current = current.container
        return tuple(reversed(parts))

    def __str__(self) -> str:
        if self.container is None:
            return f"{self.kind.value} {self.java_name}"
        return f"{self.kind.value} {self.container.java_name}.{self.java_name}"


@dataclass(frozen=True, slots=True)
class Element:
    """One member of an API surface at one version.

    The comparison unit of the diff engine. Dataclass equality is full
    equality; use :attr:`identity` to match across versions.
    """

    kind: ElementKind
    java_name: str
    container: ElementId | None = None
    ogc_name: str | None = None
    declared_type: str | None = None  # type, return type or parent type
    obligation: Obligation | None = None
    is_public: bool = True  # False means protected
    is_deprecated: bool = False

    def __post_init__(self) -> None:
        if not self.java_name:
            raise SnapshotError.invalid_element(repr(self.java_name), "empty name")
        if self.kind.is_member and self.container is None:
            raise SnapshotError.invalid_element(self.java_name, f"{self.kind.value} without container")

    @property
    def identity(self) -> ElementId:
        return ElementId(self.kind, self.container, self.java_name)

    @property
    def display_name(self) -> str:
        return self.java_name

    @property
    def container_name(self) -> str | None:
        """Canonical name of the enclosing element, if any."""
        return self.container.java_name if self.container is not None else None

    def full_equals(self, other: Element) -> bool:
        return self == other

    def sort_key(self) -> tuple[int, str, str, tuple[str, ...]]:
        """Report order: kind, container name, own name, then container chain."""
        container_key = self.container.sort_key() if self.container is not None else ()
        return (self.kind.order, self.container_name or "", self.java_name, container_key)


class Snapshot:
    """Insertion-ordered set of elements for one library version.

    Duplicate identities are rejected on construction.
    """

    __slots__ = ("_elements", "version")

    def __init__(self, elements: Iterable[Element] = (), version: str | None = None) -> None:
        self.version = version
        self._elements: dict[ElementId, Element] = {}
        for element in elements:
            key = element.identity
            if key in self._elements:
                raise SnapshotError.duplicate_element(str(key))
            self._elements[key] = element

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements.values())

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, ElementId):
            return item in self._elements
        if isinstance(item, Element):
            return self._elements.get(item.identity) == item
        return False

    def get(self, identity: ElementId) -> Element | None:
        return self._elements.get(identity)

    def types(self) -> list[Element]:
        """Type elements (classes and interfaces), in insertion order."""
        return [e for e in self._elements.values() if e.kind.is_type]

    def __repr__(self) -> str:
        return f"Snapshot(version={self.version!r}, elements={len(self._elements)})"


class DiffEntry(NamedTuple):
    """One reported element and its changes.

    ``changes`` is None when the element was added.
    """

    element: Element
    changes: ChangeRecord | None

    @property
    def status(self) -> str:
        if self.changes is None:
            return "added"
        if self.changes.is_removed:
            return "removed"
        return "changed"
