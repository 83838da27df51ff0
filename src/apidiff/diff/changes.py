"""Per-element change records and their one-line rendering."""

from __future__ import annotations

from dataclasses import dataclass, replace

from apidiff.diff.models import Element, ElementKind, Obligation

SEPARATOR = ", "


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """Changes of one element between the old and the new version.

    Each ``old_*``/``new_*`` pair is populated only when that aspect differs.
    ``is_public`` and ``is_deprecated`` hold the new value when the flag
    flipped, None otherwise. If ``is_removed`` is True every other diff
    field is unset.
    """

    kind: ElementKind
    is_removed: bool = False
    old_name: str | None = None
    new_name: str | None = None
    old_type: str | None = None
    new_type: str | None = None
    old_obligation: Obligation | None = None
    new_obligation: Obligation | None = None
    is_public: bool | None = None
    is_deprecated: bool | None = None
    uml_moved_to: str | None = None

    @classmethod
    def removed(cls, kind: ElementKind) -> ChangeRecord:
        return cls(kind=kind, is_removed=True)

    @classmethod
    def between(cls, old: Element, new: Element) -> ChangeRecord:
        """Compare two versions of the same element field by field."""
        assert old.identity == new.identity
        old_name = new_name = None
        old_type = new_type = None
        old_obligation = new_obligation = None
        if old.ogc_name != new.ogc_name:
            old_name, new_name = old.ogc_name, new.ogc_name
        if old.declared_type != new.declared_type:
            old_type, new_type = old.declared_type, new.declared_type
        if old.obligation != new.obligation:
            old_obligation, new_obligation = old.obligation, new.obligation
        return cls(
            kind=new.kind,
            old_name=old_name,
            new_name=new_name,
            old_type=old_type,
            new_type=new_type,
            old_obligation=old_obligation,
            new_obligation=new_obligation,
            is_public=new.is_public if old.is_public != new.is_public else None,
            is_deprecated=new.is_deprecated if old.is_deprecated != new.is_deprecated else None,
        )

    @property
    def is_empty(self) -> bool:
        """True if no aspect changed and the element was not removed."""
        return not self.is_removed and all(
            value is None
            for value in (
                self.old_name,
                self.new_name,
                self.old_type,
                self.new_type,
                self.old_obligation,
                self.new_obligation,
                self.is_public,
                self.is_deprecated,
            )
        )

    @property
    def is_uml_removed(self) -> bool:
        """True if both the identifier and the obligation were dropped."""
        return (
            self.old_name is not None
            and self.new_name is None
            and self.old_obligation is not None
            and self.new_obligation is None
        )

    def moved_to(self, other: Element) -> bool:
        """Whether ``other`` now carries the identifier this record lost."""
        return (
            self.is_uml_removed
            and other.ogc_name == self.old_name
            and other.obligation == self.old_obligation
        )

    def with_uml_moved_to(self, display_name: str) -> ChangeRecord:
        assert self.is_uml_removed
        return replace(self, uml_moved_to=display_name)

    @property
    def type_label(self) -> str:
        if self.kind is ElementKind.METHOD:
            return "Return type"
        return "Type" if self.kind.is_member else "Parent"

    def render(self) -> str:
        """Format the changes as a single sentence.

        Segment order: deprecation, UML move or identifier and obligation,
        type, visibility.
        """
        if self.is_removed:
            return "Removed."
        segments: list[str] = []
        _add_flag(segments, self.is_deprecated, "Deprecated", "Not deprecated anymore")
        if self.uml_moved_to is not None:
            segments.append(f"UML annotation moved to {self.uml_moved_to}")
        else:
            _add_pair(segments, "OGC/ISO identifier", self.old_name, self.new_name)
            _add_pair(
                segments,
                "Obligation",
                _obligation_text(self.old_obligation),
                _obligation_text(self.new_obligation),
            )
        _add_pair(segments, self.type_label, trim_package(self.old_type), trim_package(self.new_type))
        _add_flag(segments, self.is_public, "Made public", "Made protected")
        return SEPARATOR.join(segments) + "."


def trim_package(name: str | None) -> str | None:
    """Drop the package prefix of a qualified type name."""
    if name is None:
        return None
    return name[name.rfind(".") + 1 :]


def _obligation_text(obligation: Obligation | None) -> str | None:
    return obligation.name if obligation is not None else None


def _add_pair(segments: list[str], label: str, old: str | None, new: str | None) -> None:
    if old is not None and new is not None:
        segments.append(f"{label} changed from “{old}” to “{new}”")
    elif new is not None:
        segments.append(f"{label} set to “{new}”")
    elif old is not None:
        segments.append(f"{label} “{old}” removed")


def _add_flag(segments: list[str], value: bool | None, on_true: str, on_false: str) -> None:
    if value is not None:
        segments.append(on_true if value else on_false)
