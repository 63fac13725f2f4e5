"""Value types shared across the license analysis pipeline.

Coordinates identify artifacts, descriptors carry the parsed POM facts
the resolver needs, and dependency rows are the only durable output of
a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any, Dict, List, Optional, Tuple


@total_ordering
@dataclass(frozen=True, eq=False)
class Coordinate:
    """Artifact coordinate ``group:name:version``.

    Equality, hashing and ordering all go through the canonical string
    form so that coordinates can be used as dict/set keys and sorted
    the same way report rows are.
    """

    group: str
    name: str
    version: str

    @classmethod
    def parse(cls, notation: str) -> "Coordinate":
        """Parse ``group:name:version`` (optionally suffixed with ``@ext``).

        Raises:
            ValueError: If the notation does not have three non-empty parts.
        """
        text = (notation or "").strip()
        if "@" in text:
            text = text.split("@", 1)[0]
        parts = [part.strip() for part in text.split(":")]
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Invalid coordinate notation: {notation!r}")
        return cls(parts[0], parts[1], parts[2])

    @property
    def display_id(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"

    def __str__(self) -> str:
        return self.display_id

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.display_id == other.display_id

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.display_id < other.display_id

    def __hash__(self) -> int:
        return hash(self.display_id)


@dataclass(frozen=True)
class License:
    """A declared license: name and URL, empty strings when absent."""

    name: str = ""
    url: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class Descriptor:
    """Parsed package-metadata document.

    Attributes:
        group_id: Group used for override matching (root ``group`` element,
            falling back to ``groupId``).
        artifact_id: Root ``artifactId`` if present.
        version: Root ``version`` if present.
        licenses: Declared licenses in document order.
        parent: Parent coordinate when the ``parent`` element is complete.
        parent_incomplete: True when a ``parent`` element exists but lacks
            one of ``groupId``/``artifactId``/``version``.
    """

    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    licenses: Tuple[License, ...] = ()
    parent: Optional[Coordinate] = None
    parent_incomplete: bool = False

    @property
    def has_licenses(self) -> bool:
        return bool(self.licenses)


@dataclass(frozen=True)
class Dependency:
    """Report row: coordinate display id and its resolved licenses."""

    id: str
    licenses: Tuple[License, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "licenses": [lic.to_dict() for lic in self.licenses],
        }


def sort_dependencies(rows: List[Dependency]) -> List[Dependency]:
    """Return rows sorted ascending by display id."""
    return sorted(rows, key=lambda row: row.id)


__all__ = [
    "Coordinate",
    "License",
    "Descriptor",
    "Dependency",
    "sort_dependencies",
]
