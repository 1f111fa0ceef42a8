from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any

from ..errors import ValidationError
from ..grammar import check_type

# ============================================================================
# Relationships
#
# A typed, directed edge between two class names. At most one relationship
# exists per ordered (source, destination) pair, whatever its type, so
# identity and ordering use only the pair.
# ============================================================================


class RelationshipType(Enum):
    AGGREGATION = "Aggregation"
    COMPOSITION = "Composition"
    INHERITANCE = "Inheritance"
    REALIZATION = "Realization"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, text: str) -> RelationshipType:
        """Exact, case-sensitive lookup by display name."""
        for member in cls:
            if member.value == text:
                return member
        raise ValidationError(f"invalid relationship type: '{text}'")


@total_ordering
@dataclass(slots=True, eq=False)
class Relationship:
    """Directed edge `source -> destination` of a given type."""

    source: str
    destination: str
    type: RelationshipType

    def __post_init__(self) -> None:
        check_type(self.source, "class name")
        check_type(self.destination, "class name")
        if not isinstance(self.type, RelationshipType):
            self.type = RelationshipType.from_string(self.type)

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.destination)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Relationship):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: Relationship) -> bool:
        if not isinstance(other, Relationship):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"{self.source} -> {self.destination} ({self.type})"

    def touches(self, class_name: str) -> bool:
        return class_name in self.key

    def change_type(self, new_type: RelationshipType) -> None:
        self.type = new_type

    def change_source(self, new_source: str) -> None:
        check_type(new_source, "class name")
        self.source = new_source

    def change_destination(self, new_destination: str) -> None:
        check_type(new_destination, "class name")
        self.destination = new_destination

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "destination": self.destination,
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Relationship:
        return cls(
            data["source"],
            data["destination"],
            RelationshipType.from_string(data["type"]),
        )
