from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import ConflictError, NotFoundError
from ..grammar import check_type, check_unique
from .class_node import ClassNode
from .relationship import Relationship, RelationshipType

logger = logging.getLogger(__name__)

# ============================================================================
# Class diagram aggregate
#
# Owns every class and relationship. Invariants:
#   - class names are unique, classes are sorted by name
#   - (source, destination) pairs are unique, relationships sorted by pair
#   - every relationship endpoint names an existing class
#
# Lookups validate the raw name before searching, so a malformed name is a
# ValidationError and an absent one a NotFoundError.
# ============================================================================


@dataclass(slots=True, eq=False)
class ClassDiagram:
    """The whole editable diagram."""

    classes: list[ClassNode] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.classes = sorted(self.classes)
        self.relationships = sorted(self.relationships)
        check_unique((c.name for c in self.classes), "class")
        check_unique((r.key for r in self.relationships), "relationship")
        names = set(self.class_names())
        for rel in self.relationships:
            if rel.source not in names or rel.destination not in names:
                raise NotFoundError("Relationship(s) contain nonexistent class(es)")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassDiagram):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def class_names(self) -> list[str]:
        return [c.name for c in self.classes]

    # ------------------------------------------------------------------
    # Classes
    # ------------------------------------------------------------------

    def has_class(self, name: str) -> bool:
        return any(c.name == name for c in self.classes)

    def get_class(self, name: str) -> ClassNode:
        check_type(name, "class name")
        for c in self.classes:
            if c.name == name:
                return c
        raise NotFoundError(f"class '{name}' does not exist")

    def add_class(self, name: str) -> ClassNode:
        node = ClassNode(name)
        if self.has_class(name):
            raise ConflictError(f"Class '{name}' cannot be added because it already exists")
        self.classes.append(node)
        self.classes.sort()
        logger.debug("Added class %s", name)
        return node

    def delete_class(self, name: str) -> None:
        node = self.get_class(name)
        self.relationships = [r for r in self.relationships if not r.touches(name)]
        self.classes.remove(node)
        logger.debug("Deleted class %s", name)

    def rename_class(self, old_name: str, new_name: str) -> None:
        node = self.get_class(old_name)
        check_type(new_name, "class name")
        if self.has_class(new_name):
            raise ConflictError("the new class already exists")
        node.rename(new_name)
        self.classes.sort()
        for rel in self.relationships:
            if rel.source == old_name:
                rel.change_source(new_name)
            if rel.destination == old_name:
                rel.change_destination(new_name)
        self.relationships.sort()
        logger.debug("Renamed class %s to %s", old_name, new_name)

    def move_class(self, name: str, x: int, y: int) -> None:
        self.get_class(name).move(x, y)

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def has_relationship(self, source: str, destination: str) -> bool:
        return any(r.key == (source, destination) for r in self.relationships)

    def get_relationship(self, source: str, destination: str) -> Relationship:
        check_type(source, "class name")
        check_type(destination, "class name")
        for rel in self.relationships:
            if rel.key == (source, destination):
                return rel
        raise NotFoundError(
            f"relationship between '{source}' and '{destination}' does not exist"
        )

    def add_relationship(
        self, source: str, destination: str, type_: RelationshipType
    ) -> Relationship:
        self.get_class(source)
        self.get_class(destination)
        if self.has_relationship(source, destination):
            raise ConflictError("Cannot add relationship because it already exists")
        rel = Relationship(source, destination, type_)
        self.relationships.append(rel)
        self.relationships.sort()
        logger.debug("Added relationship %s", rel)
        return rel

    def delete_relationship(self, source: str, destination: str) -> None:
        self.relationships.remove(self.get_relationship(source, destination))
        logger.debug("Deleted relationship %s -> %s", source, destination)

    def change_relationship_source(
        self, source: str, destination: str, new_source: str
    ) -> None:
        rel = self.get_relationship(source, destination)
        if self.has_relationship(new_source, destination):
            raise ConflictError(
                f"a relationship between {new_source} and {destination} already exists"
            )
        self.get_class(new_source)
        rel.change_source(new_source)
        self.relationships.sort()

    def change_relationship_destination(
        self, source: str, destination: str, new_destination: str
    ) -> None:
        rel = self.get_relationship(source, destination)
        if self.has_relationship(source, new_destination):
            raise ConflictError(
                f"a relationship between {source} and {new_destination} already exists"
            )
        self.get_class(new_destination)
        rel.change_destination(new_destination)
        self.relationships.sort()

    def change_relationship_type(
        self, source: str, destination: str, new_type: RelationshipType
    ) -> None:
        self.get_relationship(source, destination).change_type(new_type)

    # ------------------------------------------------------------------
    # Serialization and persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "classes": [c.to_dict() for c in self.classes],
            "relationships": [r.to_dict() for r in self.relationships],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClassDiagram:
        """Build a diagram, re-running every invariant on the whole structure."""
        return cls(
            classes=[ClassNode.from_dict(c) for c in data["classes"]],
            relationships=[Relationship.from_dict(r) for r in data["relationships"]],
        )

    def replace_with(self, other: ClassDiagram) -> None:
        """Take over the contents of `other`."""
        self.classes = other.classes
        self.relationships = other.relationships

    def load(self, path: str | Path) -> None:
        from ..persistence import load_diagram

        self.replace_with(load_diagram(path))

    def save(self, path: str | Path) -> None:
        from ..persistence import save_diagram

        save_diagram(self, path)
