"""Tests for the class diagram aggregate.

Covers: class add/delete/rename with relationship cascades, relationship
add/remove/change, referential integrity and whole-structure validation.
"""
from __future__ import annotations

import copy

import pytest

from uml_editor.errors import ConflictError, NotFoundError, ValidationError
from uml_editor.model import ClassDiagram, RelationshipType


def diagram_with(*names: str) -> ClassDiagram:
    d = ClassDiagram()
    for name in names:
        d.add_class(name)
    return d


def rel_keys(d: ClassDiagram) -> list[tuple[str, str]]:
    return [r.key for r in d.relationships]


# ============================================================================
# Relationship types
# ============================================================================


class TestRelationshipType:
    @pytest.mark.parametrize("text", ["Aggregation", "Composition", "Inheritance", "Realization"])
    def test_round_trip(self, text):
        assert str(RelationshipType.from_string(text)) == text

    @pytest.mark.parametrize("text", ["composition", "Association", ""])
    def test_rejects(self, text):
        with pytest.raises(ValidationError, match="invalid relationship type"):
            RelationshipType.from_string(text)


# ============================================================================
# Classes
# ============================================================================


class TestClasses:
    def test_add_sorted(self):
        d = diagram_with("C", "A", "B")
        assert d.class_names() == ["A", "B", "C"]

    def test_add_duplicate(self):
        d = diagram_with("A")
        with pytest.raises(ConflictError, match="Class 'A' cannot be added because it already exists"):
            d.add_class("A")

    def test_add_invalid(self):
        with pytest.raises(ValidationError):
            ClassDiagram().add_class("1A")

    def test_get_distinguishes_malformed_from_missing(self):
        d = diagram_with("A")
        with pytest.raises(ValidationError):
            d.get_class("not valid")
        with pytest.raises(NotFoundError, match="class 'B' does not exist"):
            d.get_class("B")

    def test_delete_cascades(self):
        d = diagram_with("A", "B")
        d.add_relationship("A", "B", RelationshipType.COMPOSITION)
        with pytest.raises(ConflictError):
            d.add_relationship("A", "B", RelationshipType.AGGREGATION)
        d.delete_class("A")
        assert d.relationships == []
        assert d.class_names() == ["B"]

    def test_delete_cascades_self_and_incoming(self):
        d = diagram_with("A", "B", "C")
        d.add_relationship("A", "A", RelationshipType.AGGREGATION)
        d.add_relationship("B", "A", RelationshipType.INHERITANCE)
        d.add_relationship("B", "C", RelationshipType.REALIZATION)
        d.delete_class("A")
        assert rel_keys(d) == [("B", "C")]

    def test_delete_missing(self):
        with pytest.raises(NotFoundError):
            ClassDiagram().delete_class("A")

    def test_rename_propagates(self):
        d = diagram_with("A", "B", "C")
        d.add_relationship("A", "B", RelationshipType.COMPOSITION)
        d.add_relationship("C", "A", RelationshipType.INHERITANCE)
        d.add_relationship("A", "A", RelationshipType.AGGREGATION)
        d.rename_class("A", "Z")
        assert d.class_names() == ["B", "C", "Z"]
        assert rel_keys(d) == [("C", "Z"), ("Z", "B"), ("Z", "Z")]

    def test_rename_to_existing(self):
        d = diagram_with("A", "B")
        with pytest.raises(ConflictError, match="the new class already exists"):
            d.rename_class("A", "B")
        assert d.class_names() == ["A", "B"]

    def test_rename_missing(self):
        with pytest.raises(NotFoundError):
            diagram_with("A").rename_class("X", "Y")

    def test_move(self):
        d = diagram_with("A")
        d.move_class("A", 5, 6)
        assert d.get_class("A").position.to_dict() == {"x": 5, "y": 6}


# ============================================================================
# Relationships
# ============================================================================


class TestRelationships:
    def setup_method(self):
        self.d = diagram_with("A", "B", "C")
        self.d.add_relationship("A", "B", RelationshipType.COMPOSITION)

    def test_requires_existing_classes(self):
        with pytest.raises(NotFoundError):
            self.d.add_relationship("A", "X", RelationshipType.COMPOSITION)
        with pytest.raises(NotFoundError):
            self.d.add_relationship("X", "A", RelationshipType.COMPOSITION)

    def test_reverse_pair_is_distinct(self):
        self.d.add_relationship("B", "A", RelationshipType.AGGREGATION)
        assert rel_keys(self.d) == [("A", "B"), ("B", "A")]

    def test_sorted_by_pair(self):
        self.d.add_relationship("A", "A", RelationshipType.AGGREGATION)
        self.d.add_relationship("C", "A", RelationshipType.AGGREGATION)
        assert rel_keys(self.d) == [("A", "A"), ("A", "B"), ("C", "A")]

    def test_get_missing(self):
        with pytest.raises(NotFoundError, match="relationship between 'B' and 'C' does not exist"):
            self.d.get_relationship("B", "C")

    def test_delete(self):
        self.d.delete_relationship("A", "B")
        assert self.d.relationships == []
        with pytest.raises(NotFoundError):
            self.d.delete_relationship("A", "B")

    def test_change_source(self):
        self.d.change_relationship_source("A", "B", "C")
        assert rel_keys(self.d) == [("C", "B")]

    def test_change_source_collision(self):
        self.d.add_relationship("C", "B", RelationshipType.INHERITANCE)
        with pytest.raises(ConflictError, match="a relationship between C and B already exists"):
            self.d.change_relationship_source("A", "B", "C")

    def test_change_source_to_missing_class(self):
        with pytest.raises(NotFoundError):
            self.d.change_relationship_source("A", "B", "X")
        assert rel_keys(self.d) == [("A", "B")]

    def test_change_destination(self):
        self.d.change_relationship_destination("A", "B", "C")
        assert rel_keys(self.d) == [("A", "C")]

    def test_change_destination_collision(self):
        self.d.add_relationship("A", "C", RelationshipType.INHERITANCE)
        with pytest.raises(ConflictError):
            self.d.change_relationship_destination("A", "B", "C")

    def test_change_type(self):
        self.d.change_relationship_type("A", "B", RelationshipType.REALIZATION)
        assert self.d.get_relationship("A", "B").type is RelationshipType.REALIZATION

    def test_display(self):
        assert str(self.d.get_relationship("A", "B")) == "A -> B (Composition)"


# ============================================================================
# Whole-structure validation and equality
# ============================================================================


class TestFromDict:
    def test_rejects_dangling_relationship(self):
        data = {
            "classes": [{"name": "A", "fields": [], "methods": [], "position": {"x": 0, "y": 0}}],
            "relationships": [{"source": "A", "destination": "B", "type": "Composition"}],
        }
        with pytest.raises(NotFoundError, match="nonexistent class"):
            ClassDiagram.from_dict(data)

    def test_rejects_duplicate_classes(self):
        cls = {"name": "A", "fields": [], "methods": [], "position": {"x": 0, "y": 0}}
        with pytest.raises(ConflictError, match="Duplicate class exist"):
            ClassDiagram.from_dict({"classes": [cls, dict(cls)], "relationships": []})

    def test_rejects_duplicate_relationships(self):
        cls = {"name": "A", "fields": [], "methods": [], "position": {"x": 0, "y": 0}}
        rel = {"source": "A", "destination": "A", "type": "Composition"}
        other = {"source": "A", "destination": "A", "type": "Inheritance"}
        with pytest.raises(ConflictError, match="Duplicate relationship exist"):
            ClassDiagram.from_dict({"classes": [cls], "relationships": [rel, other]})

    def test_sorts_loaded_content(self):
        data = {
            "classes": [
                {"name": "B", "fields": [], "methods": [], "position": {"x": 0, "y": 0}},
                {"name": "A", "fields": [], "methods": [], "position": {"x": 0, "y": 0}},
            ],
            "relationships": [],
        }
        assert ClassDiagram.from_dict(data).class_names() == ["A", "B"]


class TestEquality:
    def test_deep_copy_is_equal_and_independent(self):
        d = diagram_with("A", "B")
        d.get_class("A").add_field("x", "int")
        snapshot = copy.deepcopy(d)
        assert snapshot == d
        d.get_class("A").add_field("y", "int")
        assert snapshot != d
        assert [f.name for f in snapshot.get_class("A").fields] == ["x"]
