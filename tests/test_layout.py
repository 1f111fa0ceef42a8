"""Tests for automatic class placement with grandalf."""
from __future__ import annotations

from uml_editor.layout import CLS, auto_layout, class_box_size
from uml_editor.model import ClassDiagram, ClassNode, Parameter, RelationshipType


def boxes(d: ClassDiagram) -> dict[str, tuple[float, float, float, float]]:
    """name -> (left, top, right, bottom)"""
    result = {}
    for c in d.classes:
        w, h = class_box_size(c)
        result[c.name] = (c.position.x, c.position.y, c.position.x + w, c.position.y + h)
    return result


def overlaps(a, b) -> bool:
    return a[0] < b[2] - 1 and b[0] < a[2] - 1 and a[1] < b[3] - 1 and b[1] < a[3] - 1


def assert_no_overlap(d: ClassDiagram) -> None:
    items = list(boxes(d).items())
    for i, (name_a, a) in enumerate(items):
        for name_b, b in items[i + 1:]:
            assert not overlaps(a, b), f"{name_a} overlaps {name_b}"


# ============================================================================
# Box sizes
# ============================================================================


class TestClassBoxSize:
    def test_minimum(self):
        w, h = class_box_size(ClassNode("A"))
        assert w == CLS["min_width"]
        assert h == CLS["header_height"] + 2 * CLS["empty_section_height"]

    def test_grows_with_members(self):
        c = ClassNode("A")
        base_w, base_h = class_box_size(c)
        c.add_field("a_rather_long_field_name", "Map<String,List<Integer>>")
        c.add_method("f", "void", Parameter.list_from_string("a:int"))
        w, h = class_box_size(c)
        assert w > base_w
        assert h > base_h


# ============================================================================
# Layout
# ============================================================================


class TestAutoLayout:
    def test_empty_diagram(self):
        d = ClassDiagram()
        auto_layout(d)
        assert d.classes == []

    def test_single_class_at_padding(self):
        d = ClassDiagram()
        d.add_class("A")
        d.move_class("A", 500, 500)
        auto_layout(d)
        pad = CLS["padding"]
        assert d.get_class("A").position.to_dict() == {"x": pad, "y": pad}

    def test_chain_is_layered(self):
        d = ClassDiagram()
        for name in ["A", "B", "C"]:
            d.add_class(name)
        d.add_relationship("A", "B", RelationshipType.COMPOSITION)
        d.add_relationship("B", "C", RelationshipType.COMPOSITION)
        auto_layout(d)
        ys = [d.get_class(n).position.y for n in ["A", "B", "C"]]
        assert ys == sorted(ys)
        assert len(set(ys)) == 3
        assert_no_overlap(d)

    def test_siblings_do_not_overlap(self):
        d = ClassDiagram()
        for name in ["Base", "Left", "Middle", "Right"]:
            d.add_class(name)
        for child in ["Left", "Middle", "Right"]:
            d.add_relationship("Base", child, RelationshipType.INHERITANCE)
        auto_layout(d)
        assert_no_overlap(d)

    def test_self_relationship_is_ignored(self):
        d = ClassDiagram()
        d.add_class("A")
        d.add_relationship("A", "A", RelationshipType.AGGREGATION)
        auto_layout(d)
        pad = CLS["padding"]
        assert d.get_class("A").position.to_dict() == {"x": pad, "y": pad}

    def test_cycle(self):
        d = ClassDiagram()
        d.add_class("A")
        d.add_class("B")
        d.add_relationship("A", "B", RelationshipType.COMPOSITION)
        d.add_relationship("B", "A", RelationshipType.AGGREGATION)
        auto_layout(d)
        assert_no_overlap(d)

    def test_components_side_by_side(self):
        d = ClassDiagram()
        d.add_class("A")
        d.add_class("B")
        auto_layout(d, node_spacing=40)
        xs = sorted(c.position.x for c in d.classes)
        pad = CLS["padding"]
        assert xs == [pad, pad + CLS["min_width"] + 40]
        assert all(c.position.y == pad for c in d.classes)

    def test_positions_are_integers(self):
        d = ClassDiagram()
        for name in ["A", "B", "C"]:
            d.add_class(name)
        d.add_relationship("A", "B", RelationshipType.REALIZATION)
        d.add_relationship("A", "C", RelationshipType.REALIZATION)
        auto_layout(d, node_spacing=33.3, layer_spacing=17.7)
        for c in d.classes:
            assert type(c.position.x) is int
            assert type(c.position.y) is int

    def test_spacing_widens_gap(self):
        def gap(spacing):
            d = ClassDiagram()
            d.add_class("A")
            d.add_class("B")
            d.add_relationship("A", "B", RelationshipType.COMPOSITION)
            auto_layout(d, layer_spacing=spacing)
            return d.get_class("B").position.y - d.get_class("A").position.y

        assert gap(200) > gap(20)
