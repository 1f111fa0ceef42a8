from __future__ import annotations

from .model.class_node import ClassNode
from .model.diagram import ClassDiagram
from .model.relationship import Relationship

# ============================================================================
# Plain-text listings
#
# Each class is rendered as a header line followed by its two compartments,
# fields then methods, indented beneath it. Relationships are one per line.
# ============================================================================

INDENT = "  "


def build_class_sections(cls: ClassNode) -> list[list[str]]:
    """Text sections for a class: [header], [fields], [methods]."""
    header = [f"{cls.name} @ ({cls.position.x}, {cls.position.y})"]
    fields = [f.format(spaced=True) for f in cls.fields]
    methods = [m.format(spaced=True) for m in cls.methods]
    return [header, fields, methods]


def render_class(cls: ClassNode) -> str:
    header, fields, methods = build_class_sections(cls)
    lines = list(header)
    lines.append(f"{INDENT}fields:" if fields else f"{INDENT}fields: (none)")
    lines.extend(f"{INDENT * 2}{line}" for line in fields)
    lines.append(f"{INDENT}methods:" if methods else f"{INDENT}methods: (none)")
    lines.extend(f"{INDENT * 2}{line}" for line in methods)
    return "\n".join(lines)


def render_relationship(rel: Relationship) -> str:
    return str(rel)


def render_classes(diagram: ClassDiagram) -> str:
    if not diagram.classes:
        return "No classes"
    return "\n".join(render_class(c) for c in diagram.classes)


def render_relationships(diagram: ClassDiagram) -> str:
    if not diagram.relationships:
        return "No relationships"
    return "\n".join(render_relationship(r) for r in diagram.relationships)


def render_diagram(diagram: ClassDiagram) -> str:
    """Classes followed by relationships."""
    return "\n".join(
        [
            "Classes:",
            render_classes(diagram),
            "Relationships:",
            render_relationships(diagram),
        ]
    )
