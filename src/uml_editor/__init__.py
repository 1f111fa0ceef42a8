"""uml-editor -- Build and edit UML class diagrams with text commands, undo/redo and JSON files."""

from __future__ import annotations

from .errors import (
    UmlError,
    ValidationError,
    NotFoundError,
    ConflictError,
    ParseError,
    PersistenceError,
    UsageError,
)
from .model import (
    Parameter,
    MethodSignature,
    Method,
    Field,
    ClassNode,
    Point,
    Relationship,
    RelationshipType,
    ClassDiagram,
)
from .persistence import load_diagram, save_diagram
from .layout import auto_layout
from .commands import (
    Command,
    EditorContext,
    Timeline,
    command_templates,
    complete,
    parse_command,
    parse_line,
)

__all__ = [
    "UmlError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ParseError",
    "PersistenceError",
    "UsageError",
    "Parameter",
    "MethodSignature",
    "Method",
    "Field",
    "ClassNode",
    "Point",
    "Relationship",
    "RelationshipType",
    "ClassDiagram",
    "load_diagram",
    "save_diagram",
    "auto_layout",
    "Command",
    "EditorContext",
    "Timeline",
    "command_templates",
    "complete",
    "parse_command",
    "parse_line",
]
