from __future__ import annotations

from .parameter import Parameter
from .signature import MethodSignature
from .method import Method
from .field import Field
from .class_node import ClassNode, Point
from .relationship import Relationship, RelationshipType
from .diagram import ClassDiagram

__all__ = [
    "Parameter",
    "MethodSignature",
    "Method",
    "Field",
    "ClassNode",
    "Point",
    "Relationship",
    "RelationshipType",
    "ClassDiagram",
]
