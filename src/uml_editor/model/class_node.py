from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any

from ..errors import ConflictError, NotFoundError
from ..grammar import check_identifier, check_type, check_unique
from .field import Field
from .method import Method
from .parameter import Parameter
from .signature import MethodSignature

logger = logging.getLogger(__name__)

# ============================================================================
# Class node
#
# Owns its fields (sorted by name) and methods (sorted by signature). Every
# structural mutation computes the resulting name or signature first, rejects
# it if another member already holds it, and only then mutates and re-sorts.
# ============================================================================


@dataclass(slots=True)
class Point:
    """Top-left position of a class box."""

    x: int = 0
    y: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Point:
        x, y = data["x"], data["y"]
        # bool is an int subclass but not a coordinate
        if type(x) is not int or type(y) is not int:
            raise TypeError(f"position must hold integers, got {data!r}")
        return cls(x, y)


def _copy_parameters(parameters: Iterable[Parameter]) -> list[Parameter]:
    # Callers (commands replayed on redo) keep their own parameter objects
    return [Parameter(p.name, p.type) for p in parameters]


def _check_signature(signature: MethodSignature) -> None:
    check_identifier(signature.name, "method name")
    for type_ in signature.parameter_types:
        check_type(type_, "parameter type")


@total_ordering
@dataclass(slots=True, eq=False)
class ClassNode:
    """A class in the diagram; identity and ordering by name."""

    name: str
    fields: list[Field] = field(default_factory=list)
    methods: list[Method] = field(default_factory=list)
    position: Point = field(default_factory=Point)

    def __post_init__(self) -> None:
        check_type(self.name, "class name")
        self.fields = sorted(self.fields)
        self.methods = sorted(self.methods)
        check_unique((f.name for f in self.fields), "field names")
        check_unique((m.signature_string() for m in self.methods), "method signatures")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassNode):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: ClassNode) -> bool:
        if not isinstance(other, ClassNode):
            return NotImplemented
        return self.name < other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def rename(self, new_name: str) -> None:
        check_type(new_name, "class name")
        self.name = new_name

    def move(self, x: int, y: int) -> None:
        self.position = Point(x, y)

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def has_field(self, field_name: str) -> bool:
        return any(f.name == field_name for f in self.fields)

    def get_field(self, field_name: str) -> Field:
        check_identifier(field_name, "field name")
        for f in self.fields:
            if f.name == field_name:
                return f
        raise NotFoundError(f"field '{field_name}' does not exist")

    def add_field(self, field_name: str, field_type: str) -> None:
        new_field = Field(field_name, field_type)
        if self.has_field(field_name):
            raise ConflictError("the new field already exists")
        self.fields.append(new_field)
        self.fields.sort()
        logger.debug("Added field %s:%s to %s", field_name, field_type, self.name)

    def delete_field(self, field_name: str) -> None:
        self.fields.remove(self.get_field(field_name))
        logger.debug("Deleted field %s from %s", field_name, self.name)

    def rename_field(self, field_name: str, new_name: str) -> None:
        target = self.get_field(field_name)
        check_identifier(new_name, "field name")
        if self.has_field(new_name):
            raise ConflictError("the new field name is already in use")
        target.rename(new_name)
        self.fields.sort()

    def change_field_type(self, field_name: str, new_type: str) -> None:
        self.get_field(field_name).change_type(new_type)

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    def has_method(self, signature: MethodSignature) -> bool:
        return any(m.signature == signature for m in self.methods)

    def get_method(self, signature: MethodSignature) -> Method:
        _check_signature(signature)
        for m in self.methods:
            if m.signature == signature:
                return m
        raise NotFoundError(f"method '{signature}' does not exist")

    def _check_free(self, method: Method, new_signature: MethodSignature) -> None:
        if any(m is not method and m.signature == new_signature for m in self.methods):
            raise ConflictError("a method with the new signature already exists")

    def add_method(
        self,
        name: str,
        return_type: str,
        parameters: Iterable[Parameter] = (),
    ) -> Method:
        method = Method(name, return_type, _copy_parameters(parameters))
        if self.has_method(method.signature):
            raise ConflictError("a method with the signature already exists")
        self.methods.append(method)
        self.methods.sort()
        logger.debug("Added method %s to %s", method.signature, self.name)
        return method

    def delete_method(self, signature: MethodSignature) -> None:
        self.methods.remove(self.get_method(signature))
        logger.debug("Deleted method %s from %s", signature, self.name)

    def rename_method(self, signature: MethodSignature, new_name: str) -> None:
        method = self.get_method(signature)
        check_identifier(new_name, "method name")
        self._check_free(method, signature.with_name(new_name))
        method.rename(new_name)
        self.methods.sort()

    def change_return_type(self, signature: MethodSignature, new_type: str) -> None:
        self.get_method(signature).change_return_type(new_type)

    # ------------------------------------------------------------------
    # Parameters -- addressed through the owning method's signature
    # ------------------------------------------------------------------

    def change_parameters(
        self, signature: MethodSignature, parameters: Iterable[Parameter]
    ) -> None:
        params = _copy_parameters(parameters)
        # Validate against a scratch method so the real one is untouched on failure
        scratch = Method(signature.name, "void", params)
        method = self.get_method(signature)
        self._check_free(method, signature.with_parameters(scratch.parameters))
        method.change_parameters(scratch.parameters)
        self.methods.sort()

    def add_parameter(
        self, signature: MethodSignature, parameter_name: str, parameter_type: str
    ) -> None:
        method = self.get_method(signature)
        param = Parameter(parameter_name, parameter_type)
        if method.has_parameter(param.name):
            raise ConflictError("adding duplicate parameter")
        self._check_free(method, signature.with_added_parameter(param.type))
        method.add_parameter(param.name, param.type)
        self.methods.sort()

    def delete_parameter(self, signature: MethodSignature, parameter_name: str) -> None:
        method = self.get_method(signature)
        index = method.parameter_index(parameter_name)
        self._check_free(method, signature.without_parameter(index))
        method.remove_parameter(parameter_name)
        self.methods.sort()

    def delete_parameters(self, signature: MethodSignature) -> None:
        method = self.get_method(signature)
        self._check_free(method, signature.with_parameter_types())
        method.clear_parameters()
        self.methods.sort()

    def change_parameter_type(
        self, signature: MethodSignature, parameter_name: str, new_type: str
    ) -> None:
        method = self.get_method(signature)
        index = method.parameter_index(parameter_name)
        check_type(new_type, "parameter type")
        self._check_free(method, signature.with_parameter_type(index, new_type))
        method.change_parameter_type(parameter_name, new_type)
        self.methods.sort()

    def rename_parameter(
        self, signature: MethodSignature, parameter_name: str, new_name: str
    ) -> None:
        self.get_method(signature).rename_parameter(parameter_name, new_name)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
            "methods": [m.to_dict() for m in self.methods],
            "position": self.position.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClassNode:
        return cls(
            name=data["name"],
            fields=[Field.from_dict(f) for f in data["fields"]],
            methods=[Method.from_dict(m) for m in data["methods"]],
            position=Point.from_dict(data["position"]),
        )
