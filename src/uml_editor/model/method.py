from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any

from ..errors import ConflictError, NotFoundError, ValidationError
from ..grammar import check_identifier, check_type, check_unique, valid_identifier, valid_type
from .parameter import Parameter
from .signature import MethodSignature

# ============================================================================
# Method
#
# Surface syntax: `name(p:type,p:type,...)->return_type`.
# A method's identity is its signature (name + parameter types); two methods
# compare equal when their signatures do, whatever their return types.
# ============================================================================


def _check_parameters(parameters: Iterable[Parameter]) -> list[Parameter]:
    params = list(parameters)
    check_unique((p.name for p in params), "parameter names")
    for p in params:
        check_identifier(p.name, "parameter name")
        check_type(p.type, "parameter type")
    return params


@total_ordering
@dataclass(slots=True, eq=False)
class Method:
    """A named method with a return type and uniquely named parameters."""

    name: str
    return_type: str
    parameters: list[Parameter] = field(default_factory=list)

    def __post_init__(self) -> None:
        check_identifier(self.name, "method name")
        check_type(self.return_type, "method return type")
        self.parameters = _check_parameters(self.parameters)

    @property
    def signature(self) -> MethodSignature:
        return MethodSignature(self.name, tuple(p.type for p in self.parameters))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Method):
            return self.signature == other.signature
        if isinstance(other, MethodSignature):
            return self.signature == other
        return NotImplemented

    def __lt__(self, other: Method) -> bool:
        if not isinstance(other, Method):
            return NotImplemented
        return self.signature < other.signature

    def __hash__(self) -> int:
        return hash(self.signature)

    def __str__(self) -> str:
        return self.format()

    def format(self, spaced: bool = False) -> str:
        """`f(a:int,b:str)->void`, or `f(a: int, b: str) -> void` when spaced."""
        if spaced:
            params = ", ".join(p.format(spaced=True) for p in self.parameters)
            return f"{self.name}({params}) -> {self.return_type}"
        params = ",".join(p.format() for p in self.parameters)
        return f"{self.name}({params})->{self.return_type}"

    def signature_string(self) -> str:
        return self.signature.format()

    # ------------------------------------------------------------------
    # Mutators -- each validates before touching state
    # ------------------------------------------------------------------

    def rename(self, new_name: str) -> None:
        check_identifier(new_name, "method name")
        self.name = new_name

    def change_return_type(self, new_type: str) -> None:
        check_type(new_type, "method return type")
        self.return_type = new_type

    def parameter_index(self, parameter_name: str) -> int:
        for i, p in enumerate(self.parameters):
            if p.name == parameter_name:
                return i
        raise NotFoundError(f"method parameter '{parameter_name}' does not exist")

    def get_parameter(self, parameter_name: str) -> Parameter:
        return self.parameters[self.parameter_index(parameter_name)]

    def has_parameter(self, parameter_name: str) -> bool:
        return any(p.name == parameter_name for p in self.parameters)

    def add_parameter(self, parameter_name: str, parameter_type: str) -> None:
        param = Parameter(parameter_name, parameter_type)
        if param in self.parameters:
            raise ConflictError("adding duplicate parameter")
        self.parameters.append(param)

    def remove_parameter(self, parameter_name: str) -> None:
        del self.parameters[self.parameter_index(parameter_name)]

    def rename_parameter(self, parameter_name: str, new_name: str) -> None:
        param = self.get_parameter(parameter_name)
        if self.has_parameter(new_name):
            raise ConflictError("duplicate parameter name")
        param.rename(new_name)

    def change_parameter_type(self, parameter_name: str, new_type: str) -> None:
        self.get_parameter(parameter_name).change_type(new_type)

    def clear_parameters(self) -> None:
        self.parameters.clear()

    def change_parameters(self, parameters: Iterable[Parameter]) -> None:
        self.parameters = _check_parameters(parameters)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @classmethod
    def from_string(cls, text: str) -> Method:
        """Parse `name(p:type,...)->return_type`; the whole string must match."""
        idx = valid_identifier(text)
        name = text[:idx]
        if idx == len(text) or text[idx] != "(":
            raise ValidationError("missing left parenthesis")
        params, idx = Parameter.parse_list(text, idx + 1)
        if idx == len(text) or text[idx] != ")":
            raise ValidationError("missing right parenthesis")
        idx += 1
        if text[idx:idx + 2] != "->":
            raise ValidationError("missing arrow")
        idx += 2
        end = valid_type(text, idx)
        if end != len(text):
            raise ValidationError(f"extra characters encountered: {text[end:]}")
        return cls(name, text[idx:end], params)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "return_type": self.return_type,
            "params": [p.to_dict() for p in self.parameters],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Method:
        params = [Parameter.from_dict(p) for p in data["params"]]
        return cls(data["name"], data["return_type"], params)
