from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..errors import ValidationError
from ..grammar import valid_identifier, valid_type
from .parameter import Parameter

# ============================================================================
# Method signature
#
# The structural key of a method: its name plus the ordered parameter types.
# Return type and parameter names take no part in identity. Ordering is the
# natural tuple ordering of (name, parameter_types): name first, then types
# position by position, with a prefix sorting first.
# ============================================================================


@dataclass(slots=True, frozen=True, order=True)
class MethodSignature:
    """Immutable overload key: `name(type,type,...)`."""

    name: str
    parameter_types: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the key stays hashable
        if not isinstance(self.parameter_types, tuple):
            object.__setattr__(self, "parameter_types", tuple(self.parameter_types))

    def __str__(self) -> str:
        return self.format()

    def format(self) -> str:
        return f"{self.name}({','.join(self.parameter_types)})"

    # ------------------------------------------------------------------
    # Derived copies
    # ------------------------------------------------------------------

    def with_name(self, name: str) -> MethodSignature:
        return MethodSignature(name, self.parameter_types)

    def with_parameter_types(self, types: Iterable[str] = ()) -> MethodSignature:
        return MethodSignature(self.name, tuple(types))

    def with_parameters(self, parameters: Sequence[Parameter]) -> MethodSignature:
        return MethodSignature(self.name, tuple(p.type for p in parameters))

    def with_added_parameter(self, type_: str) -> MethodSignature:
        return MethodSignature(self.name, self.parameter_types + (type_,))

    def without_parameter(self, index: int) -> MethodSignature:
        types = list(self.parameter_types)
        del types[index]
        return MethodSignature(self.name, tuple(types))

    def with_parameter_type(self, index: int, type_: str) -> MethodSignature:
        types = list(self.parameter_types)
        types[index] = type_
        return MethodSignature(self.name, tuple(types))

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @classmethod
    def from_string(cls, text: str) -> MethodSignature:
        """Parse `name(type,type,...)`; the whole string must match."""
        idx = valid_identifier(text)
        name = text[:idx]
        if idx == len(text) or text[idx] != "(":
            raise ValidationError("missing left parenthesis")
        types, idx = _parse_type_list(text, idx + 1)
        if idx == len(text) or text[idx] != ")":
            raise ValidationError("missing right parenthesis")
        if idx + 1 != len(text):
            raise ValidationError("extra characters at end")
        return cls(name, tuple(types))


def _parse_type_list(text: str, start: int) -> tuple[list[str], int]:
    """Comma separated types at `start`; empty when no type begins there."""
    types: list[str] = []
    idx = start
    while True:
        if idx != start:
            if idx == len(text):
                raise ValidationError("Unexpected end of type list")
            if text[idx] != ",":
                break
            idx += 1
            if idx == len(text):
                raise ValidationError("Unexpected end of type list after comma")
        try:
            end = valid_type(text, idx)
        except ValidationError:
            if idx == start:
                break
            raise
        types.append(text[idx:end])
        idx = end
    return types, idx
