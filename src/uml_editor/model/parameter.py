from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Any

from ..errors import ValidationError
from ..grammar import check_identifier, check_type, valid_identifier, valid_type

# ============================================================================
# Method parameter
#
# Surface syntax: `name:type`, lists are comma separated with no spaces.
# Parameters compare by name only so a method can spot duplicate names
# regardless of their types.
# ============================================================================


@total_ordering
@dataclass(slots=True, eq=False)
class Parameter:
    """A validated (name, type) pair."""

    name: str
    type: str

    def __post_init__(self) -> None:
        check_identifier(self.name, "parameter name")
        check_type(self.type, "parameter type")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameter):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: Parameter) -> bool:
        if not isinstance(other, Parameter):
            return NotImplemented
        return self.name < other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.format()

    def format(self, spaced: bool = False) -> str:
        sep = ": " if spaced else ":"
        return f"{self.name}{sep}{self.type}"

    def rename(self, new_name: str) -> None:
        check_identifier(new_name, "parameter name")
        self.name = new_name

    def change_type(self, new_type: str) -> None:
        check_type(new_type, "parameter type")
        self.type = new_type

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str, start: int = 0) -> tuple[Parameter, int]:
        """Parse `name:type` at `start`, returning the parameter and end index."""
        colon = valid_identifier(text, start)
        if colon == len(text) or text[colon] != ":":
            raise ValidationError(f"missing colon at index {colon}")
        end = valid_type(text, colon + 1)
        return cls(text[start:colon], text[colon + 1:end]), end

    @classmethod
    def from_string(cls, text: str) -> Parameter:
        param, end = cls.parse(text)
        if end != len(text):
            raise ValidationError(f"extra characters encountered: {text[end:]}")
        return param

    @classmethod
    def parse_list(cls, text: str, start: int = 0) -> tuple[list[Parameter], int]:
        """Parse a comma separated parameter list at `start`.

        A list that does not begin with a parameter is empty; a failure after
        a comma is an error.
        """
        params: list[Parameter] = []
        idx = start
        while idx != len(text):
            if idx != start:
                if text[idx] != ",":
                    break
                idx += 1
            try:
                param, idx = cls.parse(text, idx)
            except ValidationError:
                if idx == start:
                    break
                raise
            params.append(param)
        return params, idx

    @classmethod
    def list_from_string(cls, text: str) -> list[Parameter]:
        params, end = cls.parse_list(text)
        if end != len(text):
            raise ValidationError(f"extra characters encountered: {text[end:]}")
        return params

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Parameter:
        return cls(data["name"], data["type"])
