from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Any

from ..grammar import check_identifier, check_type


@total_ordering
@dataclass(slots=True, eq=False)
class Field:
    """A class attribute; identity and ordering by name."""

    name: str
    type: str

    def __post_init__(self) -> None:
        check_identifier(self.name, "field name")
        check_type(self.type, "field type")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: Field) -> bool:
        if not isinstance(other, Field):
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
        check_identifier(new_name, "field name")
        self.name = new_name

    def change_type(self, new_type: str) -> None:
        check_type(new_type, "field type")
        self.type = new_type

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Field:
        return cls(data["name"], data["type"])
