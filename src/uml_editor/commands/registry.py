from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import ParseError, UmlError, UsageError
from ..grammar import parse_int, split_command
from ..model.method import Method
from ..model.parameter import Parameter
from ..model.relationship import RelationshipType
from ..model.signature import MethodSignature
from .base import Command

logger = logging.getLogger(__name__)

# ============================================================================
# Command registry and resolver
#
# Every command class registers a fixed-arity, space-delimited template such
# as "field add [class_name] [name] [type]". Literal words select the command;
# bracketed holes are positional arguments parsed according to their kind.
#
# Resolution filters the registry one token at a time on the literal words.
# As soon as a single template remains, the tokens are checked against its
# arity, every hole is parsed, and the command is constructed.
# ============================================================================


def _parse_string(text: str) -> str:
    return text


# Hole name -> parser for the argument text. Unlisted holes are plain strings.
HOLE_PARSERS: dict[str, Callable[[str], Any]] = {
    "[param_list]": Parameter.list_from_string,
    "[method_signature]": MethodSignature.from_string,
    "[method_definition]": Method.from_string,
    "[relationship_type]": RelationshipType.from_string,
    "[int]": parse_int,
}


def is_hole(word: str) -> bool:
    return word.startswith("[") and word.endswith("]")


@dataclass(slots=True, frozen=True)
class CommandSpec:
    """A registered template and the command class it builds."""

    template: str
    words: tuple[str, ...]
    factory: type[Command]

    @property
    def arity(self) -> int:
        return len(self.words)

    @property
    def holes(self) -> list[tuple[int, str]]:
        return [(i, w) for i, w in enumerate(self.words) if is_hole(w)]

    def build(self, tokens: Sequence[str]) -> Command:
        if len(tokens) != self.arity:
            raise UsageError(
                f"Invalid number of arguments: got {len(tokens)} but expected {self.arity}"
            )
        args: list[Any] = []
        for index, hole in self.holes:
            parser = HOLE_PARSERS.get(hole, _parse_string)
            try:
                args.append(parser(tokens[index]))
            except UmlError as err:
                raise ParseError(f"Error: {err}. Usage: '{self.template}'") from err
        return self.factory(*args)


_REGISTRY: list[CommandSpec] = []


def command(template: str) -> Callable[[type[Command]], type[Command]]:
    """Class decorator registering a command under `template`."""

    def deco(cls: type[Command]) -> type[Command]:
        words = tuple(split_command(template))
        if any(spec.words == words for spec in _REGISTRY):
            raise ValueError(f"Command template already registered: {template!r}")
        cls.template = template
        _REGISTRY.append(CommandSpec(template, words, cls))
        return cls

    return deco


def command_specs() -> list[CommandSpec]:
    return list(_REGISTRY)


def command_templates() -> list[str]:
    """Every recognized template, in registration order."""
    return [spec.template for spec in _REGISTRY]


def parse_command(tokens: Sequence[str]) -> Command:
    """Resolve tokenized input to a constructed command."""
    if not tokens:
        raise UsageError("Empty command")

    specs = list(_REGISTRY)
    for index, token in enumerate(tokens):
        specs = [
            s for s in specs
            if index < s.arity and not is_hole(s.words[index]) and s.words[index] == token
        ]
        if len(specs) == 1:
            return specs[0].build(tokens)
        if not specs:
            break

    if not specs:
        logger.debug("Unrecognized command: %s", " ".join(tokens))
        raise UsageError("Invalid command. View a list of commands with 'help'")

    templates = [s.template for s in specs]
    message = "Command requires subcommand:" + "".join(f"\n  {t}" for t in templates)
    raise UsageError(message, candidates=templates)


def parse_line(line: str) -> Command:
    return parse_command(split_command(line))
