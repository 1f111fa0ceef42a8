from __future__ import annotations

import re
from collections.abc import Callable, Hashable, Iterable

from .errors import ConflictError, ValidationError

# ============================================================================
# Identifier and type-expression grammar
#
# Grammar (no whitespace anywhere):
#
#   Type     -> Ident ( '*'+ | Open TypeList Close '*'* )?
#   TypeList -> ( Type ( ',' Type )* )?
#   Open     -> '[' | '(' | '<'
#
# Every recognizer takes the text and a start index and returns the index just
# past what it consumed, raising ValidationError otherwise. Callers that need
# the whole string to match use the check_* wrappers.
# ============================================================================

# Matching closer for each bracket opener
BRACKETS = {
    "[": "]",
    "(": ")",
    "<": ">",
}

_INT_RE = re.compile(r"-?[0-9]+")


def is_alpha(ch: str) -> bool:
    """ASCII letter or underscore."""
    return ("A" <= ch <= "Z") or ("a" <= ch <= "z") or ch == "_"


def is_alnum(ch: str) -> bool:
    """ASCII letter, digit or underscore."""
    return is_alpha(ch) or ("0" <= ch <= "9")


def valid_identifier(text: str, start: int = 0) -> int:
    """Recognize an identifier at `start` and return the index just past it."""
    if start >= len(text):
        raise ValidationError("expected identifier but was empty")
    if not is_alpha(text[start]):
        raise ValidationError(
            f"expected identifier saw non-alphabetic '{text[start]}' at index {start}"
        )
    idx = start + 1
    while idx < len(text) and is_alnum(text[idx]):
        idx += 1
    return idx


def _consume_stars(text: str, idx: int) -> int:
    while idx < len(text) and text[idx] == "*":
        idx += 1
    return idx


def valid_type(text: str, start: int = 0) -> int:
    """Recognize a type expression at `start` and return the index just past it.

    Open bracket lists are tracked on an explicit stack of closers, so nesting
    depth is bounded only by the length of the text.
    """
    closers: list[str] = []
    idx = start
    while True:
        # A type expression starts at idx
        idx = valid_identifier(text, idx)
        if idx < len(text) and text[idx] in BRACKETS:
            closers.append(BRACKETS[text[idx]])
            idx += 1
            if idx == len(text):
                raise ValidationError("Expected more after type specifier")
            if text[idx] != closers[-1]:
                continue
        else:
            idx = _consume_stars(text, idx)
            if not closers:
                return idx

        # Close finished lists until one expects another element
        while True:
            if idx == len(text):
                raise ValidationError("Unexpected end to type list")
            if text[idx] == closers[-1]:
                closers.pop()
                idx = _consume_stars(text, idx + 1)
                if not closers:
                    return idx
                continue
            if text[idx] != ",":
                raise ValidationError(f"Expected ',' but got '{text[idx]}' at index {idx}")
            idx += 1
            break


# ============================================================================
# Total-parse wrappers
# ============================================================================


def _check(recognizer: Callable[[str, int], int], entity: str, tag: str) -> None:
    # Decoded JSON can hand over lists or numbers where names belong
    if not isinstance(entity, str):
        raise ValidationError(
            f"Invalid {tag}: expected a string, got {type(entity).__name__}"
        )
    try:
        end = recognizer(entity, 0)
    except ValidationError as err:
        raise ValidationError(f"Invalid {tag}: '{entity}'. Reason: {err}") from err
    if end != len(entity):
        raise ValidationError(
            f"Invalid {tag}: '{entity}'. Reason: "
            f"unexpected character '{entity[end]}' at index {end}"
        )


def check_identifier(entity: str, tag: str) -> None:
    """Raise ValidationError unless the whole of `entity` is an identifier."""
    _check(valid_identifier, entity, tag)


def check_type(entity: str, tag: str) -> None:
    """Raise ValidationError unless the whole of `entity` is a type expression."""
    _check(valid_type, entity, tag)


def check_unique(values: Iterable[Hashable], tag: str) -> None:
    """Raise ConflictError when `values` holds a duplicate."""
    seen: set[Hashable] = set()
    for value in values:
        if value in seen:
            raise ConflictError(f"Duplicate {tag} exist")
        seen.add(value)


# ============================================================================
# Command-line helpers
# ============================================================================


def split_command(line: str) -> list[str]:
    """Split on spaces, dropping empty tokens."""
    return [token for token in line.split(" ") if token]


def parse_int(text: str) -> int:
    """Parse a strictly formatted signed decimal integer."""
    if not _INT_RE.fullmatch(text):
        raise ValidationError(f"Couldn't parse number from string: {text}")
    return int(text)
