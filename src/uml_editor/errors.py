from __future__ import annotations

# ============================================================================
# Error taxonomy
#
# Every failure raised by the model, the command engine and the persistence
# adapter derives from UmlError, so the command loop can report any of them
# with a single except clause.
# ============================================================================


class UmlError(Exception):
    """Base class for all editor errors."""


class ValidationError(UmlError, ValueError):
    """A name, type expression or number is malformed."""


class NotFoundError(UmlError, LookupError):
    """A class, field, method, parameter or relationship does not exist."""


class ConflictError(UmlError):
    """A mutation would break a uniqueness invariant."""


class ParseError(UmlError, ValueError):
    """A command argument could not be parsed into its declared kind."""


class PersistenceError(UmlError):
    """Reading or writing a diagram file failed."""


class UsageError(UmlError):
    """A command was unrecognized, ambiguous or given the wrong arguments."""

    def __init__(self, message: str, candidates: list[str] | None = None) -> None:
        super().__init__(message)
        # Templates still viable when the input stopped short of a full command
        self.candidates = list(candidates or [])
