from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import UsageError

if TYPE_CHECKING:
    from .base import Command

logger = logging.getLogger(__name__)


class Timeline:
    """Linear undo/redo history of committed trackable commands.

    `cursor` counts the commands currently applied. Adding a command after an
    undo discards everything from the cursor onward.
    """

    def __init__(self) -> None:
        self.history: list[Command] = []
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.history)

    @property
    def can_undo(self) -> bool:
        return self.cursor > 0

    @property
    def can_redo(self) -> bool:
        return self.cursor < len(self.history)

    def add(self, command: Command) -> None:
        if not command.trackable:
            return
        dropped = len(self.history) - self.cursor
        del self.history[self.cursor:]
        self.history.append(command)
        self.cursor += 1
        if dropped:
            logger.debug("Discarded %d redoable commands", dropped)

    def undo(self) -> Command:
        if not self.can_undo:
            raise UsageError("Cannot undo any further")
        self.cursor -= 1
        return self.history[self.cursor]

    def redo(self) -> Command:
        if not self.can_redo:
            raise UsageError("Cannot redo any further")
        command = self.history[self.cursor]
        self.cursor += 1
        return command

    def clear(self) -> None:
        self.history.clear()
        self.cursor = 0
