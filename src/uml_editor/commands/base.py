from __future__ import annotations

import copy
import logging
import sys
from dataclasses import dataclass, field
from typing import ClassVar, Optional, TextIO

from ..config import EditorConfig
from ..errors import UsageError
from ..model.diagram import ClassDiagram
from .timeline import Timeline

logger = logging.getLogger(__name__)

# ============================================================================
# Command lifecycle
#
#   Unexecuted --commit--> Committed --undo--> Undone --execute (redo)--> ...
#
# commit() snapshots the whole diagram before executing, and undo() restores
# a fresh copy of that snapshot. Untrackable commands (queries and meta
# commands) never enter the timeline and undo as a no-op.
# ============================================================================


@dataclass
class EditorContext:
    """Mutable state shared by the command loop and every command."""

    diagram: ClassDiagram = field(default_factory=ClassDiagram)
    timeline: Timeline = field(default_factory=Timeline)
    out: TextIO = field(default_factory=lambda: sys.stdout)
    config: EditorConfig = field(default_factory=EditorConfig)
    # Cleared by the exit command
    running: bool = True

    def write(self, text: str) -> None:
        print(text, file=self.out)


class Command:
    """A single user action over the diagram."""

    # Registered template, filled in by the command registry
    template: ClassVar[str] = ""
    trackable: ClassVar[bool] = True

    prior: Optional[ClassDiagram] = None

    def execute(self, ctx: EditorContext) -> None:
        raise NotImplementedError

    def commit(self, ctx: EditorContext) -> None:
        """Snapshot the diagram, then execute."""
        self.prior = copy.deepcopy(ctx.diagram)
        logger.debug("Committing %r", self)
        self.execute(ctx)

    def undo(self, ctx: EditorContext) -> None:
        if not self.trackable:
            return
        if self.prior is None:
            raise UsageError("No prior state to restore")
        # Restore a copy so a later redo cannot alter the stored snapshot
        ctx.diagram.replace_with(copy.deepcopy(self.prior))
        logger.debug("Undid %r", self)


class UntrackableCommand(Command):
    """Query or meta command that bypasses the timeline."""

    trackable: ClassVar[bool] = False
