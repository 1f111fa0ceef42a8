from __future__ import annotations

from .base import Command, UntrackableCommand, EditorContext
from .timeline import Timeline
from .registry import (
    CommandSpec,
    command,
    command_specs,
    command_templates,
    parse_command,
    parse_line,
)
from . import builtins  # noqa: F401  (registers the built-in commands)
from .completion import complete

__all__ = [
    "Command",
    "UntrackableCommand",
    "EditorContext",
    "Timeline",
    "CommandSpec",
    "command",
    "command_specs",
    "command_templates",
    "parse_command",
    "parse_line",
    "complete",
]
