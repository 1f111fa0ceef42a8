from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import PersistenceError, UmlError
from .model.diagram import ClassDiagram

logger = logging.getLogger(__name__)

# ============================================================================
# JSON persistence
#
# Decoding builds a fresh ClassDiagram through from_dict, which re-runs every
# model invariant. Any failure on the way (I/O, malformed JSON, missing keys,
# wrong value types, broken invariants) is re-raised as PersistenceError.
# ============================================================================


def load_diagram(path: str | Path) -> ClassDiagram:
    """Read and validate a diagram file."""
    resolved = Path(path).absolute()
    try:
        with resolved.open(encoding="utf-8") as fh:
            data = json.load(fh)
        diagram = ClassDiagram.from_dict(data)
    except (OSError, ValueError, KeyError, TypeError, UmlError) as err:
        raise PersistenceError(f"Error: {err}") from err
    logger.info(
        "Loaded %d classes and %d relationships from %s",
        len(diagram.classes),
        len(diagram.relationships),
        resolved,
    )
    return diagram


def save_diagram(diagram: ClassDiagram, path: str | Path) -> None:
    """Write the diagram as two-space indented JSON."""
    resolved = Path(path).absolute()
    text = json.dumps(diagram.to_dict(), indent=2, ensure_ascii=True)
    try:
        resolved.write_text(text, encoding="utf-8")
    except OSError as err:
        raise PersistenceError(f"Error: Cannot write file \"{resolved}\": {err}") from err
    logger.info("Saved diagram to %s", resolved)
