from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class EditorConfig:
    """Settings for one editor session, filled from the command line."""

    prompt: str = "UML> "                    # --prompt
    load_path: Optional[Path] = None          # positional diagram file to open
    log_level: str = "WARNING"               # --log-level
    layout_node_spacing: float = 40          # --node-spacing (auto layout)
    layout_layer_spacing: float = 60         # --layer-spacing (auto layout)
