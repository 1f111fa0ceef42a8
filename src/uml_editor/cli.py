from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Optional, Sequence, TextIO

from .commands import EditorContext, complete, parse_line
from .config import EditorConfig
from .errors import UmlError
from .grammar import split_command

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="uml-editor",
        description="Interactive UML class diagram editor with undo/redo and JSON files.",
    )
    p.add_argument("file", type=Path, nargs="?", default=None,
                   help="Diagram file to load before the first command.")
    p.add_argument("--prompt", type=str, default=EditorConfig.prompt,
                   help="Prompt shown before each command in interactive mode.")
    p.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                   default=EditorConfig.log_level,
                   help="Logging verbosity (written to stderr).")
    p.add_argument("--node-spacing", type=float, default=EditorConfig.layout_node_spacing,
                   help="Horizontal gap between classes for the 'layout' command.")
    p.add_argument("--layer-spacing", type=float, default=EditorConfig.layout_layer_spacing,
                   help="Vertical gap between layers for the 'layout' command.")
    return p


def _install_completer(ctx: EditorContext) -> None:
    try:
        import readline
    except ImportError:
        logger.debug("readline unavailable, tab completion disabled")
        return

    matches: list[str] = []

    def _complete(text: str, state: int) -> Optional[str]:
        if state == 0:
            line = readline.get_line_buffer()[: readline.get_endidx()]
            tokens = split_command(line)
            if not line or line.endswith(" "):
                tokens.append("")
            matches[:] = complete(ctx.diagram, tokens)
        return matches[state] if state < len(matches) else None

    readline.set_completer_delims(" ")
    readline.set_completer(_complete)
    readline.parse_and_bind("tab: complete")


def _read_lines(ctx: EditorContext, stdin: TextIO) -> Iterator[str]:
    if stdin is sys.stdin and stdin.isatty():
        _install_completer(ctx)
        while True:
            try:
                yield input(ctx.config.prompt)
            except EOFError:
                return
    else:
        for line in stdin:
            yield line.rstrip("\r\n")


def run(
    config: EditorConfig,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Read commands until `exit` or end of input; return the exit status."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    ctx = EditorContext(out=stdout, config=config)
    if config.load_path is not None:
        try:
            ctx.diagram.load(config.load_path)
        except UmlError as err:
            print(err, file=stderr)
            return 1

    for line in _read_lines(ctx, stdin):
        if not line.strip():
            continue
        try:
            cmd = parse_line(line)
            cmd.commit(ctx)
        except UmlError as err:
            logger.debug("Command failed: %r", line, exc_info=True)
            print(err, file=stderr)
            continue
        ctx.timeline.add(cmd)
        if not ctx.running:
            break
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    cfg = EditorConfig(
        prompt=ns.prompt,
        load_path=ns.file,
        log_level=ns.log_level,
        layout_node_spacing=ns.node_spacing,
        layout_layer_spacing=ns.layer_spacing,
    )
    logging.basicConfig(
        level=getattr(logging, cfg.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return run(cfg)


if __name__ == "__main__":
    sys.exit(main())
