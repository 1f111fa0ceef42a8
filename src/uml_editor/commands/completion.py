from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ..errors import UmlError
from ..model.class_node import ClassNode
from ..model.diagram import ClassDiagram
from ..model.method import Method
from ..model.relationship import RelationshipType
from ..model.signature import MethodSignature
from .registry import command_specs, is_hole

# ============================================================================
# Completion candidates
#
# Given the tokens typed so far (the last one possibly partial or empty),
# offer the words that could come next: literal template words, or for a
# hole the names that make sense given the arguments already typed.
# ============================================================================


@dataclass
class _HoleContext:
    """What the already typed holes resolved to."""

    cls: Optional[ClassNode] = None
    method: Optional[Method] = None
    source: Optional[str] = None


def _resolve_context(
    diagram: ClassDiagram, words: Sequence[str], typed: Sequence[str]
) -> _HoleContext:
    ctx = _HoleContext()
    for word, token in zip(words, typed):
        try:
            if word == "[class_name]":
                ctx.cls = diagram.get_class(token)
            elif word == "[method_signature]" and ctx.cls is not None:
                ctx.method = ctx.cls.get_method(MethodSignature.from_string(token))
            elif word == "[class_source]":
                ctx.source = token
        except UmlError:
            # Unresolvable argument, so nothing later can be suggested from it
            if word == "[class_name]":
                ctx.cls = None
            ctx.method = None
    return ctx


def _hole_candidates(diagram: ClassDiagram, hole: str, ctx: _HoleContext) -> list[str]:
    if hole == "[class_name]":
        return diagram.class_names()
    if hole == "[field_name]":
        return [f.name for f in ctx.cls.fields] if ctx.cls else []
    if hole == "[method_signature]":
        return [m.signature_string() for m in ctx.cls.methods] if ctx.cls else []
    if hole == "[param_name]":
        return [p.name for p in ctx.method.parameters] if ctx.method else []
    if hole == "[class_source]":
        return sorted({r.source for r in diagram.relationships})
    if hole == "[class_destination]":
        return [r.destination for r in diagram.relationships if r.source == ctx.source]
    if hole == "[relationship_type]":
        return [t.value for t in RelationshipType]
    return []


def complete(diagram: ClassDiagram, tokens: Sequence[str]) -> list[str]:
    """Candidates for the last token of `tokens`, filtered by its prefix."""
    if not tokens:
        tokens = [""]
    typed, prefix = list(tokens[:-1]), tokens[-1]
    position = len(typed)

    candidates: set[str] = set()
    for spec in command_specs():
        if spec.arity <= position:
            continue
        if not all(is_hole(w) or w == t for w, t in zip(spec.words, typed)):
            continue
        word = spec.words[position]
        if is_hole(word):
            ctx = _resolve_context(diagram, spec.words, typed)
            candidates.update(_hole_candidates(diagram, word, ctx))
        else:
            candidates.add(word)

    return sorted(c for c in candidates if c.startswith(prefix))
