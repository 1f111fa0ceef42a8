from __future__ import annotations

import logging

from grandalf.graphs import Vertex, Edge, Graph
from grandalf.layouts import SugiyamaLayout

from .errors import UmlError
from .model.class_node import ClassNode
from .model.diagram import ClassDiagram

logger = logging.getLogger(__name__)

# ============================================================================
# Automatic class placement
#
# Uses grandalf (Sugiyama algorithm) to assign a position to every class box.
# Box sizes are estimated from the text each class would display:
#   1. Header (class name)
#   2. Fields section
#   3. Methods section
#
# Each connected component is laid out on its own and the components are
# placed left to right. Positions are integer top-left corners.
# ============================================================================

# Layout constants for class boxes
CLS = {
    # Padding around the diagram
    "padding": 40,
    # Horizontal padding inside class boxes
    "box_pad_x": 8,
    # Header height (class name)
    "header_height": 32,
    # Height per member row (field or method)
    "member_row_height": 20,
    # Vertical padding around member sections
    "section_pad_y": 8,
    # Minimum empty section height (when no fields or no methods)
    "empty_section_height": 8,
    # Minimum box width
    "min_width": 120,
    # Font size for header text
    "header_font_size": 13,
    # Font size for member text
    "member_font_size": 11,
    # Spacing between class nodes
    "node_spacing": 40,
    # Spacing between layers
    "layer_spacing": 60,
}


def estimate_mono_text_width(text: str, font_size: float) -> float:
    """Average character width in px for monospace fonts (uniform glyph width)."""
    return len(text) * font_size * 0.6


class _VertexView:
    """Minimal view object required by grandalf's SugiyamaLayout."""

    def __init__(self, w: float = 60, h: float = 36) -> None:
        self.w = w
        self.h = h
        # xy is set by the layout engine (center coordinates)
        self.xy = (0.0, 0.0)


def _section_height(rows: int) -> float:
    if rows == 0:
        return CLS["empty_section_height"]
    return rows * CLS["member_row_height"] + CLS["section_pad_y"]


def class_box_size(cls: ClassNode) -> tuple[float, float]:
    """Estimated (width, height) of the box drawn for a class."""
    lines = [f.format(spaced=True) for f in cls.fields]
    lines += [m.format(spaced=True) for m in cls.methods]
    member_w = max(
        (estimate_mono_text_width(line, CLS["member_font_size"]) for line in lines),
        default=0.0,
    )
    header_w = estimate_mono_text_width(cls.name, CLS["header_font_size"])
    width = max(
        CLS["min_width"],
        header_w + CLS["box_pad_x"] * 2,
        member_w + CLS["box_pad_x"] * 2,
    )
    height = (
        CLS["header_height"]
        + _section_height(len(cls.fields))
        + _section_height(len(cls.methods))
    )
    return width, height


def auto_layout(
    diagram: ClassDiagram,
    node_spacing: float | None = None,
    layer_spacing: float | None = None,
) -> None:
    """Assign a position to every class in `diagram` using grandalf."""
    if not diagram.classes:
        return

    xspace = CLS["node_spacing"] if node_spacing is None else node_spacing
    yspace = CLS["layer_spacing"] if layer_spacing is None else layer_spacing

    # 1. Build grandalf graph
    vertices: dict[str, Vertex] = {}
    for cls in diagram.classes:
        v = Vertex(cls.name)
        v.view = _VertexView(*class_box_size(cls))
        vertices[cls.name] = v

    edges: list[Edge] = []
    for rel in diagram.relationships:
        # Self relationships carry no layering information
        if rel.source == rel.destination:
            continue
        edges.append(Edge(vertices[rel.source], vertices[rel.destination]))

    g = Graph(list(vertices.values()), edges)

    # 2. Lay out each connected component, then place them side by side
    padding = CLS["padding"]
    x_offset = float(padding)
    for component in g.C:
        members = list(component.sV)
        if len(members) == 1:
            # Isolated class, nothing to rank
            view = members[0].view
            view.xy = (view.w / 2, view.h / 2)
        else:
            try:
                sug = SugiyamaLayout(component)
                sug.xspace = xspace
                sug.yspace = yspace
                sug.init_all()
                sug.draw()
            except Exception as err:
                raise UmlError(f"Grandalf layout failed (class diagram): {err}") from err

        # Convert centers to top-left
        min_x = min(v.view.xy[0] - v.view.w / 2 for v in members)
        min_y = min(v.view.xy[1] - v.view.h / 2 for v in members)
        max_x = max(v.view.xy[0] + v.view.w / 2 for v in members)

        for v in members:
            tl_x = v.view.xy[0] - v.view.w / 2 - min_x + x_offset
            tl_y = v.view.xy[1] - v.view.h / 2 - min_y + padding
            diagram.get_class(v.data).move(round(tl_x), round(tl_y))

        x_offset += (max_x - min_x) + xspace

    logger.debug(
        "Laid out %d classes in %d components", len(diagram.classes), len(g.C)
    )
