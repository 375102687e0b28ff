"""Shape and color resolution for workflow node types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .models import NodeType


class Shape(Enum):
    """Outline drawn for a node."""

    OVAL = "oval"
    DIAMOND = "diamond"
    RECTANGLE = "rectangle"


@dataclass(frozen=True)
class NodeStyle:
    """Shape and colors of a node kind."""

    shape: Shape
    fill: str
    stroke: str
    text: str


PROCESS_STYLE = NodeStyle(Shape.RECTANGLE, fill="#3b82f6", stroke="#2563eb", text="#ffffff")

NODE_STYLES: dict[NodeType, NodeStyle] = {
    NodeType.START: NodeStyle(Shape.OVAL, fill="#22c55e", stroke="#16a34a", text="#ffffff"),
    NodeType.END: NodeStyle(Shape.OVAL, fill="#ef4444", stroke="#dc2626", text="#ffffff"),
    NodeType.DECISION: NodeStyle(Shape.DIAMOND, fill="#f59e0b", stroke="#d97706", text="#ffffff"),
    NodeType.PROCESS: PROCESS_STYLE,
}


def resolve_node_style(node_type: NodeType | str | None) -> NodeStyle:
    """Return the style for a node type.

    Unknown types get the process style.
    """
    return NODE_STYLES.get(NodeType.parse(node_type), PROCESS_STYLE)


def diamond_points(
    x: float, y: float, width: float, height: float
) -> tuple[tuple[float, float], ...]:
    """Corners of a diamond inscribed in a box, clockwise from the top."""
    return (
        (x + width / 2, y),
        (x + width, y + height / 2),
        (x + width / 2, y + height),
        (x, y + height / 2),
    )
