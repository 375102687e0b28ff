"""Grid layout for flowplot workflows."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import PositionedNode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import WorkflowNode


@dataclass
class LayoutConfig:
    """Configuration for layout and drawing geometry."""

    # Fixed render surface
    canvas_width: int = 2000
    canvas_height: int = 1200

    # Grid
    columns: int = 5
    start_x: float = 50
    start_y: float = 150
    horizontal_gap: float = 250  # Distance between column origins
    vertical_gap: float = 200  # Distance between row origins
    node_width: float = 180
    node_height: float = 80

    # Connectors
    curve_threshold: float = 50  # Vertical anchor distance above which connectors curve
    arrow_length: float = 15
    arrow_spread: float = math.pi / 6
    connector_width: float = 3

    # Node decoration
    stroke_width: float = 3
    shadow_offset: float = 3
    step_inset: float = 8
    badge_width: float = 55
    badge_height: float = 20
    badge_inset_right: float = 60  # Badge left edge measured from the node's right edge
    badge_inset_top: float = 5
    badge_radius: float = 4
    badge_text_inset: float = 32  # Badge text center measured from the node's right edge

    # Text
    label_padding: float = 20  # Total horizontal padding around wrapped labels
    line_height: float = 14
    max_word_chars: int = 15
    font_size_title: int = 24
    font_size_step: int = 14
    font_size_badge: int = 10
    font_size_label: int = 12
    font_size_legend: int = 14
    title_y: float = 40


def assign_layout(
    nodes: Iterable[WorkflowNode],
    config: LayoutConfig | None = None,
) -> list[PositionedNode]:
    """Place nodes on a fixed grid in input order.

    Node i goes to column i % columns and row i // columns. Any finite input
    (including an empty one) yields a valid list.
    """
    if config is None:
        config = LayoutConfig()

    positioned = []
    for index, node in enumerate(nodes):
        row, column = divmod(index, config.columns)
        positioned.append(PositionedNode(
            id=node.id,
            type=node.type,
            label=node.label,
            connections=node.connections,
            index=index,
            row=row,
            column=column,
            x=config.start_x + column * config.horizontal_gap,
            y=config.start_y + row * config.vertical_gap,
            width=config.node_width,
            height=config.node_height,
        ))
    return positioned


def get_node_connection_point(
    node: PositionedNode, direction: str = "right"
) -> tuple[float, float]:
    """Get the connection point for edges on a node.

    Args:
        node: The positioned node
        direction: 'left', 'right', 'top', or 'bottom'

    Returns:
        (x, y) coordinates of the connection point
    """
    if direction == "right":
        return node.x + node.width, node.y + node.height / 2
    elif direction == "left":
        return node.x, node.y + node.height / 2
    elif direction == "top":
        return node.x + node.width / 2, node.y
    elif direction == "bottom":
        return node.x + node.width / 2, node.y + node.height
    else:
        return node.center
