"""Connector routing between positioned workflow nodes using NetworkX."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import networkx as nx

from .layout import LayoutConfig, get_node_connection_point

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import PositionedNode
    from .scene import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectorRoute:
    """A computed connector from a source node's right edge to a target's left edge."""

    source_id: str
    target_id: str
    start: Point
    end: Point
    controls: tuple[Point, Point] | None
    angle: float  # Approach angle at the end anchor, radians
    arrowhead: tuple[Point, Point, Point]

    @property
    def is_curved(self) -> bool:
        return self.controls is not None


def build_connection_graph(nodes: Iterable[PositionedNode]) -> nx.DiGraph:
    """Index positioned nodes by id and add an edge for every resolvable connection.

    Connections to ids that are not in the workflow are dropped.
    Edges iterate in node order, then connection order.
    """
    nodes = list(nodes)
    graph: nx.DiGraph = nx.DiGraph()

    for node in nodes:
        if node.id not in graph:
            graph.add_node(node.id, node=node)

    for node in nodes:
        for target_id in node.connections:
            if target_id not in graph:
                logger.debug("Skipping connection %s -> %s: no such node", node.id, target_id)
                continue
            graph.add_edge(node.id, target_id)

    return graph


def arrowhead_points(
    x: float,
    y: float,
    angle: float,
    length: float = 15,
    spread: float = math.pi / 6,
) -> tuple[Point, Point, Point]:
    """Tip and wing points of an arrowhead pointing along angle."""
    return (
        (x, y),
        (x - length * math.cos(angle - spread), y - length * math.sin(angle - spread)),
        (x - length * math.cos(angle + spread), y - length * math.sin(angle + spread)),
    )


def route_connector(
    source: PositionedNode,
    target: PositionedNode,
    config: LayoutConfig | None = None,
) -> ConnectorRoute:
    """Route a connector between two positioned nodes.

    Anchors further apart vertically than config.curve_threshold get an
    S-shaped cubic with both control points on the horizontal midpoint;
    closer anchors get a straight segment.
    """
    if config is None:
        config = LayoutConfig()

    sx, sy = get_node_connection_point(source, "right")
    tx, ty = get_node_connection_point(target, "left")

    controls = None
    last_x, last_y = sx, sy

    if abs(ty - sy) > config.curve_threshold:
        mid_x = sx + (tx - sx) / 2
        controls = ((mid_x, sy), (mid_x, ty))
        # Arrowhead follows the curve's final tangent unless it degenerates
        if (mid_x, ty) != (tx, ty):
            last_x, last_y = mid_x, ty

    angle = math.atan2(ty - last_y, tx - last_x)

    return ConnectorRoute(
        source_id=source.id,
        target_id=target.id,
        start=(sx, sy),
        end=(tx, ty),
        controls=controls,
        angle=angle,
        arrowhead=arrowhead_points(tx, ty, angle, config.arrow_length, config.arrow_spread),
    )


def route_connections(
    nodes: Iterable[PositionedNode],
    config: LayoutConfig | None = None,
) -> list[ConnectorRoute]:
    """Route every resolvable connection of a positioned workflow."""
    graph = build_connection_graph(nodes)
    return [
        route_connector(graph.nodes[src]["node"], graph.nodes[tgt]["node"], config)
        for src, tgt in graph.edges
    ]


def sample_cubic(
    start: Point,
    c1: Point,
    c2: Point,
    end: Point,
    steps: int = 32,
) -> list[Point]:
    """Flatten a cubic bezier into steps + 1 points."""
    points = []
    for i in range(steps + 1):
        t = i / steps
        mt = 1 - t
        a, b, c, d = mt ** 3, 3 * mt * mt * t, 3 * mt * t * t, t ** 3
        points.append((
            a * start[0] + b * c1[0] + c * c2[0] + d * end[0],
            a * start[1] + b * c1[1] + c * c2[1] + d * end[1],
        ))
    return points
