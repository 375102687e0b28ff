"""SVG backend using drawsvg."""

from __future__ import annotations

from typing import TYPE_CHECKING

import drawsvg as draw

from .scene import Curve, Ellipse, Polygon, Rect, Text

if TYPE_CHECKING:
    from .scene import Command, Scene

FONT_FAMILY = "Arial, Helvetica, sans-serif"


def _paint(fill: str | None, stroke: str | None, stroke_width: float, opacity: float) -> dict:
    attrs = {
        "fill": fill or "none",
        "stroke": stroke or "none",
    }
    if stroke:
        attrs["stroke_width"] = stroke_width
    if opacity < 1:
        attrs["opacity"] = opacity
    return attrs


def command_to_element(command: Command) -> draw.DrawingElement:
    """Convert one draw command into a drawsvg element."""
    if isinstance(command, Rect):
        attrs = _paint(command.fill, command.stroke, command.stroke_width, command.opacity)
        if command.radius:
            attrs["rx"] = attrs["ry"] = command.radius
        return draw.Rectangle(command.x, command.y, command.width, command.height, **attrs)

    if isinstance(command, Ellipse):
        return draw.Ellipse(
            command.cx, command.cy, command.rx, command.ry,
            **_paint(command.fill, command.stroke, command.stroke_width, command.opacity),
        )

    if isinstance(command, Polygon):
        coords = [c for point in command.points for c in point]
        return draw.Lines(
            *coords,
            close=True,
            **_paint(command.fill, command.stroke, command.stroke_width, command.opacity),
        )

    if isinstance(command, Curve):
        path = draw.Path(
            stroke=command.stroke,
            stroke_width=command.stroke_width,
            fill="none",
        )
        path.M(*command.start)
        if command.controls is None:
            path.L(*command.end)
        else:
            (c1x, c1y), (c2x, c2y) = command.controls
            path.C(c1x, c1y, c2x, c2y, *command.end)
        return path

    if isinstance(command, Text):
        return draw.Text(
            command.text,
            command.size,
            command.x, command.y,
            fill=command.fill,
            font_family=FONT_FAMILY,
            font_weight="bold" if command.bold else "normal",
            text_anchor=command.anchor,
            dominant_baseline="hanging" if command.baseline == "top" else "middle",
        )

    raise TypeError(f"Unsupported draw command: {type(command).__name__}")


def scene_to_drawing(scene: Scene) -> draw.Drawing:
    """Build an SVG drawing of a scene."""
    d = draw.Drawing(scene.width, scene.height)

    # Add background
    d.append(
        draw.Rectangle(
            0, 0, scene.width, scene.height,
            fill=scene.background,
        )
    )

    for command in scene.commands:
        d.append(command_to_element(command))

    return d
