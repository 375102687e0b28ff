"""Raster backend: paints scenes onto Pillow images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from PIL import Image, ImageColor, ImageDraw

from .routing import sample_cubic
from .scene import Curve, Ellipse, Polygon, Rect, Text
from .text import load_font

if TYPE_CHECKING:
    from .scene import Command, Point, Scene


@dataclass(frozen=True)
class RenderSurface:
    """A finished raster rendering and the scene it was painted from."""

    scene: Scene
    image: Image.Image

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    @classmethod
    def paint(cls, scene: Scene) -> RenderSurface:
        return cls(scene=scene, image=paint_scene(scene))


def _rgba(color: str | None, opacity: float = 1.0) -> tuple[int, int, int, int] | None:
    if color is None:
        return None
    r, g, b = ImageColor.getrgb(color)[:3]
    return r, g, b, round(opacity * 255)


def _xy(point: Point) -> tuple[int, int]:
    return round(point[0]), round(point[1])


def _width(stroke_width: float) -> int:
    return max(1, round(stroke_width))


def paint_scene(scene: Scene) -> Image.Image:
    """Paint every command of a scene, in order, onto a new RGB image."""
    image = Image.new("RGB", (scene.width, scene.height), scene.background)
    # RGBA drawing mode blends translucent fills into the RGB image
    draw = ImageDraw.Draw(image, "RGBA")
    for command in scene.commands:
        paint_command(draw, command)
    return image


def paint_command(draw: ImageDraw.ImageDraw, command: Command) -> None:
    """Paint a single draw command."""
    if isinstance(command, Rect):
        box = [
            _xy((command.x, command.y)),
            _xy((command.x + command.width, command.y + command.height)),
        ]
        fill = _rgba(command.fill, command.opacity)
        outline = _rgba(command.stroke, command.opacity)
        width = _width(command.stroke_width)
        if command.radius:
            draw.rounded_rectangle(box, radius=round(command.radius), fill=fill, outline=outline, width=width)
        else:
            draw.rectangle(box, fill=fill, outline=outline, width=width)

    elif isinstance(command, Ellipse):
        box = [
            _xy((command.cx - command.rx, command.cy - command.ry)),
            _xy((command.cx + command.rx, command.cy + command.ry)),
        ]
        draw.ellipse(
            box,
            fill=_rgba(command.fill, command.opacity),
            outline=_rgba(command.stroke, command.opacity),
            width=_width(command.stroke_width),
        )

    elif isinstance(command, Polygon):
        draw.polygon(
            [_xy(p) for p in command.points],
            fill=_rgba(command.fill, command.opacity),
            outline=_rgba(command.stroke, command.opacity),
            width=_width(command.stroke_width),
        )

    elif isinstance(command, Curve):
        if command.controls is None:
            points = [command.start, command.end]
        else:
            c1, c2 = command.controls
            points = sample_cubic(command.start, c1, c2, command.end)
        draw.line(
            [_xy(p) for p in points],
            fill=_rgba(command.stroke),
            width=_width(command.stroke_width),
            joint="curve",
        )

    elif isinstance(command, Text):
        font = load_font(command.size, command.bold)
        x, y = command.x, command.y
        if command.anchor == "middle":
            x -= font.getlength(command.text) / 2
        if command.baseline == "middle":
            _, top, _, bottom = font.getbbox(command.text)
            y -= (top + bottom) / 2
        draw.text(_xy((x, y)), command.text, font=font, fill=_rgba(command.fill))

    else:
        raise TypeError(f"Unsupported draw command: {type(command).__name__}")
