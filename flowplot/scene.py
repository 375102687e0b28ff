"""Backend-independent draw commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 0
    radius: float = 0
    opacity: float = 1.0


@dataclass(frozen=True)
class Ellipse:
    cx: float
    cy: float
    rx: float
    ry: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 0
    opacity: float = 1.0


@dataclass(frozen=True)
class Polygon:
    points: tuple[Point, ...]
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 0
    opacity: float = 1.0


@dataclass(frozen=True)
class Curve:
    """An open stroke: straight when controls is None, cubic bezier otherwise."""

    start: Point
    end: Point
    controls: tuple[Point, Point] | None = None
    stroke: str = "#000000"
    stroke_width: float = 1


@dataclass(frozen=True)
class Text:
    """A single line of text.

    anchor sets the horizontal reference point, baseline the vertical one.
    """

    text: str
    x: float
    y: float
    size: int
    fill: str
    bold: bool = False
    anchor: Literal["start", "middle"] = "start"
    baseline: Literal["top", "middle"] = "middle"


Command = Union[Rect, Ellipse, Polygon, Curve, Text]


@dataclass(frozen=True)
class Scene:
    """Everything drawn for one workflow, in paint order."""

    width: int
    height: int
    background: str
    commands: tuple[Command, ...] = ()

    def of_type(self, kind: type) -> list[Command]:
        return [c for c in self.commands if isinstance(c, kind)]
