"""Workflow diagram renderer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .layout import LayoutConfig, assign_layout
from .raster import RenderSurface
from .routing import route_connections
from .scene import Curve, Ellipse, Polygon, Rect, Scene, Text
from .styles import Shape, diamond_points, resolve_node_style
from .svg import scene_to_drawing
from .text import FontMeasurer, TextMeasurer, line_centers, load_font, wrap_text

if TYPE_CHECKING:
    from .models import PositionedNode, Workflow
    from .routing import ConnectorRoute
    from .scene import Command
    from .styles import NodeStyle

logger = logging.getLogger(__name__)


class Theme:
    """Color theme for diagrams."""

    def __init__(
        self,
        background: str = "#0a0a0f",
        connector_color: str = "#8b5cf6",
        title_color: str = "#ffffff",
        step_color: str = "#ffffff",
        shadow_color: str = "#000000",
        shadow_opacity: float = 0.3,
        badge_fill: str = "#ffffff",
        badge_opacity: float = 0.2,
        legend_text: str = "#9ca3af",
    ):
        self.background = background
        self.connector_color = connector_color
        self.title_color = title_color
        self.step_color = step_color
        self.shadow_color = shadow_color
        self.shadow_opacity = shadow_opacity
        self.badge_fill = badge_fill
        self.badge_opacity = badge_opacity
        self.legend_text = legend_text


DEFAULT_THEME = Theme()


class DiagramRenderer:
    """Turns a workflow into a scene of draw commands.

    Holds configuration only; every call to render builds a new scene.
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        theme: Theme | None = None,
        measurer: TextMeasurer | None = None,
        show_legend: bool = False,
    ):
        self.config = config or LayoutConfig()
        self.theme = theme or DEFAULT_THEME
        self.measurer = measurer or FontMeasurer(load_font(self.config.font_size_label, bold=True))
        self.show_legend = show_legend

    def render(self, workflow: Workflow | None) -> Scene:
        """Render a workflow to a scene.

        Connectors are emitted before nodes so nodes sit on top of them,
        and the title comes last.
        """
        commands: list[Command] = []

        if workflow is not None:
            nodes = assign_layout(workflow.workflow_nodes, self.config)

            for route in route_connections(nodes, self.config):
                self._render_connector(commands, route)

            for node in nodes:
                self._render_node(commands, node)

            self._render_title(commands, workflow)

            if self.show_legend:
                self._render_legend(commands, workflow)

        return Scene(
            width=self.config.canvas_width,
            height=self.config.canvas_height,
            background=self.theme.background,
            commands=tuple(commands),
        )

    def render_surface(self, workflow: Workflow | None) -> RenderSurface:
        """Render a workflow and paint it onto a fresh raster surface."""
        return RenderSurface.paint(self.render(workflow))

    def _render_connector(self, commands: list[Command], route: ConnectorRoute) -> None:
        """Render a connector line and its arrowhead."""
        commands.append(Curve(
            start=route.start,
            end=route.end,
            controls=route.controls,
            stroke=self.theme.connector_color,
            stroke_width=self.config.connector_width,
        ))
        commands.append(Polygon(
            points=route.arrowhead,
            fill=self.theme.connector_color,
        ))

    def _render_node(self, commands: list[Command], node: PositionedNode) -> None:
        """Render a single node."""
        cfg = self.config
        style = resolve_node_style(node.type)
        x, y = node.x, node.y
        w, h = node.width, node.height

        # Shadow, then body
        offset = cfg.shadow_offset
        commands.append(self._shape(
            style, x + offset, y + offset, w, h,
            fill=self.theme.shadow_color,
            opacity=self.theme.shadow_opacity,
        ))
        commands.append(self._shape(
            style, x, y, w, h,
            fill=style.fill,
            stroke=style.stroke,
            stroke_width=cfg.stroke_width,
        ))

        # Step number
        commands.append(Text(
            str(node.step),
            x + cfg.step_inset, y + cfg.step_inset,
            size=cfg.font_size_step,
            fill=self.theme.step_color,
            bold=True,
            baseline="top",
        ))

        # Type badge
        badge_x = x + w - cfg.badge_inset_right
        badge_y = y + cfg.badge_inset_top
        commands.append(Rect(
            badge_x, badge_y, cfg.badge_width, cfg.badge_height,
            fill=self.theme.badge_fill,
            radius=cfg.badge_radius,
            opacity=self.theme.badge_opacity,
        ))
        commands.append(Text(
            node.type.upper(),
            x + w - cfg.badge_text_inset, badge_y + cfg.badge_height / 2,
            size=cfg.font_size_badge,
            fill=style.text,
            anchor="middle",
        ))

        # Label, wrapped and centered as a block
        lines = wrap_text(node.label, w - cfg.label_padding, self.measurer, cfg.max_word_chars)
        cx, cy = node.center
        for line, line_y in zip(lines, line_centers(len(lines), cy, cfg.line_height)):
            commands.append(Text(
                line, cx, line_y,
                size=cfg.font_size_label,
                fill=style.text,
                bold=True,
                anchor="middle",
            ))

    def _shape(
        self,
        style: NodeStyle,
        x: float,
        y: float,
        w: float,
        h: float,
        fill: str,
        stroke: str | None = None,
        stroke_width: float = 0,
        opacity: float = 1.0,
    ) -> Command:
        """Build the outline command matching a node's shape."""
        if style.shape == Shape.OVAL:
            return Ellipse(
                x + w / 2, y + h / 2, w / 2, h / 2,
                fill=fill, stroke=stroke, stroke_width=stroke_width, opacity=opacity,
            )
        if style.shape == Shape.DIAMOND:
            return Polygon(
                diamond_points(x, y, w, h),
                fill=fill, stroke=stroke, stroke_width=stroke_width, opacity=opacity,
            )
        return Rect(
            x, y, w, h,
            fill=fill, stroke=stroke, stroke_width=stroke_width, opacity=opacity,
        )

    def _render_title(self, commands: list[Command], workflow: Workflow) -> None:
        commands.append(Text(
            workflow.title,
            self.config.canvas_width / 2, self.config.title_y,
            size=self.config.font_size_title,
            fill=self.theme.title_color,
            bold=True,
            anchor="middle",
        ))

    def _render_legend(self, commands: list[Command], workflow: Workflow) -> None:
        """Render the shape legend and summary caption along the bottom edge."""
        cfg = self.config
        size = cfg.font_size_legend
        y = cfg.canvas_height - 90
        x = cfg.start_x

        entries = [
            ("Start/End", resolve_node_style("start")),
            ("Process", resolve_node_style("process")),
            ("Decision", resolve_node_style("decision")),
        ]
        for label, style in entries:
            commands.append(self._shape(
                style, x, y, 32, 24,
                fill=style.fill, stroke=style.stroke, stroke_width=1,
            ))
            commands.append(Text(label, x + 44, y + 12, size=size, fill=self.theme.legend_text))
            x += 180

        commands.append(Curve(
            start=(x, y + 12),
            end=(x + 32, y + 12),
            stroke=self.theme.connector_color,
            stroke_width=cfg.connector_width,
        ))
        commands.append(Text("Flow", x + 44, y + 12, size=size, fill=self.theme.legend_text))

        caption_y = y + 40
        for line in workflow.summary_lines():
            commands.append(Text(line, cfg.start_x, caption_y, size=size, fill=self.theme.legend_text))
            caption_y += size + 6


def render_workflow(
    workflow: Workflow | None,
    renderer: DiagramRenderer | None = None,
) -> RenderSurface:
    """Render a workflow onto a new raster surface."""
    renderer = renderer or DiagramRenderer()
    return renderer.render_surface(workflow)


def render_to_svg(
    workflow: Workflow | None,
    filename: str | None = None,
    renderer: DiagramRenderer | None = None,
) -> str:
    """Render a workflow to SVG.

    Args:
        workflow: The workflow to render
        filename: Optional filename to save to (without extension)
        renderer: Optional renderer with custom config or theme

    Returns:
        SVG content as string
    """
    renderer = renderer or DiagramRenderer()
    drawing = scene_to_drawing(renderer.render(workflow))

    if filename:
        drawing.save_svg(f"{filename}.svg")
        logger.info("Saved %s.svg", filename)

    return drawing.as_svg()
