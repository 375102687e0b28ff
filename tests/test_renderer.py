"""Tests for renderer.py, raster.py and svg.py — draw order, node decoration, surfaces."""

from __future__ import annotations

import pytest

from flowplot.export import export_image
from flowplot.layout import assign_layout
from flowplot.models import Workflow, WorkflowNode
from flowplot.renderer import DiagramRenderer, render_to_svg, render_workflow
from flowplot.scene import Curve, Ellipse, Polygon, Rect, Text
from flowplot.text import CharWidthMeasurer

# ─── Helpers ──────────────────────────────────────────────────────────────────


def three_step_workflow(extra_connection: str | None = None) -> Workflow:
    """start -> p1 -> end, optionally with an extra connection from start."""
    start_connections = ("p1", extra_connection) if extra_connection else ("p1",)
    return Workflow(
        workflow_type="user_journey",
        workflow_nodes=(
            WorkflowNode("start", "start", "Begin", start_connections),
            WorkflowNode("p1", "process", "Collect requirements", ("end",)),
            WorkflowNode("end", "end", "Finish", ()),
        ),
    )


@pytest.fixture
def renderer() -> DiagramRenderer:
    return DiagramRenderer(measurer=CharWidthMeasurer(7.0))


def texts(scene) -> list[str]:
    return [c.text for c in scene.of_type(Text)]


# ─── Scene Tests ──────────────────────────────────────────────────────────────


class TestRenderScene:
    def test_three_step_workflow(self, renderer):
        wf = three_step_workflow()
        positioned = assign_layout(wf.workflow_nodes)
        assert [(n.row, n.column) for n in positioned] == [(0, 0), (0, 1), (0, 2)]

        scene = renderer.render(wf)
        curves = scene.of_type(Curve)
        assert len(curves) == 2
        assert all(c.controls is None for c in curves)
        assert [(c.start, c.end) for c in curves] == [((230, 190), (300, 190)), ((480, 190), (550, 190))]

    def test_draw_order(self, renderer):
        scene = renderer.render(three_step_workflow())
        kinds = [type(c) for c in scene.commands]
        last_curve = max(i for i, k in enumerate(kinds) if k is Curve)
        first_shape = min(i for i, k in enumerate(kinds) if k in (Ellipse, Rect))
        assert last_curve < first_shape
        assert scene.commands[-1] == Text(
            "USER JOURNEY WORKFLOW", 1000, 40, size=24, fill="#ffffff", bold=True, anchor="middle",
        )

    def test_ghost_connection_skipped(self, renderer):
        scene = renderer.render(three_step_workflow(extra_connection="ghost"))
        assert len(scene.of_type(Curve)) == 2

    def test_connector_style(self, renderer):
        scene = renderer.render(three_step_workflow())
        curve = scene.of_type(Curve)[0]
        assert curve.stroke == "#8b5cf6"
        assert curve.stroke_width == 3
        arrow = scene.commands[scene.commands.index(curve) + 1]
        assert isinstance(arrow, Polygon)
        assert arrow.fill == "#8b5cf6"
        assert arrow.points[0] == curve.end

    def test_shadow_then_body(self, renderer):
        scene = renderer.render(Workflow("flow", [WorkflowNode("p", "process", "Work")]))
        shadow, body = scene.of_type(Rect)[:2]
        assert (shadow.x, shadow.y) == (53, 153)
        assert shadow.fill == "#000000"
        assert shadow.opacity == pytest.approx(0.3)
        assert (body.x, body.y, body.width, body.height) == (50, 150, 180, 80)
        assert body.fill == "#3b82f6"
        assert body.stroke == "#2563eb"

    def test_shapes_per_type(self, renderer):
        wf = Workflow("flow", [
            WorkflowNode("s", "start", "S"),
            WorkflowNode("d", "decision", "D"),
            WorkflowNode("e", "end", "E"),
        ])
        scene = renderer.render(wf)
        ellipses = scene.of_type(Ellipse)
        assert len(ellipses) == 4  # shadow + body for start and end
        assert ellipses[1].fill == "#22c55e"
        assert ellipses[3].fill == "#ef4444"
        diamonds = [p for p in scene.of_type(Polygon) if len(p.points) == 4]
        assert [d.fill for d in diamonds] == ["#000000", "#f59e0b"]

    def test_step_numbers_and_badges(self, renderer):
        scene = renderer.render(three_step_workflow())
        steps = [c for c in scene.of_type(Text) if c.baseline == "top"]
        assert [s.text for s in steps] == ["1", "2", "3"]
        assert (steps[0].x, steps[0].y) == (58, 158)
        for badge in ("START", "PROCESS", "END"):
            assert badge in texts(scene)
        badges = [r for r in scene.of_type(Rect) if r.radius]
        assert (badges[0].x, badges[0].y, badges[0].width, badges[0].height) == (170, 155, 55, 20)
        start_badge = next(c for c in scene.of_type(Text) if c.text == "START")
        assert (start_badge.x, start_badge.y) == (198, 165)

    def test_unknown_type_uses_process_style(self, renderer):
        scene = renderer.render(Workflow("flow", [WorkflowNode("m", "milestone", "Ship it")]))
        body = scene.of_type(Rect)[1]
        assert body.fill == "#3b82f6"
        assert "MILESTONE" in texts(scene)

    def test_label_wrapped_and_centered(self, renderer):
        wf = Workflow("flow", [WorkflowNode("p", "process", "Review the submitted expense report carefully")])
        scene = renderer.render(wf)
        labels = [c for c in scene.of_type(Text) if c.size == 12]
        assert len(labels) > 1
        assert all(c.x == 140 and c.anchor == "middle" for c in labels)
        ys = [c.y for c in labels]
        assert sum(ys) / len(ys) == pytest.approx(190)
        assert all(7.0 * len(c.text) <= 160 for c in labels)

    def test_oversized_label_truncated(self, renderer):
        wf = Workflow("flow", [WorkflowNode("p", "process", "Pneumonoultramicroscopicsilicovolcanoconiosis")])
        assert "Pneumonoultrami..." in texts(renderer.render(wf))

    def test_no_workflow(self, renderer):
        scene = renderer.render(None)
        assert scene.commands == ()
        assert (scene.width, scene.height) == (2000, 1200)
        assert scene.background == "#0a0a0f"

    def test_empty_workflow_has_title_only(self, renderer):
        scene = renderer.render(Workflow("feature_flow"))
        assert len(scene.commands) == 1
        assert texts(scene) == ["FEATURE FLOW WORKFLOW"]

    def test_render_is_idempotent(self, renderer):
        wf = three_step_workflow(extra_connection="ghost")
        assert renderer.render(wf) == renderer.render(wf)

    def test_legend(self):
        renderer = DiagramRenderer(measurer=CharWidthMeasurer(7.0), show_legend=True)
        labels = texts(renderer.render(three_step_workflow()))
        for expected in ("Start/End", "Process", "Decision", "Flow", "Nodes: 3", "Workflow: user journey"):
            assert expected in labels


# ─── Raster Tests ─────────────────────────────────────────────────────────────


class TestRasterSurface:
    def test_surface_size_and_background(self):
        surface = render_workflow(None)
        assert surface.size == (2000, 1200)
        assert surface.image.getpixel((5, 5)) == (10, 10, 15)

    def test_pixels(self):
        surface = render_workflow(three_step_workflow())
        image = surface.image
        assert image.getpixel((5, 5)) == (10, 10, 15)
        assert image.getpixel((80, 190)) == (34, 197, 94)  # start oval
        assert image.getpixel((310, 220)) == (59, 130, 246)  # process body
        assert image.getpixel((265, 190)) == (139, 92, 246)  # connector

    def test_curved_connector_painted(self):
        nodes = [WorkflowNode(f"n{i}", "process", "", (f"n{i + 1}",)) for i in range(5)]
        nodes.append(WorkflowNode("n5", "end", "", ()))
        surface = render_workflow(Workflow("flow", nodes))
        # S-curve from (1230, 190) to (50, 390) crosses its midpoint at (640, 290)
        assert surface.image.getpixel((640, 290)) == (139, 92, 246)

    def test_rerender_is_pixel_identical(self):
        wf = three_step_workflow()
        first = render_workflow(wf)
        second = render_workflow(wf)
        assert first.scene == second.scene
        assert first.image.tobytes() == second.image.tobytes()
        assert export_image(first, "png") == export_image(second, "png")

    def test_end_to_end_png(self):
        data = export_image(render_workflow(three_step_workflow()), "png")
        assert len(data) > 0
        assert data.startswith(b"\x89PNG")


# ─── SVG Tests ────────────────────────────────────────────────────────────────


class TestSvg:
    def test_svg_content(self):
        svg = render_to_svg(three_step_workflow(), renderer=DiagramRenderer(measurer=CharWidthMeasurer(7.0)))
        assert svg.startswith("<?xml") or svg.startswith("<svg")
        assert "USER JOURNEY WORKFLOW" in svg
        assert "<ellipse" in svg
        assert svg.count("<path") == 4  # two connectors, two arrowheads

    def test_svg_deterministic(self):
        wf = three_step_workflow()
        assert render_to_svg(wf) == render_to_svg(wf)

    def test_svg_saved(self, tmp_path):
        render_to_svg(three_step_workflow(), filename=str(tmp_path / "journey"))
        assert (tmp_path / "journey.svg").read_text().count("<ellipse") == 4
