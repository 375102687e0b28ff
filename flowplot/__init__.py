"""flowplot - Workflow flowchart rendering.

Example usage:
    from flowplot import Workflow, render_workflow, export_image

    wf = Workflow.from_dict({
        "workflow_type": "user_journey",
        "workflow_nodes": [
            {"id": "start", "type": "start", "label": "Sign up", "connections": ["p1"]},
            {"id": "p1", "type": "process", "label": "Verify email", "connections": ["end"]},
            {"id": "end", "type": "end", "label": "Done", "connections": []},
        ],
    })
    png = export_image(render_workflow(wf), "png")
"""

from .dsl import (
    StepRef,
    WorkflowBuilder,
    step,
    workflow,
)
from .export import (
    export_filename,
    export_image,
    save_image,
)
from .layout import (
    LayoutConfig,
    assign_layout,
)
from .models import (
    NodeType,
    PositionedNode,
    Workflow,
    WorkflowNode,
)
from .raster import (
    RenderSurface,
)
from .renderer import (
    DEFAULT_THEME,
    DiagramRenderer,
    Theme,
    render_to_svg,
    render_workflow,
)
from .routing import (
    ConnectorRoute,
    route_connector,
)
from .scene import (
    Scene,
)
from .styles import (
    NodeStyle,
    Shape,
    resolve_node_style,
)
from .text import (
    CharWidthMeasurer,
    FontMeasurer,
    wrap_text,
)

__version__ = "0.1.0"

__all__ = [
    # DSL functions
    "workflow",
    "step",
    "StepRef",
    "WorkflowBuilder",
    # Models
    "NodeType",
    "WorkflowNode",
    "PositionedNode",
    "Workflow",
    # Layout and routing
    "LayoutConfig",
    "assign_layout",
    "ConnectorRoute",
    "route_connector",
    # Styles and text
    "Shape",
    "NodeStyle",
    "resolve_node_style",
    "CharWidthMeasurer",
    "FontMeasurer",
    "wrap_text",
    # Rendering
    "Scene",
    "RenderSurface",
    "DiagramRenderer",
    "Theme",
    "DEFAULT_THEME",
    "render_workflow",
    "render_to_svg",
    # Export
    "export_image",
    "export_filename",
    "save_image",
    # Version
    "__version__",
]
