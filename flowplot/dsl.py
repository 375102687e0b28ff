"""Python DSL for building workflows."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Literal

from .export import export_image
from .models import NodeType, Workflow, WorkflowNode
from .renderer import render_workflow

if TYPE_CHECKING:
    from collections.abc import Generator

# Type alias for the step type parameter
StepTypeLiteral = Literal["start", "end", "decision", "process"]

# Context stack for nested workflow creation
_builder_stack: list[WorkflowBuilder] = []


@dataclass
class StepRef:
    """A step being built. `a >> b` connects a to b and returns b."""

    id: str
    type: str
    label: str
    connections: list[str] = field(default_factory=list)

    def __rshift__(self, other: StepRef) -> StepRef:
        self.connections.append(other.id)
        return other

    def to_node(self) -> WorkflowNode:
        return WorkflowNode(
            id=self.id,
            type=self.type,
            label=self.label,
            connections=tuple(self.connections),
        )


@dataclass
class WorkflowBuilder:
    """Collects steps until the workflow context closes."""

    workflow_type: str
    document_length: int = 0
    steps: list[StepRef] = field(default_factory=list)
    workflow: Workflow | None = None

    def add(self, step: StepRef) -> StepRef:
        self.steps.append(step)
        return step

    def build(self) -> Workflow:
        return Workflow(
            workflow_type=self.workflow_type,
            workflow_nodes=tuple(s.to_node() for s in self.steps),
            timestamp=datetime.now(timezone.utc),
            document_length=self.document_length,
        )


def _current_builder() -> WorkflowBuilder | None:
    """Get the current workflow context."""
    return _builder_stack[-1] if _builder_stack else None


@contextmanager
def workflow(
        workflow_type: str = "workflow",
        filename: str | None = None,
        document_length: int = 0,
) -> Generator[WorkflowBuilder]:
    """Create a workflow context.

    Usage:
        with workflow("user_journey", filename="output/journey") as wf:
            start = step("start", "Open app")
            browse = step("process", "Browse catalog")
            done = step("end", "Checkout")
            start >> browse >> done

        wf.workflow  # the finished Workflow

    Args:
        workflow_type: Category label used for the diagram title
        filename: Optional output filename (without extension); a PNG is
            written on exit
        document_length: Length of the source document

    Yields:
        The WorkflowBuilder
    """
    builder = WorkflowBuilder(workflow_type=workflow_type, document_length=document_length)
    _builder_stack.append(builder)

    try:
        yield builder
    finally:
        _builder_stack.pop()

    builder.workflow = builder.build()
    if filename:
        surface = render_workflow(builder.workflow)
        with open(f"{filename}.png", "wb") as fp:
            fp.write(export_image(surface, "png"))


def step(
        type: StepTypeLiteral | NodeType | str = "process",
        label: str = "",
        id: str | None = None,
) -> StepRef:
    """Create a step in the current workflow.

    Args:
        type: "start", "end", "decision" or "process"
        label: Text shown inside the node
        id: Node id; defaults to "step<n>" by position

    Returns:
        StepRef that can be connected with >>
    """
    builder = _current_builder()
    if id is None:
        position = len(builder.steps) + 1 if builder else 1
        id = f"step{position}"

    if isinstance(type, NodeType):
        type = type.value

    ref = StepRef(id=id, type=type, label=label)
    if builder:
        builder.add(ref)
    return ref
