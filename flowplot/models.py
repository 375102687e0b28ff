"""Data models for flowplot workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)


class NodeType(Enum):
    """Semantic kind of a workflow step."""

    START = "start"
    END = "end"
    DECISION = "decision"
    PROCESS = "process"

    @classmethod
    def parse(cls, value: NodeType | str | None) -> NodeType:
        """Map any value onto a node type, defaulting to PROCESS."""
        if isinstance(value, NodeType):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unknown node type %r, using process", value)
            return cls.PROCESS


@dataclass(frozen=True)
class WorkflowNode:
    """A single step in a workflow."""

    id: str
    type: str = NodeType.PROCESS.value
    label: str = ""
    connections: tuple[str, ...] = ()

    @property
    def kind(self) -> NodeType:
        return NodeType.parse(self.type)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WorkflowNode:
        """Build a node from its wire representation."""
        if data.get("id") is None:
            raise ValueError(f"Workflow node has no id: {dict(data)!r}")
        return cls(
            id=str(data["id"]),
            type=str(data.get("type") or NodeType.PROCESS.value),
            label=str(data.get("label") or ""),
            connections=tuple(str(c) for c in data.get("connections") or ()),
        )


@dataclass(frozen=True)
class PositionedNode:
    """A workflow node placed on the layout grid.

    x, y is the top-left corner in surface coordinates.
    """

    id: str
    type: str
    label: str
    connections: tuple[str, ...]
    index: int
    row: int
    column: int
    x: float
    y: float
    width: float
    height: float

    @property
    def kind(self) -> NodeType:
        return NodeType.parse(self.type)

    @property
    def step(self) -> int:
        """1-based step number."""
        return self.index + 1

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


def parse_timestamp(value: datetime | str | float | None) -> datetime | None:
    """Parse an ISO-8601 string or epoch milliseconds into a datetime."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class Workflow:
    """An ordered set of typed steps extracted from a document."""

    workflow_type: str
    workflow_nodes: tuple[WorkflowNode, ...] = ()
    timestamp: datetime | None = None
    document_length: int = 0
    _ids: frozenset[str] = field(default=frozenset(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Accept any iterable of nodes, store a tuple
        nodes = tuple(self.workflow_nodes)
        object.__setattr__(self, "workflow_nodes", nodes)

        seen: set[str] = set()
        for node in nodes:
            if node.id in seen:
                raise ValueError(f"Duplicate node id '{node.id}' in workflow '{self.workflow_type}'")
            seen.add(node.id)
        object.__setattr__(self, "_ids", frozenset(seen))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._ids

    def __len__(self) -> int:
        return len(self.workflow_nodes)

    @property
    def display_name(self) -> str:
        """Workflow type with underscores turned into spaces."""
        return self.workflow_type.replace("_", " ")

    @property
    def title(self) -> str:
        return f"{self.display_name.upper()} WORKFLOW"

    def summary_lines(self) -> list[str]:
        """Caption lines describing the workflow."""
        generated = self.timestamp.strftime("%Y-%m-%d %H:%M:%S") if self.timestamp else "unknown"
        return [
            f"Workflow: {self.display_name}",
            f"Nodes: {len(self.workflow_nodes)}",
            f"Generated: {generated}",
        ]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Workflow:
        """Build a workflow from the analysis backend's JSON payload."""
        nodes: Iterable[Mapping[str, Any]] = data.get("workflow_nodes") or ()
        return cls(
            workflow_type=str(data.get("workflow_type") or "workflow"),
            workflow_nodes=tuple(WorkflowNode.from_dict(n) for n in nodes),
            timestamp=parse_timestamp(data.get("timestamp")),
            document_length=int(data.get("document_length") or 0),
        )
