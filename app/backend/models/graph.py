from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

START_NODE_ID = "start"
END_NODE_ID = "end"

START_STEP_INDEX = -1
END_STEP_INDEX = -99


class NodeKind(str, Enum):
    """Kind of a canvas node."""
    START = "start"
    END = "end"
    STEP = "step"


class Position(BaseModel):
    """Top-left corner of a node on the canvas."""
    x: float = 0.0
    y: float = 0.0


class NodeData(BaseModel):
    """Payload shown and edited on a node."""
    label: str = ""
    type: str = ""
    config: dict[str, Any] = Field(default_factory=dict)
    step_index: int = Field(default=0, alias="stepIndex")  # index within its own chain
    branch_keys: list[str] = Field(default_factory=list, alias="branchKeys")

    class Config:
        populate_by_name = True


class Node(BaseModel):
    """A canvas node."""
    id: str
    kind: NodeKind = NodeKind.STEP
    position: Position = Field(default_factory=Position)
    data: NodeData = Field(default_factory=NodeData)

    @property
    def is_sentinel(self) -> bool:
        return self.kind in (NodeKind.START, NodeKind.END)


class Edge(BaseModel):
    """A directed link between two nodes."""
    id: str
    source: str
    target: str
    branch_key: str | None = Field(default=None, alias="branchKey")
    source_handle: str | None = Field(default=None, alias="sourceHandle")

    class Config:
        populate_by_name = True

    @property
    def effective_branch_key(self) -> str | None:
        """Branch this edge enters, or None for a main edge.

        Edges drawn by hand from a branch handle only carry the handle id.
        """
        return self.branch_key or self.source_handle or None


class Graph(BaseModel):
    """Nodes and edges of the canvas."""
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    def get_node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_edge(self, edge_id: str) -> Edge | None:
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None
