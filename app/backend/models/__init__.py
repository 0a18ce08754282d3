from .pipeline import PipelineSpec, PipelineStep, ChatHistoryConfig
from .graph import (
    Edge,
    Graph,
    Node,
    NodeData,
    NodeKind,
    Position,
    START_NODE_ID,
    END_NODE_ID,
)

__all__ = [
    "PipelineSpec",
    "PipelineStep",
    "ChatHistoryConfig",
    "Edge",
    "Graph",
    "Node",
    "NodeData",
    "NodeKind",
    "Position",
    "START_NODE_ID",
    "END_NODE_ID",
]
