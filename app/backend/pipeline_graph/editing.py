"""
Graph edits performed on the canvas.

Every function returns a Graph and leaves its input untouched.
Edits that name a missing node or edge raise GraphEditError.
"""

from typing import Any

from models.graph import Edge, Graph, Node, NodeData, NodeKind, Position
from .compiler import edge_id as make_edge_id


class GraphEditError(ValueError):
    """An edit referenced a node or edge that is not in the graph."""


def _require_node(graph: Graph, node_id: str) -> Node:
    node = graph.get_node(node_id)
    if node is None:
        raise GraphEditError(f"Node not found: {node_id}")
    return node


def _next_step_id(graph: Graph) -> str:
    taken = {node.id for node in graph.nodes}
    n = len(graph.nodes)
    while f"step-{n}" in taken:
        n += 1
    return f"step-{n}"


def insert_step_node(
    graph: Graph,
    step_type: str,
    position: Position | None = None,
) -> tuple[Graph, Node]:
    """Add an unconnected step node dropped from the palette."""
    node = Node(
        id=_next_step_id(graph),
        kind=NodeKind.STEP,
        position=position or Position(),
        data=NodeData(
            label=f"New {step_type}",
            type=step_type,
            config={},
            step_index=len(graph.nodes),
        ),
    )
    return Graph(nodes=[*graph.nodes, node], edges=list(graph.edges)), node


def connect(graph: Graph, source: str, target: str, branch_key: str | None = None) -> Graph:
    """Add an edge. Connecting the same pair with the same branch key twice is a no-op."""
    _require_node(graph, source)
    _require_node(graph, target)

    for edge in graph.edges:
        if edge.source == source and edge.target == target and edge.effective_branch_key == branch_key:
            return graph

    new_id = make_edge_id(source, target)
    if branch_key is not None:
        new_id = f"{new_id}-{branch_key}"
    taken = {edge.id for edge in graph.edges}
    suffix = 1
    candidate = new_id
    while candidate in taken:
        candidate = f"{new_id}-{suffix}"
        suffix += 1

    edge = Edge(
        id=candidate,
        source=source,
        target=target,
        branch_key=branch_key,
        source_handle=branch_key,
    )
    return Graph(nodes=list(graph.nodes), edges=[*graph.edges, edge])


def disconnect(graph: Graph, edge_id: str) -> Graph:
    """Remove an edge."""
    if graph.get_edge(edge_id) is None:
        raise GraphEditError(f"Edge not found: {edge_id}")
    return Graph(
        nodes=list(graph.nodes),
        edges=[edge for edge in graph.edges if edge.id != edge_id],
    )


def delete_node(graph: Graph, node_id: str) -> Graph:
    """Remove a node together with every edge touching it."""
    _require_node(graph, node_id)
    return Graph(
        nodes=[node for node in graph.nodes if node.id != node_id],
        edges=[edge for edge in graph.edges if edge.source != node_id and edge.target != node_id],
    )


def _replace_node(graph: Graph, node_id: str, **update: Any) -> Graph:
    _require_node(graph, node_id)
    return Graph(
        nodes=[
            node.model_copy(update=update) if node.id == node_id else node
            for node in graph.nodes
        ],
        edges=list(graph.edges),
    )


def move_node(graph: Graph, node_id: str, position: Position) -> Graph:
    return _replace_node(graph, node_id, position=position)


def update_node_data(
    graph: Graph,
    node_id: str,
    label: str | None = None,
    config: dict[str, Any] | None = None,
    branch_keys: list[str] | None = None,
) -> Graph:
    """Apply property-panel edits to a node."""
    node = _require_node(graph, node_id)
    data_update: dict[str, Any] = {}
    if label is not None:
        data_update["label"] = label
    if config is not None:
        data_update["config"] = dict(config)
    if branch_keys is not None:
        data_update["branch_keys"] = list(branch_keys)
    return _replace_node(graph, node_id, data=node.data.model_copy(update=data_update))
