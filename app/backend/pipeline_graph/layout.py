"""
Layered top-to-bottom layout for the pipeline canvas.

Phases:
  1. Back-edge detection (DFS from the start node, path-based)
  2. Rank assignment (longest path over the remaining DAG)
  3. Crossing minimization (dummy nodes + barycenter sweeps)
  4. Coordinate assignment (uniform node footprint, ranks centered on x = 0)

The result depends only on the node id set and the edge set: list order and
prior positions are ignored.
"""

import logging
import re
from dataclasses import dataclass

import networkx as nx

import settings
from models.graph import Edge, Graph, Node, Position, START_NODE_ID

logger = logging.getLogger(__name__)

DUMMY_PREFIX = "__dummy_"
MAX_SWEEPS = 24


@dataclass(frozen=True)
class LayoutSpacing:
    """Node footprint and gaps, in canvas units."""
    node_width: float = settings.NODE_WIDTH
    node_height: float = settings.NODE_HEIGHT
    rank_sep: float = settings.RANK_SEP
    node_sep: float = settings.NODE_SEP


def natural_key(node_id: str) -> tuple:
    """Sort key that orders step-2 before step-10. Ids equal up to leading zeros fall back to the raw id."""
    parts = [(0, int(part), "") if part.isdecimal() else (1, 0, part) for part in re.split(r"(\d+)", node_id)]
    return parts, node_id


def build_digraph(nodes: list[Node], edges: list[Edge]) -> nx.DiGraph:
    """DiGraph of the canvas topology. Edges naming unknown nodes and self-loops are skipped."""
    graph = nx.DiGraph()
    node_ids = sorted({node.id for node in nodes}, key=natural_key)
    graph.add_nodes_from(node_ids)
    for source, target in sorted({(e.source, e.target) for e in edges}, key=lambda p: (natural_key(p[0]), natural_key(p[1]))):
        if source == target or source not in graph or target not in graph:
            continue
        graph.add_edge(source, target)
    return graph


def _successors(graph: nx.DiGraph, node_id: str) -> list[str]:
    return sorted(graph.successors(node_id), key=natural_key)


def find_back_edges(graph: nx.DiGraph, root: str | None = START_NODE_ID) -> set[tuple[str, str]]:
    """
    Edges that point at a node on the current DFS path.

    The DFS starts from root (when present), then from every unvisited node in
    natural id order. Iterative, so long chains do not hit the recursion limit.
    """
    roots = sorted(graph.nodes, key=natural_key)
    if root in graph:
        roots.remove(root)
        roots.insert(0, root)

    back_edges: set[tuple[str, str]] = set()
    visited: set[str] = set()
    on_path: set[str] = set()

    for start in roots:
        if start in visited:
            continue
        visited.add(start)
        on_path.add(start)
        stack = [(start, iter(_successors(graph, start)))]
        while stack:
            node_id, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                on_path.discard(node_id)
                continue
            if child in on_path:
                back_edges.add((node_id, child))
            elif child not in visited:
                visited.add(child)
                on_path.add(child)
                stack.append((child, iter(_successors(graph, child))))

    return back_edges


def assign_ranks(graph: nx.DiGraph, back_edges: set[tuple[str, str]]) -> dict[str, int]:
    """Longest-path rank of every node, ignoring back-edges."""
    dag = nx.DiGraph()
    dag.add_nodes_from(graph.nodes)
    dag.add_edges_from(edge for edge in graph.edges if edge not in back_edges)

    ranks = {node_id: 0 for node_id in dag.nodes}
    for node_id in nx.lexicographical_topological_sort(dag, key=natural_key):
        for succ in dag.successors(node_id):
            ranks[succ] = max(ranks[succ], ranks[node_id] + 1)
    return ranks


def insert_dummy_nodes(
    graph: nx.DiGraph,
    ranks: dict[str, int],
) -> tuple[nx.DiGraph, dict[str, int]]:
    """
    Split edges spanning more than one rank into chains of dummy nodes.

    Back-edges (pointing upward) are kept as single-rank segments in reverse,
    so every edge of the result connects adjacent ranks top-down.
    """
    layered = nx.DiGraph()
    layered.add_nodes_from(graph.nodes)
    layer_of = dict(ranks)
    counter = 0

    for source, target in sorted(graph.edges, key=lambda p: (natural_key(p[0]), natural_key(p[1]))):
        upper, lower = (source, target) if layer_of[source] < layer_of[target] else (target, source)
        span = layer_of[lower] - layer_of[upper]
        if span == 0:
            continue
        previous = upper
        for i in range(span - 1):
            dummy_id = f"{DUMMY_PREFIX}{counter}_{i}"
            layered.add_node(dummy_id)
            layer_of[dummy_id] = layer_of[upper] + i + 1
            layered.add_edge(previous, dummy_id)
            previous = dummy_id
        layered.add_edge(previous, lower)
        counter += 1

    return layered, layer_of


def count_crossings(ordering: list[list[str]], graph: nx.DiGraph) -> int:
    """Count edge crossings between consecutive ranks."""
    total = 0
    for layer_idx in range(len(ordering) - 1):
        lower_pos = {node_id: i for i, node_id in enumerate(ordering[layer_idx + 1])}
        segments = [
            (upper_idx, lower_pos[succ])
            for upper_idx, node_id in enumerate(ordering[layer_idx])
            for succ in graph.successors(node_id)
            if succ in lower_pos
        ]
        for i, (a_upper, a_lower) in enumerate(segments):
            for b_upper, b_lower in segments[i + 1:]:
                if (a_upper - b_upper) * (a_lower - b_lower) < 0:
                    total += 1
    return total


def _barycenter(neighbors: list[str], positions: dict[str, int], fallback: float) -> float:
    placed = [positions[n] for n in neighbors if n in positions]
    if not placed:
        return fallback
    return sum(placed) / len(placed)


def _sorted_by_barycenter(layer: list[str], positions: dict[str, int], neighbors_of) -> list[str]:
    index_of = {node_id: i for i, node_id in enumerate(layer)}
    return sorted(
        layer,
        key=lambda n: (_barycenter(list(neighbors_of(n)), positions, index_of[n]), index_of[n]),
    )


def minimize_crossings(layered: nx.DiGraph, layer_of: dict[str, int]) -> list[list[str]]:
    """
    Order the nodes of each rank with alternating barycenter sweeps.

    Ties and nodes without neighbors in the adjacent rank keep their current
    index, so the result is fully determined by the initial natural-id order.
    """
    layer_count = max(layer_of.values(), default=-1) + 1
    ordering: list[list[str]] = [[] for _ in range(layer_count)]
    for node_id in sorted(layer_of, key=natural_key):
        ordering[layer_of[node_id]].append(node_id)

    best = [list(layer) for layer in ordering]
    best_crossings = count_crossings(best, layered)

    for _ in range(MAX_SWEEPS):
        if best_crossings == 0:
            break

        for layer_idx in range(1, layer_count):
            above = {node_id: i for i, node_id in enumerate(ordering[layer_idx - 1])}
            ordering[layer_idx] = _sorted_by_barycenter(ordering[layer_idx], above, layered.predecessors)

        for layer_idx in range(layer_count - 2, -1, -1):
            below = {node_id: i for i, node_id in enumerate(ordering[layer_idx + 1])}
            ordering[layer_idx] = _sorted_by_barycenter(ordering[layer_idx], below, layered.successors)

        crossings = count_crossings(ordering, layered)
        if crossings >= best_crossings:
            break
        best = [list(layer) for layer in ordering]
        best_crossings = crossings

    return best


def compute_positions(
    nodes: list[Node],
    edges: list[Edge],
    spacing: LayoutSpacing | None = None,
) -> dict[str, Position]:
    """Top-left position of every node, keyed by node id."""
    spacing = spacing or LayoutSpacing()
    graph = build_digraph(nodes, edges)
    if graph.number_of_nodes() == 0:
        return {}

    back_edges = find_back_edges(graph)
    if back_edges:
        logger.debug(f"Layout ignoring {len(back_edges)} back-edge(s): {sorted(back_edges)}")

    ranks = assign_ranks(graph, back_edges)
    layered, layer_of = insert_dummy_nodes(graph, ranks)
    ordering = minimize_crossings(layered, layer_of)

    positions: dict[str, Position] = {}
    column_width = spacing.node_width + spacing.node_sep
    row_height = spacing.node_height + spacing.rank_sep
    for rank, layer in enumerate(ordering):
        real_nodes = [node_id for node_id in layer if not node_id.startswith(DUMMY_PREFIX)]
        offset = (len(real_nodes) - 1) / 2
        for column, node_id in enumerate(real_nodes):
            center_x = (column - offset) * column_width
            positions[node_id] = Position(
                x=center_x - spacing.node_width / 2,
                y=rank * row_height,
            )
    return positions


def apply_layout(
    nodes: list[Node],
    edges: list[Edge],
    spacing: LayoutSpacing | None = None,
) -> list[Node]:
    """Return copies of nodes with layout positions. Topology is untouched."""
    positions = compute_positions(nodes, edges, spacing)
    return [
        node.model_copy(update={"position": positions.get(node.id, node.position)})
        for node in nodes
    ]


def layout_graph(graph: Graph, spacing: LayoutSpacing | None = None) -> Graph:
    """Lay out a whole graph."""
    return Graph(
        nodes=apply_layout(graph.nodes, graph.edges, spacing),
        edges=list(graph.edges),
    )
