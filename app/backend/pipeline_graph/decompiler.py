"""
Canvas graph -> pipeline spec.

Inverse of the compiler, but run against whatever the user has drawn. The
graph is walked along its edges from the start node:

- a node seen before ends the chain (cycle guard);
- a route/parallel step with branch edges gets one sub-chain per branch and
  ends its chain (branches never rejoin);
- any other step continues along its main edge;
- reaching the end node ends the chain without emitting a step.

Nothing here raises on a malformed graph. Nodes the walk never reaches are
left out of the result and reported.
"""

import logging
from dataclasses import dataclass, field

from models.graph import Edge, Node, NodeKind, START_NODE_ID
from models.pipeline import PipelineSpec, PipelineStep
from step_types import supports_branches

logger = logging.getLogger(__name__)


@dataclass
class DecompileReport:
    """What the rebuilt spec lost relative to the graph."""
    dropped_node_ids: list[str] = field(default_factory=list)  # step nodes not in the spec
    revisited_node_ids: list[str] = field(default_factory=list)  # where the cycle guard cut a chain


class _Decompiler:
    def __init__(self, nodes: list[Node], edges: list[Edge]):
        self.nodes_by_id: dict[str, Node] = {}
        for node in nodes:
            self.nodes_by_id.setdefault(node.id, node)

        # Outgoing edges per source, in edge-list order; dangling edges are ignored.
        self.outgoing: dict[str, list[Edge]] = {}
        for edge in edges:
            if edge.source in self.nodes_by_id and edge.target in self.nodes_by_id:
                self.outgoing.setdefault(edge.source, []).append(edge)

        self.visited: set[str] = set()
        self.emitted: set[str] = set()
        self.revisited: list[str] = []

    def find_start(self) -> Node | None:
        for node in self.nodes_by_id.values():
            if node.kind == NodeKind.START:
                return node
        return self.nodes_by_id.get(START_NODE_ID)

    def main_edge(self, node_id: str) -> Edge | None:
        """First untagged outgoing edge. Later ones are ambiguous and ignored."""
        main_edges = [e for e in self.outgoing.get(node_id, []) if e.effective_branch_key is None]
        if len(main_edges) > 1:
            logger.debug(f"Node {node_id} has {len(main_edges)} main edges; following {main_edges[0].id}")
        return main_edges[0] if main_edges else None

    def branch_edges(self, node_id: str) -> dict[str, Edge]:
        """Branch-tagged outgoing edges by branch key; the first edge per key wins."""
        branches: dict[str, Edge] = {}
        for edge in self.outgoing.get(node_id, []):
            key = edge.effective_branch_key
            if key is not None and key not in branches:
                branches[key] = edge
        return branches

    def walk(self, entry_id: str | None) -> list[PipelineStep]:
        """
        Rebuild the chain starting at entry_id, branches included.

        Branch sub-chains are queued as (steps list, entry node) frames on an
        explicit stack, so deeply nested fan-outs do not hit the recursion limit.
        Frames run depth-first in branch order, matching the compiler's preorder.
        """
        root: list[PipelineStep] = []
        stack: list[tuple[list[PipelineStep], str | None]] = [(root, entry_id)]

        while stack:
            steps, node_id = stack.pop()
            while node_id is not None:
                if node_id in self.visited:
                    self.revisited.append(node_id)
                    logger.debug(f"Chain truncated at already visited node {node_id}")
                    break

                node = self.nodes_by_id[node_id]
                if node.is_sentinel:
                    break
                self.visited.add(node_id)

                step = PipelineStep(
                    name=node.data.label,
                    type=node.data.type,
                    config=dict(node.data.config),
                )
                steps.append(step)
                self.emitted.add(node_id)

                branch_edges = self.branch_edges(node_id) if supports_branches(node.data.type) else {}
                if branch_edges:
                    step.branches = {key: [] for key in branch_edges}
                    for key, edge in reversed(list(branch_edges.items())):
                        stack.append((step.branches[key], edge.target))
                    break

                next_edge = self.main_edge(node_id)
                node_id = next_edge.target if next_edge else None

        return root

    def run(self) -> list[PipelineStep]:
        start = self.find_start()
        if start is None:
            logger.debug("No start node; decompiling to an empty pipeline")
            return []

        self.visited.add(start.id)
        first_edge = self.main_edge(start.id)
        return self.walk(first_edge.target if first_edge else None)

    def dropped_node_ids(self) -> list[str]:
        return [
            node_id
            for node_id, node in self.nodes_by_id.items()
            if not node.is_sentinel and node_id not in self.emitted
        ]


def decompile_with_report(
    nodes: list[Node],
    edges: list[Edge],
    previous_spec: PipelineSpec | None = None,
) -> tuple[PipelineSpec, DecompileReport]:
    """
    Rebuild the pipeline spec from the current graph.

    Fields the graph does not carry (pipeline type, chat history options, ...)
    are taken from previous_spec unchanged.

    Returns:
        The rebuilt spec and a report of what was left out
    """
    decompiler = _Decompiler(nodes, edges)
    steps = decompiler.run()

    report = DecompileReport(
        dropped_node_ids=decompiler.dropped_node_ids(),
        revisited_node_ids=decompiler.revisited,
    )
    if report.dropped_node_ids:
        logger.info(
            f"Dropped {len(report.dropped_node_ids)} unreachable step node(s): {report.dropped_node_ids[:5]}"
            + (f" (and {len(report.dropped_node_ids) - 5} more)" if len(report.dropped_node_ids) > 5 else "")
        )

    base = previous_spec or PipelineSpec()
    return base.model_copy(update={"steps": steps}), report


def decompile_from_graph(
    nodes: list[Node],
    edges: list[Edge],
    previous_spec: PipelineSpec | None = None,
) -> PipelineSpec:
    """Rebuild the pipeline spec from the current graph."""
    spec, _ = decompile_with_report(nodes, edges, previous_spec)
    return spec
