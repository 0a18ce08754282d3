"""
Pipeline spec -> canvas graph.

Each step becomes a node linked from the previous node of its chain. A step
with branches gets one sub-chain per branch; the first edge of a sub-chain is
tagged with the branch key, and sub-chains never rejoin the root chain or
connect to the end node.
"""

from models.graph import (
    Edge,
    Graph,
    Node,
    NodeData,
    NodeKind,
    START_NODE_ID,
    END_NODE_ID,
    START_STEP_INDEX,
    END_STEP_INDEX,
)
from models.pipeline import PipelineSpec, PipelineStep


def edge_id(source: str, target: str) -> str:
    return f"e-{source}-{target}"


class _GraphBuilder:
    def __init__(self):
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self._step_counter = 0

    def add_sentinel(self, node_id: str, kind: NodeKind, label: str, step_index: int) -> str:
        self.nodes.append(Node(
            id=node_id,
            kind=kind,
            data=NodeData(label=label, step_index=step_index),
        ))
        return node_id

    def add_step(self, step: PipelineStep, index: int) -> str:
        node_id = f"step-{self._step_counter}"
        self._step_counter += 1
        self.nodes.append(Node(
            id=node_id,
            kind=NodeKind.STEP,
            data=NodeData(
                label=step.name,
                type=step.type,
                config=dict(step.config),
                step_index=index,
                branch_keys=list(step.branches or {}),
            ),
        ))
        return node_id

    def link(self, source: str, target: str, branch_key: str | None = None) -> None:
        self.edges.append(Edge(
            id=edge_id(source, target),
            source=source,
            target=target,
            branch_key=branch_key,
            source_handle=branch_key,
        ))

    def add_chain(self, steps: list[PipelineStep], parent_id: str) -> str:
        """
        Add a chain of steps hanging off parent_id. Returns the last node id.

        Branch sub-chains go on an explicit stack of [remaining steps, previous
        node, entry edge tag] frames and are finished before the chain that owns
        them continues, so node ids follow preorder at any nesting depth.
        """
        last_id = parent_id
        stack = [[iter(enumerate(steps)), parent_id, None]]

        while stack:
            frame = stack[-1]
            remaining, previous_id, edge_tag = frame
            item = next(remaining, None)
            if item is None:
                stack.pop()
                continue

            index, step = item
            node_id = self.add_step(step, index)
            self.link(previous_id, node_id, edge_tag)
            frame[1] = node_id
            frame[2] = None  # only the entry edge of a branch is tagged
            if len(stack) == 1:
                last_id = node_id

            for key, branch_steps in reversed(list((step.branches or {}).items())):
                stack.append([iter(enumerate(branch_steps)), node_id, key])

        return last_id


def compile_to_graph(spec: PipelineSpec) -> Graph:
    """
    Convert a pipeline spec into canvas nodes and edges.

    All nodes are placed at the origin; run the layout engine before rendering.
    """
    builder = _GraphBuilder()
    builder.add_sentinel(START_NODE_ID, NodeKind.START, "Start", START_STEP_INDEX)

    last_id = builder.add_chain(spec.steps, START_NODE_ID)

    builder.add_sentinel(END_NODE_ID, NodeKind.END, "End", END_STEP_INDEX)
    builder.link(last_id, END_NODE_ID)

    return Graph(nodes=builder.nodes, edges=builder.edges)
