"""
Editor session: the live canvas graph plus debounced resync of the spec.

The graph is the source of truth while editing. Each edit replaces it and
restarts the quiet period; once the period elapses, poll() decompiles the
current graph into a fresh spec. Layout only runs on load, on replace_spec()
and (optionally) when a step is dropped from the palette.
"""

import logging
import time
from typing import Any, Callable

import settings
from models.graph import Graph, Node, Position
from models.pipeline import PipelineSpec
from . import editing
from .compiler import compile_to_graph
from .decompiler import DecompileReport, decompile_with_report
from .layout import LayoutSpacing, layout_graph

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class TrailingDebounce:
    """Fires once a fixed quiet period has passed since the last touch()."""

    def __init__(self, delay: float, clock: Clock = time.monotonic):
        self.delay = delay
        self._clock = clock
        self._last_touch: float | None = None

    @property
    def pending(self) -> bool:
        return self._last_touch is not None

    def touch(self) -> None:
        """Record a mutation; supersedes any pending deadline."""
        self._last_touch = self._clock()

    def is_due(self) -> bool:
        if self._last_touch is None:
            return False
        return self._clock() - self._last_touch >= self.delay

    def cancel(self) -> None:
        self._last_touch = None


class EditorSession:
    """Canvas state for one open pipeline."""

    def __init__(
        self,
        spec: PipelineSpec,
        sync_delay: float = settings.SYNC_DEBOUNCE_SECONDS,
        relayout_on_insert: bool = settings.RELAYOUT_ON_INSERT,
        spacing: LayoutSpacing | None = None,
        clock: Clock = time.monotonic,
    ):
        self.relayout_on_insert = relayout_on_insert
        self.spacing = spacing
        self.debounce = TrailingDebounce(sync_delay, clock)
        self.spec = spec
        self.graph = layout_graph(compile_to_graph(spec), spacing)
        self.last_report = DecompileReport()

    def replace_spec(self, spec: PipelineSpec) -> Graph:
        """Load a different spec wholesale (e.g. switching documents)."""
        self.debounce.cancel()
        self.spec = spec
        self.graph = layout_graph(compile_to_graph(spec), self.spacing)
        return self.graph

    def _edited(self, graph: Graph) -> Graph:
        self.graph = graph
        self.debounce.touch()
        return graph

    # -- Edits --

    def insert_step(self, step_type: str, position: Position | None = None) -> Node:
        graph, node = editing.insert_step_node(self.graph, step_type, position)
        if self.relayout_on_insert:
            graph = layout_graph(graph, self.spacing)
            node = graph.get_node(node.id)
        self._edited(graph)
        return node

    def connect(self, source: str, target: str, branch_key: str | None = None) -> Graph:
        return self._edited(editing.connect(self.graph, source, target, branch_key))

    def disconnect(self, edge_id: str) -> Graph:
        return self._edited(editing.disconnect(self.graph, edge_id))

    def delete_node(self, node_id: str) -> Graph:
        return self._edited(editing.delete_node(self.graph, node_id))

    def move_node(self, node_id: str, position: Position) -> Graph:
        return self._edited(editing.move_node(self.graph, node_id, position))

    def update_node(
        self,
        node_id: str,
        label: str | None = None,
        config: dict[str, Any] | None = None,
        branch_keys: list[str] | None = None,
    ) -> Graph:
        return self._edited(editing.update_node_data(self.graph, node_id, label, config, branch_keys))

    # -- Sync --

    def flush(self) -> PipelineSpec:
        """Decompile the current graph now, dropping any pending resync."""
        self.debounce.cancel()
        self.spec, self.last_report = decompile_with_report(self.graph.nodes, self.graph.edges, self.spec)
        if self.last_report.dropped_node_ids or self.last_report.revisited_node_ids:
            logger.warning(
                f"Spec no longer matches the canvas: dropped={self.last_report.dropped_node_ids} "
                f"revisited={self.last_report.revisited_node_ids}"
            )
        return self.spec

    def poll(self) -> PipelineSpec | None:
        """Return a freshly decompiled spec once the quiet period has elapsed."""
        if not self.debounce.is_due():
            return None
        return self.flush()
