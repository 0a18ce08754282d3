import pytest

from models.graph import Position
from models.pipeline import PipelineSpec, PipelineStep
from pipeline_graph import EditorSession, GraphEditError, LayoutSpacing, TrailingDebounce

SPACING = LayoutSpacing(node_width=250, node_height=200, rank_sep=100, node_sep=80)


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_debounce_fires_after_quiet_period() -> None:
    clock = FakeClock()
    debounce = TrailingDebounce(0.5, clock)

    assert not debounce.pending
    assert not debounce.is_due()

    debounce.touch()
    clock.now = 0.4
    assert debounce.pending
    assert not debounce.is_due()

    clock.now = 0.5
    assert debounce.is_due()


def test_new_touch_restarts_the_quiet_period() -> None:
    clock = FakeClock()
    debounce = TrailingDebounce(0.5, clock)

    debounce.touch()
    clock.now = 0.4
    debounce.touch()
    clock.now = 0.8
    assert not debounce.is_due()

    clock.now = 1.0
    assert debounce.is_due()

    debounce.cancel()
    assert not debounce.pending
    assert not debounce.is_due()


def test_session_loads_a_laid_out_graph(linear_spec) -> None:
    session = EditorSession(linear_spec, spacing=SPACING, clock=FakeClock())

    ys = [session.graph.get_node(i).position.y for i in ["start", "step-0", "step-1", "step-2", "end"]]
    assert ys == sorted(ys)
    assert len(set(ys)) == 5
    assert session.poll() is None


def test_session_resyncs_after_edits_settle(linear_spec) -> None:
    clock = FakeClock()
    session = EditorSession(linear_spec, sync_delay=0.5, spacing=SPACING, clock=clock)

    session.update_node("step-0", label="Rewrite query")
    clock.now = 0.3
    session.move_node("step-1", Position(x=500, y=-200))
    clock.now = 0.7
    assert session.poll() is None

    clock.now = 0.9
    spec = session.poll()

    assert spec is not None
    assert [s.name for s in spec.steps] == ["Rewrite query", "Search", "Answer"]
    assert spec.type == "simple_rag"
    assert session.spec is spec
    assert session.poll() is None


def test_session_reports_dropped_nodes(linear_spec) -> None:
    session = EditorSession(linear_spec, spacing=SPACING, clock=FakeClock())

    session.disconnect("e-step-1-step-2")
    spec = session.flush()

    assert [s.name for s in spec.steps] == ["Rewrite", "Search"]
    assert session.last_report.dropped_node_ids == ["step-2"]
    assert not session.debounce.pending


def test_palette_insert_keeps_drop_position_by_default(linear_spec) -> None:
    session = EditorSession(linear_spec, relayout_on_insert=False, spacing=SPACING, clock=FakeClock())

    node = session.insert_step("retrieve", Position(x=900, y=900))

    assert node.position == Position(x=900, y=900)
    assert session.graph.get_node(node.id) == node
    assert session.debounce.pending


def test_palette_insert_can_relayout(linear_spec) -> None:
    session = EditorSession(linear_spec, relayout_on_insert=True, spacing=SPACING, clock=FakeClock())

    node = session.insert_step("retrieve", Position(x=900, y=900))

    # unconnected, so it lands on the top rank next to start
    assert node.position.y == 0
    assert session.graph.get_node(node.id).position == node.position


def test_session_connect_and_delete(branching_spec) -> None:
    session = EditorSession(branching_spec, spacing=SPACING, clock=FakeClock())

    session.delete_node("step-3")
    node = session.insert_step("generate")
    session.connect("step-1", node.id, branch_key="chat")
    spec = session.flush()

    dispatch = spec.steps[1]
    assert list(dispatch.branches) == ["faq", "chat"]
    assert [s.name for s in dispatch.branches["chat"]] == ["New generate"]

    with pytest.raises(GraphEditError):
        session.connect("step-1", "step-3")


def test_replace_spec_relayouts_and_cancels_pending_sync(linear_spec) -> None:
    session = EditorSession(linear_spec, spacing=SPACING, clock=FakeClock())
    session.update_node("step-0", label="changed")

    graph = session.replace_spec(PipelineSpec(steps=[PipelineStep(name="Only", type="generate")]))

    assert [n.id for n in graph.nodes] == ["start", "step-0", "end"]
    assert graph.get_node("step-0").position.y > graph.get_node("start").position.y
    assert not session.debounce.pending
    assert session.poll() is None
