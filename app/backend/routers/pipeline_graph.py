"""
Pipeline Graph API - Convert between pipeline specs and canvas graphs.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from models.graph import Edge, Graph, Node, Position
from models.pipeline import PipelineSpec
from pipeline_graph import (
    GraphEditError,
    compile_to_graph,
    connect,
    decompile_with_report,
    insert_step_node,
    layout_graph,
)

router = APIRouter(prefix="/pipeline-graph", tags=["pipeline-graph"])


class DecompileRequest(BaseModel):
    """Current canvas plus the spec it was loaded from."""
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    previous_spec: PipelineSpec = Field(default_factory=PipelineSpec)


class DecompileResponse(BaseModel):
    """Rebuilt spec and the parts of the canvas it does not cover."""
    spec: PipelineSpec
    dropped_node_ids: list[str] = Field(default_factory=list)
    revisited_node_ids: list[str] = Field(default_factory=list)


class InsertNodeRequest(BaseModel):
    """Request to add a step dropped from the palette."""
    graph: Graph
    step_type: str = Field(..., min_length=1)
    position: Position | None = None
    relayout: bool = False


class InsertNodeResponse(BaseModel):
    """Updated graph and the node that was added."""
    graph: Graph
    node: Node


class ConnectRequest(BaseModel):
    """Request to draw an edge on the canvas."""
    graph: Graph
    source: str
    target: str
    branch_key: str | None = None


@router.post("/compile")
def compile_pipeline(spec: PipelineSpec, layout: bool = True) -> Graph:
    """Build the canvas graph for a pipeline spec."""
    graph = compile_to_graph(spec)
    if layout:
        graph = layout_graph(graph)
    return graph


@router.post("/layout")
def layout_pipeline_graph(graph: Graph) -> Graph:
    """Assign positions to every node of a graph."""
    return layout_graph(graph)


@router.post("/decompile")
def decompile_pipeline(request: DecompileRequest) -> DecompileResponse:
    """Rebuild the pipeline spec from the current canvas."""
    spec, report = decompile_with_report(request.nodes, request.edges, request.previous_spec)
    return DecompileResponse(
        spec=spec,
        dropped_node_ids=report.dropped_node_ids,
        revisited_node_ids=report.revisited_node_ids,
    )


@router.post("/nodes")
def insert_node(request: InsertNodeRequest) -> InsertNodeResponse:
    """Add a step node dropped from the palette."""
    graph, node = insert_step_node(request.graph, request.step_type, request.position)

    if request.relayout:
        graph = layout_graph(graph)
        node = graph.get_node(node.id)

    return InsertNodeResponse(graph=graph, node=node)


@router.post("/edges")
def connect_nodes(request: ConnectRequest) -> Graph:
    """Connect two nodes, optionally as the entry edge of a branch."""
    try:
        return connect(request.graph, request.source, request.target, request.branch_key)
    except GraphEditError as e:
        raise HTTPException(status_code=400, detail=str(e))
