from .pipeline_graph import router as pipeline_graph_router
from .step_types import router as step_types_router

__all__ = [
    "pipeline_graph_router",
    "step_types_router",
]
