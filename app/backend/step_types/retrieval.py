"""
Retrieval step types: document retrieval and re-ranking.
"""

from .base import StepTypeDefinition, StepType
from . import register_step_type


@register_step_type
class RetrieveStep(StepTypeDefinition):
    """Fetch candidate chunks from the vector store."""

    step_type = StepType.RETRIEVE
    name = "Retrieve"
    description = "Retrieve the most relevant chunks for the query."
    icon = "Search"
    color = "primary"
    palette_label = "Retrieval"
    palette_order = 2

    @classmethod
    def get_config_schema(cls) -> dict:
        return {
            "type": "object",
            "properties": {
                "top_k": {
                    "type": "integer",
                    "default": 5,
                    "minimum": 1,
                    "description": "Number of chunks to retrieve",
                },
                "method": {
                    "type": "string",
                    "enum": ["semantic", "hybrid", "bm25"],
                    "default": "semantic",
                    "description": "Retrieval method",
                },
            },
        }


@register_step_type
class FilterStep(StepTypeDefinition):
    """Drop or re-order retrieved chunks."""

    step_type = StepType.FILTER
    name = "Filter"
    description = "Re-rank retrieved chunks and drop the ones below threshold."
    icon = "FilterList"
    color = "error"
    palette_label = "Re-ranking"
    palette_order = 3
