"""
LLM-backed step types: query rewriting, classification and generation.
"""

from .base import StepTypeDefinition, StepType
from . import register_step_type


@register_step_type
class TransformStep(StepTypeDefinition):
    """Rewrite or reshape the query with a prompt template."""

    step_type = StepType.TRANSFORM
    name = "Transform"
    description = "Rewrite the query or intermediate text using a prompt template."
    icon = "AutoFixHigh"
    color = "warning"
    palette_label = "Query Rewrite"
    palette_order = 1

    @classmethod
    def get_config_schema(cls) -> dict:
        return {
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "default": "",
                    "description": "Prompt template applied to the input",
                },
            },
        }


@register_step_type
class ClassifyStep(StepTypeDefinition):
    """Label the input with one of a set of categories."""

    step_type = StepType.CLASSIFY
    name = "Classify"
    description = "Classify the input into one of the configured categories."
    icon = "Description"
    color = "secondary"


@register_step_type
class GenerateStep(StepTypeDefinition):
    """Produce the answer with an LLM."""

    step_type = StepType.GENERATE
    name = "Generate"
    description = "Generate a response from the retrieved context."
    icon = "SmartToy"
    color = "success"
    palette_label = "Generation"
    palette_order = 4

    @classmethod
    def get_config_schema(cls) -> dict:
        return {
            "type": "object",
            "properties": {
                "temperature": {
                    "type": "number",
                    "default": 0.7,
                    "minimum": 0,
                    "maximum": 1,
                    "description": "Sampling temperature",
                },
                "model": {
                    "type": "string",
                    "default": "gpt-4o",
                    "description": "Model used for generation",
                },
            },
        }
