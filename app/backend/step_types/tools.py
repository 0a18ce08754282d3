from .base import StepTypeDefinition, StepType
from . import register_step_type


@register_step_type
class ToolCallStep(StepTypeDefinition):
    """Invoke an external tool."""

    step_type = StepType.TOOL_CALL
    name = "Tool Call"
    description = "Call an external tool and pass its result downstream."
    icon = "Settings"
    color = "info"
    palette_label = "Tool Call"
    palette_order = 5
