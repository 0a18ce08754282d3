"""
Control-flow step types.

Both fan out into named branches. A branch is a sub-chain that ends the
pipeline on its own; nothing continues after a route or parallel step.
"""

from .base import StepTypeDefinition, StepType
from . import register_step_type


@register_step_type
class RouteStep(StepTypeDefinition):
    """Send the input down exactly one of the named branches."""

    step_type = StepType.ROUTE
    name = "Route"
    description = "Pick one branch to run based on the input."
    icon = "CallSplit"
    color = "warning"
    supports_branches = True


@register_step_type
class ParallelStep(StepTypeDefinition):
    """Run every named branch."""

    step_type = StepType.PARALLEL
    name = "Parallel"
    description = "Run all branches on the same input."
    icon = "Bolt"
    color = "secondary"
    supports_branches = True
