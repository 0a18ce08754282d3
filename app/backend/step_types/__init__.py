"""
Step type registry.

Each step type registers itself here. The registry is the single source of
truth for which types may fan out into branches, and is used by the API to
list available step types and palette items.
"""

from .base import StepType, StepTypeDefinition, StepTypeInfo, PaletteEntry

# Registry of step type definitions
STEP_DEFINITIONS: dict[str, type[StepTypeDefinition]] = {}

# Registry of step type info (for API)
STEP_TYPES: dict[str, StepTypeInfo] = {}


def register_step_type(definition: type[StepTypeDefinition]) -> type[StepTypeDefinition]:
    """Decorator to register a step type definition."""
    step_type = definition.step_type.value
    STEP_DEFINITIONS[step_type] = definition
    STEP_TYPES[step_type] = StepTypeInfo(
        id=step_type,
        name=definition.name,
        description=definition.description,
        icon=definition.icon,
        color=definition.color,
        supports_branches=definition.supports_branches,
        config_schema=definition.get_config_schema(),
    )
    return definition


def get_step_type(step_type: str) -> StepTypeInfo | None:
    """Get step type info by id."""
    return STEP_TYPES.get(step_type)


def list_step_types() -> list[StepTypeInfo]:
    """List all registered step types."""
    return list(STEP_TYPES.values())


def list_palette_entries() -> list[PaletteEntry]:
    """List the step types offered in the drag palette, in palette order."""
    definitions = sorted(
        (d for d in STEP_DEFINITIONS.values() if d.palette_label),
        key=lambda d: d.palette_order,
    )
    return [
        PaletteEntry(type=d.step_type.value, label=d.palette_label, icon=d.icon)
        for d in definitions
    ]


def supports_branches(step_type: str | None) -> bool:
    """Whether a step of this type fans out into named branches.

    Unknown types never branch.
    """
    definition = STEP_DEFINITIONS.get(step_type or "")
    return bool(definition and definition.supports_branches)


# Import definitions to trigger registration
from . import llm
from . import retrieval
from . import tools
from . import control_flow
