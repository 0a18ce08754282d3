"""
Base class for step type definitions.

Each step type inherits from StepTypeDefinition and declares its display
metadata, whether it fans out into named branches, and its config schema.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class StepType(str, Enum):
    """Known step types."""
    RETRIEVE = "retrieve"
    CLASSIFY = "classify"
    GENERATE = "generate"
    ROUTE = "route"
    TRANSFORM = "transform"
    PARALLEL = "parallel"
    TOOL_CALL = "tool_call"
    FILTER = "filter"


@dataclass
class StepTypeInfo:
    """Information about a step type (for API)."""
    id: str
    name: str
    description: str
    icon: str
    color: str
    supports_branches: bool
    config_schema: dict[str, Any]


@dataclass
class PaletteEntry:
    """An item in the drag palette."""
    type: str
    label: str
    icon: str


class StepTypeDefinition:
    """Base class for step type definitions."""

    # Must be overridden by subclasses
    step_type: StepType
    name: str = ""
    description: str = ""
    icon: str = "Settings"
    color: str = "default"
    supports_branches: bool = False
    palette_label: str | None = None  # None = not offered in the palette
    palette_order: int = 0

    @classmethod
    def get_config_schema(cls) -> dict[str, Any]:
        """
        Return JSON Schema for the step configuration.
        Override in subclasses to define config options.
        """
        return {"type": "object", "properties": {}}
