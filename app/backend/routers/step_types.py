"""
Step Types API - List available step types and palette items.
"""

from fastapi import APIRouter, HTTPException

from step_types import list_step_types, list_palette_entries, STEP_TYPES
from step_types.base import StepTypeInfo, PaletteEntry

router = APIRouter(prefix="/step-types", tags=["step-types"])


@router.get("")
def get_step_types() -> list[StepTypeInfo]:
    """List all available step types."""
    return list_step_types()


@router.get("/palette")
def get_palette() -> list[PaletteEntry]:
    """List the step types offered in the drag palette."""
    return list_palette_entries()


@router.get("/{step_type}")
def get_step_type(step_type: str) -> StepTypeInfo:
    """Get information about a specific step type."""
    if step_type not in STEP_TYPES:
        raise HTTPException(status_code=404, detail=f"Step type not found: {step_type}")

    return STEP_TYPES[step_type]
