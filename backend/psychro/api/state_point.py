"""
API routes for state point resolution.
"""

from fastapi import APIRouter, HTTPException

from psychro.models.state_point import (
    StatePointInput,
    StatePointConvertInput,
    StatePointOutput,
)
from psychro.engine.state_resolver import resolve_state_point, convert_state_point

router = APIRouter(prefix="/api/v1", tags=["state-point"])


@router.post("/state-point", response_model=StatePointOutput)
async def create_state_point(data: StatePointInput) -> StatePointOutput:
    """
    Resolve a full psychrometric state point from two independent properties.

    Accepts any supported input pair (e.g., Tdb+RH, Tdb+Twb, Tdb+Tdp, h+RH)
    and returns all psychrometric properties.
    """
    try:
        return resolve_state_point(
            input_pair=data.input_pair,
            values=data.values,
            pressure=data.pressure,
            unit_system=data.unit_system,
            label=data.label,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.post("/state-point/convert", response_model=StatePointOutput)
async def convert_state_point_units(data: StatePointConvertInput) -> StatePointOutput:
    """
    Resolve a state point and return it in the other unit system
    (°C/Pa <-> °F/psia). The humidity ratio is unit-independent.
    """
    try:
        return convert_state_point(
            input_pair=data.input_pair,
            values=data.values,
            pressure=data.pressure,
            unit_system=data.unit_system,
            target_unit_system=data.target_unit_system,
            label=data.label,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
