"""
API routes for psychrometric process calculations.
"""

from fastapi import APIRouter, HTTPException

from psychro.models.process import ProcessInput, ProcessOutput, ProcessType
from psychro.engine.processes.sensible import SensibleSolver
from psychro.engine.processes.humidification import (
    AdiabaticHumidificationSolver,
    IsothermalHumidificationSolver,
)
from psychro.engine.processes.saturation_cooling import SaturationCoolingSolver

router = APIRouter(prefix="/api/v1", tags=["process"])

# Solver dispatch table: maps process types to solver instances
_SOLVERS = {
    ProcessType.SENSIBLE_HEATING: SensibleSolver(),
    ProcessType.SENSIBLE_COOLING: SensibleSolver(),
    ProcessType.ADIABATIC_HUMIDIFICATION: AdiabaticHumidificationSolver(),
    ProcessType.ISOTHERMAL_HUMIDIFICATION: IsothermalHumidificationSolver(),
    ProcessType.SATURATION_COOLING: SaturationCoolingSolver(),
}


@router.post("/process", response_model=ProcessOutput)
async def calculate_process(data: ProcessInput) -> ProcessOutput:
    """
    Calculate a single-step psychrometric process.

    Dispatches to the appropriate solver based on process_type.
    Returns start state, end state, mass flow, metadata, and any warnings.
    """
    solver = _SOLVERS.get(data.process_type)
    if solver is None:
        raise HTTPException(
            status_code=422,
            detail=f"Process type '{data.process_type}' is not yet implemented.",
        )

    try:
        return solver.solve(data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
