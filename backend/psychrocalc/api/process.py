"""
API routes for heating, cooling and mixing process calculations.
"""

from fastapi import APIRouter, HTTPException

from psychrocalc.config import ProcessType
from psychrocalc.engine.processes.cooling import CoolingSolver, DryCoolingSolver
from psychrocalc.engine.processes.heating import HeatingSolver
from psychrocalc.engine.processes.mixing import MixingSolver
from psychrocalc.exceptions import SolverNotConvergedError
from psychrocalc.models.process import (
    CoolingInput,
    DryCoolingInput,
    HeatingInput,
    MixingInput,
    ProcessResult,
)

router = APIRouter(prefix="/api/v1/process", tags=["process"])

# Maps process types to solver instances
_SOLVERS = {
    ProcessType.HEATING: HeatingSolver(),
    ProcessType.COOLING: CoolingSolver(),
    ProcessType.DRY_COOLING: DryCoolingSolver(),
    ProcessType.MIXING: MixingSolver(),
}


def _solve(process_type: ProcessType, data) -> ProcessResult:
    try:
        return _SOLVERS[process_type].solve(data)
    except SolverNotConvergedError as e:
        raise HTTPException(status_code=500, detail=f"Solver error: {str(e)}")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.post("/heating", response_model=ProcessResult)
async def heating(data: HeatingInput) -> ProcessResult:
    """Heat a flow to a target power, temperature or relative humidity."""
    return _solve(ProcessType.HEATING, data)


@router.post("/cooling", response_model=ProcessResult)
async def cooling(data: CoolingInput) -> ProcessResult:
    """
    Cool a flow through a real coil.

    The coil wall temperature is the mean of coolant supply and return.
    Returns the outlet flow, condensate flow and bypass factor.
    """
    return _solve(ProcessType.COOLING, data)


@router.post("/dry-cooling", response_model=ProcessResult)
async def dry_cooling(data: DryCoolingInput) -> ProcessResult:
    """Sensible cooling without condensation."""
    return _solve(ProcessType.DRY_COOLING, data)


@router.post("/mixing", response_model=ProcessResult)
async def mixing(data: MixingInput) -> ProcessResult:
    """Adiabatic mixing of two or more flows."""
    return _solve(ProcessType.MIXING, data)
