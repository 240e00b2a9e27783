"""
API route for single-substance fluid states.
"""

from fastapi import APIRouter, HTTPException

from psychrocalc.models.fluids import Fluid, FluidInput, fluid_state

router = APIRouter(prefix="/api/v1", tags=["fluids"])


@router.post("/fluid", response_model=Fluid)
async def fluid(data: FluidInput) -> Fluid:
    """State of dry air, water vapour, liquid water or ice at a temperature and pressure."""
    try:
        return fluid_state(data.kind, data.temperature, data.pressure)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
