"""
API routes for moist air states and dry-bulb recovery.
"""

from fastapi import APIRouter, HTTPException

from psychrocalc.engine.processes.utils import build_state
from psychrocalc.engine.properties import humid_air
from psychrocalc.exceptions import SolverNotConvergedError
from psychrocalc.models.fluids import MoistAirState
from psychrocalc.models.moist_air import DryBulbInput, DryBulbOutput, DryBulbPair, MoistAirInput

router = APIRouter(prefix="/api/v1", tags=["moist-air"])

_DRY_BULB_FUNCTIONS = {
    DryBulbPair.ENTHALPY_HUMIDITY_RATIO: humid_air.dry_bulb_temperature_from_enthalpy,
    DryBulbPair.HUMIDITY_RATIO_RH: humid_air.dry_bulb_temperature_from_humidity_ratio,
    DryBulbPair.DEW_POINT_RH: humid_air.dry_bulb_temperature_from_dew_point,
    DryBulbPair.WET_BULB_RH: humid_air.dry_bulb_temperature_from_wet_bulb,
}


@router.post("/moist-air", response_model=MoistAirState)
async def moist_air_state(data: MoistAirInput) -> MoistAirState:
    """
    Resolve a moist air state from dry bulb and RH or humidity ratio.

    Returns every derived property: saturation pressure, dew point, wet bulb,
    density, enthalpy, transport properties.
    """
    try:
        return build_state(data)
    except SolverNotConvergedError as e:
        raise HTTPException(status_code=500, detail=f"Solver error: {str(e)}")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.post("/moist-air/dry-bulb", response_model=DryBulbOutput)
async def dry_bulb(data: DryBulbInput) -> DryBulbOutput:
    """Recover the dry-bulb temperature from one of the supported property pairs."""
    try:
        func = _DRY_BULB_FUNCTIONS[data.pair]
        temperature = func(data.values[0], data.values[1], data.pressure)
        return DryBulbOutput(
            pair=data.pair,
            values=data.values,
            pressure=data.pressure,
            temperature=temperature,
        )
    except SolverNotConvergedError as e:
        raise HTTPException(status_code=500, detail=f"Solver error: {str(e)}")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
