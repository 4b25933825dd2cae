"""Offline price calculator endpoint (no provider call)."""

from fastapi import APIRouter, HTTPException, Query

from stockcalc.core.exceptions import InvalidInputError
from stockcalc.pricing.calculator import PriceProjection, percent_for_target, project

router = APIRouter()


@router.get("")
async def calculate(
    current: float = Query(..., description="Current price"),
    percent: float = Query(0.0, description="Percent move"),
    target: float | None = Query(default=None, description="Target price; overrides percent"),
) -> PriceProjection:
    """New price for a percent move, or the move implied by a target price."""
    try:
        if target is not None:
            percent = percent_for_target(current, target)
        return project(current, percent)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.message)
