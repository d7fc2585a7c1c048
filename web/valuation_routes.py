"""
Valuation Routes - Pricing API

Fair-price valuation against the Listing Store plus the market tools
(time to sell, price scenarios, neighbourhood forecast, renovation ROI).

Every valuation is stateless: the request carries the property attributes,
the response carries the result, and nothing is retained between calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from core.errors import ValuationError
from core.market_tools import (
    estimate_time_to_sell,
    neighbourhood_forecast,
    price_scenarios,
    renovation_roi,
)
from core.valuation import TargetPropertyAttributes


logger = logging.getLogger(__name__)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api", tags=["valuation"])


async def simulate_latency(request: Request) -> None:
    """Cosmetic delay mimicking a remote model call."""
    delay_ms = request.app.state.config.simulated_latency_ms
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)


# =============================================================================
# Request Models
# =============================================================================


class ValuationRequest(BaseModel):
    """Attributes of the property to value."""
    location: str
    area: float
    level: int = 0
    year_built: int
    condition: str
    property_type: str = "apartment"
    heating: str = "other"
    equipment: str = "unfurnished"
    orientation: str = "east"
    amenities: List[str] = []
    municipality: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class TimeToSellRequest(BaseModel):
    price: float
    area: float


class PriceScenarioRequest(BaseModel):
    base_price: float
    area: float
    step_percent: int = 5
    span_percent: int = 20


class ForecastRequest(BaseModel):
    address: str
    years: int = 3


class RenovationRequest(BaseModel):
    current_price: float
    upgrade_cost: float
    uplift_percent: float = 5.0


# =============================================================================
# Routes
# =============================================================================


@router.post("/valuation")
async def valuation(request_data: ValuationRequest, request: Request):
    """
    Estimate price, price-per-area, confidence and value rating.

    Comparables are the listings in the store whose city matches
    ``location`` exactly.
    """
    await simulate_latency(request)
    try:
        target = TargetPropertyAttributes.from_dict(request_data.model_dump())
        result = request.app.state.engine.estimate(target, request.app.state.store)
    except ValuationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return result.to_dict()


@router.post("/time-to-sell")
async def time_to_sell(request_data: TimeToSellRequest, request: Request):
    """Estimated days on market for an asking price."""
    await simulate_latency(request)
    state = request.app.state
    try:
        days = estimate_time_to_sell(
            request_data.price,
            request_data.area,
            rng=state.rng,
            local_median=state.config.local_median_ppa,
        )
    except ValuationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"estimated_days": days}


@router.post("/price-scenarios")
async def scenarios(request_data: PriceScenarioRequest, request: Request):
    """Sell probability and days on market across asking-price scenarios."""
    await simulate_latency(request)
    state = request.app.state
    try:
        results = price_scenarios(
            request_data.base_price,
            request_data.area,
            step_percent=request_data.step_percent,
            span_percent=request_data.span_percent,
            rng=state.rng,
            local_median=state.config.local_median_ppa,
        )
    except ValuationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"scenarios": [s.to_dict() for s in results]}


@router.post("/neighbourhood-forecast")
async def forecast(request_data: ForecastRequest, request: Request):
    """Mock price change forecast for an address."""
    await simulate_latency(request)
    try:
        result = neighbourhood_forecast(
            request_data.address,
            request_data.years,
            rng=request.app.state.rng,
        )
    except ValuationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return result.to_dict()


@router.post("/renovation-roi")
async def renovation(request_data: RenovationRequest):
    """Return on a renovation that lifts the sale price."""
    try:
        result = renovation_roi(
            request_data.current_price,
            request_data.upgrade_cost,
            request_data.uplift_percent,
        )
    except ValuationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return result.to_dict()
