"""
Market Tools

Heuristic companions to the valuation: time-to-sell, price scenario
simulation, neighbourhood price forecast and renovation ROI.

These are closed-form demo heuristics with a noise term, not models. Every
randomised tool takes a ``random.Random`` so callers can seed it.
"""

import math
import random
from dataclasses import dataclass
from typing import List, Optional

from core.errors import InvalidInputError, require_positive
from core.valuation.multipliers import round_half_up


# =============================================================================
# Configuration Constants
# =============================================================================

# Local median price-per-area the heuristics compare against (BAM/m2)
LOCAL_MEDIAN_PRICE_PER_AREA = 1700.0

# Time to sell
TIME_TO_SELL_BASE_DAYS = 10
TIME_TO_SELL_SLOPE = 40
TIME_TO_SELL_MAX_NOISE = 10
MIN_DAYS_ON_MARKET = 2

# Price scenarios
SCENARIO_SPAN_PERCENT = 20
SCENARIO_STEP_PERCENT = 5
SELL_PROBABILITY_SLOPE = 60
SELL_PROBABILITY_NOISE = 10
MIN_SELL_PROBABILITY = 5
MAX_SELL_PROBABILITY = 100
SCENARIO_BASE_DAYS = 7
SCENARIO_DAYS_SLOPE = 50
SCENARIO_DAYS_NOISE = 20

# Neighbourhood forecast
FORECAST_YEARLY_DRIFT = 1.2
FORECAST_REASONS = (
    (0.6, "New tram line & park planned"),
    (0.35, "Planned commercial project"),
)
FORECAST_DEFAULT_REASON = "Road upgrade and school nearby"


def _rng_or_default(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


def _price_ratio(price: float, area: float, local_median: float) -> float:
    """Price-per-area relative to the local median."""
    price = require_positive("price", price)
    area = require_positive("area", area)
    local_median = require_positive("local_median", local_median)
    return (price / area) / local_median


# =============================================================================
# Time to Sell
# =============================================================================

def estimate_time_to_sell(
    price: float,
    area: float,
    rng: Optional[random.Random] = None,
    local_median: float = LOCAL_MEDIAN_PRICE_PER_AREA,
) -> int:
    """
    Estimate days on market. Cheaper than the local median sells faster.

    days = max(2, round(10 + (ratio - 1) * 40 + noise)), noise = round(r * 10)

    The ratio is taken on the whole-mark price-per-area.
    """
    price = require_positive("price", price)
    area = require_positive("area", area)
    local_median = require_positive("local_median", local_median)
    ratio = round_half_up(price / area) / local_median
    noise = round_half_up(_rng_or_default(rng).random() * TIME_TO_SELL_MAX_NOISE)
    days = round_half_up(TIME_TO_SELL_BASE_DAYS + (ratio - 1) * TIME_TO_SELL_SLOPE + noise)
    return max(MIN_DAYS_ON_MARKET, days)


# =============================================================================
# Price Scenarios
# =============================================================================

@dataclass
class PriceScenario:
    """One asking-price scenario."""
    delta_percent: int
    price: int
    sell_probability: int  # percent
    estimated_days: int

    def to_dict(self) -> dict:
        return {
            "delta_percent": self.delta_percent,
            "price": self.price,
            "sell_probability": self.sell_probability,
            "estimated_days": self.estimated_days,
        }


def price_scenarios(
    base_price: float,
    area: float,
    step_percent: int = SCENARIO_STEP_PERCENT,
    span_percent: int = SCENARIO_SPAN_PERCENT,
    rng: Optional[random.Random] = None,
    local_median: float = LOCAL_MEDIAN_PRICE_PER_AREA,
) -> List[PriceScenario]:
    """
    Simulate asking prices from -span% to +span% of ``base_price``.

    Each scenario carries a sell probability (clamped to 5..100) and an
    estimated days on market, both falling as price-per-area rises above
    the local median.

    Raises:
        InvalidInputError: if step_percent <= 0 or span_percent < 0
    """
    if step_percent <= 0:
        raise InvalidInputError(f"step_percent must be positive, got {step_percent}")
    if span_percent < 0:
        raise InvalidInputError(f"span_percent must not be negative, got {span_percent}")
    require_positive("base_price", base_price)
    rng = _rng_or_default(rng)

    scenarios = []
    delta = -span_percent
    while delta <= span_percent:
        price = round_half_up(base_price * (1 + delta / 100))
        excess = _price_ratio(price, area, local_median) - 1

        sell_probability = round_half_up(
            100 - excess * SELL_PROBABILITY_SLOPE + rng.random() * SELL_PROBABILITY_NOISE
        )
        sell_probability = min(MAX_SELL_PROBABILITY, max(MIN_SELL_PROBABILITY, sell_probability))

        estimated_days = round_half_up(
            SCENARIO_BASE_DAYS + excess * SCENARIO_DAYS_SLOPE + rng.random() * SCENARIO_DAYS_NOISE
        )
        estimated_days = max(MIN_DAYS_ON_MARKET, estimated_days)

        scenarios.append(PriceScenario(
            delta_percent=delta,
            price=price,
            sell_probability=sell_probability,
            estimated_days=estimated_days,
        ))
        delta += step_percent

    return scenarios


# =============================================================================
# Neighbourhood Forecast
# =============================================================================

@dataclass
class NeighbourhoodForecast:
    """Forecast price change for an address over a horizon."""
    address: str
    years: int
    change_percent: int
    reason: str

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "years": self.years,
            "change_percent": self.change_percent,
            "reason": self.reason,
        }


def neighbourhood_forecast(
    address: str,
    years: int,
    rng: Optional[random.Random] = None,
) -> NeighbourhoodForecast:
    """
    Mock neighbourhood impact forecast.

    change = round((r - 0.3) * 10 + years * 1.2) for r uniform in [0, 1);
    the reason is picked by the same draw.
    """
    if years < 0:
        raise InvalidInputError(f"years must not be negative, got {years}")

    draw = _rng_or_default(rng).random()
    change_percent = round_half_up((draw - 0.3) * 10 + years * FORECAST_YEARLY_DRIFT)

    reason = FORECAST_DEFAULT_REASON
    for threshold, label in FORECAST_REASONS:
        if draw > threshold:
            reason = label
            break

    return NeighbourhoodForecast(
        address=address,
        years=years,
        change_percent=change_percent,
        reason=reason,
    )


# =============================================================================
# Renovation ROI
# =============================================================================

@dataclass
class RenovationROI:
    """Return on a renovation that lifts the sale price."""
    new_price: int
    profit: float
    roi_percent: int

    def to_dict(self) -> dict:
        return {
            "new_price": self.new_price,
            "profit": self.profit,
            "roi_percent": self.roi_percent,
        }


def renovation_roi(
    current_price: float,
    upgrade_cost: float,
    uplift_percent: float,
) -> RenovationROI:
    """
    Deterministic renovation ROI.

    new_price = round(current * (1 + uplift / 100))
    roi = round((new_price - current - cost) / cost * 100)
    """
    current_price = require_positive("current_price", current_price)
    upgrade_cost = require_positive("upgrade_cost", upgrade_cost)
    if math.isnan(float(uplift_percent)):
        raise InvalidInputError("uplift_percent must not be NaN")

    new_price = round_half_up(current_price * (1 + uplift_percent / 100))
    profit = new_price - current_price - upgrade_cost
    roi_percent = round_half_up(profit / upgrade_cost * 100)

    return RenovationROI(new_price=new_price, profit=profit, roi_percent=roi_percent)
