"""Budget estimator — rule-based baseline plus clamping of externally suggested ranges."""

import logging
import math
from datetime import date, datetime, timezone

from trippy.config import settings
from trippy.exceptions import ValidationFailure
from trippy.schemas.budget import BudgetBaseline, BudgetEstimate, BudgetRange
from trippy.schemas.preference import GroupConstraints
from trippy.schemas.trip import TripFacts
from trippy.services.engine_config import ENGINE, round_half_up
from trippy.services.llm_response import parse_budget_range

logger = logging.getLogger(__name__)

# 2010 * 1.2 == 2412.0000000000005 without trimming
_BOUND_DIGITS = 6


def trip_nights(start: date | None, end: date | None) -> int:
    """Whole nights between the dates, at least 1. Missing dates fall back to the default."""
    if start is None or end is None:
        return ENGINE.budget_bands.default_nights
    if start > end:
        raise ValidationFailure(
            "Malformed date range",
            details={"start_date": start.isoformat(), "end_date": end.isoformat()},
        )
    return max(1, math.ceil((end - start).days))


def baseline_budget(nights: int, lodging_min: float, lodging_max: float) -> BudgetBaseline:
    """Per-person baseline: lodging, flights, activities and misc bands summed."""
    if nights < 1:
        raise ValidationFailure("nights must be at least 1", details={"nights": nights})
    if lodging_min > lodging_max:
        raise ValidationFailure(
            "Lodging budget min must not exceed max",
            details={"min": lodging_min, "max": lodging_max},
        )

    bands = ENGINE.budget_bands
    lodging = BudgetRange(min=round_half_up(nights * lodging_min), max=round_half_up(nights * lodging_max))
    flights = BudgetRange(min=bands.flights_min, max=bands.flights_max)
    activities = BudgetRange(
        min=round_half_up(nights * bands.activities_per_night_min),
        max=round_half_up(nights * bands.activities_per_night_max),
    )
    misc = BudgetRange(min=bands.misc_min, max=bands.misc_max)

    parts = (lodging, flights, activities, misc)
    return BudgetBaseline(
        nights=nights,
        lodging=lodging,
        flights=flights,
        activities=activities,
        misc=misc,
        total=BudgetRange(min=sum(p.min for p in parts), max=sum(p.max for p in parts)),
    )


def trip_baseline(trip: TripFacts, constraints: GroupConstraints) -> BudgetBaseline:
    nights = trip_nights(trip.start_date, trip.end_date)
    return baseline_budget(nights, constraints.lodging_budget_min, constraints.lodging_budget_max)


def clamp_bounds(baseline: BudgetBaseline) -> tuple[float, float]:
    """Exact clamp bounds: 0.8 x baseline total min and 1.2 x baseline total max."""
    return (
        round(baseline.total.min * settings.budget_clamp_low, _BOUND_DIGITS),
        round(baseline.total.max * settings.budget_clamp_high, _BOUND_DIGITS),
    )


def clamp_estimate(budget_min: float, budget_max: float, baseline: BudgetBaseline) -> tuple[float, float]:
    """Clamp each bound independently into [0.8 x baseline min, 1.2 x baseline max]."""
    low, high = clamp_bounds(baseline)
    clamped = (min(max(budget_min, low), high), min(max(budget_max, low), high))
    if clamped != (budget_min, budget_max):
        logger.warning(
            f"Clamped external budget {budget_min}-{budget_max} to {clamped[0]}-{clamped[1]} "
            f"(bounds {low}-{high})"
        )
    return clamped


def estimate_budget(
    trip: TripFacts,
    constraints: GroupConstraints,
    external_text: str | None = None,
    now: datetime | None = None,
    baseline: BudgetBaseline | None = None,
) -> BudgetEstimate:
    """
    Build the per-person estimate for a trip.

    Without external text the baseline total is used as-is. External text is
    parsed as ``{"budget_min", "budget_max"}`` and clamped to the baseline;
    malformed text raises ``UpstreamMalformedError``. A baseline already
    computed for the trip (e.g. the one quoted in the LLM prompt) can be passed
    in so the prompt and the clamp agree.
    """
    if baseline is None:
        baseline = trip_baseline(trip, constraints)

    if external_text is None:
        budget_min, budget_max = baseline.total.min, baseline.total.max
        source = "baseline"
    else:
        suggested_min, suggested_max = parse_budget_range(external_text)
        budget_min, budget_max = clamp_estimate(suggested_min, suggested_max, baseline)
        source = "external"

    return BudgetEstimate(
        budget_min=budget_min,
        budget_max=budget_max,
        source=source,
        baseline=baseline,
        updated_at=now or datetime.now(timezone.utc),
    )
