"""Budget router — baseline, LLM-backed estimate and clamping."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from trippy.dependencies import get_llm_client
from trippy.exceptions import ValidationFailure
from trippy.schemas.budget import BudgetBaseline, BudgetEstimate, BudgetRange
from trippy.schemas.preference import MemberPreference
from trippy.schemas.trip import TripFacts
from trippy.services.budget_estimator import clamp_estimate, trip_baseline
from trippy.services.llm_client import LLMClient
from trippy.services.preference_aggregator import aggregate_preferences
from trippy.services.recommendation_service import recommendation_service

router = APIRouter()


class TripBudgetRequest(BaseModel):
    trip: TripFacts
    preferences: list[MemberPreference] = Field(default_factory=list)


class ClampRequest(TripBudgetRequest):
    estimate: BudgetRange


class ClampResponse(BaseModel):
    budget_min: float
    budget_max: float
    baseline: BudgetBaseline


def _baseline_for(req: TripBudgetRequest) -> BudgetBaseline:
    return trip_baseline(req.trip, aggregate_preferences(req.preferences))


@router.post("/baseline", response_model=BudgetBaseline)
async def baseline(req: TripBudgetRequest):
    return _baseline_for(req)


@router.post("/estimate", response_model=BudgetEstimate)
async def estimate(req: TripBudgetRequest, llm: LLMClient = Depends(get_llm_client)):
    """Ask the LLM for a per-person range and clamp it to the baseline."""
    return await recommendation_service.generate_budget(req.trip, req.preferences, llm)


@router.post("/clamp", response_model=ClampResponse)
async def clamp(req: ClampRequest):
    base = _baseline_for(req)
    if req.estimate.min > req.estimate.max:
        raise ValidationFailure("Estimate min must not exceed max")
    budget_min, budget_max = clamp_estimate(req.estimate.min, req.estimate.max, base)
    return ClampResponse(budget_min=budget_min, budget_max=budget_max, baseline=base)
