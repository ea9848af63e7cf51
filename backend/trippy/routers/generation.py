"""Generation router — LLM itinerary and suggestion endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from trippy.dependencies import get_llm_client
from trippy.schemas.preference import MemberPreference
from trippy.schemas.trip import TripFacts
from trippy.services.llm_client import LLMClient
from trippy.services.recommendation_service import recommendation_service

router = APIRouter()


class ItineraryRequest(BaseModel):
    trip: TripFacts
    preferences: list[MemberPreference] = Field(default_factory=list)
    budget_min: float | None = None
    budget_max: float | None = None


class SuggestionsRequest(BaseModel):
    trip: TripFacts
    preferences: list[MemberPreference] = Field(default_factory=list)
    rejection_context: str | None = None


@router.post("/itinerary/generate")
async def generate_itinerary(req: ItineraryRequest, llm: LLMClient = Depends(get_llm_client)):
    days = await recommendation_service.generate_itinerary(
        req.trip, req.preferences, llm, req.budget_min, req.budget_max
    )
    return {"trip_id": req.trip.id, "days": days}


@router.post("/suggestions/generate")
async def generate_suggestions(req: SuggestionsRequest, llm: LLMClient = Depends(get_llm_client)):
    suggestions = await recommendation_service.generate_suggestions(
        req.trip, req.preferences, llm, req.rejection_context
    )
    return {"success": True, "trip_id": req.trip.id, "suggestions": suggestions}
