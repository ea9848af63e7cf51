"""Group constraint aggregation endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from trippy.schemas.preference import GroupConstraints, MemberPreference
from trippy.services.preference_aggregator import aggregate_preferences

router = APIRouter()


class AggregateRequest(BaseModel):
    preferences: list[MemberPreference] = Field(default_factory=list)


@router.post("/aggregate", response_model=GroupConstraints)
async def aggregate(req: AggregateRequest):
    """Merge every member's preferences into the group constraint set."""
    return aggregate_preferences(req.preferences)
