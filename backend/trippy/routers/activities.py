"""Activity ratings, selection toggles and the 80% rule."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from trippy.schemas.consensus import Activity, ActivityValidation
from trippy.services import consensus

router = APIRouter()


class RateRequest(BaseModel):
    activities: list[Activity]
    activity_id: str
    member_id: str
    rating: int


class ToggleRequest(BaseModel):
    activities: list[Activity]
    activity_id: str


class ValidateRequest(BaseModel):
    activities: list[Activity] = Field(default_factory=list)
    member_ids: list[str] = Field(default_factory=list)


@router.post("/rate", response_model=list[Activity])
async def rate(req: RateRequest):
    return consensus.rate_activity(req.activities, req.activity_id, req.member_id, req.rating)


@router.post("/toggle", response_model=list[Activity])
async def toggle(req: ToggleRequest):
    return consensus.toggle_activity(req.activities, req.activity_id)


@router.post("/validate", response_model=ActivityValidation)
async def validate(req: ValidateRequest):
    return consensus.validate_activity_selection(req.activities, req.member_ids)
