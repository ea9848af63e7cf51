"""Lodging scoring against the group's nightly budget."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from trippy.schemas.option import LodgingOption
from trippy.schemas.preference import MemberPreference
from trippy.services.recommendation_service import recommendation_service

router = APIRouter()


class ScoreLodgingRequest(BaseModel):
    options: list[LodgingOption] = Field(default_factory=list)
    preferences: list[MemberPreference] = Field(default_factory=list)


@router.post("/score", response_model=list[LodgingOption])
async def score_lodging(req: ScoreLodgingRequest):
    return recommendation_service.recommend_lodging(req.options, req.preferences)
