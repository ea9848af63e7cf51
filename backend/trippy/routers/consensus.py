"""Consensus router — option selection and per-member approvals."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from trippy.schemas.consensus import Selection, SelectionStatus
from trippy.services import consensus

logger = logging.getLogger(__name__)

router = APIRouter()


class SelectRequest(BaseModel):
    selection: Selection
    option_id: str = Field(min_length=1)
    member_ids: list[str] = Field(default_factory=list)


class VoteRequest(BaseModel):
    selection: Selection
    member_id: str = Field(min_length=1)
    approved: bool
    reason: str | None = None
    member_ids: list[str] = Field(default_factory=list)


class StatusRequest(BaseModel):
    selection: Selection
    member_ids: list[str] = Field(default_factory=list)


class SelectionResponse(BaseModel):
    selection: Selection
    status: SelectionStatus


@router.post("/select", response_model=SelectionResponse)
async def select_option(req: SelectRequest):
    selection = consensus.select_option(req.selection, req.option_id)
    return SelectionResponse(selection=selection, status=consensus.selection_state(selection, req.member_ids))


@router.post("/vote", response_model=SelectionResponse)
async def vote(req: VoteRequest):
    """Record one member's vote and report the recomputed state."""
    approvals = consensus.record_vote(req.selection.approvals, req.member_id, req.approved, req.reason)
    selection = req.selection.model_copy(update={"approvals": approvals})
    status = consensus.selection_state(selection, req.member_ids)
    if status.finalized:
        logger.info(f"Selection {selection.selected_option_id} finalized by {len(req.member_ids)} members")
    return SelectionResponse(selection=selection, status=status)


@router.post("/status", response_model=SelectionStatus)
async def status(req: StatusRequest):
    return consensus.selection_state(req.selection, req.member_ids)
