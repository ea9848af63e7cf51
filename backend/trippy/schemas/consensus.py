from enum import Enum

from pydantic import BaseModel, Field


class ApprovalEntry(BaseModel):
    approved: bool
    reason: str | None = None


class SelectionState(str, Enum):
    PROPOSED = "proposed"
    SELECTED = "selected"
    PENDING_APPROVAL = "pending_approval"
    REJECTED = "rejected"
    FINALIZED = "finalized"


class Selection(BaseModel):
    """A flight or lodging decision: the candidates, the chosen one, and who approved it."""

    options: list[str] = Field(default_factory=list)
    selected_option_id: str | None = None
    approvals: dict[str, ApprovalEntry] = Field(default_factory=dict)


class SelectionStatus(BaseModel):
    state: SelectionState
    finalized: bool
    pending_members: list[str] = Field(default_factory=list)
    rejected_by: list[str] = Field(default_factory=list)


class Activity(BaseModel):
    id: str
    name: str
    category: str = ""
    description: str = ""
    location: str = ""
    link: str | None = None
    image_url: str | None = None
    ratings: dict[str, int] = Field(default_factory=dict)  # member_id -> 1..5
    average_rating: float = 0
    is_selected: bool = False
    conflicts: list[str] = Field(default_factory=list)  # members who rated < 3


class ActivityValidation(BaseModel):
    is_valid: bool
    conflicts: list[str] = Field(default_factory=list)
