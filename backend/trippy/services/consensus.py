"""Consensus tracker — per-member approvals, activity ratings and the 80% rule.

Every function takes the current member list explicitly and returns new
objects instead of mutating its inputs. Callers persisting the result are
responsible for serializing concurrent votes.
"""

import logging

from trippy.exceptions import ValidationFailure
from trippy.schemas.consensus import (
    Activity,
    ActivityValidation,
    ApprovalEntry,
    Selection,
    SelectionState,
    SelectionStatus,
)
from trippy.services.engine_config import ENGINE, round_half_up

logger = logging.getLogger(__name__)


# ─── Selections ───

def select_option(selection: Selection, option_id: str) -> Selection:
    """Choose a candidate. Any earlier approvals belong to another choice and are dropped."""
    if selection.options and option_id not in selection.options:
        raise ValidationFailure("Unknown option", details={"option_id": option_id})
    return selection.model_copy(update={"selected_option_id": option_id, "approvals": {}})


def record_vote(
    approvals: dict[str, ApprovalEntry],
    member_id: str,
    approved: bool,
    reason: str | None = None,
) -> dict[str, ApprovalEntry]:
    """Set or overwrite one member's vote."""
    if not member_id:
        raise ValidationFailure("member_id is required")
    updated = dict(approvals)
    updated[member_id] = ApprovalEntry(approved=approved, reason=reason)
    return updated


def remove_vote(approvals: dict[str, ApprovalEntry], member_id: str) -> dict[str, ApprovalEntry]:
    return {m: entry for m, entry in approvals.items() if m != member_id}


def is_finalized(approvals: dict[str, ApprovalEntry], member_ids: list[str]) -> bool:
    """
    True iff there is exactly one entry per current member and every entry approves.

    An entry left behind by a former member blocks finalization until it is
    removed; a member who joins after finalization un-finalizes the selection
    until they approve too.
    """
    if not member_ids or len(approvals) != len(member_ids):
        return False
    return all(m in approvals for m in member_ids) and all(e.approved for e in approvals.values())


def pending_members(approvals: dict[str, ApprovalEntry], member_ids: list[str]) -> list[str]:
    return [m for m in member_ids if m not in approvals]


def selection_state(selection: Selection, member_ids: list[str]) -> SelectionStatus:
    approvals = selection.approvals
    rejected_by = [m for m in member_ids if m in approvals and not approvals[m].approved]
    pending = pending_members(approvals, member_ids)
    finalized = selection.selected_option_id is not None and is_finalized(approvals, member_ids)

    if selection.selected_option_id is None:
        state = SelectionState.PROPOSED
    elif finalized:
        state = SelectionState.FINALIZED
    elif rejected_by:
        state = SelectionState.REJECTED
    elif len(pending) < len(member_ids):
        state = SelectionState.PENDING_APPROVAL
    else:
        state = SelectionState.SELECTED

    return SelectionStatus(
        state=state,
        finalized=finalized,
        pending_members=pending,
        rejected_by=rejected_by,
    )


# ─── Activities ───

def rate_activity(activities: list[Activity], activity_id: str, member_id: str, rating: int) -> list[Activity]:
    """Record one member's 1-5 rating and recompute the derived fields."""
    rules = ENGINE.activity_rules
    if not rules.min_rating <= rating <= rules.max_rating:
        raise ValidationFailure(
            f"Rating must be between {rules.min_rating} and {rules.max_rating}",
            details={"rating": rating},
        )
    if not member_id:
        raise ValidationFailure("member_id is required")

    _require_activity(activities, activity_id)
    updated = [
        a.model_copy(update={"ratings": {**a.ratings, member_id: rating}}) if a.id == activity_id else a
        for a in activities
    ]
    return update_activity_ratings(updated)


def toggle_activity(activities: list[Activity], activity_id: str) -> list[Activity]:
    _require_activity(activities, activity_id)
    return [
        a.model_copy(update={"is_selected": not a.is_selected}) if a.id == activity_id else a
        for a in activities
    ]


def update_activity_ratings(activities: list[Activity]) -> list[Activity]:
    """Recompute average rating (one decimal) and the low-rating conflict list."""
    passing = ENGINE.activity_rules.passing_rating
    result = []
    for activity in activities:
        ratings = list(activity.ratings.values())
        average = sum(ratings) / len(ratings) if ratings else 0
        result.append(activity.model_copy(update={
            "average_rating": round_half_up(average * 10) / 10,
            "conflicts": [m for m, r in activity.ratings.items() if r < passing],
        }))
    return result


def validate_activity_selection(activities: list[Activity], member_ids: list[str]) -> ActivityValidation:
    """
    80% rule: every member must rate at least 80% of the selected activities 3 or higher.

    A member who has not rated a selected activity counts as rating it 0,
    which fails. An empty selection is never valid.
    """
    rules = ENGINE.activity_rules
    selected = [a for a in activities if a.is_selected]
    if not selected:
        return ActivityValidation(is_valid=False, conflicts=[])

    conflicts = []
    for member_id in member_ids:
        passing = sum(1 for a in selected if a.ratings.get(member_id, 0) >= rules.passing_rating)
        if passing / len(selected) < rules.min_pass_fraction:
            conflicts.append(member_id)

    if conflicts:
        logger.info(f"80% rule not met by {len(conflicts)} of {len(member_ids)} members")
    return ActivityValidation(is_valid=not conflicts, conflicts=conflicts)


def _require_activity(activities: list[Activity], activity_id: str) -> None:
    if not any(a.id == activity_id for a in activities):
        raise ValidationFailure("Unknown activity", details={"activity_id": activity_id})
