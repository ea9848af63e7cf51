"""Merges per-member preferences into one group constraint set."""

import logging

from trippy.config import settings
from trippy.schemas.preference import GroupConstraints, MemberPreference

logger = logging.getLogger(__name__)


def aggregate_preferences(
    preferences: list[MemberPreference],
    *,
    default_min: float | None = None,
    default_max: float | None = None,
) -> GroupConstraints:
    """
    Build the group constraints for the current preference set.

    Lodging budget is the intersection of every member range that has both
    bounds. When the ranges do not overlap the union is used instead, so the
    group always ends up with a non-empty range. With no complete range the
    configured defaults (50-300) apply.

    Categorical fields are collected in member order without any majority
    vote; consumers receive the full lists.
    """
    if default_min is None:
        default_min = settings.default_lodging_budget_min
    if default_max is None:
        default_max = settings.default_lodging_budget_max

    ranges = [
        (p.accommodation_budget_min, p.accommodation_budget_max)
        for p in preferences
        if p.has_lodging_budget
    ]

    if ranges:
        mins = [r[0] for r in ranges]
        maxs = [r[1] for r in ranges]
        budget_min, budget_max = max(mins), min(maxs)
        source = "overlap"
        if budget_min > budget_max:
            budget_min, budget_max = min(mins), max(maxs)
            source = "union"
            logger.info(
                f"Lodging budgets of {len(ranges)} members do not overlap; "
                f"using union {budget_min}-{budget_max}"
            )
    else:
        budget_min, budget_max = default_min, default_max
        source = "default"

    return GroupConstraints(
        lodging_budget_min=budget_min,
        lodging_budget_max=budget_max,
        lodging_budget_source=source,
        interests=_unique(tag for p in preferences for tag in p.activity_interests),
        origins=[p.preferred_origin for p in preferences if p.preferred_origin],
        accommodation_types=[p.accommodation_type for p in preferences if p.accommodation_type],
        flight_flexibilities=[p.flight_flexibility for p in preferences if p.flight_flexibility],
        budget_sensitivities=[p.budget_sensitivity for p in preferences if p.budget_sensitivity],
        member_count=len(preferences),
    )


def _unique(values) -> list[str]:
    """De-duplicate while keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result
