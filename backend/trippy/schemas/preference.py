from typing import Literal

from pydantic import BaseModel, Field, model_validator

Level = Literal["low", "medium", "high"]


class MemberPreference(BaseModel):
    """One member's preferences for a trip. Every field but the owner is optional."""

    member_id: str = Field(min_length=1)
    preferred_origin: str | None = None
    accommodation_budget_min: float | None = Field(default=None, ge=0)
    accommodation_budget_max: float | None = Field(default=None, ge=0)
    accommodation_type: str | None = None
    activity_interests: list[str] = Field(default_factory=list)
    flight_flexibility: Level | None = None
    budget_sensitivity: Level | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _check_budget_order(self) -> "MemberPreference":
        if self.has_lodging_budget and self.accommodation_budget_min > self.accommodation_budget_max:
            raise ValueError("accommodation_budget_min must not exceed accommodation_budget_max")
        return self

    @property
    def has_lodging_budget(self) -> bool:
        return self.accommodation_budget_min is not None and self.accommodation_budget_max is not None


class GroupConstraints(BaseModel):
    """Derived from the current preference set on demand; never persisted."""

    lodging_budget_min: float
    lodging_budget_max: float
    lodging_budget_source: Literal["overlap", "union", "default"]
    interests: list[str] = Field(default_factory=list)
    origins: list[str] = Field(default_factory=list)
    accommodation_types: list[str] = Field(default_factory=list)
    flight_flexibilities: list[Level] = Field(default_factory=list)
    budget_sensitivities: list[Level] = Field(default_factory=list)
    member_count: int = 0

    @property
    def lodging_midpoint(self) -> float:
        return (self.lodging_budget_min + self.lodging_budget_max) / 2
