from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class BudgetRange(BaseModel):
    min: float
    max: float


class BudgetBaseline(BaseModel):
    """Rule-based per-person estimate used to bound externally suggested numbers."""

    nights: int
    lodging: BudgetRange
    flights: BudgetRange
    activities: BudgetRange
    misc: BudgetRange
    total: BudgetRange


class BudgetEstimate(BaseModel):
    budget_min: float
    budget_max: float
    currency: str = "USD"
    source: Literal["baseline", "external"]
    baseline: BudgetBaseline
    updated_at: datetime
