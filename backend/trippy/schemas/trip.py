from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, model_validator


class TripFacts(BaseModel):
    id: str = Field(min_length=1)
    destination_city: str | None = None
    destination_country: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    traveler_count: int = Field(default=1, ge=1)
    timezone: str | None = None
    currency: Literal["USD"] = "USD"

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_date_order(self) -> "TripFacts":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self

    @property
    def destination(self) -> str:
        return f"{self.destination_city or 'Unknown'}, {self.destination_country or 'Unknown'}"
