from datetime import date

from pydantic import BaseModel, Field, model_validator


class DateRange(BaseModel):
    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if self.start > self.end:
            raise ValueError("date range start must not be after its end")
        return self


class FlightEndpoint(BaseModel):
    airport: str
    time: str
    city: str | None = None


class Layovers(BaseModel):
    count: int = Field(default=0, ge=0)
    airports: list[str] = Field(default_factory=list)
    durations: list[int] | None = None


class FlightSegment(BaseModel):
    airline: str
    flight_number: str | None = None
    departure: FlightEndpoint
    arrival: FlightEndpoint
    duration: int  # minutes, layover dwell included
    layovers: Layovers = Field(default_factory=Layovers)
    stops: int = 0


class FlightOption(BaseModel):
    id: str
    price: float  # per traveler, USD
    round_trip_price: float | None = None  # all travelers, USD
    currency: str = "USD"
    airline: list[str] = Field(default_factory=list)
    departure: FlightEndpoint
    arrival: FlightEndpoint
    duration: int
    layovers: Layovers = Field(default_factory=Layovers)
    stops: int | None = None
    return_segment: FlightSegment | None = None
    total_duration: int | None = None
    outbound_date: str | None = None
    return_date: str | None = None
    score: int = 0
    is_cheapest: bool = False
    is_fastest: bool = False
    is_best_value: bool = False

    @property
    def price_signal(self) -> float:
        return self.round_trip_price if self.round_trip_price is not None else self.price

    @property
    def duration_signal(self) -> int:
        return self.total_duration if self.total_duration is not None else self.duration

    @property
    def layover_signal(self) -> int:
        if self.return_segment:
            return self.layovers.count + self.return_segment.layovers.count
        return self.layovers.count


class LodgingOption(BaseModel):
    id: str
    name: str
    type: str = "hotel"
    price_per_night: float
    rating: float = Field(default=0, ge=0, le=5)
    location: str = ""
    features: list[str] = Field(default_factory=list)
    link: str | None = None
    image_url: str | None = None
    score: int = 0


class FlightSearchRequest(BaseModel):
    origin: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    departure_date_range: DateRange
    return_date_range: DateRange
    budget: float | None = None
    travelers: int = Field(default=1, ge=1)
