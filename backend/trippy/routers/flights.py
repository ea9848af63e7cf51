"""Flights router — search with generator fallback, synthetic options, and scoring."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from trippy.dependencies import get_flight_supplier
from trippy.schemas.option import DateRange, FlightOption, FlightSearchRequest
from trippy.services.flight_generator import generate_mock_flights
from trippy.services.recommendation_service import FlightSupplier, recommendation_service
from trippy.services.scoring_engine import score_flights, sort_flights_by_price

logger = logging.getLogger(__name__)

router = APIRouter()


class MockFlightsRequest(BaseModel):
    origin: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    departure_date_range: DateRange
    return_date_range: DateRange | None = None
    travelers: int = Field(default=1, ge=1)


class ScoreFlightsRequest(BaseModel):
    options: list[FlightOption] = Field(default_factory=list)
    sort_by_price: bool = False


@router.post("/search")
async def search_flights(
    req: FlightSearchRequest,
    supplier: FlightSupplier | None = Depends(get_flight_supplier),
):
    """Search, filter by dates and budget, score, and sort by price."""
    return await recommendation_service.search_flights(req, supplier)


@router.post("/mock", response_model=list[FlightOption])
async def mock_flights(req: MockFlightsRequest):
    return generate_mock_flights(
        req.origin, req.destination, req.departure_date_range, req.return_date_range, req.travelers
    )


@router.post("/score", response_model=list[FlightOption])
async def rescore_flights(req: ScoreFlightsRequest):
    scored = score_flights(req.options)
    return sort_flights_by_price(scored) if req.sort_by_price else scored
