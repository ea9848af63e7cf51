"""Recommendation service — request-level orchestration around the pure engine.

Supplier and LLM calls happen here; the engine only ever sees fully
resolved inputs.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from trippy.config import settings
from trippy.schemas.budget import BudgetEstimate
from trippy.schemas.option import FlightOption, FlightSearchRequest, FlightSegment, LodgingOption
from trippy.schemas.preference import MemberPreference
from trippy.schemas.trip import TripFacts
from trippy.services import prompts
from trippy.services.budget_estimator import estimate_budget, trip_baseline
from trippy.services.engine_config import round_half_up
from trippy.services.flight_generator import generate_mock_flights, hash_string
from trippy.services.llm_client import LLMClient
from trippy.services.llm_response import parse_itinerary_days, parse_trip_suggestions
from trippy.services.preference_aggregator import aggregate_preferences
from trippy.services.scoring_engine import (
    build_date_list,
    filter_flights_by_budget,
    filter_flights_by_date_range,
    score_flights,
    score_lodging,
    sort_flights_by_price,
)

logger = logging.getLogger(__name__)

# (origin, destination, ISO date) -> one-way segments for that day
FlightSupplier = Callable[[str, str, str], Awaitable[list[FlightSegment]]]


class RecommendationService:
    """Fans out to suppliers / LLMs and feeds the resolved data to the engine."""

    # ─── Flights ───

    async def search_flights(
        self,
        request: FlightSearchRequest,
        supplier: FlightSupplier | None = None,
    ) -> dict:
        origin = request.origin.strip().upper()
        destination = request.destination.strip().upper()
        dep_range = request.departure_date_range
        ret_range = request.return_date_range

        options: list[FlightOption] = []
        source = "generated"
        if supplier is not None:
            options = await self._fetch_supplier_options(supplier, request, origin, destination)
            if options:
                source = "supplier"

        if not options:
            options = generate_mock_flights(origin, destination, dep_range, ret_range, request.travelers)

        options = filter_flights_by_date_range(options, dep_range.start, dep_range.end, ret_range.start, ret_range.end)
        options = filter_flights_by_budget(options, request.budget)
        options = sort_flights_by_price(score_flights(options))

        logger.info(f"Flight search {origin}-{destination}: {len(options)} options ({source})")
        return {"source": source, "options": options}

    async def _fetch_supplier_options(
        self,
        supplier: FlightSupplier,
        request: FlightSearchRequest,
        origin: str,
        destination: str,
    ) -> list[FlightOption]:
        max_dates = settings.flight_search_max_dates
        departure_dates = build_date_list(
            request.departure_date_range.start, request.departure_date_range.end, max_dates
        )
        return_dates = build_date_list(
            request.return_date_range.start, request.return_date_range.end, max_dates
        )

        calls = [supplier(origin, destination, d) for d in departure_dates]
        calls += [supplier(destination, origin, d) for d in return_dates]
        results = await asyncio.gather(*calls, return_exceptions=True)

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.warning(
                f"Flight supplier failed for {len(failures)} of {len(results)} date queries; "
                f"using generated options: {failures[0]}"
            )
            return []

        outbound = [seg for batch in results[:len(departure_dates)] for seg in batch]
        inbound = [seg for batch in results[len(departure_dates):] for seg in batch]
        return build_round_trips(outbound, inbound, request.travelers)

    # ─── Lodging ───

    def recommend_lodging(
        self,
        options: list[LodgingOption],
        preferences: list[MemberPreference],
    ) -> list[LodgingOption]:
        constraints = aggregate_preferences(preferences)
        return score_lodging(options, constraints.lodging_budget_min, constraints.lodging_budget_max)

    # ─── Generative text ───

    async def generate_budget(
        self,
        trip: TripFacts,
        preferences: list[MemberPreference],
        llm: LLMClient,
    ) -> BudgetEstimate:
        constraints = aggregate_preferences(preferences)
        baseline = trip_baseline(trip, constraints)

        text = await llm.complete(
            prompts.BUDGET_SYSTEM_PROMPT,
            prompts.build_budget_prompt(trip, constraints, baseline),
            json_mode=True,
        )
        estimate = estimate_budget(trip, constraints, external_text=text, baseline=baseline)
        logger.info(f"Budget for trip {trip.id}: {estimate.budget_min}-{estimate.budget_max} USD")
        return estimate

    async def generate_itinerary(
        self,
        trip: TripFacts,
        preferences: list[MemberPreference],
        llm: LLMClient,
        budget_min: float | None = None,
        budget_max: float | None = None,
    ) -> list[dict]:
        constraints = aggregate_preferences(preferences)
        text = await llm.complete(
            prompts.ITINERARY_SYSTEM_PROMPT,
            prompts.build_itinerary_prompt(trip, constraints, budget_min, budget_max),
            json_mode=True,
        )
        return parse_itinerary_days(text)

    async def generate_suggestions(
        self,
        trip: TripFacts,
        preferences: list[MemberPreference],
        llm: LLMClient,
        rejection_context: str | None = None,
    ) -> dict:
        constraints = aggregate_preferences(preferences)
        text = await llm.complete(
            prompts.SUGGESTIONS_SYSTEM_PROMPT,
            prompts.build_suggestions_prompt(trip, constraints, preferences, rejection_context),
            json_mode=True,
        )
        return parse_trip_suggestions(text)


def estimate_round_trip_price(outbound: FlightSegment, inbound: FlightSegment | None) -> int:
    """Per-traveler fare for supplier segments that carry no price."""
    total_duration = outbound.duration + (inbound.duration if inbound else 0)
    stops = outbound.stops + (inbound.stops if inbound else 0)
    base = 80 + total_duration * 0.18 + stops * 45
    seed = hash_string(
        f"{outbound.airline}-{outbound.flight_number or ''}-{outbound.departure.time}-"
        f"{inbound.departure.time if inbound else ''}"
    )
    multiplier = 0.85 + (seed % 30) / 100
    return max(120, round_half_up(base * multiplier))


def build_round_trips(
    outbound: list[FlightSegment],
    inbound: list[FlightSegment],
    travelers: int,
) -> list[FlightOption]:
    """Pair outbound segments with return segments (cycling) into priced options."""
    if not outbound or not inbound:
        return []

    options = []
    for i, segment in enumerate(outbound[:settings.flight_search_max_options]):
        return_segment = inbound[i % len(inbound)]
        price = estimate_round_trip_price(segment, return_segment)
        options.append(FlightOption(
            id=f"{segment.flight_number or 'flight'}-{i}",
            price=price,
            round_trip_price=price * max(travelers, 1),
            airline=[a for a in (segment.airline, return_segment.airline) if a],
            departure=segment.departure,
            arrival=segment.arrival,
            duration=segment.duration,
            layovers=segment.layovers,
            stops=segment.stops,
            return_segment=return_segment,
            total_duration=segment.duration + return_segment.duration,
            outbound_date=segment.departure.time[:10],
            return_date=return_segment.departure.time[:10],
        ))
    return options


recommendation_service = RecommendationService()
