import asyncio
import unittest
from datetime import date

from tests.fakes import FakeLLM, unavailable_llm
from trippy.exceptions import UpstreamMalformedError, UpstreamUnavailableError
from trippy.schemas.option import DateRange, FlightEndpoint, FlightSearchRequest, FlightSegment, LodgingOption
from trippy.schemas.preference import MemberPreference
from trippy.schemas.trip import TripFacts
from trippy.services.recommendation_service import RecommendationService, build_round_trips

REQUEST = FlightSearchRequest(
    origin="jfk",
    destination="lax",
    departure_date_range=DateRange(start=date(2025, 7, 1), end=date(2025, 7, 2)),
    return_date_range=DateRange(start=date(2025, 7, 8), end=date(2025, 7, 9)),
    travelers=2,
)

TRIP = TripFacts(
    id="trip-1",
    destination_city="Lisbon",
    destination_country="Portugal",
    start_date=date(2025, 6, 1),
    end_date=date(2025, 6, 4),
    traveler_count=2,
)

PREFERENCES = [
    MemberPreference(member_id="ana", accommodation_budget_min=80, accommodation_budget_max=150,
                     activity_interests=["Food & Dining"]),
    MemberPreference(member_id="ben", accommodation_budget_min=60, accommodation_budget_max=200,
                     activity_interests=["Beaches"]),
]


def segment(origin, destination, day, hour=9, duration=330, airline="Delta", number="DL100"):
    return FlightSegment(
        airline=airline,
        flight_number=number,
        departure=FlightEndpoint(airport=origin, time=f"{day}T{hour:02d}:00:00"),
        arrival=FlightEndpoint(airport=destination, time=f"{day}T{hour + 5:02d}:30:00"),
        duration=duration,
    )


class RecordingSupplier:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    async def __call__(self, origin, destination, day):
        self.calls.append((origin, destination, day))
        if self.fail and destination == "JFK":
            raise ConnectionError("supplier down")
        return [segment(origin, destination, day, number=f"DL{len(self.calls)}")]


class FlightSearchTests(unittest.TestCase):
    def setUp(self):
        self.service = RecommendationService()

    def test_without_supplier_uses_generator(self):
        result = asyncio.run(self.service.search_flights(REQUEST))
        self.assertEqual(result["source"], "generated")
        prices = [o.round_trip_price for o in result["options"]]
        self.assertEqual(prices, sorted(prices))
        self.assertEqual(sum(o.is_best_value for o in result["options"]), 1)

    def test_supplier_results_are_paired_and_scored(self):
        supplier = RecordingSupplier()
        result = asyncio.run(self.service.search_flights(REQUEST, supplier))
        self.assertEqual(result["source"], "supplier")
        self.assertEqual(len(supplier.calls), 4)
        self.assertIn(("LAX", "JFK", "2025-07-08"), supplier.calls)
        for option in result["options"]:
            self.assertEqual(option.return_segment.departure.airport, "LAX")
            self.assertEqual(option.round_trip_price, option.price * 2)

    def test_any_failed_branch_falls_back_to_generator(self):
        supplier = RecordingSupplier(fail=True)
        result = asyncio.run(self.service.search_flights(REQUEST, supplier))
        self.assertEqual(result["source"], "generated")
        self.assertEqual(len(supplier.calls), 4)

    def test_budget_filter_applies(self):
        request = REQUEST.model_copy(update={"budget": 1})
        result = asyncio.run(self.service.search_flights(request))
        self.assertEqual(result["options"], [])

    def test_build_round_trips_needs_both_legs(self):
        self.assertEqual(build_round_trips([segment("JFK", "LAX", "2025-07-01")], [], 1), [])


class LodgingTests(unittest.TestCase):
    def test_uses_aggregated_budget(self):
        options = [
            LodgingOption(id="cheap", name="Hostel", price_per_night=40, rating=3),
            LodgingOption(id="fit", name="Hotel", price_per_night=115, rating=4),
        ]
        scored = RecommendationService().recommend_lodging(options, PREFERENCES)
        self.assertEqual(scored[0].id, "fit")


class GenerationTests(unittest.TestCase):
    def setUp(self):
        self.service = RecommendationService()

    def test_budget_is_clamped_and_prompt_carries_constraints(self):
        llm = FakeLLM('{"budget_min": 500, "budget_max": 2500}')
        estimate = asyncio.run(self.service.generate_budget(TRIP, PREFERENCES, llm))
        self.assertEqual((estimate.budget_min, estimate.budget_max), (528, 2412))
        prompt = llm.prompts[0]
        self.assertIn("Lisbon, Portugal", prompt)
        self.assertIn("$80-$150", prompt)
        self.assertIn("Food & Dining, Beaches", prompt)
        self.assertIn("$660-$2,010", prompt)

    def test_malformed_budget(self):
        llm = FakeLLM("I cannot estimate that.")
        with self.assertRaises(UpstreamMalformedError):
            asyncio.run(self.service.generate_budget(TRIP, PREFERENCES, llm))

    def test_unavailable_llm_propagates(self):
        with self.assertRaises(UpstreamUnavailableError):
            asyncio.run(self.service.generate_budget(TRIP, PREFERENCES, unavailable_llm()))

    def test_itinerary(self):
        llm = FakeLLM('{"days": [{"date": "2025-06-01", "title": "Alfama"}]}')
        days = asyncio.run(self.service.generate_itinerary(TRIP, PREFERENCES, llm, 600, 1200))
        self.assertEqual(days, [{"date": "2025-06-01", "title": "Alfama"}])
        self.assertIn("$600 - $1,200", llm.prompts[0])

    def test_suggestions_include_rejection_feedback(self):
        llm = FakeLLM('{"flights": [], "accommodations": [], "activities": []}')
        asyncio.run(self.service.generate_suggestions(TRIP, PREFERENCES, llm, "Hotels were too far out"))
        self.assertIn("Hotels were too far out", llm.prompts[0])
        self.assertIn("- ana: Origin: Not specified", llm.prompts[0])


if __name__ == "__main__":
    unittest.main()
