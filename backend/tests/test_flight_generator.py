import json
import unittest
from datetime import date, datetime, timedelta

from trippy.exceptions import ValidationFailure
from trippy.schemas.option import DateRange
from trippy.services.engine_config import ENGINE
from trippy.services.flight_generator import generate_mock_flights, hash_string

DEPARTURE = DateRange(start=date(2025, 7, 1), end=date(2025, 7, 3))
RETURN = DateRange(start=date(2025, 7, 8), end=date(2025, 7, 10))


class HashStringTests(unittest.TestCase):
    def test_known_values(self):
        self.assertEqual(hash_string(""), 0)
        self.assertEqual(hash_string("a"), 97)
        self.assertEqual(hash_string("ab"), 97 * 31 + 98)
        # Same algorithm as java.lang.String#hashCode
        self.assertEqual(hash_string("hello"), 99162322)

    def test_wraps_to_32_bits_and_is_non_negative(self):
        value = hash_string("JFKLAX" * 40)
        self.assertGreaterEqual(value, 0)
        self.assertLessEqual(value, 2**31)


class GenerateMockFlightsTests(unittest.TestCase):
    def test_identical_arguments_give_identical_output(self):
        first = generate_mock_flights("JFK", "LAX", DEPARTURE, RETURN, travelers=3)
        second = generate_mock_flights("JFK", "LAX", DEPARTURE, RETURN, travelers=3)
        dump = lambda flights: json.dumps([f.model_dump(mode="json") for f in flights], sort_keys=True)
        self.assertEqual(dump(first), dump(second))

    def test_route_codes_are_case_insensitive(self):
        upper = generate_mock_flights("JFK", "LAX", DEPARTURE)
        lower = generate_mock_flights(" jfk", "lax ", DEPARTURE)
        self.assertEqual([f.model_dump() for f in upper], [f.model_dump() for f in lower])

    def test_different_routes_differ(self):
        a = generate_mock_flights("JFK", "LAX", DEPARTURE)
        b = generate_mock_flights("LAX", "JFK", DEPARTURE)
        self.assertNotEqual([f.id for f in a], [f.id for f in b])

    def test_candidate_count_and_ids(self):
        flights = generate_mock_flights("SFO", "SEA", DEPARTURE)
        self.assertIn(len(flights), (10, 11, 12))
        self.assertEqual(flights[0].id, "flight-SFO-SEA-0")
        self.assertEqual(len({f.id for f in flights}), len(flights))

    def test_field_ranges(self):
        hubs = set(ENGINE.generator.layover_hubs)
        for f in generate_mock_flights("BOS", "MIA", DEPARTURE):
            with self.subTest(flight=f.id):
                self.assertGreaterEqual(f.price, 210)
                self.assertLessEqual(f.price, 594)

                self.assertIn(f.layovers.count, (0, 1, 2))
                self.assertEqual(len(f.layovers.airports), f.layovers.count)
                self.assertEqual(len(set(f.layovers.airports)), f.layovers.count)
                self.assertTrue(set(f.layovers.airports) <= hubs)

                air_minutes = f.duration - 60 * f.layovers.count
                self.assertGreaterEqual(air_minutes, 144)
                self.assertLessEqual(air_minutes, 583)

                departure = datetime.fromisoformat(f.departure.time)
                self.assertEqual(departure.date(), DEPARTURE.start)
                self.assertGreaterEqual(departure.hour, 6)
                self.assertLess(departure.hour, 20)
                self.assertIn(departure.minute, (0, 15, 30, 45))

                arrival = datetime.fromisoformat(f.arrival.time)
                self.assertEqual(arrival - departure, timedelta(minutes=f.duration))

    def test_one_way_has_no_return_fields(self):
        for f in generate_mock_flights("JFK", "LAX", DEPARTURE):
            self.assertIsNone(f.return_segment)
            self.assertIsNone(f.round_trip_price)
            self.assertEqual(f.outbound_date, "2025-07-01")

    def test_round_trip_is_symmetric(self):
        for f in generate_mock_flights("JFK", "LAX", DEPARTURE, RETURN, travelers=2):
            with self.subTest(flight=f.id):
                seg = f.return_segment
                self.assertEqual((seg.departure.airport, seg.arrival.airport), ("LAX", "JFK"))
                self.assertEqual(datetime.fromisoformat(seg.departure.time).date(), RETURN.start)
                self.assertEqual(f.total_duration, f.duration + seg.duration)
                self.assertEqual(f.round_trip_price, f.price * 2)
                self.assertEqual(f.return_date, "2025-07-08")

    def test_requires_route(self):
        with self.assertRaises(ValidationFailure):
            generate_mock_flights("", "LAX", DEPARTURE)


if __name__ == "__main__":
    unittest.main()
