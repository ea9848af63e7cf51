import unittest

from trippy.exceptions import UpstreamMalformedError
from trippy.services.llm_response import (
    parse_itinerary_days,
    parse_json_payload,
    parse_trip_suggestions,
    strip_code_fences,
)


class StripCodeFencesTests(unittest.TestCase):
    def test_json_fence(self):
        self.assertEqual(strip_code_fences('```json\n{"a": 1}\n```'), '{"a": 1}')

    def test_bare_fence(self):
        self.assertEqual(strip_code_fences('```\n{"a": 1}\n```'), '{"a": 1}')

    def test_no_fence(self):
        self.assertEqual(strip_code_fences('  {"a": 1}  '), '{"a": 1}')


class ParsePayloadTests(unittest.TestCase):
    def test_malformed_json_keeps_raw_excerpt(self):
        with self.assertRaises(UpstreamMalformedError) as ctx:
            parse_json_payload("Sure! Here is your plan: {")
        self.assertIn("raw_response", ctx.exception.details)
        self.assertEqual(ctx.exception.category, "upstream_malformed")

    def test_none(self):
        with self.assertRaises(UpstreamMalformedError):
            parse_json_payload(None)

    def test_itinerary_days(self):
        days = parse_itinerary_days('{"days": [{"date": "2025-06-01", "title": "Arrival"}]}')
        self.assertEqual(days[0]["title"], "Arrival")

    def test_itinerary_requires_days_list(self):
        for text in ['{"days": "soon"}', '{"plan": []}', '{"days": ["x"]}']:
            with self.subTest(text=text), self.assertRaises(UpstreamMalformedError):
                parse_itinerary_days(text)

    def test_suggestions(self):
        result = parse_trip_suggestions('{"flights": [], "accommodations": [{"id": "h"}], "activities": [], "extra": 1}')
        self.assertEqual(set(result), {"flights", "accommodations", "activities"})

    def test_suggestions_report_missing_sections(self):
        with self.assertRaises(UpstreamMalformedError) as ctx:
            parse_trip_suggestions('{"flights": []}')
        self.assertEqual(ctx.exception.details["missing"], ["accommodations", "activities"])


if __name__ == "__main__":
    unittest.main()
