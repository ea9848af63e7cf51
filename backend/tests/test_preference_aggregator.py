import unittest

from pydantic import ValidationError

from trippy.schemas.preference import MemberPreference
from trippy.services.preference_aggregator import aggregate_preferences


def pref(member_id, lo=None, hi=None, **kwargs):
    return MemberPreference(
        member_id=member_id,
        accommodation_budget_min=lo,
        accommodation_budget_max=hi,
        **kwargs,
    )


class LodgingBudgetTests(unittest.TestCase):
    def test_no_members_returns_defaults(self):
        result = aggregate_preferences([])
        self.assertEqual((result.lodging_budget_min, result.lodging_budget_max), (50, 300))
        self.assertEqual(result.lodging_budget_source, "default")
        self.assertEqual(result.member_count, 0)
        self.assertEqual(result.interests, [])

    def test_overlapping_ranges_intersect(self):
        result = aggregate_preferences([pref("a", 80, 200), pref("b", 100, 150), pref("c", 90, 180)])
        self.assertEqual((result.lodging_budget_min, result.lodging_budget_max), (100, 150))
        self.assertEqual(result.lodging_budget_source, "overlap")

    def test_disjoint_ranges_fall_back_to_union(self):
        result = aggregate_preferences([pref("a", 50, 100), pref("b", 150, 300)])
        self.assertEqual((result.lodging_budget_min, result.lodging_budget_max), (50, 300))
        self.assertEqual(result.lodging_budget_source, "union")

    def test_min_never_exceeds_max(self):
        pairs = [((0, 10), (20, 30)), ((200, 400), (10, 20)), ((5, 5), (6, 6)), ((100, 100), (100, 100))]
        for (a_lo, a_hi), (b_lo, b_hi) in pairs:
            with self.subTest(a=(a_lo, a_hi), b=(b_lo, b_hi)):
                result = aggregate_preferences([pref("a", a_lo, a_hi), pref("b", b_lo, b_hi)])
                self.assertLessEqual(result.lodging_budget_min, result.lodging_budget_max)

    def test_inverted_member_range_is_rejected(self):
        with self.assertRaises(ValidationError):
            pref("a", 200, 100)
        self.assertEqual(pref("a", 120, 120).accommodation_budget_max, 120)

    def test_half_specified_ranges_are_ignored(self):
        result = aggregate_preferences([pref("a", 80, None), pref("b", None, 90), pref("c", 60, 120)])
        self.assertEqual((result.lodging_budget_min, result.lodging_budget_max), (60, 120))

    def test_only_half_specified_ranges_use_defaults(self):
        result = aggregate_preferences([pref("a", 80, None)])
        self.assertEqual(result.lodging_budget_source, "default")
        self.assertEqual(result.member_count, 1)

    def test_midpoint(self):
        result = aggregate_preferences([pref("a", 80, 150)])
        self.assertEqual(result.lodging_midpoint, 115)


class CategoricalTests(unittest.TestCase):
    def test_interests_union_keeps_first_seen_order(self):
        result = aggregate_preferences([
            pref("a", activity_interests=["Food & Dining", "Museums & Culture"]),
            pref("b", activity_interests=["Museums & Culture", "Nightlife", "Food & Dining"]),
        ])
        self.assertEqual(result.interests, ["Food & Dining", "Museums & Culture", "Nightlife"])

    def test_levels_are_collected_without_a_vote(self):
        result = aggregate_preferences([
            pref("a", flight_flexibility="low", budget_sensitivity="high"),
            pref("b", flight_flexibility="high"),
            pref("c", flight_flexibility="high", budget_sensitivity="high"),
        ])
        self.assertEqual(result.flight_flexibilities, ["low", "high", "high"])
        self.assertEqual(result.budget_sensitivities, ["high", "high"])

    def test_origins_and_types_skip_empty_values(self):
        result = aggregate_preferences([
            pref("a", preferred_origin="JFK", accommodation_type="Hotel"),
            pref("b", preferred_origin=""),
            pref("c", preferred_origin="EWR"),
        ])
        self.assertEqual(result.origins, ["JFK", "EWR"])
        self.assertEqual(result.accommodation_types, ["Hotel"])


if __name__ == "__main__":
    unittest.main()
