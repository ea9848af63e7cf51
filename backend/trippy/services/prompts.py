"""Prompt assembly for the generative-text service."""

from trippy.schemas.budget import BudgetBaseline
from trippy.schemas.preference import GroupConstraints, MemberPreference
from trippy.schemas.trip import TripFacts

BUDGET_SYSTEM_PROMPT = (
    "You are a travel cost analyst. Estimate realistic per-person trip budgets in USD. "
    "Respond with ONLY valid JSON, no markdown."
)

ITINERARY_SYSTEM_PROMPT = (
    "You are an expert travel coordinator building day-by-day plans for groups. "
    "Respond with ONLY valid JSON, no markdown."
)

SUGGESTIONS_SYSTEM_PROMPT = (
    "You are an expert travel coordinator. Suggest flights, accommodations and activities "
    "that fit a whole group. Respond with ONLY valid JSON, no markdown."
)


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _listing(values: list[str], fallback: str) -> str:
    return ", ".join(values) if values else fallback


def build_budget_prompt(trip: TripFacts, constraints: GroupConstraints, baseline: BudgetBaseline) -> str:
    b = baseline
    return f"""Estimate a realistic total trip budget range per person in USD for a group trip.

Trip:
- Destination: {trip.destination}
- Dates: {trip.start_date or 'TBD'} to {trip.end_date or 'TBD'}
- Timezone: {trip.timezone or 'Unknown'}
- Travelers: {trip.traveler_count}
- Trip length: {b.nights} night(s)

Preferences:
- Accommodation budget range per night: {_money(constraints.lodging_budget_min)}-{_money(constraints.lodging_budget_max)}
- Activity interests: {_listing(constraints.interests, 'General')}

Baseline estimate (per person, USD):
- Flights: {_money(b.flights.min)}-{_money(b.flights.max)}
- Lodging: {_money(b.lodging.min)}-{_money(b.lodging.max)} ({b.nights} nights)
- Activities: {_money(b.activities.min)}-{_money(b.activities.max)}
- Misc: {_money(b.misc.min)}-{_money(b.misc.max)}
- Total baseline: {_money(b.total.min)}-{_money(b.total.max)}

Return ONLY valid JSON:
{{
  "budget_min": 0,
  "budget_max": 0
}}

Rules:
- Provide integers (no decimals).
- budget_min must be <= budget_max.
- Keep the range realistic for the trip length and destination.
- Stay within 20% of the baseline total unless the destination is unusually expensive or cheap."""


def build_itinerary_prompt(
    trip: TripFacts,
    constraints: GroupConstraints,
    budget_min: float | None = None,
    budget_max: float | None = None,
) -> str:
    budget = (
        f"{_money(budget_min)} - {_money(budget_max)}"
        if budget_min is not None and budget_max is not None
        else "TBD"
    )
    return f"""Create a day-by-day travel itinerary for this group trip.

Trip:
- Destination: {trip.destination}
- Dates: {trip.start_date or 'TBD'} to {trip.end_date or 'TBD'}
- Timezone: {trip.timezone or 'Unknown'}
- Travelers: {trip.traveler_count}
- Budget range per person: {budget}
- Interests: {_listing(constraints.interests, 'General sightseeing, food, local culture')}

Requirements:
- Provide one entry per day between the start and end dates (inclusive).
- Each day must include: date (YYYY-MM-DD), title, budget_range, morning, afternoon, evening, notes.
- Keep activities realistic and specific to the destination.
- Balance paid activities with free/low-cost options if budget is moderate.

Return ONLY this JSON structure:
{{
  "days": [
    {{
      "date": "YYYY-MM-DD",
      "title": "Short theme",
      "budget_range": "$100-$180",
      "morning": "...",
      "afternoon": "...",
      "evening": "...",
      "notes": "..."
    }}
  ]
}}"""


def build_suggestions_prompt(
    trip: TripFacts,
    constraints: GroupConstraints,
    preferences: list[MemberPreference],
    rejection_context: str | None = None,
) -> str:
    member_lines = []
    for p in preferences:
        budget = (
            f"{_money(p.accommodation_budget_min)}-{_money(p.accommodation_budget_max)}/night"
            if p.has_lodging_budget
            else "N/A"
        )
        member_lines.append(
            f"- {p.member_id}: Origin: {p.preferred_origin or 'Not specified'}, "
            f"Budget: {budget}, Interests: {_listing(p.activity_interests, 'General')}"
        )

    rejection_notes = (
        f"\nRejection feedback (use this to improve new options):\n{rejection_context}\n"
        if rejection_context
        else ""
    )

    return f"""Based on the following group preferences for a trip to {trip.destination}, suggest 5 flights, 5 accommodations, and 10 activities.{rejection_notes}

Trip Details:
- Destination: {trip.destination}
- Start Date: {trip.start_date or 'Not specified'}
- End Date: {trip.end_date or 'Not specified'}
- Number of Travelers: {trip.traveler_count}

Group Preferences Summary:
- Preferred Origin Airports: {_listing(constraints.origins, 'Not specified')}
- Flight Flexibility: {_listing(constraints.flight_flexibilities, 'medium')}
- Budget Sensitivity: {_listing(constraints.budget_sensitivities, 'medium')}
- Accommodation Budget Range: {_money(constraints.lodging_budget_min)}-{_money(constraints.lodging_budget_max)} per night
- Preferred Accommodation Types: {_listing(constraints.accommodation_types, 'any')}
- Activity Interests: {_listing(constraints.interests, 'General travel activities')}

Individual Member Details:
{chr(10).join(member_lines) if member_lines else '- No preferences submitted yet'}

Return JSON with exactly these top-level arrays:
{{
  "flights": [{{"id": "flight-1", "airline": "...", "departure": {{"airport": "...", "time": "HH:MM", "date": "YYYY-MM-DD"}}, "arrival": {{"airport": "...", "time": "HH:MM", "date": "YYYY-MM-DD"}}, "duration": "Xh Ym", "price": 999, "layovers": 0, "layoverAirports": [], "link": "https://..."}}],
  "accommodations": [{{"id": "accommodation-1", "name": "...", "type": "hotel|airbnb|hostel", "pricePerNight": 99, "location": "...", "rating": 4.5, "features": ["WiFi"], "link": "https://..."}}],
  "activities": [{{"id": "activity-1", "name": "...", "type": "sightseeing|adventure|food|culture|relaxation", "duration": "2-3 hours", "price": 49, "location": "...", "description": "..."}}]
}}

Important:
- Provide exactly 5 flights, 5 accommodations, and 10 activities.
- Consider the group's budget ranges and preferences.
- Prefer direct flights when possible, but include some with layovers if they're more affordable.
- For activities, focus on the interests mentioned but provide a diverse mix."""
