"""Parse boundary for generative-text output. Everything here is untrusted input."""

import json
import logging
import math
import re

from trippy.exceptions import UpstreamMalformedError

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\n?```\s*$")

RAW_EXCERPT_CHARS = 500


def strip_code_fences(text: str) -> str:
    """Remove an optional leading ```json / ``` fence and its closing fence."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
        cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_json_payload(text: str | None) -> dict:
    if not text or not text.strip():
        raise UpstreamMalformedError("Empty response from AI")

    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse AI response as JSON: {e}")
        raise UpstreamMalformedError(
            "Failed to parse JSON from AI response",
            details={"message": str(e), "raw_response": text[:RAW_EXCERPT_CHARS]},
        ) from e

    if not isinstance(payload, dict):
        raise UpstreamMalformedError(
            "AI response must be a JSON object",
            details={"raw_response": text[:RAW_EXCERPT_CHARS]},
        )
    return payload


def parse_number(value, field: str) -> float:
    """Coerce a JSON number (or numeric string) to a finite float."""
    if isinstance(value, bool) or value is None:
        raise UpstreamMalformedError(f"'{field}' must be a number", details={field: value})
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise UpstreamMalformedError(f"'{field}' must be a number", details={field: value}) from e
    if not math.isfinite(number):
        raise UpstreamMalformedError(f"'{field}' must be finite", details={field: value})
    return number


def parse_budget_range(text: str | None) -> tuple[float, float]:
    """Parse ``{"budget_min": n, "budget_max": n}``; min must not exceed max."""
    payload = parse_json_payload(text)
    budget_min = parse_number(payload.get("budget_min"), "budget_min")
    budget_max = parse_number(payload.get("budget_max"), "budget_max")
    if budget_min > budget_max:
        raise UpstreamMalformedError(
            "Invalid budget range from AI response",
            details={"budget_min": budget_min, "budget_max": budget_max},
        )
    return budget_min, budget_max


def parse_itinerary_days(text: str | None) -> list[dict]:
    payload = parse_json_payload(text)
    days = payload.get("days")
    if not isinstance(days, list):
        raise UpstreamMalformedError("Invalid itinerary format from AI")
    if not all(isinstance(day, dict) for day in days):
        raise UpstreamMalformedError("Itinerary days must be JSON objects")
    return days


def parse_trip_suggestions(text: str | None) -> dict:
    payload = parse_json_payload(text)
    missing = [
        key for key in ("flights", "accommodations", "activities")
        if not isinstance(payload.get(key), list)
    ]
    if missing:
        raise UpstreamMalformedError(
            "Invalid response structure from AI",
            details={"missing": missing},
        )
    return {
        "flights": payload["flights"],
        "accommodations": payload["accommodations"],
        "activities": payload["activities"],
    }
