"""Scoring engine — ranks flight and lodging candidates for the whole group."""

import logging
from datetime import date, timedelta

from trippy.exceptions import ValidationFailure
from trippy.schemas.option import FlightOption, LodgingOption
from trippy.services.engine_config import ENGINE, FlightWeights, LodgingWeights, round_half_up

logger = logging.getLogger(__name__)


def score_flights(options: list[FlightOption], weights: FlightWeights | None = None) -> list[FlightOption]:
    """
    Score flight options and tag the category winners.

    Each signal (price, duration incl. layover dwell, layover count) is
    min-max scaled across the candidate set; lower raw values score higher.
    A signal shared by every candidate has its range treated as 1, so it
    contributes its full weight. Input order is kept.
    """
    if not options:
        return []

    if weights is None:
        weights = ENGINE.flight_weights

    prices = [o.price_signal for o in options]
    durations = [o.duration_signal for o in options]
    layover_counts = [o.layover_signal for o in options]

    min_price = min(prices)
    price_range = (max(prices) - min_price) or 1
    min_duration = min(durations)
    duration_range = (max(durations) - min_duration) or 1
    min_layovers = min(layover_counts)
    layover_range = (max(layover_counts) - min_layovers) or 1

    scored = []
    for option, price, duration, layovers in zip(options, prices, durations, layover_counts):
        price_score = 1.0 - (price - min_price) / price_range
        duration_score = 1.0 - (duration - min_duration) / duration_range
        layover_score = 1.0 - (layovers - min_layovers) / layover_range

        composite = (
            weights.price * price_score
            + weights.duration * duration_score
            + weights.layovers * layover_score
        )
        scored.append(option.model_copy(update={"score": round_half_up(composite * 100)}))

    cheapest = _first_index(scored, key=lambda o: o.price_signal, better=lambda a, b: a < b)
    fastest = _first_index(scored, key=lambda o: o.duration_signal, better=lambda a, b: a < b)
    best_value = _first_index(scored, key=lambda o: o.score, better=lambda a, b: a > b)

    return [
        option.model_copy(update={
            "is_cheapest": i == cheapest,
            "is_fastest": i == fastest,
            "is_best_value": i == best_value,
        })
        for i, option in enumerate(scored)
    ]


def score_lodging(
    options: list[LodgingOption],
    budget_min: float,
    budget_max: float,
    weights: LodgingWeights | None = None,
) -> list[LodgingOption]:
    """
    Score lodging by closeness to the group's nightly budget midpoint and by rating.

    Returns a new list sorted by score, highest first (ties keep input order).
    """
    if not options:
        return []

    if weights is None:
        weights = ENGINE.lodging_weights

    midpoint = (budget_min + budget_max) / 2
    budget_range = (budget_max - budget_min) or 1

    scored = []
    for option in options:
        distance = abs(option.price_per_night - midpoint)
        budget_score = 1.0 - min(distance / budget_range, 1.0)
        rating_score = option.rating / 5

        composite = weights.budget_fit * budget_score + weights.rating * rating_score
        scored.append(option.model_copy(update={"score": round_half_up(composite * 100)}))

    scored.sort(key=lambda o: o.score, reverse=True)
    return scored


def sort_flights_by_price(options: list[FlightOption]) -> list[FlightOption]:
    return sorted(options, key=lambda o: o.price_signal)


def filter_flights_by_budget(options: list[FlightOption], budget: float | None) -> list[FlightOption]:
    """Keep options whose per-traveler price fits the budget. No budget keeps everything."""
    if budget is None:
        return list(options)
    return [o for o in options if o.price <= budget]


def filter_flights_by_date_range(
    options: list[FlightOption],
    departure_start: date,
    departure_end: date,
    return_start: date,
    return_end: date,
) -> list[FlightOption]:
    """Drop options whose outbound or return date falls outside its window. Undated legs pass."""
    kept = []
    for option in options:
        outbound = _parse_date(option.outbound_date)
        returning = _parse_date(option.return_date)
        if outbound and not departure_start <= outbound <= departure_end:
            continue
        if returning and not return_start <= returning <= return_end:
            continue
        kept.append(option)

    if len(kept) < len(options):
        logger.debug(f"Date filter removed {len(options) - len(kept)} of {len(options)} flight options")
    return kept


def build_date_list(start: date, end: date, limit: int) -> list[str]:
    """Inclusive ISO dates from start to end, capped at ``limit`` entries."""
    if start > end:
        raise ValidationFailure(
            "Malformed date range",
            details={"start": start.isoformat(), "end": end.isoformat()},
        )
    dates = []
    current = start
    while current <= end and len(dates) < limit:
        dates.append(current.isoformat())
        current += timedelta(days=1)
    return dates


def _first_index(options, key, better) -> int:
    best = 0
    for i in range(1, len(options)):
        if better(key(options[i]), key(options[best])):
            best = i
    return best


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None
