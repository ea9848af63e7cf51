"""Deterministic flight generator — stable synthetic options when no supplier data exists."""

import logging
from datetime import datetime, time, timedelta

from trippy.exceptions import ValidationFailure
from trippy.schemas.option import DateRange, FlightEndpoint, FlightOption, FlightSegment, Layovers
from trippy.services.engine_config import ENGINE, round_half_up

logger = logging.getLogger(__name__)

ITEM_SEED_STRIDE = 1000


def hash_string(text: str) -> int:
    """
    Non-cryptographic 32-bit polynomial rolling hash.

    For each character: ``h = h * 31 + ord(ch)``, wrapped to a signed 32-bit
    integer after every step; the absolute value is returned. Fixtures built
    from this hash stay stable only while this exact algorithm is kept.
    """
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def _draw(item_seed: int, field: str) -> int:
    """A value in [0, 1000) that depends only on the item seed and the field name."""
    return hash_string(f"{item_seed}:{field}") % 1000


def generate_mock_flights(
    origin: str,
    destination: str,
    departure_range: DateRange,
    return_range: DateRange | None = None,
    travelers: int = 1,
) -> list[FlightOption]:
    """
    Generate 10-12 flight options for a route.

    The route seed is ``hash_string(ORIGIN + DESTINATION)`` and item ``i``
    uses ``seed + i * 1000``; every field is a pure function of those two
    values and the supplied dates, so repeated calls return identical lists.
    """
    if not origin or not destination:
        raise ValidationFailure("Origin and destination are required")

    origin = origin.strip().upper()
    destination = destination.strip().upper()
    seed = hash_string(f"{origin}{destination}")
    tables = ENGINE.generator

    num_flights = 10 + seed % 3
    base_price = 300 + seed % 300
    base_duration = 180 + seed % 240

    flights = []
    for i in range(num_flights):
        item_seed = seed + i * ITEM_SEED_STRIDE
        airline = list(tables.airlines[i % len(tables.airlines)])

        price = round_half_up(base_price * (0.7 + (_draw(item_seed, "price") % 30) / 100))
        outbound = _build_segment(
            item_seed, "", origin, destination, departure_range.start.isoformat(),
            base_duration, airline[0],
        )

        option = {
            "id": f"flight-{origin}-{destination}-{i}",
            "price": price,
            "currency": "USD",
            "airline": airline,
            "departure": outbound.departure,
            "arrival": outbound.arrival,
            "duration": outbound.duration,
            "layovers": outbound.layovers,
            "stops": outbound.stops,
            "outbound_date": departure_range.start.isoformat(),
        }

        if return_range is not None:
            inbound = _build_segment(
                item_seed, "return:", destination, origin, return_range.start.isoformat(),
                base_duration, airline[-1],
            )
            option.update({
                "return_segment": inbound,
                "total_duration": outbound.duration + inbound.duration,
                "return_date": return_range.start.isoformat(),
                "round_trip_price": price * max(travelers, 1),
            })

        flights.append(FlightOption(**option))

    logger.debug(f"Generated {len(flights)} synthetic flights for {origin}-{destination} (seed {seed})")
    return flights


def _build_segment(
    item_seed: int,
    prefix: str,
    origin: str,
    destination: str,
    day: str,
    base_duration: int,
    airline: str,
) -> FlightSegment:
    tables = ENGINE.generator
    hubs = tables.layover_hubs

    air_minutes = round_half_up(base_duration * (0.8 + (_draw(item_seed, prefix + "duration") % 60) / 100))

    layover_type = _draw(item_seed, prefix + "layover_type") % 100
    if layover_type < 20:
        airports = []
    elif layover_type < 70:
        airports = [hubs[_draw(item_seed, prefix + "hub1") % len(hubs)]]
    else:
        first = hubs[_draw(item_seed, prefix + "hub1") % len(hubs)]
        remaining = [h for h in hubs if h != first]
        second = remaining[_draw(item_seed, prefix + "hub2") % len(remaining)]
        airports = [first, second]

    duration = air_minutes + len(airports) * tables.layover_dwell_minutes

    hour = 6 + _draw(item_seed, prefix + "departure_hour") % 14
    minute = (_draw(item_seed, prefix + "departure_minute") % 4) * 15
    departure = datetime.combine(datetime.fromisoformat(day).date(), time(hour, minute))
    arrival = departure + timedelta(minutes=duration)

    return FlightSegment(
        airline=airline,
        departure=FlightEndpoint(airport=origin, time=departure.isoformat()),
        arrival=FlightEndpoint(airport=destination, time=arrival.isoformat()),
        duration=duration,
        layovers=Layovers(count=len(airports), airports=airports),
        stops=len(airports),
    )
