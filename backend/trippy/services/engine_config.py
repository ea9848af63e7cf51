"""Engine configuration — single source for scoring weights, budget bands and thresholds."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FlightWeights:
    """Weighted sum of normalized flight signals (must total 1.0)."""
    price: float = 0.45
    duration: float = 0.35
    layovers: float = 0.20


@dataclass(frozen=True)
class LodgingWeights:
    budget_fit: float = 0.5
    rating: float = 0.5


@dataclass(frozen=True)
class BudgetBands:
    """Per-person baseline bands (USD)."""
    flights_min: int = 200
    flights_max: int = 900
    activities_per_night_min: int = 40
    activities_per_night_max: int = 120
    misc_min: int = 100
    misc_max: int = 300
    default_nights: int = 3       # when either trip date is missing


@dataclass(frozen=True)
class ActivityRules:
    passing_rating: int = 3       # "okay" or better
    min_pass_fraction: float = 0.80
    min_rating: int = 1
    max_rating: int = 5


@dataclass(frozen=True)
class GeneratorTables:
    """Fixed tables used by the deterministic flight generator."""
    airlines: tuple[tuple[str, ...], ...] = (
        ("United Airlines",),
        ("American Airlines",),
        ("Delta",),
        ("Southwest",),
        ("JetBlue",),
        ("Alaska Airlines",),
        ("Spirit Airlines",),
        ("Frontier",),
        ("United Airlines", "Lufthansa"),
        ("American Airlines", "British Airways"),
        ("Delta", "KLM"),
        ("United Airlines", "Air Canada"),
    )
    layover_hubs: tuple[str, ...] = ("DFW", "ATL", "DEN", "ORD", "LAX", "JFK", "CLT", "PHX", "SEA", "MIA")
    layover_dwell_minutes: int = 60


@dataclass(frozen=True)
class EngineConfig:
    flight_weights: FlightWeights = field(default_factory=FlightWeights)
    lodging_weights: LodgingWeights = field(default_factory=LodgingWeights)
    budget_bands: BudgetBands = field(default_factory=BudgetBands)
    activity_rules: ActivityRules = field(default_factory=ActivityRules)
    generator: GeneratorTables = field(default_factory=GeneratorTables)


ENGINE = EngineConfig()


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
