from trippy.schemas.budget import BudgetBaseline, BudgetEstimate, BudgetRange
from trippy.schemas.consensus import (
    Activity,
    ActivityValidation,
    ApprovalEntry,
    Selection,
    SelectionState,
    SelectionStatus,
)
from trippy.schemas.option import (
    DateRange,
    FlightEndpoint,
    FlightOption,
    FlightSearchRequest,
    FlightSegment,
    Layovers,
    LodgingOption,
)
from trippy.schemas.preference import GroupConstraints, MemberPreference
from trippy.schemas.trip import TripFacts

__all__ = [
    "Activity",
    "ActivityValidation",
    "ApprovalEntry",
    "BudgetBaseline",
    "BudgetEstimate",
    "BudgetRange",
    "DateRange",
    "FlightEndpoint",
    "FlightOption",
    "FlightSearchRequest",
    "FlightSegment",
    "GroupConstraints",
    "Layovers",
    "LodgingOption",
    "MemberPreference",
    "Selection",
    "SelectionState",
    "SelectionStatus",
    "TripFacts",
]
