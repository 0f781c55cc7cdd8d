"""Rule compliance module for generated schedules."""

from .types import (
    NO_MINIMUM_OBSERVED,
    ComplianceResult,
    ConstraintReport,
    ShiftMetrics,
)
from .engine import NOT_EVALUATED, ComplianceEngine, evaluate
from .validators import (
    BaseValidator,
    MaxDaysPerWeekValidator,
    MaxHoursPerDayValidator,
    MinDaysPerWeekValidator,
    MinHoursPerDayValidator,
)

__all__ = [
    "NO_MINIMUM_OBSERVED",
    "ComplianceResult",
    "ConstraintReport",
    "ShiftMetrics",
    "NOT_EVALUATED",
    "ComplianceEngine",
    "evaluate",
    "BaseValidator",
    "MaxDaysPerWeekValidator",
    "MaxHoursPerDayValidator",
    "MinDaysPerWeekValidator",
    "MinHoursPerDayValidator",
]
