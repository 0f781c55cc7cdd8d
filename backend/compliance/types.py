"""Type definitions for the compliance module."""

from dataclasses import dataclass
from typing import Optional

from grid import WEEKDAYS, Schedule, day_hours, working_days

from rules import RuleCategory


# Reported as the daily minimum when no day has any hours
NO_MINIMUM_OBSERVED = 24.0


@dataclass(frozen=True)
class ShiftMetrics:
    """Metrics re-derived from a filled schedule."""
    total_hours: float
    working_days: int
    max_hours_per_day: float
    min_hours_per_day: float

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> "ShiftMetrics":
        daily = [day_hours(schedule, day) for day in WEEKDAYS]
        worked = [hours for hours in daily if hours > 0]
        return cls(
            total_hours=sum(daily),
            working_days=working_days(schedule),
            max_hours_per_day=max(daily),
            min_hours_per_day=min(worked) if worked else NO_MINIMUM_OBSERVED,
        )


@dataclass(frozen=True)
class ComplianceResult:
    """Whether one constraint is met by one shift, and why."""
    meet: bool
    explanation: str
    category: Optional[RuleCategory] = None

    def to_dict(self) -> dict:
        return {"meet": self.meet, "explanation": self.explanation}


@dataclass(frozen=True)
class ConstraintReport:
    """A compliance result tied back to its constraint."""
    id: str
    text: str
    meet: bool
    explanation: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "meet": self.meet,
            "explanation": self.explanation,
        }
