"""Weekly time grid shared by generation, compliance and coverage."""

from .types import (
    WEEKDAYS,
    WEEKEND,
    TIME_SLOTS,
    FIRST_SLOT,
    LAST_SLOT,
    ShiftMark,
    Schedule,
    Employee,
    Constraint,
    EmployeeShift,
    empty_schedule,
    mark_hours,
    day_hours,
    total_hours,
    working_days,
    parse_hours,
)

__all__ = [
    "WEEKDAYS",
    "WEEKEND",
    "TIME_SLOTS",
    "FIRST_SLOT",
    "LAST_SLOT",
    "ShiftMark",
    "Schedule",
    "Employee",
    "Constraint",
    "EmployeeShift",
    "empty_schedule",
    "mark_hours",
    "day_hours",
    "total_hours",
    "working_days",
    "parse_hours",
]
