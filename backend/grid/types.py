"""Type definitions for the weekly time grid."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


WEEKDAYS: list[str] = [
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
]

WEEKEND: tuple[str, str] = ("SATURDAY", "SUNDAY")

# Start hour of each one-hour slot
TIME_SLOTS: list[int] = list(range(7, 24))

FIRST_SLOT = TIME_SLOTS[0]
LAST_SLOT = TIME_SLOTS[-1]


class ShiftMark(str, Enum):
    """Occupancy state of a single (day, slot) cell."""
    EMPTY = ""
    FULL = "X"
    SECOND_HALF = "/"  # Last 30 minutes of the slot
    FIRST_HALF = "\\"  # First 30 minutes of the slot; only reachable via import

    @property
    def hours(self) -> float:
        """Hour-equivalent value of the mark."""
        if self is ShiftMark.FULL:
            return 1.0
        if self in (ShiftMark.FIRST_HALF, ShiftMark.SECOND_HALF):
            return 0.5
        return 0.0


# day -> slot -> mark; always holds all 119 cells
Schedule = dict[str, dict[int, ShiftMark]]


def empty_schedule() -> Schedule:
    """Build a schedule with every (day, slot) cell empty."""
    return {day: {slot: ShiftMark.EMPTY for slot in TIME_SLOTS} for day in WEEKDAYS}


def mark_hours(mark: ShiftMark | str) -> float:
    """Hour value of a mark, accepting either the enum or its raw symbol."""
    return ShiftMark(mark).hours


def day_hours(schedule: Schedule, day: str) -> float:
    """Sum of hours worked on a single day."""
    return sum(mark_hours(schedule[day][slot]) for slot in TIME_SLOTS)


def total_hours(schedule: Schedule) -> float:
    """Total weekly hours held by a schedule."""
    return sum(day_hours(schedule, day) for day in WEEKDAYS)


def working_days(schedule: Schedule) -> int:
    """Count of days with at least one non-empty cell."""
    return sum(
        1 for day in WEEKDAYS
        if any(ShiftMark(schedule[day][slot]) != ShiftMark.EMPTY for slot in TIME_SLOTS)
    )


def parse_hours(value: Any) -> Optional[float]:
    """
    Coerce a weekly-hour quota into a number.

    Strings such as "40h" or "37.5 hrs" are stripped of everything that is not
    a digit or a dot before conversion.

    Returns:
        The parsed hours, or None when the value cannot be read as a number
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if value == value else None
    if isinstance(value, str):
        cleaned = re.sub(r"[^0-9.]", "", value)
        try:
            return float(cleaned)
        except ValueError:
            return None
    return None


@dataclass
class Employee:
    """An employee with a target weekly-hour quota.

    The descriptive attributes are carried through untouched.
    """
    id: str
    name: str
    hours: float | str | None
    section: str = ""
    grouping: str = ""
    job: str = ""
    role: Optional[str] = None
    contract: str = ""
    status: str = ""

    @property
    def target_hours(self) -> Optional[float]:
        """Parsed quota, None when the hours field is not a number."""
        return parse_hours(self.hours)

    @classmethod
    def from_dict(cls, data: dict) -> "Employee":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            hours=data.get("hours"),
            section=str(data.get("section", "")),
            grouping=str(data.get("grouping", "")),
            job=str(data.get("job", "")),
            role=data.get("role"),
            contract=str(data.get("contract", "")),
            status=str(data.get("status", "")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "hours": self.hours,
            "section": self.section,
            "grouping": self.grouping,
            "job": self.job,
            "role": self.role,
            "contract": self.contract,
            "status": self.status,
        }


@dataclass
class Constraint:
    """A free-text scheduling rule, optionally with a formalised form."""
    id: str
    text: str
    structured: Optional[dict] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Constraint":
        return cls(
            id=str(data["id"]),
            text=str(data.get("text", "")),
            structured=data.get("structured"),
        )


@dataclass
class EmployeeShift:
    """The weekly schedule generated for one employee."""
    employee_id: str
    employee_name: str
    schedule: Schedule = field(default_factory=empty_schedule)

    @property
    def total_hours(self) -> float:
        return total_hours(self.schedule)

    def to_dict(self) -> dict:
        """Convert to the camelCase record used at the engine boundary."""
        return {
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "schedule": {
                day: {str(slot): ShiftMark(self.schedule[day][slot]).value for slot in TIME_SLOTS}
                for day in WEEKDAYS
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EmployeeShift":
        """Build from a boundary record; missing cells default to empty."""
        raw = data.get("schedule") or {}
        schedule = empty_schedule()
        for day in WEEKDAYS:
            day_marks = raw.get(day) or {}
            for slot in TIME_SLOTS:
                value = day_marks.get(str(slot), day_marks.get(slot, ""))
                schedule[day][slot] = ShiftMark(value)
        return cls(
            employee_id=str(data["employeeId"]),
            employee_name=str(data.get("employeeName", "")),
            schedule=schedule,
        )
