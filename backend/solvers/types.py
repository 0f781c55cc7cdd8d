"""Type definitions for the interchangeable generation strategies."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from grid import Constraint, Employee, EmployeeShift
from rules import StructuredRules


# (employee_name, percent_complete)
ProgressCallback = Callable[[str, float], None]


class SolverType(str, Enum):
    """Available generation strategies."""
    HEURISTIC = "heuristic"
    REMOTE = "remote"


class SolverStatus(str, Enum):
    """Outcome of a generation run."""
    COMPLETED = "completed"
    FALLBACK = "fallback"  # Remote failure replaced by empty schedules


@dataclass
class SolverConfig:
    """Configuration parameters for a generation run."""
    seed: Optional[int] = None
    remote_url: Optional[str] = None
    remote_timeout: float = 30.0
    progress_delay: float = 0.0  # Pause between employees so observers can redraw
    min_block_hours: int = 4
    max_block_hours: int = 8
    weekend_reserve_ratio: float = 0.25


@dataclass
class GenerationProblem:
    """Input data for a generation run."""
    employees: list[Employee]
    constraints: list[Constraint] = field(default_factory=list)
    rules: StructuredRules = field(default_factory=StructuredRules)


@dataclass
class GenerationResult:
    """Result from a generation run: one shift per input employee."""
    status: SolverStatus
    shifts: list[EmployeeShift]
    message: str = ""
    solve_time: float = 0.0

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "message": self.message,
            "solve_time": self.solve_time,
            "shifts": [s.to_dict() for s in self.shifts],
        }
