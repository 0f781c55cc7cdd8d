from typing import Any, Literal

from pydantic import BaseModel, StrictBool, ValidationError, model_validator

from grid import TIME_SLOTS, WEEKDAYS, Constraint, Employee, EmployeeShift
from compliance import ConstraintReport


ShiftMarkValue = Literal["", "X", "/", "\\"]


class EmployeeSchema(BaseModel):
    id: str
    name: str
    hours: float | str | None = None  # Unparseable values produce an empty schedule
    section: str = ""
    grouping: str = ""
    job: str = ""
    role: str | None = None
    contract: str = ""
    status: str = ""

    def to_employee(self) -> Employee:
        return Employee(**self.model_dump())


class ConstraintSchema(BaseModel):
    id: str
    text: str
    structured: dict[str, Any] | None = None

    def to_constraint(self) -> Constraint:
        return Constraint(id=self.id, text=self.text, structured=self.structured)


class EmployeeShiftSchema(BaseModel):
    """A full weekly grid: every weekday and every slot must be present."""
    employeeId: str
    employeeName: str
    schedule: dict[str, dict[int, ShiftMarkValue]]

    @model_validator(mode="after")
    def check_full_grid(self) -> "EmployeeShiftSchema":
        for day in WEEKDAYS:
            if day not in self.schedule:
                raise ValueError(f"schedule is missing {day}")
            missing = [slot for slot in TIME_SLOTS if slot not in self.schedule[day]]
            if missing:
                raise ValueError(f"schedule for {day} is missing slots {missing}")
        unknown = set(self.schedule) - set(WEEKDAYS)
        if unknown:
            raise ValueError(f"schedule has unknown days {sorted(unknown)}")
        return self

    def to_shift(self) -> EmployeeShift:
        return EmployeeShift.from_dict(self.model_dump())


class ConstraintResultSchema(BaseModel):
    """Compliance outcome stored alongside an exported shift."""
    id: str
    text: str
    meet: StrictBool
    explanation: str | None = None


class ShiftSnapshot(BaseModel):
    """Importable single-employee schedule with its compliance outcomes."""
    shifts: EmployeeShiftSchema
    constraints: list[ConstraintResultSchema]


class SnapshotValidationError(ValueError):
    """A snapshot document failed validation and was rejected whole."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def load_snapshot(data: Any) -> ShiftSnapshot:
    """
    Validate a snapshot document field by field.

    Raises:
        SnapshotValidationError: If any field is missing or invalid
    """
    try:
        return ShiftSnapshot.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or 'document'}: {err['msg']}"
            for err in e.errors()
        ]
        raise SnapshotValidationError(errors) from e


def build_snapshot(shift: EmployeeShift, reports: list[ConstraintReport]) -> dict:
    """Export one shift and its compliance results as a snapshot document."""
    return {
        "shifts": shift.to_dict(),
        "constraints": [r.to_dict() for r in reports],
    }


# ============================================================================
# API request/response models
# ============================================================================


class StructuredRulesSchema(BaseModel):
    max_days_per_week: int
    max_hours_per_day: int
    min_days_per_week: int | None = None
    min_hours_per_day: int | None = None
    require_free_weekend: bool = False


class InterpretRequest(BaseModel):
    constraints: list[ConstraintSchema]


class GenerateRequest(BaseModel):
    employees: list[EmployeeSchema]
    constraints: list[ConstraintSchema] = []
    solver_type: Literal["heuristic", "remote"] | None = None
    seed: int | None = None


class ConstraintReportSchema(BaseModel):
    id: str
    text: str
    meet: bool
    explanation: str


class ProgressEvent(BaseModel):
    employee_name: str
    percent: float


class GenerateResponse(BaseModel):
    status: str
    message: str = ""
    shifts: list[EmployeeShiftSchema]
    compliance: dict[str, list[ConstraintReportSchema]]
    coverage: dict[str, dict[int, float]]
    progress: list[ProgressEvent] = []


class EvaluateRequest(BaseModel):
    constraints: list[ConstraintSchema]
    shifts: list[EmployeeShiftSchema]


class EvaluateResponse(BaseModel):
    compliance: dict[str, list[ConstraintReportSchema]]


class CoverageRequest(BaseModel):
    shifts: list[EmployeeShiftSchema]


class CoverageResponse(BaseModel):
    coverage: dict[str, dict[int, float]]
    peak: float
