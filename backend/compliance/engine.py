"""Compliance evaluation engine that dispatches constraints to validators."""

from grid import Constraint, EmployeeShift

from rules import match_templates

from .types import ComplianceResult, ConstraintReport, ShiftMetrics
from .validators import (
    BaseValidator,
    MaxDaysPerWeekValidator,
    MaxHoursPerDayValidator,
    MinDaysPerWeekValidator,
    MinHoursPerDayValidator,
)

NOT_EVALUATED = "This constraint was not specifically evaluated"


class ComplianceEngine:
    """
    Checks generated shifts against the constraints they were built from.

    Metrics are re-derived from each filled schedule, so the engine does not
    depend on how the schedule was produced.
    """

    def __init__(self):
        """Initialize with all validators."""
        validators: list[BaseValidator] = [
            MaxDaysPerWeekValidator(),
            MaxHoursPerDayValidator(),
            MinDaysPerWeekValidator(),
            MinHoursPerDayValidator(),
        ]
        self.validators = {v.category: v for v in validators}

    def evaluate(self, constraint: Constraint, shift: EmployeeShift) -> ComplianceResult:
        """
        Evaluate one constraint against one employee's shift.

        Text that does not match a known template is reported as met. A
        sentence carrying several rules is met only when every rule is, and
        the explanations are joined in template order.

        Args:
            constraint: The constraint, matched on its text
            shift: The filled schedule to check

        Returns:
            ComplianceResult with meet flag and an explanation quoting the
            derived number
        """
        matches = match_templates(constraint.text)
        if not matches:
            return ComplianceResult(meet=True, explanation=NOT_EVALUATED)

        metrics = ShiftMetrics.from_schedule(shift.schedule)
        results = []
        for category, threshold in matches:
            validator = self.validators.get(category)
            if validator is not None:
                results.append(validator.validate(threshold, metrics))

        if not results:
            return ComplianceResult(meet=True, explanation=NOT_EVALUATED, category=matches[0][0])
        if len(results) == 1:
            return results[0]

        return ComplianceResult(
            meet=all(r.meet for r in results),
            explanation="; ".join(r.explanation for r in results),
            category=results[0].category,
        )

    def report(self, constraints: list[Constraint], shift: EmployeeShift) -> list[ConstraintReport]:
        """Evaluate every constraint for one shift."""
        reports = []
        for constraint in constraints:
            result = self.evaluate(constraint, shift)
            reports.append(ConstraintReport(
                id=constraint.id,
                text=constraint.text,
                meet=result.meet,
                explanation=result.explanation,
            ))
        return reports

    def evaluate_all(
        self,
        constraints: list[Constraint],
        shifts: list[EmployeeShift],
    ) -> dict[str, list[ConstraintReport]]:
        """
        Evaluate every constraint for every shift.

        Returns:
            employee_id -> reports in constraint order
        """
        return {shift.employee_id: self.report(constraints, shift) for shift in shifts}


_default_engine = ComplianceEngine()


def evaluate(constraint: Constraint, shift: EmployeeShift) -> ComplianceResult:
    """Evaluate one constraint against one shift with the default engine."""
    return _default_engine.evaluate(constraint, shift)
