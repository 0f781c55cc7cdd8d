"""Compliance validators, one per recognised rule category."""

from abc import ABC, abstractmethod

from rules import RuleCategory

from .types import ComplianceResult, ShiftMetrics


def format_hours(value: float) -> str:
    """Render 8.0 as "8" and 7.5 as "7.5"."""
    return f"{value:g}"


class BaseValidator(ABC):
    """Base class for compliance validators."""

    category: RuleCategory

    @abstractmethod
    def validate(self, threshold: int, metrics: ShiftMetrics) -> ComplianceResult:
        """Compare the derived metrics against the rule threshold."""
        pass


class MaxDaysPerWeekValidator(BaseValidator):
    """Working days must not exceed the weekly maximum."""

    category = RuleCategory.MAX_DAYS_PER_WEEK

    def validate(self, threshold: int, metrics: ShiftMetrics) -> ComplianceResult:
        meet = metrics.working_days <= threshold
        verdict = "within" if meet else "exceeding"
        return ComplianceResult(
            meet=meet,
            explanation=f"Employee works {metrics.working_days} days per week, {verdict} the maximum of {threshold}",
            category=self.category,
        )


class MaxHoursPerDayValidator(BaseValidator):
    """The busiest day must not exceed the daily maximum."""

    category = RuleCategory.MAX_HOURS_PER_DAY

    def validate(self, threshold: int, metrics: ShiftMetrics) -> ComplianceResult:
        meet = metrics.max_hours_per_day <= threshold
        verdict = "within" if meet else "exceeding"
        return ComplianceResult(
            meet=meet,
            explanation=(
                f"Employee works at most {format_hours(metrics.max_hours_per_day)} hours in a day, "
                f"{verdict} the maximum of {threshold}"
            ),
            category=self.category,
        )


class MinDaysPerWeekValidator(BaseValidator):
    """Working days must reach the weekly minimum."""

    category = RuleCategory.MIN_DAYS_PER_WEEK

    def validate(self, threshold: int, metrics: ShiftMetrics) -> ComplianceResult:
        meet = metrics.working_days >= threshold
        verdict = "meeting" if meet else "below"
        return ComplianceResult(
            meet=meet,
            explanation=f"Employee works {metrics.working_days} days per week, {verdict} the minimum of {threshold}",
            category=self.category,
        )


class MinHoursPerDayValidator(BaseValidator):
    """Every worked day must reach the daily minimum."""

    category = RuleCategory.MIN_HOURS_PER_DAY

    def validate(self, threshold: int, metrics: ShiftMetrics) -> ComplianceResult:
        if metrics.working_days == 0:
            return ComplianceResult(
                meet=True,
                explanation=f"Employee has 0 working days, so the minimum of {threshold} hours per day does not apply",
                category=self.category,
            )

        meet = metrics.min_hours_per_day >= threshold
        verdict = "meeting" if meet else "below"
        return ComplianceResult(
            meet=meet,
            explanation=(
                f"Employee works at least {format_hours(metrics.min_hours_per_day)} hours on each working day, "
                f"{verdict} the minimum of {threshold}"
            ),
            category=self.category,
        )
