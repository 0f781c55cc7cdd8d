"""Local greedy implementation of the schedule generator."""

import logging
import math
import random
import time
from typing import Optional

from grid import (
    FIRST_SLOT,
    LAST_SLOT,
    WEEKDAYS,
    WEEKEND,
    Employee,
    EmployeeShift,
    Schedule,
    ShiftMark,
    empty_schedule,
    total_hours,
)
from rules import StructuredRules

from .types import (
    GenerationProblem,
    GenerationResult,
    ProgressCallback,
    SolverConfig,
    SolverStatus,
)

logger = logging.getLogger(__name__)


class HeuristicSolver:
    """Walks the week day by day, placing one random block per day.

    The target quota is approached but not guaranteed; maxima in the rules
    are never exceeded.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng

    def _random(self, config: SolverConfig) -> random.Random:
        if self._rng is None:
            self._rng = random.Random(config.seed)
        return self._rng

    def generate(
        self,
        employee: Employee,
        rules: StructuredRules,
        rng: random.Random,
        config: Optional[SolverConfig] = None,
    ) -> Schedule:
        """
        Fill a weekly schedule for a single employee.

        Args:
            employee: Employee whose quota is being allocated
            rules: Interpreted scheduling rules
            rng: Random source for block length and start slot
            config: Block sizes and weekend reserve; defaults when omitted

        Returns:
            A schedule with all 119 cells present
        """
        config = config or SolverConfig()
        schedule = empty_schedule()

        target = employee.target_hours
        if target is None or target <= 0:
            logger.warning(f"Skipping {employee.name} (ID: {employee.id}) - invalid hours: {employee.hours!r}")
            return schedule

        remaining = target
        days_assigned = 0

        for day in WEEKDAYS:
            if remaining <= 0 or days_assigned >= rules.max_days_per_week:
                break

            # Keep the weekend free once the quota is nearly met
            if (
                rules.require_free_weekend
                and day in WEEKEND
                and remaining < target * config.weekend_reserve_ratio
            ):
                continue

            hours_to_allocate = min(
                rng.randint(config.min_block_hours, config.max_block_hours),
                remaining,
                rules.max_hours_per_day,
            )
            if hours_to_allocate < 1:
                continue

            start_slot = rng.randint(FIRST_SLOT, LAST_SLOT - math.ceil(hours_to_allocate))
            full_hours = math.floor(hours_to_allocate)

            for offset in range(full_hours):
                schedule[day][start_slot + offset] = ShiftMark.FULL

            if hours_to_allocate - full_hours >= 0.5:
                schedule[day][start_slot + full_hours] = ShiftMark.SECOND_HALF

            remaining -= hours_to_allocate
            days_assigned += 1

        return schedule

    def solve(
        self,
        problem: GenerationProblem,
        config: SolverConfig,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        """Generate schedules employee by employee."""
        start_time = time.time()
        rng = self._random(config)

        shifts = []
        total = len(problem.employees)

        for index, employee in enumerate(problem.employees):
            if on_progress:
                on_progress(employee.name, index / total * 100)

            schedule = self.generate(employee, problem.rules, rng, config)
            shifts.append(EmployeeShift(
                employee_id=employee.id,
                employee_name=employee.name,
                schedule=schedule,
            ))
            logger.info(
                f"Employee {employee.name}: Target hours = {employee.hours}, "
                f"Allocated hours = {total_hours(schedule)}"
            )

            if config.progress_delay > 0 and index < total - 1:
                time.sleep(config.progress_delay)

        if on_progress:
            last_name = problem.employees[-1].name if problem.employees else ""
            on_progress(last_name, 100.0)

        return GenerationResult(
            status=SolverStatus.COMPLETED,
            shifts=shifts,
            solve_time=time.time() - start_time,
        )
