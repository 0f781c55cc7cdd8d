import logging
from typing import Optional

import pandas as pd

import config as app_config
from compliance import ComplianceEngine, ConstraintReport
from headcount import aggregate
from grid import TIME_SLOTS, WEEKDAYS, Constraint, Employee, EmployeeShift, ShiftMark, empty_schedule
from rules import interpret
from solvers import (
    create_solver,
    GenerationProblem,
    GenerationResult,
    ProgressCallback,
    RemoteSolverError,
    SolverConfig,
    SolverStatus,
    SolverType,
)

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Failed to generate schedules"


_logging_configured = False


def setup_logging():
    global _logging_configured
    if _logging_configured:
        return

    logger = logging.getLogger()
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        console = logging.StreamHandler()
        console.setLevel(logging.INFO)
        console.setFormatter(logging.Formatter('%(name)-12s: %(levelname)-8s %(message)s'))
        logger.addHandler(console)

    _logging_configured = True


def shift_dataframe(shift: EmployeeShift) -> pd.DataFrame:
    """Render one shift as a day x slot table of marks."""
    data = []
    for day in WEEKDAYS:
        for slot in TIME_SLOTS:
            data.append({
                "day": day,
                "slot": slot,
                "mark": ShiftMark(shift.schedule[day][slot]).value or "-",
            })
    df = pd.DataFrame(data)
    df_wide = pd.pivot(df, index="day", columns="slot", values="mark")
    return df_wide.loc[WEEKDAYS, TIME_SLOTS]


def fallback_shifts(employees: list[Employee]) -> list[EmployeeShift]:
    """Full-width empty schedules so downstream consumers still get one record per employee."""
    return [
        EmployeeShift(employee_id=e.id, employee_name=e.name, schedule=empty_schedule())
        for e in employees
    ]


def generate_all(
    employees: list[Employee],
    constraints: list[Constraint],
    on_progress: Optional[ProgressCallback] = None,
    solver_type: SolverType | str | None = None,
    config: Optional[SolverConfig] = None,
) -> GenerationResult:
    """
    Generate a weekly schedule for every employee.

    Args:
        employees: Employees with their weekly-hour targets
        constraints: Free-text constraints, interpreted once for the whole run
        on_progress: Optional observer called with (employee_name, percent)
        solver_type: Which strategy to use ("heuristic", "remote"); defaults to SOLVER_TYPE
        config: Solver configuration; defaults to the environment settings

    Returns:
        GenerationResult with one shift per employee. A failed remote run
        yields empty schedules and status FALLBACK.

    Raises:
        InfeasibleScheduleError: If the remote solver reports no valid assignment
    """
    setup_logging()

    solver_type = solver_type or app_config.SOLVER_TYPE
    config = config or app_config.get_solver_config()

    rules = interpret(constraints)
    logger.info(f"Generating schedules for {len(employees)} employees using {solver_type}")
    logger.debug(f"Structured rules: {rules.to_dict()}")

    problem = GenerationProblem(employees=employees, constraints=constraints, rules=rules)
    solver = create_solver(solver_type)

    try:
        result = solver.solve(problem, config, on_progress)
    except RemoteSolverError as e:
        logger.error(f"Remote solver failed, falling back to empty schedules: {e}")
        if on_progress:
            on_progress(employees[-1].name if employees else "", 100.0)
        return GenerationResult(
            status=SolverStatus.FALLBACK,
            shifts=fallback_shifts(employees),
            message=FALLBACK_MESSAGE,
        )

    for shift in result.shifts:
        logger.debug(f"Schedule for {shift.employee_name}:\n{shift_dataframe(shift)}")

    logger.info(f"Generated {len(result.shifts)} schedules in {result.solve_time:.2f}s")
    return result


def run_schedule(
    employees: list[Employee],
    constraints: list[Constraint],
    on_progress: Optional[ProgressCallback] = None,
    solver_type: SolverType | str | None = None,
    config: Optional[SolverConfig] = None,
) -> tuple[GenerationResult, dict[str, list[ConstraintReport]], dict[str, dict[int, float]]]:
    """
    Generate, evaluate and aggregate in one pass.

    Returns:
        (generation result, employee_id -> compliance reports, coverage map)
    """
    result = generate_all(employees, constraints, on_progress, solver_type, config)
    compliance = ComplianceEngine().evaluate_all(constraints, result.shifts)
    coverage = aggregate(result.shifts)

    violations = sum(1 for reports in compliance.values() for r in reports if not r.meet)
    if violations:
        logger.warning(f"{violations} constraint checks not met across {len(result.shifts)} employees")

    return result, compliance, coverage
