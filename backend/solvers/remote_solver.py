"""Remote solver delegation: one request/response exchange per batch."""

import asyncio
import logging
import time
from typing import Any, Optional

import aiohttp

from grid import TIME_SLOTS, WEEKDAYS, Employee, EmployeeShift, ShiftMark, empty_schedule

from .errors import InfeasibleScheduleError, RemoteSolverError
from .types import (
    GenerationProblem,
    GenerationResult,
    ProgressCallback,
    SolverConfig,
    SolverStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_INFEASIBLE_REASON = "The schedule is not feasible under the given constraints"


def build_request_body(problem: GenerationProblem) -> dict:
    """Request payload: all employees and the formalised constraints only."""
    return {
        "employees": [e.to_dict() for e in problem.employees],
        "constraints": [c.structured for c in problem.constraints if c.structured],
    }


def parse_response(
    status: int,
    body: Any,
    employees: list[Employee],
) -> list[EmployeeShift]:
    """
    Translate a remote solver response into shifts.

    Args:
        status: HTTP status code of the response
        body: Decoded JSON body
        employees: Employees sent in the request, in order

    Returns:
        One shift per employee, in request order

    Raises:
        InfeasibleScheduleError: On a 4xx response or when the solver reports
            the solution as not feasible
        RemoteSolverError: On any other unusable response
    """
    if 400 <= status < 500:
        reason = body.get("error") if isinstance(body, dict) else None
        raise InfeasibleScheduleError(reason or f"Remote solver rejected the request ({status})")

    if status != 200:
        raise RemoteSolverError(f"Remote solver returned HTTP {status}")

    if not isinstance(body, dict) or not isinstance(body.get("schedule"), dict):
        raise RemoteSolverError("Remote solver response has no schedule")

    solver_status = body.get("_status") or {}
    if not isinstance(solver_status, dict):
        raise RemoteSolverError("Remote solver response has a malformed _status")
    if solver_status.get("is_feasible") is False:
        raise InfeasibleScheduleError(body.get("error") or DEFAULT_INFEASIBLE_REASON)

    remote_schedule = body["schedule"]
    shifts = []
    for employee in employees:
        entry = remote_schedule.get(employee.id)
        schedule = empty_schedule()

        if entry is None:
            logger.warning(f"Remote solver returned no schedule for {employee.name} (ID: {employee.id})")
        elif not isinstance(entry, dict) or not isinstance(entry.get("schedule") or {}, dict):
            raise RemoteSolverError(f"Malformed remote schedule for employee {employee.id}")
        else:
            days = entry.get("schedule") or {}
            for day_name, hours in days.items():
                day = str(day_name).upper()
                if day not in WEEKDAYS:
                    raise RemoteSolverError(f"Unknown weekday in remote schedule: {day_name!r}")
                if not isinstance(hours, list):
                    raise RemoteSolverError(f"Hours for {day_name!r} are not a list: {hours!r}")
                for hour in hours:
                    try:
                        slot = int(hour)
                    except (TypeError, ValueError):
                        raise RemoteSolverError(f"Invalid hour label in remote schedule: {hour!r}")
                    if slot not in TIME_SLOTS:
                        raise RemoteSolverError(f"Hour {hour!r} is outside the scheduling window")
                    schedule[day][slot] = ShiftMark.FULL

        shifts.append(EmployeeShift(
            employee_id=employee.id,
            employee_name=employee.name,
            schedule=schedule,
        ))

    return shifts


class RemoteSolver:
    """Delegates the whole batch to an external solver service."""

    async def _exchange(self, url: str, payload: dict, timeout: float) -> tuple[int, Any]:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
            async with session.post(url, json=payload) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
                return response.status, body

    def solve(
        self,
        problem: GenerationProblem,
        config: SolverConfig,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        """Send the batch and wait for the full answer."""
        start_time = time.time()

        if not config.remote_url:
            raise RemoteSolverError("REMOTE_SOLVER_URL is not configured")

        total = len(problem.employees)
        if on_progress:
            for index, employee in enumerate(problem.employees):
                on_progress(employee.name, index / total * 100)

        payload = build_request_body(problem)
        try:
            status, body = asyncio.run(self._exchange(config.remote_url, payload, config.remote_timeout))
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteSolverError(f"Remote solver request failed: {e}") from e

        shifts = parse_response(status, body, problem.employees)

        if on_progress:
            last_name = problem.employees[-1].name if problem.employees else ""
            on_progress(last_name, 100.0)

        return GenerationResult(
            status=SolverStatus.COMPLETED,
            shifts=shifts,
            solve_time=time.time() - start_time,
        )
