"""Integration tests for generation, compliance and coverage working together."""

from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from compliance import ComplianceEngine, evaluate
from grid import WEEKDAYS, Constraint, day_hours, total_hours, working_days
from headcount import aggregate
from model_run import FALLBACK_MESSAGE, generate_all, run_schedule
from solvers import InfeasibleScheduleError, RemoteSolver, SolverConfig, SolverStatus


# ============================================================================
# Fixtures
# ============================================================================


DEFAULT_RULE_TEXTS = [
    "No one can work more than 7 days per week",
    "No one can work more than 12 hours per day",
]


@pytest.fixture
def constraints():
    return [
        Constraint(id="c1", text="No one can work more than 5 days per week"),
        Constraint(id="c2", text="No one can work more than 8 hours per day"),
        Constraint(id="c3", text="Employees should greet customers"),
    ]


@pytest.fixture
def staff(make_employee):
    return [
        make_employee("e1", "Alice", 40),
        make_employee("e2", "Bob", 20),
        make_employee("e3", "Carol", "37.5 hrs"),
        make_employee("e4", "Dan", 0),
    ]


class TestHeuristicPipeline:

    def test_twenty_hours_without_constraints(self, make_employee):
        result = generate_all([make_employee(hours=20)], [], solver_type="heuristic", config=SolverConfig(seed=11))

        shift = result.shifts[0]
        assert abs(total_hours(shift.schedule) - 20) <= 0.5

        for text in DEFAULT_RULE_TEXTS:
            assert evaluate(Constraint(id="d", text=text), shift).meet is True

    @pytest.mark.parametrize("seed", range(10))
    def test_generated_shifts_respect_maxima(self, staff, constraints, seed):
        result = generate_all(staff, constraints, solver_type="heuristic", config=SolverConfig(seed=seed))

        assert result.status == SolverStatus.COMPLETED
        assert len(result.shifts) == len(staff)
        for shift in result.shifts:
            assert working_days(shift.schedule) <= 5
            assert all(day_hours(shift.schedule, d) <= 8 for d in WEEKDAYS)

        reports = ComplianceEngine().evaluate_all(constraints, result.shifts)
        assert all(r.meet for employee_reports in reports.values() for r in employee_reports)

    def test_run_schedule_returns_all_outputs(self, staff, constraints):
        events = []

        result, compliance, coverage = run_schedule(
            staff,
            constraints,
            on_progress=lambda name, percent: events.append((name, percent)),
            solver_type="heuristic",
            config=SolverConfig(seed=5),
        )

        assert set(compliance) == {"e1", "e2", "e3", "e4"}
        assert [r.id for r in compliance["e1"]] == ["c1", "c2", "c3"]
        assert coverage == aggregate(result.shifts)
        assert sum(sum(slots.values()) for slots in coverage.values()) == pytest.approx(
            sum(s.total_hours for s in result.shifts)
        )
        assert events[-1][1] == 100
        assert [p for _, p in events] == sorted(p for _, p in events)
        assert result.shifts[3].total_hours == 0


class TestRemotePipeline:

    @pytest.fixture
    def remote_config(self):
        return SolverConfig(remote_url="http://solver.test/solve")

    def test_transport_failure_falls_back_to_empty_schedules(self, staff, constraints, remote_config):
        events = []
        with patch.object(
            RemoteSolver, "_exchange", new=AsyncMock(side_effect=aiohttp.ClientConnectionError("down"))
        ):
            result = generate_all(
                staff,
                constraints,
                on_progress=lambda name, percent: events.append(percent),
                solver_type="remote",
                config=remote_config,
            )

        assert result.status == SolverStatus.FALLBACK
        assert result.message == FALLBACK_MESSAGE
        assert [s.employee_id for s in result.shifts] == ["e1", "e2", "e3", "e4"]
        for shift in result.shifts:
            assert sum(len(slots) for slots in shift.schedule.values()) == 119
            assert shift.total_hours == 0
        assert events[-1] == 100

    @pytest.mark.parametrize("body", [
        {"schedule": {"e1": {"name": "Alice", "schedule": {"MONDAY": None}}}, "_status": {"is_feasible": True}},
        {"schedule": {}, "_status": "ok"},
    ])
    def test_malformed_response_falls_back(self, staff, constraints, remote_config, body):
        with patch.object(RemoteSolver, "_exchange", new=AsyncMock(return_value=(200, body))):
            result = generate_all(staff, constraints, solver_type="remote", config=remote_config)

        assert result.status == SolverStatus.FALLBACK
        assert all(shift.total_hours == 0 for shift in result.shifts)

    def test_unconfigured_remote_falls_back(self, staff, constraints):
        result = generate_all(staff, constraints, solver_type="remote", config=SolverConfig())

        assert result.status == SolverStatus.FALLBACK

    def test_infeasible_is_not_downgraded(self, staff, constraints, remote_config):
        body = {"schedule": {}, "_status": {"is_feasible": False}, "error": "Too few staff"}
        with patch.object(RemoteSolver, "_exchange", new=AsyncMock(return_value=(200, body))):
            with pytest.raises(InfeasibleScheduleError, match="Too few staff"):
                generate_all(staff, constraints, solver_type="remote", config=remote_config)

    def test_remote_shifts_are_evaluated(self, make_employee, remote_config):
        body = {
            "schedule": {"e1": {"name": "Alice", "schedule": {day: ["09", "10"] for day in WEEKDAYS}}},
            "_status": {"is_feasible": True},
        }
        constraints = [Constraint(id="c1", text="No one can work more than 5 days per week")]

        with patch.object(RemoteSolver, "_exchange", new=AsyncMock(return_value=(200, body))):
            result, compliance, coverage = run_schedule(
                [make_employee("e1", "Alice", 14)], constraints, solver_type="remote", config=remote_config
            )

        assert result.status == SolverStatus.COMPLETED
        assert result.shifts[0].total_hours == 14
        assert compliance["e1"][0].meet is False
        assert "7" in compliance["e1"][0].explanation
        assert coverage["MONDAY"][9] == 1
