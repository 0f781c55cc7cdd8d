"""Unit tests for remote solver delegation.

The HTTP exchange is mocked; response translation is tested directly.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest

from grid import ShiftMark, total_hours
from solvers import (
    GenerationProblem,
    InfeasibleScheduleError,
    RemoteSolver,
    RemoteSolverError,
    SolverConfig,
    SolverStatus,
)
from solvers.remote_solver import DEFAULT_INFEASIBLE_REASON, build_request_body, parse_response


@pytest.fixture
def employees(make_employee):
    return [make_employee("e1", "Alice", 20), make_employee("e2", "Bob", 10)]


@pytest.fixture
def remote_config():
    return SolverConfig(remote_url="http://solver.test/solve", remote_timeout=5)


@pytest.fixture
def feasible_body():
    return {
        "schedule": {
            "e1": {"name": "Alice", "schedule": {"MONDAY": ["09", "10", "11"], "friday": ["07"]}},
            "e2": {"name": "Bob", "schedule": {"SUNDAY": ["23"]}},
        },
        "_status": {"is_feasible": True},
    }


class TestBuildRequestBody:

    def test_only_formalised_constraints_are_sent(self, employees, make_constraint):
        problem = GenerationProblem(
            employees=employees,
            constraints=[
                make_constraint("No one can work more than 5 days per week", structured={"maxDaysPerWeek": 5}),
                make_constraint("Be kind"),
            ],
        )

        body = build_request_body(problem)

        assert body["constraints"] == [{"maxDaysPerWeek": 5}]
        assert [e["id"] for e in body["employees"]] == ["e1", "e2"]
        assert body["employees"][0]["hours"] == 20


class TestParseResponse:

    def test_hour_labels_become_full_slots(self, employees, feasible_body):
        shifts = parse_response(200, feasible_body, employees)

        alice, bob = shifts
        assert [alice.schedule["MONDAY"][s] for s in (9, 10, 11)] == [ShiftMark.FULL] * 3
        assert alice.schedule["FRIDAY"][7] == ShiftMark.FULL
        assert total_hours(alice.schedule) == 4
        assert bob.schedule["SUNDAY"][23] == ShiftMark.FULL
        assert total_hours(bob.schedule) == 1

    def test_missing_employee_gets_empty_schedule(self, employees, feasible_body):
        del feasible_body["schedule"]["e2"]

        shifts = parse_response(200, feasible_body, employees)

        assert [s.employee_id for s in shifts] == ["e1", "e2"]
        assert total_hours(shifts[1].schedule) == 0

    def test_client_error_is_infeasible_with_verbatim_reason(self, employees):
        with pytest.raises(InfeasibleScheduleError) as exc_info:
            parse_response(400, {"error": "Not enough staff for Sunday"}, employees)

        assert exc_info.value.reason == "Not enough staff for Sunday"
        assert str(exc_info.value) == "Not enough staff for Sunday"

    def test_not_feasible_flag_on_success(self, employees, feasible_body):
        feasible_body["_status"]["is_feasible"] = False

        with pytest.raises(InfeasibleScheduleError) as exc_info:
            parse_response(200, feasible_body, employees)

        assert exc_info.value.reason == DEFAULT_INFEASIBLE_REASON

    def test_server_error(self, employees):
        with pytest.raises(RemoteSolverError):
            parse_response(503, None, employees)

    @pytest.mark.parametrize("body", [
        None,
        [],
        {"_status": {"is_feasible": True}},
        {"schedule": {"e1": {"schedule": {"FUNDAY": ["09"]}}}},
        {"schedule": {"e1": {"schedule": {"MONDAY": ["06"]}}}},
        {"schedule": {"e1": {"schedule": {"MONDAY": ["nine"]}}}},
        {"schedule": {}, "_status": "ok"},
        {"schedule": {"e1": {"schedule": {"MONDAY": None}}}, "_status": {"is_feasible": True}},
        {"schedule": {"e1": {"schedule": {"MONDAY": 9}}}},
    ])
    def test_malformed_body(self, employees, body):
        with pytest.raises(RemoteSolverError):
            parse_response(200, body, employees)


class TestRemoteSolve:

    def test_successful_exchange(self, employees, remote_config, feasible_body):
        events = []
        with patch.object(RemoteSolver, "_exchange", new=AsyncMock(return_value=(200, feasible_body))) as mock_exchange:
            result = RemoteSolver().solve(
                GenerationProblem(employees=employees),
                remote_config,
                lambda name, percent: events.append((name, percent)),
            )

        assert result.status == SolverStatus.COMPLETED
        assert len(result.shifts) == 2
        mock_exchange.assert_awaited_once()
        url, payload, timeout = mock_exchange.await_args.args
        assert url == "http://solver.test/solve"
        assert timeout == 5
        assert set(payload) == {"employees", "constraints"}
        assert events == [("Alice", 0.0), ("Bob", 50.0), ("Bob", 100.0)]

    @pytest.mark.parametrize("error", [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
    ])
    def test_transport_failure(self, employees, remote_config, error):
        with patch.object(RemoteSolver, "_exchange", new=AsyncMock(side_effect=error)):
            with pytest.raises(RemoteSolverError):
                RemoteSolver().solve(GenerationProblem(employees=employees), remote_config)

    def test_missing_url(self, employees):
        with pytest.raises(RemoteSolverError):
            RemoteSolver().solve(GenerationProblem(employees=employees), SolverConfig())

    def test_infeasible_propagates(self, employees, remote_config):
        response = (422, {"error": "Max days conflicts with min days"})
        with patch.object(RemoteSolver, "_exchange", new=AsyncMock(return_value=response)):
            with pytest.raises(InfeasibleScheduleError, match="Max days conflicts with min days"):
                RemoteSolver().solve(GenerationProblem(employees=employees), remote_config)
