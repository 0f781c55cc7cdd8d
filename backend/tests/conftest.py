import pytest

from grid import Constraint, Employee, EmployeeShift, ShiftMark, empty_schedule


class ScriptedRandom:
    """Random source returning either bound of each randint range."""

    def __init__(self, pick: str = "low"):
        self.pick = pick
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return a if self.pick == "low" else b


class QueuedRandom:
    """Random source returning queued values in order."""

    def __init__(self, values: list[int]):
        self.values = list(values)

    def randint(self, a: int, b: int) -> int:
        value = self.values.pop(0)
        assert a <= value <= b, f"{value} outside [{a}, {b}]"
        return value


@pytest.fixture
def make_employee():
    """Factory to create Employee objects."""
    def _make_employee(
        employee_id: str = "e1",
        name: str = "Alice",
        hours=20,
        **kwargs
    ) -> Employee:
        return Employee(id=employee_id, name=name, hours=hours, **kwargs)
    return _make_employee


@pytest.fixture
def make_constraint():
    """Factory to create Constraint objects."""
    counter = {"n": 0}

    def _make_constraint(text: str, structured: dict = None, constraint_id: str = None) -> Constraint:
        counter["n"] += 1
        return Constraint(
            id=constraint_id or f"c{counter['n']}",
            text=text,
            structured=structured,
        )
    return _make_constraint


@pytest.fixture
def make_shift():
    """Factory to create EmployeeShift objects from day -> {slot: mark} maps."""
    def _make_shift(
        cells: dict[str, dict[int, ShiftMark]] = None,
        employee_id: str = "e1",
        employee_name: str = "Alice",
    ) -> EmployeeShift:
        schedule = empty_schedule()
        for day, marks in (cells or {}).items():
            for slot, mark in marks.items():
                schedule[day][slot] = mark
        return EmployeeShift(employee_id=employee_id, employee_name=employee_name, schedule=schedule)
    return _make_shift


@pytest.fixture
def block():
    """Consecutive FULL marks starting at a slot."""
    def _block(start: int, hours: int) -> dict[int, ShiftMark]:
        return {slot: ShiftMark.FULL for slot in range(start, start + hours)}
    return _block


@pytest.fixture
def low_random():
    """Always picks the shortest block and the earliest start."""
    return ScriptedRandom("low")


@pytest.fixture
def high_random():
    """Always picks the longest block and the latest start."""
    return ScriptedRandom("high")


@pytest.fixture
def queued_random():
    """Factory for a random source replaying fixed values."""
    return QueuedRandom
