"""Errors raised by generation strategies."""


class SchedulingError(Exception):
    """Base class for generation failures."""


class InfeasibleScheduleError(SchedulingError):
    """The solver computed that no valid assignment exists.

    Carries the human-readable reason reported upstream.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class RemoteSolverError(SchedulingError):
    """The remote solver could not be reached or returned an unusable answer."""
