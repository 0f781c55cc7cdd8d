"""Interchangeable schedule generation strategies."""

from .types import (
    ProgressCallback,
    SolverType,
    SolverStatus,
    SolverConfig,
    GenerationProblem,
    GenerationResult,
)
from .errors import SchedulingError, InfeasibleScheduleError, RemoteSolverError
from .base import ShiftGenerator
from .heuristic_solver import HeuristicSolver
from .remote_solver import RemoteSolver


def create_solver(solver_type: SolverType | str) -> ShiftGenerator:
    """
    Factory function to create a generator instance.

    Args:
        solver_type: The type of generator to create (SolverType enum or string)

    Returns:
        A generator implementing the ShiftGenerator protocol

    Raises:
        ValueError: If solver_type is not recognized
    """
    if isinstance(solver_type, str):
        solver_type = SolverType(solver_type.lower())

    if solver_type == SolverType.HEURISTIC:
        return HeuristicSolver()
    elif solver_type == SolverType.REMOTE:
        return RemoteSolver()
    else:
        raise ValueError(f"Unknown solver type: {solver_type}")


__all__ = [
    "ProgressCallback",
    "SolverType",
    "SolverStatus",
    "SolverConfig",
    "GenerationProblem",
    "GenerationResult",
    "SchedulingError",
    "InfeasibleScheduleError",
    "RemoteSolverError",
    "ShiftGenerator",
    "HeuristicSolver",
    "RemoteSolver",
    "create_solver",
]
