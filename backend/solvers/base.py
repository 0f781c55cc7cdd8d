"""Base protocol for schedule generation strategies."""

from typing import Optional, Protocol

from .types import GenerationProblem, GenerationResult, ProgressCallback, SolverConfig


class ShiftGenerator(Protocol):
    """Protocol defining the interface for schedule generators."""

    def solve(
        self,
        problem: GenerationProblem,
        config: SolverConfig,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GenerationResult:
        """
        Generate one weekly schedule per employee.

        Args:
            problem: Employees, constraints and their interpreted rules
            config: Solver configuration parameters
            on_progress: Optional observer called with (employee_name, percent)

        Returns:
            GenerationResult holding a shift for every employee, in input order

        Raises:
            InfeasibleScheduleError: If the strategy proves no assignment exists
            RemoteSolverError: If a remote strategy fails for any other reason
        """
        ...
