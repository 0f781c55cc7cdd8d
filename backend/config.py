import os
from dotenv import load_dotenv

from solvers import SolverConfig

load_dotenv()

SOLVER_TYPE = os.getenv("SOLVER_TYPE", "heuristic")

REMOTE_SOLVER_URL = os.getenv("REMOTE_SOLVER_URL")
REMOTE_SOLVER_TIMEOUT = float(os.getenv("REMOTE_SOLVER_TIMEOUT", "30"))

SCHEDULER_SEED = os.getenv("SCHEDULER_SEED")
PROGRESS_DELAY = float(os.getenv("PROGRESS_DELAY", "0"))


def get_solver_config(seed: int | None = None) -> SolverConfig:
    """Solver configuration from the environment; an explicit seed wins."""
    if seed is None and SCHEDULER_SEED:
        seed = int(SCHEDULER_SEED)
    return SolverConfig(
        seed=seed,
        remote_url=REMOTE_SOLVER_URL,
        remote_timeout=REMOTE_SOLVER_TIMEOUT,
        progress_delay=PROGRESS_DELAY,
    )


def validate_remote_config() -> None:
    missing = []
    if not REMOTE_SOLVER_URL:
        missing.append("REMOTE_SOLVER_URL")

    if missing:
        raise RuntimeError(
            f"Missing required remote solver environment variables: {', '.join(missing)}. "
            "Please set these in your .env file."
        )
