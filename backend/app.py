from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

import config as app_config
from compliance import ComplianceEngine
from headcount import aggregate
from model_run import run_schedule, setup_logging
from rules import interpret
from schemas import (
    CoverageRequest,
    CoverageResponse,
    EvaluateRequest,
    EvaluateResponse,
    GenerateRequest,
    GenerateResponse,
    InterpretRequest,
    ProgressEvent,
    ShiftSnapshot,
    SnapshotValidationError,
    StructuredRulesSchema,
    load_snapshot,
)
from solvers import InfeasibleScheduleError, SolverType

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if app_config.SOLVER_TYPE == SolverType.REMOTE.value:
        app_config.validate_remote_config()
    yield


app = FastAPI(title="shiftScheduler", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _reports_to_dict(compliance: dict) -> dict:
    return {
        employee_id: [r.to_dict() for r in reports]
        for employee_id, reports in compliance.items()
    }


@app.get("/health")
async def health():
    return {"status": "ok", "solver_type": app_config.SOLVER_TYPE}


@app.post("/constraints/interpret", response_model=StructuredRulesSchema)
async def interpret_ep(request: InterpretRequest) -> StructuredRulesSchema:
    rules = interpret([c.to_constraint() for c in request.constraints])
    return StructuredRulesSchema(**rules.to_dict())


# Plain def: the remote solver blocks on its own event loop, so this runs in the threadpool
@app.post("/schedule/generate", response_model=GenerateResponse)
def generate_ep(request: GenerateRequest) -> GenerateResponse:
    if not request.employees:
        raise HTTPException(status_code=400, detail="No employees to generate schedule for")

    employees = [e.to_employee() for e in request.employees]
    constraints = [c.to_constraint() for c in request.constraints]

    progress: list[ProgressEvent] = []

    def on_progress(employee_name: str, percent: float) -> None:
        progress.append(ProgressEvent(employee_name=employee_name, percent=percent))

    try:
        result, compliance, coverage = run_schedule(
            employees,
            constraints,
            on_progress=on_progress,
            solver_type=request.solver_type,
            config=app_config.get_solver_config(seed=request.seed),
        )
    except InfeasibleScheduleError as e:
        raise HTTPException(status_code=422, detail=e.reason)

    return GenerateResponse(
        status=result.status.value,
        message=result.message,
        shifts=[s.to_dict() for s in result.shifts],
        compliance=_reports_to_dict(compliance),
        coverage=coverage,
        progress=progress,
    )


@app.post("/schedule/evaluate", response_model=EvaluateResponse)
async def evaluate_ep(request: EvaluateRequest) -> EvaluateResponse:
    constraints = [c.to_constraint() for c in request.constraints]
    shifts = [s.to_shift() for s in request.shifts]
    compliance = ComplianceEngine().evaluate_all(constraints, shifts)
    return EvaluateResponse(compliance=_reports_to_dict(compliance))


@app.post("/schedule/coverage", response_model=CoverageResponse)
async def coverage_ep(request: CoverageRequest) -> CoverageResponse:
    coverage = aggregate([s.to_shift() for s in request.shifts])
    peak = max(hours for slots in coverage.values() for hours in slots.values())
    return CoverageResponse(coverage=coverage, peak=peak)


@app.post("/snapshot/validate", response_model=ShiftSnapshot)
async def validate_snapshot_ep(document: dict) -> ShiftSnapshot:
    try:
        return load_snapshot(document)
    except SnapshotValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
