"""HTTP controller layer for seating optimization and what-if simulation."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator

from officeplan.controllers.dependencies import (
    get_optimization_service,
    get_simulation_service,
)
from officeplan.domain.constraints import WEIGHT_MAX, WEIGHT_MIN
from officeplan.domain.models import AlgorithmParameters, SeatingPlan
from officeplan.services.matching_service import (
    SeatingOptimizationService,
    SeatingValidationError,
    SolverDependencyError,
)
from officeplan.services.simulation_service import SimulationService, SimulationValidationError
from officeplan.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["seating"])


class AlgorithmParametersPayload(BaseModel):
    """Slider weights, each an integer percentage."""

    team_proximity_weight: int = Field(ge=WEIGHT_MIN, le=WEIGHT_MAX)
    tech_stack_weight: int = Field(ge=WEIGHT_MIN, le=WEIGHT_MAX)
    cross_team_weight: int = Field(ge=WEIGHT_MIN, le=WEIGHT_MAX)
    deadline_weight: int = Field(ge=WEIGHT_MIN, le=WEIGHT_MAX)

    def to_domain(self) -> AlgorithmParameters:
        return AlgorithmParameters(
            team_proximity_weight=self.team_proximity_weight,
            tech_stack_weight=self.tech_stack_weight,
            cross_team_weight=self.cross_team_weight,
            deadline_weight=self.deadline_weight,
        )

    @classmethod
    def from_domain(cls, params: AlgorithmParameters) -> "AlgorithmParametersPayload":
        return cls(**params.to_dict())


class SeatAssignmentResponse(BaseModel):
    employee_id: str
    seat_id: str
    reason: str
    score: float = Field(ge=0.0)


class SeatingPlanResponse(BaseModel):
    plan_id: int | None = None
    name: str
    description: str
    parameters: AlgorithmParametersPayload
    assignments: list[SeatAssignmentResponse]
    optimization_score: int = Field(ge=0, le=100)
    is_active: bool
    created_by: str
    created_at: str | None = None
    effective_from: str | None = None
    updated_at: str | None = None
    unassigned_employee_ids: list[str]
    unassigned_seat_ids: list[str]


class OptimizeSeatingRequest(BaseModel):
    created_by: str = Field(min_length=1, max_length=128)
    parameters: AlgorithmParametersPayload | None = None
    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    solver: str | None = None

    @field_validator("created_by")
    @classmethod
    def validate_created_by(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("created_by must be non-empty")
        return stripped

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("name must be non-empty when provided")
        return value


class PreviewSeatingRequest(BaseModel):
    parameters: AlgorithmParametersPayload | None = None
    solver: str | None = None


class OptimizeSeatingResponse(BaseModel):
    plan: SeatingPlanResponse
    solver: str
    unassigned_employee_ids: list[str]
    unassigned_seat_ids: list[str]


class SimulateRequest(BaseModel):
    candidate: AlgorithmParametersPayload
    baseline: AlgorithmParametersPayload | None = None
    solver: str | None = None


class SimulationMetricsResponse(BaseModel):
    optimization_score: int = Field(ge=0, le=100)
    assigned_count: int = Field(ge=0)
    unassigned_employee_count: int = Field(ge=0)
    unassigned_seat_count: int = Field(ge=0)
    average_pair_score: float = Field(ge=0.0)


class SimulationDeltaResponse(BaseModel):
    optimization_score_change: int
    assigned_change: int
    unassigned_employee_change: int
    average_pair_score_change: float


class SimulateResponse(BaseModel):
    baseline_source: str
    baseline_parameters: AlgorithmParametersPayload
    candidate_parameters: AlgorithmParametersPayload
    baseline: SimulationMetricsResponse
    simulation: SimulationMetricsResponse
    delta: SimulationDeltaResponse
    changed_seat_count: int = Field(ge=0)


def plan_to_response(plan: SeatingPlan) -> SeatingPlanResponse:
    return SeatingPlanResponse(
        plan_id=plan.plan_id,
        name=plan.name,
        description=plan.description,
        parameters=AlgorithmParametersPayload.from_domain(plan.parameters),
        assignments=[
            SeatAssignmentResponse(
                employee_id=item.employee_id,
                seat_id=item.seat_id,
                reason=item.reason,
                score=item.score,
            )
            for item in plan.assignments
        ],
        optimization_score=plan.optimization_score,
        is_active=plan.is_active,
        created_by=plan.created_by,
        created_at=plan.created_at,
        effective_from=plan.effective_from,
        updated_at=plan.updated_at,
        unassigned_employee_ids=list(plan.unassigned_employee_ids),
        unassigned_seat_ids=list(plan.unassigned_seat_ids),
    )


def _run_optimization(
    service: SeatingOptimizationService,
    *,
    created_by: str,
    parameters: AlgorithmParametersPayload | None,
    name: str | None,
    description: str | None,
    solver: str | None,
    persist_outputs: bool,
) -> OptimizeSeatingResponse:
    try:
        result = service.optimize_seating(
            created_by=created_by,
            parameters=parameters.to_domain() if parameters is not None else None,
            name=name,
            description=description,
            solver_name=solver,
            persist_outputs=persist_outputs,
        )
        return OptimizeSeatingResponse(
            plan=plan_to_response(result.plan),
            solver=result.solver,
            unassigned_employee_ids=result.unassigned_employee_ids,
            unassigned_seat_ids=result.unassigned_seat_ids,
        )
    except SeatingValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except SolverDependencyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected seating optimization failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Optimization failed: {exc}",
        ) from exc


@router.get(
    "/algorithm_parameters/default",
    response_model=AlgorithmParametersPayload,
    status_code=status.HTTP_200_OK,
)
async def get_default_parameters(
    service: SeatingOptimizationService = Depends(get_optimization_service),
) -> AlgorithmParametersPayload:
    return AlgorithmParametersPayload.from_domain(service.default_parameters())


@router.post(
    "/optimize_seating",
    response_model=OptimizeSeatingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def optimize_seating(
    payload: OptimizeSeatingRequest,
    service: SeatingOptimizationService = Depends(get_optimization_service),
) -> OptimizeSeatingResponse:
    """Generate a new inactive seating plan from current workspace data and store it."""
    return _run_optimization(
        service,
        created_by=payload.created_by,
        parameters=payload.parameters,
        name=payload.name,
        description=payload.description,
        solver=payload.solver,
        persist_outputs=True,
    )


@router.post(
    "/preview_seating",
    response_model=OptimizeSeatingResponse,
    status_code=status.HTTP_200_OK,
)
async def preview_seating(
    payload: PreviewSeatingRequest,
    service: SeatingOptimizationService = Depends(get_optimization_service),
) -> OptimizeSeatingResponse:
    """Same as /optimize_seating but nothing is written."""
    return _run_optimization(
        service,
        created_by="preview",
        parameters=payload.parameters,
        name=None,
        description=None,
        solver=payload.solver,
        persist_outputs=False,
    )


@router.post(
    "/simulate",
    response_model=SimulateResponse,
    status_code=status.HTTP_200_OK,
)
async def simulate(
    payload: SimulateRequest,
    service: SimulationService = Depends(get_simulation_service),
) -> SimulateResponse:
    """Compare two weight settings over the same snapshot without persistence."""
    try:
        result = service.compare_parameters(
            candidate=payload.candidate.to_domain(),
            baseline=payload.baseline.to_domain() if payload.baseline is not None else None,
            solver_name=payload.solver,
        )
        return SimulateResponse(**result)
    except SimulationValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except SolverDependencyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected simulation failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Optimization failed: {exc}",
        ) from exc
