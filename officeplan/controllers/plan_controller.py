"""HTTP controller layer for stored seating plans and reports."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from officeplan.controllers.dependencies import get_plan_service, get_report_service
from officeplan.controllers.seating_controller import (
    AlgorithmParametersPayload,
    SeatingPlanResponse,
    plan_to_response,
)
from officeplan.services.plan_service import (
    PlanNotFoundError,
    PlanValidationError,
    SeatingPlanService,
)
from officeplan.services.report_service import ReportService
from officeplan.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["seating_plans"])


class SeatStatusCounts(BaseModel):
    available: int = Field(ge=0)
    occupied: int = Field(ge=0)
    reserved: int = Field(ge=0)
    maintenance: int = Field(ge=0)


class FloorStatusCounts(SeatStatusCounts):
    floor_id: str


class SeatUtilizationResponse(BaseModel):
    total_seats: int = Field(ge=0)
    by_status: SeatStatusCounts
    utilization_rate: float = Field(ge=0.0, le=1.0)
    by_floor: list[FloorStatusCounts]


class ZoneSummaryResponse(BaseModel):
    zone_id: str
    zone_name: str
    zone_type: str
    assigned_seats: int = Field(ge=0)
    average_score: float = Field(ge=0.0)


class PlanSummaryResponse(BaseModel):
    plan_id: int
    plan_name: str
    optimization_score: int = Field(ge=0, le=100)
    total_assignments: int = Field(ge=0)
    unassigned_employee_count: int = Field(ge=0)
    zones: list[ZoneSummaryResponse]


def _not_found(exc: PlanNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get(
    "/seating_plans",
    response_model=list[SeatingPlanResponse],
    status_code=status.HTTP_200_OK,
)
async def list_seating_plans(
    service: SeatingPlanService = Depends(get_plan_service),
) -> list[SeatingPlanResponse]:
    return [plan_to_response(plan) for plan in service.list_plans()]


@router.get(
    "/seating_plans/active",
    response_model=SeatingPlanResponse | None,
    status_code=status.HTTP_200_OK,
)
async def get_active_seating_plan(
    service: SeatingPlanService = Depends(get_plan_service),
) -> SeatingPlanResponse | None:
    """Return the single active plan, or null when none has been activated."""
    plan = service.get_active_plan()
    return plan_to_response(plan) if plan is not None else None


@router.get(
    "/seating_plans/{plan_id}",
    response_model=SeatingPlanResponse,
    status_code=status.HTTP_200_OK,
)
async def get_seating_plan(
    plan_id: int,
    service: SeatingPlanService = Depends(get_plan_service),
) -> SeatingPlanResponse:
    try:
        return plan_to_response(service.get_plan(plan_id))
    except PlanNotFoundError as exc:
        raise _not_found(exc) from exc


@router.post(
    "/seating_plans/{plan_id}/activate",
    response_model=SeatingPlanResponse,
    status_code=status.HTTP_200_OK,
)
async def activate_seating_plan(
    plan_id: int,
    service: SeatingPlanService = Depends(get_plan_service),
) -> SeatingPlanResponse:
    """Make this plan the only active one."""
    try:
        return plan_to_response(service.activate_plan(plan_id))
    except PlanNotFoundError as exc:
        raise _not_found(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected plan activation failure | plan_id=%s", plan_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to activate seating plan",
        ) from exc


@router.put(
    "/seating_plans/{plan_id}/parameters",
    response_model=SeatingPlanResponse,
    status_code=status.HTTP_200_OK,
)
async def update_seating_plan_parameters(
    plan_id: int,
    payload: AlgorithmParametersPayload,
    service: SeatingPlanService = Depends(get_plan_service),
) -> SeatingPlanResponse:
    """Store new weights on a plan without recomputing its assignments."""
    try:
        return plan_to_response(
            service.update_algorithm_parameters(plan_id, payload.to_domain())
        )
    except PlanValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except PlanNotFoundError as exc:
        raise _not_found(exc) from exc


@router.delete(
    "/seating_plans/{plan_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_seating_plan(
    plan_id: int,
    service: SeatingPlanService = Depends(get_plan_service),
) -> Response:
    try:
        service.delete_plan(plan_id)
    except PlanNotFoundError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/seating_plans/{plan_id}/summary",
    response_model=PlanSummaryResponse,
    status_code=status.HTTP_200_OK,
)
async def get_seating_plan_summary(
    plan_id: int,
    service: ReportService = Depends(get_report_service),
) -> PlanSummaryResponse:
    try:
        return PlanSummaryResponse(**service.summarize_plan(plan_id))
    except PlanNotFoundError as exc:
        raise _not_found(exc) from exc


@router.get(
    "/reports/seat_utilization",
    response_model=SeatUtilizationResponse,
    status_code=status.HTTP_200_OK,
)
async def get_seat_utilization(
    service: ReportService = Depends(get_report_service),
) -> SeatUtilizationResponse:
    return SeatUtilizationResponse(**service.seat_utilization())
