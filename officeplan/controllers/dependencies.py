"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request, status

from officeplan.services.matching_service import SeatingOptimizationService
from officeplan.services.plan_service import SeatingPlanService
from officeplan.services.report_service import ReportService
from officeplan.services.simulation_service import SimulationService


def _get_state_service(request: Request, attribute: str, label: str) -> Any:
    service = getattr(request.app.state, attribute, None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} service is not initialized",
        )
    return service


def get_optimization_service(request: Request) -> SeatingOptimizationService:
    return _get_state_service(request, "optimization_service", "Seating optimization")


def get_plan_service(request: Request) -> SeatingPlanService:
    return _get_state_service(request, "plan_service", "Seating plan")


def get_simulation_service(request: Request) -> SimulationService:
    return _get_state_service(request, "simulation_service", "Simulation")


def get_report_service(request: Request) -> ReportService:
    return _get_state_service(request, "report_service", "Report")
