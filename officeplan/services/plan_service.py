"""Seating plan aggregation and plan lifecycle operations."""

from __future__ import annotations

from typing import Optional, Sequence

from officeplan.domain.constraints import validate_algorithm_parameters
from officeplan.domain.models import (
    AlgorithmParameters,
    NormalizedDataset,
    SeatAssignment,
    SeatingPlan,
)
from officeplan.repository.data_repository import DataRepository
from officeplan.services.scoring import MAX_SUB_SCORE, score, zone_for_seat
from officeplan.utils.config import Settings, get_settings
from officeplan.utils.logger import get_logger


logger = get_logger(__name__)


class PlanNotFoundError(Exception):
    """Raised when a seating plan id does not exist."""


class PlanValidationError(Exception):
    """Raised when a plan lifecycle request is invalid."""


def compute_optimization_score(
    assignments: Sequence[SeatAssignment],
    dataset: NormalizedDataset,
    params: AlgorithmParameters,
) -> int:
    """Average re-scored assignment quality as a 0-100 percentage.

    Assignments whose employee or seat is no longer part of the dataset are
    skipped and do not count towards the denominator.
    """
    employees_by_id = dataset.employees_by_id
    seats_by_id = dataset.seats_by_id
    zones_by_id = dataset.zones_by_id

    total_score = 0.0
    max_possible_score = 0.0
    for assignment in assignments:
        employee = employees_by_id.get(assignment.employee_id)
        seat = seats_by_id.get(assignment.seat_id)
        if employee is None or seat is None:
            continue
        total_score += score(
            employee,
            seat,
            zone_for_seat(seat, zones_by_id),
            employees_by_id,
            params,
        )
        max_possible_score += MAX_SUB_SCORE

    if max_possible_score <= 0.0:
        return 0
    percentage = (total_score / max_possible_score) * 100
    return int(min(100, max(0, round(percentage))))


def build_plan(
    *,
    assignments: Sequence[SeatAssignment],
    params: AlgorithmParameters,
    name: str,
    description: str,
    created_by: str,
    dataset: NormalizedDataset,
    unassigned_employee_ids: Sequence[str] = (),
    unassigned_seat_ids: Sequence[str] = (),
) -> SeatingPlan:
    """Wrap one run's assignments into an inactive, not yet persisted plan."""
    optimization_score = compute_optimization_score(assignments, dataset, params)
    return SeatingPlan(
        name=name,
        description=description,
        parameters=params,
        assignments=tuple(assignments),
        optimization_score=optimization_score,
        created_by=created_by,
        is_active=False,
        unassigned_employee_ids=tuple(unassigned_employee_ids),
        unassigned_seat_ids=tuple(unassigned_seat_ids),
    )


class SeatingPlanService:
    """Plan lifecycle on top of the persistence layer."""

    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)

    def list_plans(self) -> list[SeatingPlan]:
        return self._repository.list_seating_plans()

    def get_plan(self, plan_id: int) -> SeatingPlan:
        plan = self._repository.get_seating_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(f"Seating plan {plan_id} does not exist")
        return plan

    def get_active_plan(self) -> Optional[SeatingPlan]:
        return self._repository.get_active_seating_plan()

    def activate_plan(self, plan_id: int) -> SeatingPlan:
        if not self._repository.activate_seating_plan(plan_id):
            raise PlanNotFoundError(f"Seating plan {plan_id} does not exist")
        logger.info("Seating plan activated | plan_id=%s", plan_id)
        return self.get_plan(plan_id)

    def update_algorithm_parameters(
        self,
        plan_id: int,
        params: AlgorithmParameters,
    ) -> SeatingPlan:
        """Store new weights on a plan; its assignments are left untouched."""
        try:
            validate_algorithm_parameters(params)
        except ValueError as exc:
            raise PlanValidationError(str(exc)) from exc
        if not self._repository.update_plan_parameters(plan_id, params):
            raise PlanNotFoundError(f"Seating plan {plan_id} does not exist")
        logger.info(
            "Seating plan parameters updated | plan_id=%s | parameters=%s",
            plan_id,
            params.to_dict(),
        )
        return self.get_plan(plan_id)

    def delete_plan(self, plan_id: int) -> None:
        if not self._repository.delete_seating_plan(plan_id):
            raise PlanNotFoundError(f"Seating plan {plan_id} does not exist")
        logger.info("Seating plan deleted | plan_id=%s", plan_id)
