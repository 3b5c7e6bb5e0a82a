"""What-if comparison of slider settings isolated from plan persistence.

Both runs share one in-memory workspace snapshot and nothing is written to
`SeatingPlans` or `PlanAssignments`.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from officeplan.domain.constraints import validate_algorithm_parameters
from officeplan.domain.models import AlgorithmParameters, AssignmentOutcome, WorkspaceSnapshot
from officeplan.repository.data_repository import DataRepository
from officeplan.services.matching_service import (
    AssignmentSolver,
    SeatingOptimizationService,
    SeatingValidationError,
    optimize_seating_plan,
)
from officeplan.services.plan_service import compute_optimization_score
from officeplan.utils.config import Settings, get_settings
from officeplan.utils.logger import get_logger


logger = get_logger(__name__)


class SimulationValidationError(Exception):
    """Raised when simulation parameters are invalid."""


@dataclass(frozen=True)
class SimulationMetrics:
    optimization_score: int
    assigned_count: int
    unassigned_employee_count: int
    unassigned_seat_count: int
    average_pair_score: float

    def to_api_dict(self) -> dict[str, float | int]:
        return {
            "optimization_score": self.optimization_score,
            "assigned_count": self.assigned_count,
            "unassigned_employee_count": self.unassigned_employee_count,
            "unassigned_seat_count": self.unassigned_seat_count,
            "average_pair_score": self.average_pair_score,
        }


class SimulationService:
    """Runs baseline vs candidate weight comparisons in memory."""

    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
        optimization_service: Optional[SeatingOptimizationService] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)
        self._optimization_service = optimization_service or SeatingOptimizationService(
            repository=self._repository,
            settings=self._settings,
        )

    def _validate(self, label: str, params: AlgorithmParameters) -> None:
        try:
            validate_algorithm_parameters(params)
        except ValueError as exc:
            raise SimulationValidationError(f"{label}: {exc}") from exc

    def resolve_baseline(
        self,
        baseline: Optional[AlgorithmParameters],
    ) -> tuple[AlgorithmParameters, str]:
        """Pick explicit weights, else the active plan's, else the defaults."""
        if baseline is not None:
            return baseline, "request"
        active_plan = self._repository.get_active_seating_plan()
        if active_plan is not None:
            return active_plan.parameters, "active_plan"
        return self._optimization_service.default_parameters(), "defaults"

    def _run(
        self,
        snapshot: WorkspaceSnapshot,
        params: AlgorithmParameters,
        solver: AssignmentSolver,
        cancel_event: Optional[threading.Event],
    ) -> AssignmentOutcome:
        return optimize_seating_plan(
            snapshot=snapshot,
            parameters=params,
            solver=solver,
            cancel_event=cancel_event,
        )

    def compute_metrics(
        self,
        outcome: AssignmentOutcome,
        params: AlgorithmParameters,
    ) -> SimulationMetrics:
        assignments = outcome.assignments
        average_pair_score = (
            float(sum(item.score for item in assignments) / len(assignments))
            if assignments
            else 0.0
        )
        return SimulationMetrics(
            optimization_score=compute_optimization_score(assignments, outcome.dataset, params),
            assigned_count=len(assignments),
            unassigned_employee_count=len(outcome.unassigned_employee_ids),
            unassigned_seat_count=len(outcome.unassigned_seat_ids),
            average_pair_score=average_pair_score,
        )

    def compare_results(
        self,
        baseline: SimulationMetrics,
        simulation: SimulationMetrics,
    ) -> dict[str, float | int]:
        return {
            "optimization_score_change": simulation.optimization_score - baseline.optimization_score,
            "assigned_change": simulation.assigned_count - baseline.assigned_count,
            "unassigned_employee_change": (
                simulation.unassigned_employee_count - baseline.unassigned_employee_count
            ),
            "average_pair_score_change": (
                simulation.average_pair_score - baseline.average_pair_score
            ),
        }

    @staticmethod
    def count_changed_seats(baseline: AssignmentOutcome, simulation: AssignmentOutcome) -> int:
        """Employees seated differently (or only seated in one of the runs)."""
        baseline_seats = {item.employee_id: item.seat_id for item in baseline.assignments}
        simulated_seats = {item.employee_id: item.seat_id for item in simulation.assignments}
        employee_ids = set(baseline_seats) | set(simulated_seats)
        return sum(
            1
            for employee_id in employee_ids
            if baseline_seats.get(employee_id) != simulated_seats.get(employee_id)
        )

    def compare_parameters(
        self,
        candidate: AlgorithmParameters,
        baseline: Optional[AlgorithmParameters] = None,
        solver_name: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> dict[str, object]:
        run_id = str(uuid4())
        baseline_params, baseline_source = self.resolve_baseline(baseline)
        self._validate("candidate", candidate)
        self._validate("baseline", baseline_params)
        try:
            solver = self._optimization_service.resolve_solver(solver_name)
        except SeatingValidationError as exc:
            raise SimulationValidationError(str(exc)) from exc

        logger.info(
            "Simulation run started | run_id=%s | baseline_source=%s | candidate=%s",
            run_id,
            baseline_source,
            candidate.to_dict(),
        )

        snapshot = self._optimization_service.load_snapshot()
        baseline_outcome = self._run(snapshot, baseline_params, solver, cancel_event)
        simulation_outcome = self._run(snapshot, candidate, solver, cancel_event)

        baseline_metrics = self.compute_metrics(baseline_outcome, baseline_params)
        simulation_metrics = self.compute_metrics(simulation_outcome, candidate)
        delta = self.compare_results(baseline_metrics, simulation_metrics)
        changed_seats = self.count_changed_seats(baseline_outcome, simulation_outcome)

        logger.info(
            (
                "Simulation run completed | run_id=%s | baseline_score=%s | "
                "simulation_score=%s | changed_seats=%s"
            ),
            run_id,
            baseline_metrics.optimization_score,
            simulation_metrics.optimization_score,
            changed_seats,
        )
        return {
            "baseline_source": baseline_source,
            "baseline_parameters": baseline_params.to_dict(),
            "candidate_parameters": candidate.to_dict(),
            "baseline": baseline_metrics.to_api_dict(),
            "simulation": simulation_metrics.to_api_dict(),
            "delta": delta,
            "changed_seat_count": changed_seats,
        }
