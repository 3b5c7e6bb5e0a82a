"""Employee-to-seat assignment: greedy matching plus an optional CP-SAT strategy."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, Sequence

import numpy as np

try:
    from ortools.sat.python import cp_model
except ModuleNotFoundError:  # pragma: no cover - runtime dependency guard
    cp_model = None  # type: ignore[assignment]

from officeplan.domain.constraints import (
    SolverConfig,
    validate_algorithm_parameters,
    validate_solver_config,
)
from officeplan.domain.models import (
    AlgorithmParameters,
    AssignmentOutcome,
    Employee,
    NormalizedDataset,
    OptimizationResult,
    ScoredPair,
    Seat,
    SeatAssignment,
    WorkspaceSnapshot,
    Zone,
)
from officeplan.repository.data_repository import DataRepository
from officeplan.services.normalizer import normalize_inputs
from officeplan.services.plan_service import build_plan
from officeplan.services.scoring import (
    describe_breakdown,
    raise_if_cancelled,
    score_all_pairs,
    score_breakdown,
    zone_for_seat,
)
from officeplan.utils.config import Settings, get_settings
from officeplan.utils.logger import get_logger


logger = get_logger(__name__)

SOLVER_GREEDY = "greedy"
SOLVER_CP_SAT = "cp_sat"
SOLVER_NAMES = (SOLVER_GREEDY, SOLVER_CP_SAT)


class SeatingValidationError(Exception):
    """Raised when optimization request inputs are invalid."""


class SolverDependencyError(Exception):
    """Raised when OR-Tools is unavailable in the runtime."""


def _ensure_solver_dependency() -> None:
    if cp_model is None:
        raise SolverDependencyError(
            "OR-Tools is not installed. Install 'ortools' to enable the cp_sat solver."
        )


def _build_assignment(
    employee_id: str,
    seat_id: str,
    employees_by_id: dict[str, Employee],
    seats_by_id: dict[str, Seat],
    zones_by_id: dict[str, Zone],
    params: AlgorithmParameters,
) -> SeatAssignment:
    seat = seats_by_id[seat_id]
    breakdown = score_breakdown(
        employees_by_id[employee_id],
        seat,
        zone_for_seat(seat, zones_by_id),
        employees_by_id,
        params,
    )
    return SeatAssignment(
        employee_id=employee_id,
        seat_id=seat_id,
        reason=describe_breakdown(breakdown),
        score=breakdown.total,
    )


class AssignmentSolver(ABC):
    """Base interface for employee-seat matching strategies."""

    name: str = ""

    @abstractmethod
    def assign(
        self,
        employees: Sequence[Employee],
        seats: Sequence[Seat],
        zones: Sequence[Zone],
        params: AlgorithmParameters,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[SeatAssignment]:
        """
        Match employees to eligible seats.

        Returns at most one assignment per employee and per seat; the number
        of assignments equals ``min(len(employees), len(seats))``.
        """


class GreedyAssignmentSolver(AssignmentSolver):
    """
    Greedy matching over all employee x seat scores.

    Pairs are visited from the highest score down and accepted whenever
    neither side has been claimed yet. This is not a globally optimal
    assignment. Equal scores keep their enumeration order (employee input
    order, then seat input order) through a stable sort, so repeated runs
    over the same inputs produce the same plan.
    """

    name = SOLVER_GREEDY

    def assign(
        self,
        employees: Sequence[Employee],
        seats: Sequence[Seat],
        zones: Sequence[Zone],
        params: AlgorithmParameters,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[SeatAssignment]:
        if not employees or not seats:
            return []

        dataset = NormalizedDataset(
            employees=tuple(employees),
            seats=tuple(seats),
            zones=tuple(zones),
        )
        pairs = score_all_pairs(dataset, params, cancel_event=cancel_event)
        return self._accept_in_order(pairs, dataset, params, cancel_event)

    def _accept_in_order(
        self,
        pairs: list[ScoredPair],
        dataset: NormalizedDataset,
        params: AlgorithmParameters,
        cancel_event: Optional[threading.Event],
    ) -> list[SeatAssignment]:
        scores = np.fromiter((pair.score for pair in pairs), dtype=float, count=len(pairs))
        order = np.argsort(-scores, kind="stable")

        employee_ids = {employee.employee_id for employee in dataset.employees}
        seat_ids = {seat.seat_id for seat in dataset.seats}
        employees_by_id = dataset.employees_by_id
        seats_by_id = dataset.seats_by_id
        zones_by_id = dataset.zones_by_id

        claimed_employees: set[str] = set()
        claimed_seats: set[str] = set()
        assignments: list[SeatAssignment] = []
        for index in order:
            pair = pairs[int(index)]
            if pair.employee_id in claimed_employees or pair.seat_id in claimed_seats:
                continue
            raise_if_cancelled(cancel_event)
            assignments.append(
                _build_assignment(
                    pair.employee_id,
                    pair.seat_id,
                    employees_by_id,
                    seats_by_id,
                    zones_by_id,
                    params,
                )
            )
            claimed_employees.add(pair.employee_id)
            claimed_seats.add(pair.seat_id)
            if len(claimed_employees) == len(employee_ids) or len(claimed_seats) == len(seat_ids):
                break
        return assignments


class CpSatAssignmentSolver(AssignmentSolver):
    """Maximum-total-score matching solved with OR-Tools CP-SAT.

    Falls back to the greedy strategy when CP-SAT returns no feasible
    solution within the time limit.
    """

    name = SOLVER_CP_SAT

    def __init__(self, config: SolverConfig) -> None:
        validate_solver_config(config)
        self._config = config

    def assign(
        self,
        employees: Sequence[Employee],
        seats: Sequence[Seat],
        zones: Sequence[Zone],
        params: AlgorithmParameters,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[SeatAssignment]:
        _ensure_solver_dependency()
        if not employees or not seats:
            return []

        dataset = NormalizedDataset(
            employees=tuple(employees),
            seats=tuple(seats),
            zones=tuple(zones),
        )
        pairs = score_all_pairs(dataset, params, cancel_event=cancel_event)
        seat_count = len(dataset.seats)

        model = cp_model.CpModel()
        variables: dict[tuple[int, int], cp_model.IntVar] = {}
        coefficients: dict[tuple[int, int], int] = {}
        for index, pair in enumerate(pairs):
            key = divmod(index, seat_count)
            variables[key] = model.NewBoolVar(f"x_emp_{key[0]}_seat_{key[1]}")
            coefficients[key] = max(0, int(round(pair.score * self._config.objective_scale)))

        for employee_index in range(len(dataset.employees)):
            model.Add(
                sum(variables[(employee_index, seat_index)] for seat_index in range(seat_count)) <= 1
            )
        for seat_index in range(seat_count):
            model.Add(
                sum(
                    variables[(employee_index, seat_index)]
                    for employee_index in range(len(dataset.employees))
                )
                <= 1
            )
        model.Add(sum(variables.values()) == min(len(dataset.employees), seat_count))
        model.Maximize(sum(coefficients[key] * var for key, var in variables.items()))

        raise_if_cancelled(cancel_event)
        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = float(self._config.solver_max_time_seconds)
        solver.parameters.num_search_workers = self._config.cp_sat_workers
        solver.parameters.random_seed = self._config.solver_random_seed

        status = solver.Solve(model)
        status_name = solver.StatusName(status)
        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            logger.warning("CP-SAT seating solve failed, using greedy | status=%s", status_name)
            return GreedyAssignmentSolver().assign(
                employees, seats, zones, params, cancel_event=cancel_event
            )

        employees_by_id = dataset.employees_by_id
        seats_by_id = dataset.seats_by_id
        zones_by_id = dataset.zones_by_id
        assignments: list[SeatAssignment] = []
        for (employee_index, seat_index), var in variables.items():
            if solver.Value(var) != 1:
                continue
            assignments.append(
                _build_assignment(
                    dataset.employees[employee_index].employee_id,
                    dataset.seats[seat_index].seat_id,
                    employees_by_id,
                    seats_by_id,
                    zones_by_id,
                    params,
                )
            )
        assignments.sort(key=lambda item: -item.score)
        logger.info(
            "CP-SAT seating solve completed | status=%s | objective_value=%.3f | assigned=%s",
            status_name,
            float(solver.ObjectiveValue()) / self._config.objective_scale,
            len(assignments),
        )
        return assignments


def get_solver(name: str, config: SolverConfig) -> AssignmentSolver:
    if name == SOLVER_GREEDY:
        return GreedyAssignmentSolver()
    if name == SOLVER_CP_SAT:
        return CpSatAssignmentSolver(config)
    raise SeatingValidationError(
        f"Unknown solver '{name}'. Expected one of: {', '.join(SOLVER_NAMES)}"
    )


def optimize_seating_plan(
    *,
    snapshot: WorkspaceSnapshot,
    parameters: AlgorithmParameters,
    solver: Optional[AssignmentSolver] = None,
    cancel_event: Optional[threading.Event] = None,
) -> AssignmentOutcome:
    """Normalize a workspace snapshot and match employees to available seats."""
    dataset = normalize_inputs(
        snapshot.employees,
        snapshot.projects,
        snapshot.seats,
        snapshot.zones,
    )
    active_solver = solver or GreedyAssignmentSolver()
    assignments = active_solver.assign(
        dataset.employees,
        dataset.seats,
        dataset.zones,
        parameters,
        cancel_event=cancel_event,
    )

    assigned_employee_ids = {assignment.employee_id for assignment in assignments}
    assigned_seat_ids = {assignment.seat_id for assignment in assignments}
    unassigned_employee_ids = [
        employee.employee_id
        for employee in dataset.employees
        if employee.employee_id not in assigned_employee_ids
    ]
    unassigned_seat_ids = [
        seat.seat_id
        for seat in dataset.seats
        if seat.seat_id not in assigned_seat_ids
    ]
    if unassigned_employee_ids:
        logger.warning(
            "Employees left without a seat | count=%s | employee_ids=%s",
            len(unassigned_employee_ids),
            unassigned_employee_ids,
        )
    logger.info(
        (
            "Seat matching completed | solver=%s | employees=%s | seats=%s | "
            "assigned=%s | unassigned_employees=%s | unassigned_seats=%s"
        ),
        active_solver.name,
        len(dataset.employees),
        len(dataset.seats),
        len(assignments),
        len(unassigned_employee_ids),
        len(unassigned_seat_ids),
    )
    return AssignmentOutcome(
        dataset=dataset,
        assignments=assignments,
        unassigned_employee_ids=unassigned_employee_ids,
        unassigned_seat_ids=unassigned_seat_ids,
    )


def default_plan_name(prefix: str, now: Optional[datetime] = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return f"{prefix} - {moment:%b} {moment.day}, {moment.year}"


def default_plan_description(params: AlgorithmParameters) -> str:
    return (
        f"Generated with team proximity: {params.team_proximity_weight}%, "
        f"tech stack: {params.tech_stack_weight}%, "
        f"cross-team: {params.cross_team_weight}%, "
        f"deadline: {params.deadline_weight}%"
    )


class SeatingOptimizationService:
    """Business logic orchestration for snapshot -> matching -> plan persistence."""

    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)

    def default_parameters(self) -> AlgorithmParameters:
        return AlgorithmParameters(
            team_proximity_weight=self._settings.default_team_proximity_weight,
            tech_stack_weight=self._settings.default_tech_stack_weight,
            cross_team_weight=self._settings.default_cross_team_weight,
            deadline_weight=self._settings.default_deadline_weight,
        )

    def resolve_parameters(
        self,
        parameters: Optional[AlgorithmParameters],
    ) -> AlgorithmParameters:
        resolved = parameters or self.default_parameters()
        try:
            validate_algorithm_parameters(resolved)
        except ValueError as exc:
            raise SeatingValidationError(str(exc)) from exc
        return resolved

    def resolve_solver(self, solver_name: Optional[str]) -> AssignmentSolver:
        config = SolverConfig(
            solver_max_time_seconds=self._settings.seating_solver_max_time_seconds,
            solver_random_seed=self._settings.seating_solver_random_seed,
            objective_scale=self._settings.seating_objective_scale,
            cp_sat_workers=self._settings.seating_cp_sat_workers,
        )
        try:
            return get_solver(solver_name or self._settings.seating_solver, config)
        except ValueError as exc:
            raise SeatingValidationError(str(exc)) from exc

    def load_snapshot(self) -> WorkspaceSnapshot:
        return WorkspaceSnapshot(
            employees=self._repository.list_employee_records(),
            projects=self._repository.list_project_records(),
            seats=self._repository.list_seat_records(),
            zones=self._repository.list_zone_records(),
        )

    def optimize_seating(
        self,
        *,
        created_by: str,
        parameters: Optional[AlgorithmParameters] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
        solver_name: Optional[str] = None,
        persist_outputs: bool = True,
        cancel_event: Optional[threading.Event] = None,
    ) -> OptimizationResult:
        if not created_by or not created_by.strip():
            raise SeatingValidationError("created_by must be a non-empty identifier")
        resolved_parameters = self.resolve_parameters(parameters)
        solver = self.resolve_solver(solver_name)

        snapshot = self.load_snapshot()
        outcome = optimize_seating_plan(
            snapshot=snapshot,
            parameters=resolved_parameters,
            solver=solver,
            cancel_event=cancel_event,
        )
        plan = build_plan(
            assignments=outcome.assignments,
            params=resolved_parameters,
            name=name or default_plan_name(self._settings.plan_name_prefix),
            description=(
                description
                if description is not None
                else default_plan_description(resolved_parameters)
            ),
            created_by=created_by,
            dataset=outcome.dataset,
            unassigned_employee_ids=outcome.unassigned_employee_ids,
            unassigned_seat_ids=outcome.unassigned_seat_ids,
        )

        if persist_outputs:
            plan_id = self._repository.save_seating_plan(plan)
            stored = self._repository.get_seating_plan(plan_id)
            if stored is not None:
                plan = stored

        logger.info(
            (
                "Seating optimization completed | plan_id=%s | solver=%s | "
                "optimization_score=%s | assigned=%s | persisted=%s"
            ),
            plan.plan_id,
            solver.name,
            plan.optimization_score,
            len(plan.assignments),
            persist_outputs,
        )
        return OptimizationResult(
            plan=plan,
            unassigned_employee_ids=list(outcome.unassigned_employee_ids),
            unassigned_seat_ids=list(outcome.unassigned_seat_ids),
            solver=solver.name,
        )
