from __future__ import annotations

import threading

import pytest

from officeplan.domain.constraints import SolverConfig
from officeplan.domain.models import (
    AlgorithmParameters,
    EmployeeRecord,
    ProjectRecord,
    SeatRecord,
    WorkspaceSnapshot,
    ZoneRecord,
)
from officeplan.services.matching_service import (
    CpSatAssignmentSolver,
    GreedyAssignmentSolver,
    SeatingValidationError,
    SolverDependencyError,
    default_plan_description,
    default_plan_name,
    get_solver,
    optimize_seating_plan,
)
from officeplan.services.plan_service import build_plan, compute_optimization_score
from officeplan.services.scoring import OptimizationCancelledError


SOLVER_CONFIG = SolverConfig(
    solver_max_time_seconds=5,
    solver_random_seed=42,
    objective_scale=1000,
    cp_sat_workers=1,
)


def _params(team=0, tech=0, cross=0, deadline=0) -> AlgorithmParameters:
    return AlgorithmParameters(
        team_proximity_weight=team,
        tech_stack_weight=tech,
        cross_team_weight=cross,
        deadline_weight=deadline,
    )


def _seat(seat_id: str, zone_id: str = "z-team", status: str = "available") -> SeatRecord:
    return SeatRecord(seat_id=seat_id, label=seat_id.upper(), zone_id=zone_id, floor_id="f1", status=status)


ZONES = [
    ZoneRecord(zone_id="z-team", name="Team", zone_type="team_area", floor_id="f1"),
    ZoneRecord(zone_id="z-collab", name="Hub", zone_type="collaboration", floor_id="f1"),
    ZoneRecord(zone_id="z-quiet", name="Quiet", zone_type="quiet_area", floor_id="f1"),
]


def _office_snapshot() -> WorkspaceSnapshot:
    employees = [
        EmployeeRecord(employee_id=f"emp-{index}", tech_skills=("python",) if index % 2 else ())
        for index in range(1, 7)
    ]
    projects = [
        ProjectRecord(project_id="p1", priority=5, team_member_ids=("emp-1", "emp-2", "emp-3")),
        ProjectRecord(project_id="p2", priority=2, team_member_ids=("emp-3", "emp-4")),
        ProjectRecord(project_id="p3", priority=4, team_member_ids=("emp-5",)),
    ]
    seats = [
        _seat("s1"),
        _seat("s2", "z-collab"),
        _seat("s3", "z-quiet"),
        _seat("s4", "z-collab", status="reserved"),
        _seat("s5"),
    ]
    return WorkspaceSnapshot(employees=employees, projects=projects, seats=seats, zones=ZONES)


# --- Properties ---

def test_no_employee_or_seat_assigned_twice():
    outcome = optimize_seating_plan(snapshot=_office_snapshot(), parameters=_params(75, 60, 40, 85))

    employee_ids = [item.employee_id for item in outcome.assignments]
    seat_ids = [item.seat_id for item in outcome.assignments]
    assert len(employee_ids) == len(set(employee_ids))
    assert len(seat_ids) == len(set(seat_ids))


def test_assignment_count_is_min_of_pools_and_skips_unavailable_seats():
    outcome = optimize_seating_plan(snapshot=_office_snapshot(), parameters=_params(75, 60, 40, 85))

    assert len(outcome.assignments) == 4
    assert "s4" not in {item.seat_id for item in outcome.assignments}
    assert len(outcome.unassigned_employee_ids) == 2
    assert outcome.unassigned_seat_ids == []


def test_repeated_runs_produce_identical_output():
    snapshot = _office_snapshot()
    params = _params(75, 60, 40, 85)

    first = optimize_seating_plan(snapshot=snapshot, parameters=params)
    second = optimize_seating_plan(snapshot=snapshot, parameters=params)

    assert first.assignments == second.assignments
    assert first.unassigned_employee_ids == second.unassigned_employee_ids


def test_greedy_accepts_pairs_in_descending_score_order():
    outcome = optimize_seating_plan(snapshot=_office_snapshot(), parameters=_params(75, 60, 40, 85))

    scores = [item.score for item in outcome.assignments]
    assert scores == sorted(scores, reverse=True)
    assert all(0.0 <= value <= 100.0 for value in scores)
    assert all(item.reason.startswith("Assigned by optimization algorithm") for item in outcome.assignments)


@pytest.mark.parametrize(
    ("employees", "seats"),
    [
        ([], [_seat("s1")]),
        ([EmployeeRecord(employee_id="a")], []),
        ([], []),
    ],
)
def test_empty_pools_yield_no_assignments(employees, seats):
    snapshot = WorkspaceSnapshot(employees=employees, projects=[], seats=seats, zones=ZONES)

    outcome = optimize_seating_plan(snapshot=snapshot, parameters=_params(75, 60, 40, 85))

    assert outcome.assignments == []
    assert outcome.unassigned_employee_ids == [item.employee_id for item in employees]
    assert outcome.unassigned_seat_ids == [item.seat_id for item in seats]
    assert compute_optimization_score(outcome.assignments, outcome.dataset, _params(75, 60, 40, 85)) == 0


# --- Worked scenarios ---

def test_zero_scores_still_fill_every_seat():
    snapshot = WorkspaceSnapshot(
        employees=[EmployeeRecord(employee_id="a"), EmployeeRecord(employee_id="b")],
        projects=[],
        seats=[_seat("s1"), _seat("s2")],
        zones=ZONES,
    )
    params = _params(team=100)

    outcome = optimize_seating_plan(snapshot=snapshot, parameters=params)

    assert {item.employee_id for item in outcome.assignments} == {"a", "b"}
    assert {item.seat_id for item in outcome.assignments} == {"s1", "s2"}
    assert compute_optimization_score(outcome.assignments, outcome.dataset, params) == 0


def test_multi_project_employee_in_collaboration_zone_scores_full():
    snapshot = WorkspaceSnapshot(
        employees=[EmployeeRecord(employee_id="a")],
        projects=[
            ProjectRecord(project_id="p1", priority=5, team_member_ids=("a",)),
            ProjectRecord(project_id="p2", priority=3, team_member_ids=("a",)),
        ],
        seats=[_seat("s1", "z-collab")],
        zones=ZONES,
    )
    params = _params(cross=100)

    outcome = optimize_seating_plan(snapshot=snapshot, parameters=params)

    assert len(outcome.assignments) == 1
    assert outcome.assignments[0].score == pytest.approx(100.0)
    assert compute_optimization_score(outcome.assignments, outcome.dataset, params) == 100


def test_surplus_employees_are_reported_unassigned():
    snapshot = WorkspaceSnapshot(
        employees=[EmployeeRecord(employee_id=name) for name in ("a", "b", "c")],
        projects=[],
        seats=[_seat("s1")],
        zones=ZONES,
    )

    outcome = optimize_seating_plan(snapshot=snapshot, parameters=_params(75, 60, 40, 85))

    assert len(outcome.assignments) == 1
    assert outcome.assignments[0].employee_id == "a"
    assert outcome.unassigned_employee_ids == ["b", "c"]


def test_surplus_seats_are_reported_unassigned_in_input_order():
    snapshot = WorkspaceSnapshot(
        employees=[EmployeeRecord(employee_id="a")],
        projects=[],
        seats=[
            _seat("s1"),
            _seat("s2", "z-gone"),
            _seat("s3", "z-collab", status="occupied"),
            _seat("s4", "z-quiet"),
        ],
        zones=ZONES,
    )
    params = _params(75, 60, 40, 85)

    outcome = optimize_seating_plan(snapshot=snapshot, parameters=params)

    assert len(outcome.assignments) == 1
    assert outcome.assignments[0].employee_id == "a"
    assert outcome.assignments[0].seat_id == "s1"
    assert outcome.unassigned_employee_ids == []
    assert outcome.unassigned_seat_ids == ["s2", "s4"]

    plan = build_plan(
        assignments=outcome.assignments,
        params=params,
        name="Seat surplus",
        description="",
        created_by="admin-1",
        dataset=outcome.dataset,
        unassigned_employee_ids=outcome.unassigned_employee_ids,
        unassigned_seat_ids=outcome.unassigned_seat_ids,
    )
    assert plan.unassigned_seat_ids == ("s2", "s4")
    assert plan.unassigned_employee_ids == ()
    assert plan.is_active is False


def test_top_priority_project_gives_full_deadline_score():
    snapshot = WorkspaceSnapshot(
        employees=[EmployeeRecord(employee_id="a")],
        projects=[ProjectRecord(project_id="p1", priority=5, team_member_ids=("a",))],
        seats=[_seat("s1")],
        zones=ZONES,
    )
    params = _params(deadline=100)

    outcome = optimize_seating_plan(snapshot=snapshot, parameters=params)

    assert outcome.assignments[0].score == pytest.approx(100.0)
    assert compute_optimization_score(outcome.assignments, outcome.dataset, params) == 100


def test_tied_scores_resolve_by_input_order():
    snapshot = WorkspaceSnapshot(
        employees=[EmployeeRecord(employee_id="a"), EmployeeRecord(employee_id="b")],
        projects=[],
        seats=[_seat("s1"), _seat("s2")],
        zones=ZONES,
    )

    for _ in range(3):
        outcome = optimize_seating_plan(snapshot=snapshot, parameters=_params(tech=50))
        assert [(item.employee_id, item.seat_id) for item in outcome.assignments] == [
            ("a", "s1"),
            ("b", "s2"),
        ]


# --- Solver selection ---

def test_unknown_solver_name_rejected():
    with pytest.raises(SeatingValidationError):
        get_solver("hungarian", SOLVER_CONFIG)


def test_cp_sat_requires_ortools(monkeypatch):
    monkeypatch.setattr("officeplan.services.matching_service.cp_model", None)

    with pytest.raises(SolverDependencyError):
        optimize_seating_plan(
            snapshot=_office_snapshot(),
            parameters=_params(75, 60, 40, 85),
            solver=CpSatAssignmentSolver(SOLVER_CONFIG),
        )


def test_cp_sat_total_score_not_below_greedy():
    pytest.importorskip("ortools")
    snapshot = _office_snapshot()
    params = _params(75, 60, 40, 85)

    greedy = optimize_seating_plan(snapshot=snapshot, parameters=params, solver=GreedyAssignmentSolver())
    cp_sat = optimize_seating_plan(
        snapshot=snapshot,
        parameters=params,
        solver=CpSatAssignmentSolver(SOLVER_CONFIG),
    )

    assert len(cp_sat.assignments) == len(greedy.assignments)
    assert len({item.seat_id for item in cp_sat.assignments}) == len(cp_sat.assignments)
    greedy_total = sum(item.score for item in greedy.assignments)
    cp_sat_total = sum(item.score for item in cp_sat.assignments)
    assert cp_sat_total >= greedy_total - 1e-3


def test_cancelled_run_raises():
    cancel_event = threading.Event()
    cancel_event.set()

    with pytest.raises(OptimizationCancelledError):
        optimize_seating_plan(
            snapshot=_office_snapshot(),
            parameters=_params(75, 60, 40, 85),
            cancel_event=cancel_event,
        )


# --- Plan naming ---

def test_default_plan_name_and_description():
    from datetime import datetime

    assert default_plan_name("Seating Plan", datetime(2026, 10, 19)) == "Seating Plan - Oct 19, 2026"
    assert default_plan_description(_params(75, 60, 40, 85)) == (
        "Generated with team proximity: 75%, tech stack: 60%, cross-team: 40%, deadline: 85%"
    )
