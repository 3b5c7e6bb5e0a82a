from __future__ import annotations

import sqlite3
from dataclasses import replace

import pytest

from officeplan.domain.models import (
    AlgorithmParameters,
    EmployeeRecord,
    ProjectRecord,
    SeatRecord,
    ZoneRecord,
)
from officeplan.repository.data_repository import DataRepository
from officeplan.services.matching_service import SeatingOptimizationService, SeatingValidationError
from officeplan.services.plan_service import (
    PlanNotFoundError,
    PlanValidationError,
    SeatingPlanService,
)
from officeplan.utils.config import get_settings


def _build_test_settings(tmp_path, filename: str):
    base = get_settings()
    return replace(
        base,
        database_path=tmp_path / filename,
        seating_solver="greedy",
        seating_solver_max_time_seconds=5,
    )


def _seed_small_office(repository: DataRepository) -> None:
    repository.upsert_floor("f1", "Floor 1")
    repository.upsert_zone(ZoneRecord(zone_id="z-team", name="Team", zone_type="team_area", floor_id="f1"))
    repository.upsert_zone(
        ZoneRecord(zone_id="z-collab", name="Hub", zone_type="collaboration", floor_id="f1")
    )
    for employee_id, skills in (("ana", ("python",)), ("bo", ()), ("cy", ("go",))):
        repository.upsert_employee(EmployeeRecord(employee_id=employee_id, tech_skills=skills))
    repository.upsert_project(ProjectRecord(project_id="p1", priority=5, team_member_ids=("ana", "bo")))
    repository.upsert_project(ProjectRecord(project_id="p2", priority=2, team_member_ids=("ana",)))
    repository.upsert_seat(SeatRecord(seat_id="s1", label="T1", zone_id="z-team", floor_id="f1"))
    repository.upsert_seat(SeatRecord(seat_id="s2", label="H1", zone_id="z-collab", floor_id="f1"))
    repository.upsert_seat(
        SeatRecord(seat_id="s3", label="H2", zone_id="z-collab", floor_id="f1", status="maintenance")
    )


def _build_services(tmp_path, filename: str):
    settings = _build_test_settings(tmp_path, filename)
    repository = DataRepository(settings)
    repository.initialize_database()
    _seed_small_office(repository)
    optimization_service = SeatingOptimizationService(repository=repository, settings=settings)
    plan_service = SeatingPlanService(repository=repository, settings=settings)
    return repository, optimization_service, plan_service


def test_records_round_trip_through_repository(tmp_path):
    repository, _, _ = _build_services(tmp_path, "records.db")

    employees = repository.list_employee_records()
    assert [item.employee_id for item in employees] == ["ana", "bo", "cy"]
    assert employees[0].tech_skills == ("python",)
    assert employees[0].current_project_ids == ("p1", "p2")
    assert employees[2].current_project_ids == ()

    projects = repository.list_project_records()
    assert projects[0].team_member_ids == ("ana", "bo")

    seats = repository.list_seat_records()
    assert [seat.status for seat in seats] == ["available", "available", "maintenance"]


def test_optimize_persists_inactive_plan_with_remainder(tmp_path):
    repository, optimization_service, _ = _build_services(tmp_path, "persist.db")

    result = optimization_service.optimize_seating(created_by="admin-1")

    plan = result.plan
    assert plan.plan_id is not None
    assert plan.is_active is False
    assert plan.created_by == "admin-1"
    assert plan.created_at is not None
    assert plan.parameters == AlgorithmParameters(75, 60, 40, 85)
    assert len(plan.assignments) == 2
    assert {item.seat_id for item in plan.assignments} == {"s1", "s2"}
    assert len(plan.unassigned_employee_ids) == 1
    assert result.unassigned_employee_ids == list(plan.unassigned_employee_ids)
    assert 0 <= plan.optimization_score <= 100
    assert plan.name.startswith("Seating Plan - ")
    assert plan.description.startswith("Generated with team proximity: 75%")
    assert repository.count_seating_plans() == 1


def test_preview_does_not_persist(tmp_path):
    repository, optimization_service, _ = _build_services(tmp_path, "preview.db")

    result = optimization_service.optimize_seating(created_by="admin-1", persist_outputs=False)

    assert result.plan.plan_id is None
    assert result.plan.assignments
    assert repository.count_seating_plans() == 0


def test_invalid_parameters_rejected_before_run(tmp_path):
    repository, optimization_service, _ = _build_services(tmp_path, "invalid.db")

    with pytest.raises(SeatingValidationError):
        optimization_service.optimize_seating(
            created_by="admin-1",
            parameters=AlgorithmParameters(150, 60, 40, 85),
        )
    with pytest.raises(SeatingValidationError):
        optimization_service.optimize_seating(created_by="  ")
    assert repository.count_seating_plans() == 0


def test_activation_keeps_single_active_plan(tmp_path):
    repository, optimization_service, plan_service = _build_services(tmp_path, "activate.db")
    first = optimization_service.optimize_seating(created_by="admin-1").plan
    second = optimization_service.optimize_seating(created_by="admin-1").plan

    activated_first = plan_service.activate_plan(first.plan_id)
    assert activated_first.is_active is True
    assert activated_first.effective_from is not None

    plan_service.activate_plan(second.plan_id)

    assert repository.count_active_seating_plans() == 1
    assert plan_service.get_active_plan().plan_id == second.plan_id
    assert plan_service.get_plan(first.plan_id).is_active is False

    # Re-activating the current plan is a no-op for the invariant.
    plan_service.activate_plan(second.plan_id)
    assert repository.count_active_seating_plans() == 1


def test_database_rejects_second_active_plan(tmp_path):
    repository, optimization_service, plan_service = _build_services(tmp_path, "index.db")
    first = optimization_service.optimize_seating(created_by="admin-1").plan
    second = optimization_service.optimize_seating(created_by="admin-1").plan
    plan_service.activate_plan(first.plan_id)

    with sqlite3.connect(repository.database_path) as conn:
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute("UPDATE SeatingPlans SET is_active = 1 WHERE id = ?;", (second.plan_id,))


def test_database_rejects_unknown_zone_type(tmp_path):
    repository, _, _ = _build_services(tmp_path, "zone_type.db")

    with pytest.raises(sqlite3.IntegrityError):
        repository.upsert_zone(ZoneRecord(zone_id="z-roof", name="Roof", zone_type="rooftop", floor_id="f1"))

    assert "z-roof" not in {zone.zone_id for zone in repository.list_zone_records()}


def test_update_parameters_keeps_assignments(tmp_path):
    _, optimization_service, plan_service = _build_services(tmp_path, "update.db")
    plan = optimization_service.optimize_seating(created_by="admin-1").plan

    updated = plan_service.update_algorithm_parameters(plan.plan_id, AlgorithmParameters(10, 20, 30, 40))

    assert updated.parameters == AlgorithmParameters(10, 20, 30, 40)
    assert updated.assignments == plan.assignments
    assert updated.optimization_score == plan.optimization_score
    assert updated.updated_at is not None


def test_update_parameters_validates_range(tmp_path):
    _, optimization_service, plan_service = _build_services(tmp_path, "update_invalid.db")
    plan = optimization_service.optimize_seating(created_by="admin-1").plan

    with pytest.raises(PlanValidationError):
        plan_service.update_algorithm_parameters(plan.plan_id, AlgorithmParameters(10, 20, 30, 101))


def test_unknown_plan_ids_raise_not_found(tmp_path):
    _, _, plan_service = _build_services(tmp_path, "missing.db")

    with pytest.raises(PlanNotFoundError):
        plan_service.get_plan(999)
    with pytest.raises(PlanNotFoundError):
        plan_service.activate_plan(999)
    with pytest.raises(PlanNotFoundError):
        plan_service.update_algorithm_parameters(999, AlgorithmParameters(1, 2, 3, 4))
    with pytest.raises(PlanNotFoundError):
        plan_service.delete_plan(999)
    assert plan_service.get_active_plan() is None


def test_delete_removes_plan_and_assignments(tmp_path):
    repository, optimization_service, plan_service = _build_services(tmp_path, "delete.db")
    plan = optimization_service.optimize_seating(created_by="admin-1").plan

    plan_service.delete_plan(plan.plan_id)

    assert plan_service.list_plans() == []
    with sqlite3.connect(repository.database_path) as conn:
        remaining = conn.execute("SELECT COUNT(*) FROM PlanAssignments;").fetchone()[0]
    assert remaining == 0


def test_synthetic_seed_is_idempotent(tmp_path):
    settings = _build_test_settings(tmp_path, "seed.db")
    repository = DataRepository(settings)
    repository.initialize_database()

    repository.seed_synthetic_data()
    first_count = len(repository.list_employee_records())
    repository.seed_synthetic_data()

    assert first_count == settings.synthetic_employee_count
    assert len(repository.list_employee_records()) == first_count
    assert repository.list_seat_records()
    assert repository.list_project_records()
