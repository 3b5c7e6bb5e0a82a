"""Flatten raw employee/project/seat/zone records for the scoring engine.

Relationships are resolved purely by identifier. Dangling references never
fail a run: unknown projects are ignored and seats whose zone cannot be found
report the zone type as ``"unknown"``.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from officeplan.domain.models import (
    SEAT_STATUS_AVAILABLE,
    SEAT_STATUS_OCCUPIED,
    ZONE_TYPE_UNKNOWN,
    Employee,
    EmployeeRecord,
    NormalizedDataset,
    ProjectRecord,
    Seat,
    SeatRecord,
    Zone,
    ZoneRecord,
)


def _projects_for_employee(
    employee: EmployeeRecord,
    projects: Sequence[ProjectRecord],
) -> list[ProjectRecord]:
    listed = set(employee.current_project_ids)
    return [
        project
        for project in projects
        if employee.employee_id in project.team_member_ids or project.project_id in listed
    ]


def _current_zone_by_employee(
    seats: Iterable[SeatRecord],
) -> dict[str, str]:
    zones: dict[str, str] = {}
    for seat in seats:
        if seat.status != SEAT_STATUS_OCCUPIED or not seat.assigned_employee_id:
            continue
        zones.setdefault(seat.assigned_employee_id, seat.zone_id)
    return zones


def normalize_employees(
    employees: Sequence[EmployeeRecord],
    projects: Sequence[ProjectRecord],
    seats: Sequence[SeatRecord] = (),
) -> list[Employee]:
    current_zones = _current_zone_by_employee(seats)
    normalized: list[Employee] = []
    for employee in employees:
        employee_projects = _projects_for_employee(employee, projects)
        teammates: set[str] = set()
        for project in employee_projects:
            teammates.update(
                member_id
                for member_id in project.team_member_ids
                if member_id != employee.employee_id
            )
        normalized.append(
            Employee(
                employee_id=employee.employee_id,
                tech_skills=frozenset(employee.tech_skills or ()),
                department=employee.department,
                project_ids=tuple(project.project_id for project in employee_projects),
                project_priorities=tuple(int(project.priority) for project in employee_projects),
                teammate_ids=frozenset(teammates),
                current_zone_id=current_zones.get(employee.employee_id),
            )
        )
    return normalized


def normalize_zones(zones: Sequence[ZoneRecord]) -> list[Zone]:
    return [
        Zone(
            zone_id=zone.zone_id,
            name=zone.name,
            zone_type=zone.zone_type,
            floor_id=zone.floor_id,
        )
        for zone in zones
    ]


def normalize_seats(
    seats: Sequence[SeatRecord],
    zones: Sequence[ZoneRecord],
) -> list[Seat]:
    """Return eligible (available) seats with their zone type resolved."""
    zone_type_by_id = {zone.zone_id: zone.zone_type for zone in zones}
    return [
        Seat(
            seat_id=seat.seat_id,
            label=seat.label,
            zone_id=seat.zone_id,
            zone_type=zone_type_by_id.get(seat.zone_id, ZONE_TYPE_UNKNOWN),
            floor_id=seat.floor_id,
        )
        for seat in seats
        if seat.status == SEAT_STATUS_AVAILABLE
    ]


def normalize_inputs(
    employees: Sequence[EmployeeRecord],
    projects: Sequence[ProjectRecord],
    seats: Sequence[SeatRecord],
    zones: Sequence[ZoneRecord],
) -> NormalizedDataset:
    return NormalizedDataset(
        employees=tuple(normalize_employees(employees, projects, seats)),
        seats=tuple(normalize_seats(seats, zones)),
        zones=tuple(normalize_zones(zones)),
    )
