"""Pairwise employee-seat compatibility scoring.

Each factor produces a sub-score on a 0-100 scale which is scaled by its
slider weight (``weight / 100``). A weight of zero switches the factor off.
The weighted sum is divided by ``max(1, total_weight / 100)`` so a pair never
scores above 100 even when the sliders add up to more than 100; the divisor
is constant within a run, so pair ranking is unaffected.
"""

from __future__ import annotations

import threading
from typing import Mapping, Optional

from officeplan.domain.models import (
    COLLABORATIVE_ZONE_TYPES,
    AlgorithmParameters,
    Employee,
    NormalizedDataset,
    ScoreBreakdown,
    ScoredPair,
    Seat,
    Zone,
)


MAX_SUB_SCORE = 100.0
TECH_SKILL_SCORE = 50.0
PARTIAL_CROSS_TEAM_SCORE = 50.0
MAX_PROJECT_PRIORITY = 5
REASON_PREFIX = "Assigned by optimization algorithm"

_FACTOR_LABELS = (
    ("team_proximity", "team proximity"),
    ("tech_stack", "tech stack alignment"),
    ("cross_team", "cross-team collaboration"),
    ("deadline", "deadline priority"),
)


class OptimizationCancelledError(Exception):
    """Raised when a caller cancels a running optimization."""


def raise_if_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OptimizationCancelledError("Seating optimization was cancelled")


def team_proximity_score(
    employee: Employee,
    seat: Seat,
    employees_by_id: Mapping[str, Employee],
) -> float:
    """Share of teammates known to be near the seat's zone, times 100.

    A teammate counts when it takes part in this run and is either not
    currently seated anywhere or currently seated in the seat's zone.
    """
    nearby = 0
    for teammate_id in employee.teammate_ids:
        teammate = employees_by_id.get(teammate_id)
        if teammate is None or teammate.employee_id == employee.employee_id:
            continue
        if teammate.current_zone_id is None or teammate.current_zone_id == seat.zone_id:
            nearby += 1
    return (nearby / max(1, len(employee.teammate_ids))) * MAX_SUB_SCORE


def tech_stack_score(employee: Employee) -> float:
    # Coarse proxy: neighbouring occupants' skills are not compared.
    return TECH_SKILL_SCORE if employee.tech_skills else 0.0


def cross_team_score(employee: Employee, zone: Zone) -> float:
    is_collaborative_zone = zone.zone_type in COLLABORATIVE_ZONE_TYPES
    is_multi_project = len(employee.project_ids) > 1
    if is_collaborative_zone and is_multi_project:
        return MAX_SUB_SCORE
    if is_collaborative_zone or is_multi_project:
        return PARTIAL_CROSS_TEAM_SCORE
    return 0.0


def deadline_score(employee: Employee) -> float:
    highest_priority = max(employee.project_priorities, default=0)
    return (highest_priority / MAX_PROJECT_PRIORITY) * MAX_SUB_SCORE


def score_breakdown(
    employee: Employee,
    seat: Seat,
    zone: Zone,
    employees_by_id: Mapping[str, Employee],
    params: AlgorithmParameters,
) -> ScoreBreakdown:
    team_proximity = 0.0
    if params.team_proximity_weight > 0:
        team_proximity = team_proximity_score(employee, seat, employees_by_id) * (
            params.team_proximity_weight / 100
        )

    tech_stack = 0.0
    if params.tech_stack_weight > 0:
        tech_stack = tech_stack_score(employee) * (params.tech_stack_weight / 100)

    cross_team = 0.0
    if params.cross_team_weight > 0:
        cross_team = cross_team_score(employee, zone) * (params.cross_team_weight / 100)

    deadline = 0.0
    if params.deadline_weight > 0:
        deadline = deadline_score(employee) * (params.deadline_weight / 100)

    return ScoreBreakdown(
        team_proximity=team_proximity,
        tech_stack=tech_stack,
        cross_team=cross_team,
        deadline=deadline,
        normalizer=max(1.0, params.total_weight / 100),
    )


def score(
    employee: Employee,
    seat: Seat,
    zone: Zone,
    employees_by_id: Mapping[str, Employee],
    params: AlgorithmParameters,
) -> float:
    return score_breakdown(employee, seat, zone, employees_by_id, params).total


def zone_for_seat(seat: Seat, zones_by_id: Mapping[str, Zone]) -> Zone:
    zone = zones_by_id.get(seat.zone_id)
    if zone is None:
        return Zone(zone_id=seat.zone_id, name="", zone_type=seat.zone_type, floor_id=seat.floor_id)
    return zone


def describe_breakdown(breakdown: ScoreBreakdown) -> str:
    """Render a human-readable justification for one assignment."""
    factors = [
        f"{label} {getattr(breakdown, attribute) / breakdown.normalizer:.1f}"
        for attribute, label in _FACTOR_LABELS
        if getattr(breakdown, attribute) > 0
    ]
    if not factors:
        return f"{REASON_PREFIX}: no weighted factor preferred this seat (score 0.0)"
    return (
        f"{REASON_PREFIX} (normalised contribution per factor): "
        f"{', '.join(factors)} (score {breakdown.total:.1f})"
    )


def score_all_pairs(
    dataset: NormalizedDataset,
    params: AlgorithmParameters,
    cancel_event: Optional[threading.Event] = None,
) -> list[ScoredPair]:
    """Score every employee x seat pair in employee-major, seat-minor order."""
    employees_by_id = dataset.employees_by_id
    zones_by_id = dataset.zones_by_id
    pairs: list[ScoredPair] = []
    for employee in dataset.employees:
        raise_if_cancelled(cancel_event)
        for seat in dataset.seats:
            pairs.append(
                ScoredPair(
                    employee_id=employee.employee_id,
                    seat_id=seat.seat_id,
                    score=score(
                        employee,
                        seat,
                        zone_for_seat(seat, zones_by_id),
                        employees_by_id,
                        params,
                    ),
                )
            )
    return pairs
