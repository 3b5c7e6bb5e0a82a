"""Domain models for seat assignment optimization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


SEAT_STATUS_AVAILABLE = "available"
SEAT_STATUS_OCCUPIED = "occupied"
SEAT_STATUS_RESERVED = "reserved"
SEAT_STATUS_MAINTENANCE = "maintenance"
SEAT_STATUSES = (
    SEAT_STATUS_AVAILABLE,
    SEAT_STATUS_OCCUPIED,
    SEAT_STATUS_RESERVED,
    SEAT_STATUS_MAINTENANCE,
)

ZONE_TYPE_TEAM_AREA = "team_area"
ZONE_TYPE_MEETING = "meeting"
ZONE_TYPE_BREAK_ROOM = "break_room"
ZONE_TYPE_QUIET_AREA = "quiet_area"
ZONE_TYPE_COLLABORATION = "collaboration"
ZONE_TYPE_UNKNOWN = "unknown"
ZONE_TYPES = (
    ZONE_TYPE_TEAM_AREA,
    ZONE_TYPE_MEETING,
    ZONE_TYPE_BREAK_ROOM,
    ZONE_TYPE_QUIET_AREA,
    ZONE_TYPE_COLLABORATION,
)
COLLABORATIVE_ZONE_TYPES = frozenset({ZONE_TYPE_COLLABORATION, ZONE_TYPE_MEETING})


# --- Raw snapshot records supplied by the persistence layer ---

@dataclass(frozen=True)
class EmployeeRecord:
    employee_id: str
    tech_skills: tuple[str, ...] = ()
    department: str = ""
    current_project_ids: tuple[str, ...] = ()
    name: str = ""


@dataclass(frozen=True)
class ProjectRecord:
    project_id: str
    priority: int
    team_member_ids: tuple[str, ...] = ()
    name: str = ""


@dataclass(frozen=True)
class SeatRecord:
    seat_id: str
    label: str
    zone_id: str
    floor_id: str
    status: str = SEAT_STATUS_AVAILABLE
    assigned_employee_id: Optional[str] = None


@dataclass(frozen=True)
class ZoneRecord:
    zone_id: str
    name: str
    zone_type: str
    floor_id: Optional[str] = None


# --- Flattened structures consumed by the scorer and solvers ---

@dataclass(frozen=True)
class Employee:
    employee_id: str
    tech_skills: frozenset[str]
    department: str
    project_ids: tuple[str, ...]
    project_priorities: tuple[int, ...]
    teammate_ids: frozenset[str]
    current_zone_id: Optional[str] = None


@dataclass(frozen=True)
class Seat:
    seat_id: str
    label: str
    zone_id: str
    zone_type: str
    floor_id: str


@dataclass(frozen=True)
class Zone:
    zone_id: str
    name: str
    zone_type: str
    floor_id: Optional[str] = None


@dataclass(frozen=True)
class NormalizedDataset:
    employees: tuple[Employee, ...]
    seats: tuple[Seat, ...]
    zones: tuple[Zone, ...]

    @property
    def employees_by_id(self) -> dict[str, Employee]:
        return {employee.employee_id: employee for employee in self.employees}

    @property
    def seats_by_id(self) -> dict[str, Seat]:
        return {seat.seat_id: seat for seat in self.seats}

    @property
    def zones_by_id(self) -> dict[str, Zone]:
        return {zone.zone_id: zone for zone in self.zones}


@dataclass(frozen=True)
class AlgorithmParameters:
    team_proximity_weight: int
    tech_stack_weight: int
    cross_team_weight: int
    deadline_weight: int

    @property
    def total_weight(self) -> int:
        return (
            self.team_proximity_weight
            + self.tech_stack_weight
            + self.cross_team_weight
            + self.deadline_weight
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "team_proximity_weight": self.team_proximity_weight,
            "tech_stack_weight": self.tech_stack_weight,
            "cross_team_weight": self.cross_team_weight,
            "deadline_weight": self.deadline_weight,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    """Weighted contribution of each factor for one employee-seat pair."""

    team_proximity: float = 0.0
    tech_stack: float = 0.0
    cross_team: float = 0.0
    deadline: float = 0.0
    normalizer: float = 1.0

    @property
    def total(self) -> float:
        raw = self.team_proximity + self.tech_stack + self.cross_team + self.deadline
        return raw / self.normalizer


@dataclass(frozen=True)
class ScoredPair:
    employee_id: str
    seat_id: str
    score: float


@dataclass(frozen=True)
class SeatAssignment:
    employee_id: str
    seat_id: str
    reason: str
    score: float = 0.0


@dataclass(frozen=True)
class AssignmentOutcome:
    dataset: NormalizedDataset
    assignments: list[SeatAssignment]
    unassigned_employee_ids: list[str]
    unassigned_seat_ids: list[str]


@dataclass(frozen=True)
class WorkspaceSnapshot:
    """Read-only inputs of one optimization run."""

    employees: list[EmployeeRecord]
    projects: list[ProjectRecord]
    seats: list[SeatRecord]
    zones: list[ZoneRecord]


@dataclass(frozen=True)
class SeatingPlan:
    name: str
    description: str
    parameters: AlgorithmParameters
    assignments: tuple[SeatAssignment, ...]
    optimization_score: int
    created_by: str
    is_active: bool = False
    unassigned_employee_ids: tuple[str, ...] = ()
    unassigned_seat_ids: tuple[str, ...] = ()
    plan_id: Optional[int] = None
    created_at: Optional[str] = None
    effective_from: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass(frozen=True)
class OptimizationResult:
    plan: SeatingPlan
    unassigned_employee_ids: list[str] = field(default_factory=list)
    unassigned_seat_ids: list[str] = field(default_factory=list)
    solver: str = "greedy"
