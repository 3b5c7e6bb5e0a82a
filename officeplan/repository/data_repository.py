"""Repository layer responsible for all database access."""

from __future__ import annotations

import json
import random
import sqlite3
from pathlib import Path
from typing import Optional

from officeplan.domain.models import (
    SEAT_STATUS_AVAILABLE,
    SEAT_STATUS_MAINTENANCE,
    SEAT_STATUS_OCCUPIED,
    SEAT_STATUS_RESERVED,
    ZONE_TYPE_BREAK_ROOM,
    ZONE_TYPE_COLLABORATION,
    ZONE_TYPE_MEETING,
    ZONE_TYPE_QUIET_AREA,
    ZONE_TYPE_TEAM_AREA,
    ZONE_TYPES,
    AlgorithmParameters,
    EmployeeRecord,
    ProjectRecord,
    SeatAssignment,
    SeatingPlan,
    SeatRecord,
    ZoneRecord,
)
from officeplan.utils.config import Settings, get_settings
from officeplan.utils.logger import get_logger


logger = get_logger(__name__)

UNASSIGNED_EMPLOYEE = "EMPLOYEE"
UNASSIGNED_SEAT = "SEAT"

_ZONE_TYPE_SQL_LIST = ", ".join(f"'{zone_type}'" for zone_type in ZONE_TYPES)

_SYNTHETIC_ZONE_LAYOUT = (
    (("Team Area North", ZONE_TYPE_TEAM_AREA), ("Collaboration Hub", ZONE_TYPE_COLLABORATION),
     ("Quiet Corner", ZONE_TYPE_QUIET_AREA)),
    (("Team Area South", ZONE_TYPE_TEAM_AREA), ("Meeting Pods", ZONE_TYPE_MEETING),
     ("Break Room", ZONE_TYPE_BREAK_ROOM)),
)

_PLAN_COLUMNS = """
    id,
    name,
    description,
    team_proximity_weight,
    tech_stack_weight,
    cross_team_weight,
    deadline_weight,
    optimization_score,
    is_active,
    created_by,
    created_at,
    effective_from,
    updated_at
"""


class DataRepository:
    """Encapsulates SQLite access so business logic stays storage-agnostic."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._db_path = Path(self._settings.database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON;")
        return connection

    def initialize_database(self) -> None:
        """Create all persistence artifacts before API startup."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Floors (
                        id TEXT PRIMARY KEY,
                        name TEXT NOT NULL
                    );
                    """
                )

                cursor.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS Zones (
                        id TEXT PRIMARY KEY,
                        name TEXT NOT NULL,
                        zone_type TEXT NOT NULL CHECK (zone_type IN ({_ZONE_TYPE_SQL_LIST})),
                        floor_id TEXT
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Seats (
                        id TEXT PRIMARY KEY,
                        label TEXT NOT NULL,
                        zone_id TEXT NOT NULL,
                        floor_id TEXT NOT NULL,
                        status TEXT NOT NULL DEFAULT 'available'
                            CHECK (status IN ('available', 'occupied', 'reserved', 'maintenance')),
                        assigned_employee_id TEXT
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Employees (
                        id TEXT PRIMARY KEY,
                        name TEXT NOT NULL DEFAULT '',
                        department TEXT NOT NULL DEFAULT '',
                        tech_skills TEXT NOT NULL DEFAULT '[]'
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Projects (
                        id TEXT PRIMARY KEY,
                        name TEXT NOT NULL DEFAULT '',
                        priority INTEGER NOT NULL CHECK (priority BETWEEN 1 AND 5)
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS ProjectMembers (
                        project_id TEXT NOT NULL,
                        employee_id TEXT NOT NULL,
                        position INTEGER NOT NULL,
                        PRIMARY KEY (project_id, employee_id),
                        FOREIGN KEY (project_id) REFERENCES Projects(id) ON DELETE CASCADE
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS SeatingPlans (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        description TEXT NOT NULL DEFAULT '',
                        team_proximity_weight INTEGER NOT NULL,
                        tech_stack_weight INTEGER NOT NULL,
                        cross_team_weight INTEGER NOT NULL,
                        deadline_weight INTEGER NOT NULL,
                        optimization_score INTEGER NOT NULL
                            CHECK (optimization_score BETWEEN 0 AND 100),
                        is_active INTEGER NOT NULL DEFAULT 0 CHECK (is_active IN (0,1)),
                        created_by TEXT NOT NULL,
                        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                        effective_from DATETIME,
                        updated_at DATETIME
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS PlanAssignments (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        plan_id INTEGER NOT NULL,
                        position INTEGER NOT NULL,
                        employee_id TEXT NOT NULL,
                        seat_id TEXT NOT NULL,
                        reason TEXT NOT NULL,
                        score REAL NOT NULL DEFAULT 0.0,
                        UNIQUE (plan_id, employee_id),
                        UNIQUE (plan_id, seat_id),
                        FOREIGN KEY (plan_id) REFERENCES SeatingPlans(id) ON DELETE CASCADE
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS PlanUnassigned (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        plan_id INTEGER NOT NULL,
                        position INTEGER NOT NULL,
                        entity_type TEXT NOT NULL CHECK (entity_type IN ('EMPLOYEE', 'SEAT')),
                        entity_id TEXT NOT NULL,
                        FOREIGN KEY (plan_id) REFERENCES SeatingPlans(id) ON DELETE CASCADE
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE UNIQUE INDEX IF NOT EXISTS idx_single_active_plan
                    ON SeatingPlans(is_active) WHERE is_active = 1;
                    """
                )
                cursor.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_plan_assignments_plan
                    ON PlanAssignments(plan_id, position);
                    """
                )
                cursor.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_seats_status
                    ON Seats(status);
                    """
                )
                conn.commit()
            logger.info("Database initialized at %s", self._db_path)
        except sqlite3.Error as exc:
            raise RuntimeError(f"Database initialization failed: {exc}") from exc

    def seed_synthetic_data(self) -> None:
        """Seed a deterministic demo office only when no employees exist."""
        random.seed(self._settings.synthetic_random_seed)
        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                cursor.execute("SELECT COUNT(*) AS count FROM Employees;")
                employee_count = int(cursor.fetchone()["count"])
                if employee_count > 0:
                    logger.info("Synthetic data already present; skipping seed")
                    return

                floors = [
                    (f"floor-{index + 1}", name)
                    for index, name in enumerate(self._settings.synthetic_floor_names)
                ]
                cursor.executemany("INSERT INTO Floors (id, name) VALUES (?, ?);", floors)

                zones: list[tuple[str, str, str, str]] = []
                for floor_index, (floor_id, _) in enumerate(floors):
                    layout = _SYNTHETIC_ZONE_LAYOUT[floor_index % len(_SYNTHETIC_ZONE_LAYOUT)]
                    for zone_index, (zone_name, zone_type) in enumerate(layout):
                        zones.append(
                            (f"zone-{floor_index + 1}{zone_index + 1}", zone_name, zone_type, floor_id)
                        )
                cursor.executemany(
                    "INSERT INTO Zones (id, name, zone_type, floor_id) VALUES (?, ?, ?, ?);",
                    zones,
                )

                employees = []
                for index in range(self._settings.synthetic_employee_count):
                    skill_count = random.randint(0, 3)
                    skills = sorted(random.sample(self._settings.synthetic_tech_skills, skill_count))
                    employees.append(
                        (
                            f"emp-{index + 1:03d}",
                            f"Employee {index + 1}",
                            random.choice(self._settings.synthetic_departments),
                            json.dumps(skills),
                        )
                    )
                cursor.executemany(
                    """
                    INSERT INTO Employees (id, name, department, tech_skills)
                    VALUES (?, ?, ?, ?);
                    """,
                    employees,
                )

                employee_ids = [row[0] for row in employees]
                project_rows = []
                member_rows = []
                for index in range(max(1, len(employee_ids) // 4)):
                    project_id = f"proj-{index + 1:02d}"
                    project_rows.append((project_id, f"Project {index + 1}", random.randint(1, 5)))
                    members = random.sample(employee_ids, min(len(employee_ids), random.randint(3, 6)))
                    member_rows.extend(
                        (project_id, member_id, position)
                        for position, member_id in enumerate(members)
                    )
                cursor.executemany(
                    "INSERT INTO Projects (id, name, priority) VALUES (?, ?, ?);",
                    project_rows,
                )
                cursor.executemany(
                    """
                    INSERT INTO ProjectMembers (project_id, employee_id, position)
                    VALUES (?, ?, ?);
                    """,
                    member_rows,
                )

                seat_rows = []
                occupant_pool = list(employee_ids)
                for zone_id, zone_name, _, floor_id in zones:
                    for seat_index in range(self._settings.synthetic_seats_per_zone):
                        roll = random.random()
                        status = SEAT_STATUS_AVAILABLE
                        occupant = None
                        if roll < self._settings.synthetic_occupied_probability and occupant_pool:
                            status = SEAT_STATUS_OCCUPIED
                            occupant = occupant_pool.pop(0)
                        elif roll > 0.95:
                            status = SEAT_STATUS_MAINTENANCE
                        elif roll > 0.9:
                            status = SEAT_STATUS_RESERVED
                        seat_rows.append(
                            (
                                f"{zone_id}-s{seat_index + 1}",
                                f"{zone_name} {seat_index + 1}",
                                zone_id,
                                floor_id,
                                status,
                                occupant,
                            )
                        )
                cursor.executemany(
                    """
                    INSERT INTO Seats (id, label, zone_id, floor_id, status, assigned_employee_id)
                    VALUES (?, ?, ?, ?, ?, ?);
                    """,
                    seat_rows,
                )
                conn.commit()
            logger.info(
                "Synthetic seed completed | employees=%s | projects=%s | seats=%s",
                len(employees),
                len(project_rows),
                len(seat_rows),
            )
        except sqlite3.Error as exc:
            raise RuntimeError(f"Synthetic data seeding failed: {exc}") from exc

    # --- Workspace records ---

    def upsert_floor(self, floor_id: str, name: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO Floors (id, name) VALUES (?, ?)
                ON CONFLICT(id) DO UPDATE SET name = excluded.name;
                """,
                (floor_id, name),
            )
            conn.commit()

    def upsert_zone(self, zone: ZoneRecord) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO Zones (id, name, zone_type, floor_id) VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    zone_type = excluded.zone_type,
                    floor_id = excluded.floor_id;
                """,
                (zone.zone_id, zone.name, zone.zone_type, zone.floor_id),
            )
            conn.commit()

    def upsert_seat(self, seat: SeatRecord) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO Seats (id, label, zone_id, floor_id, status, assigned_employee_id)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    label = excluded.label,
                    zone_id = excluded.zone_id,
                    floor_id = excluded.floor_id,
                    status = excluded.status,
                    assigned_employee_id = excluded.assigned_employee_id;
                """,
                (
                    seat.seat_id,
                    seat.label,
                    seat.zone_id,
                    seat.floor_id,
                    seat.status,
                    seat.assigned_employee_id,
                ),
            )
            conn.commit()

    def upsert_employee(self, employee: EmployeeRecord) -> None:
        """Store an employee; project membership is owned by `upsert_project`."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO Employees (id, name, department, tech_skills) VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    department = excluded.department,
                    tech_skills = excluded.tech_skills;
                """,
                (
                    employee.employee_id,
                    employee.name,
                    employee.department,
                    json.dumps(list(employee.tech_skills)),
                ),
            )
            conn.commit()

    def upsert_project(self, project: ProjectRecord) -> None:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO Projects (id, name, priority) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    priority = excluded.priority;
                """,
                (project.project_id, project.name, project.priority),
            )
            cursor.execute(
                "DELETE FROM ProjectMembers WHERE project_id = ?;",
                (project.project_id,),
            )
            cursor.executemany(
                """
                INSERT OR IGNORE INTO ProjectMembers (project_id, employee_id, position)
                VALUES (?, ?, ?);
                """,
                [
                    (project.project_id, member_id, position)
                    for position, member_id in enumerate(project.team_member_ids)
                ],
            )
            conn.commit()

    def list_employee_records(self) -> list[EmployeeRecord]:
        """Return employees in insertion order with their current project ids."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT pm.employee_id, pm.project_id
                FROM ProjectMembers AS pm
                INNER JOIN Projects AS p ON p.id = pm.project_id
                ORDER BY p.rowid ASC;
                """
            )
            projects_by_employee: dict[str, list[str]] = {}
            for row in cursor.fetchall():
                projects_by_employee.setdefault(str(row["employee_id"]), []).append(
                    str(row["project_id"])
                )

            cursor.execute(
                """
                SELECT id, name, department, tech_skills
                FROM Employees
                ORDER BY rowid ASC;
                """
            )
            return [
                EmployeeRecord(
                    employee_id=str(row["id"]),
                    name=str(row["name"]),
                    department=str(row["department"]),
                    tech_skills=tuple(json.loads(row["tech_skills"] or "[]")),
                    current_project_ids=tuple(projects_by_employee.get(str(row["id"]), [])),
                )
                for row in cursor.fetchall()
            ]

    def list_project_records(self) -> list[ProjectRecord]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT project_id, employee_id
                FROM ProjectMembers
                ORDER BY project_id ASC, position ASC;
                """
            )
            members_by_project: dict[str, list[str]] = {}
            for row in cursor.fetchall():
                members_by_project.setdefault(str(row["project_id"]), []).append(
                    str(row["employee_id"])
                )

            cursor.execute("SELECT id, name, priority FROM Projects ORDER BY rowid ASC;")
            return [
                ProjectRecord(
                    project_id=str(row["id"]),
                    name=str(row["name"]),
                    priority=int(row["priority"]),
                    team_member_ids=tuple(members_by_project.get(str(row["id"]), [])),
                )
                for row in cursor.fetchall()
            ]

    def list_seat_records(self) -> list[SeatRecord]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, label, zone_id, floor_id, status, assigned_employee_id
                FROM Seats
                ORDER BY rowid ASC;
                """
            )
            return [
                SeatRecord(
                    seat_id=str(row["id"]),
                    label=str(row["label"]),
                    zone_id=str(row["zone_id"]),
                    floor_id=str(row["floor_id"]),
                    status=str(row["status"]),
                    assigned_employee_id=(
                        str(row["assigned_employee_id"])
                        if row["assigned_employee_id"] is not None
                        else None
                    ),
                )
                for row in cursor.fetchall()
            ]

    def list_zone_records(self) -> list[ZoneRecord]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, name, zone_type, floor_id FROM Zones ORDER BY rowid ASC;")
            return [
                ZoneRecord(
                    zone_id=str(row["id"]),
                    name=str(row["name"]),
                    zone_type=str(row["zone_type"]),
                    floor_id=str(row["floor_id"]) if row["floor_id"] is not None else None,
                )
                for row in cursor.fetchall()
            ]

    # --- Seating plans ---

    def save_seating_plan(self, plan: SeatingPlan) -> int:
        """Insert plan, assignments and unassigned remainder in one transaction."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO SeatingPlans (
                    name,
                    description,
                    team_proximity_weight,
                    tech_stack_weight,
                    cross_team_weight,
                    deadline_weight,
                    optimization_score,
                    is_active,
                    created_by
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?);
                """,
                (
                    plan.name,
                    plan.description,
                    plan.parameters.team_proximity_weight,
                    plan.parameters.tech_stack_weight,
                    plan.parameters.cross_team_weight,
                    plan.parameters.deadline_weight,
                    plan.optimization_score,
                    plan.created_by,
                ),
            )
            plan_id = int(cursor.lastrowid)
            cursor.executemany(
                """
                INSERT INTO PlanAssignments (plan_id, position, employee_id, seat_id, reason, score)
                VALUES (?, ?, ?, ?, ?, ?);
                """,
                [
                    (
                        plan_id,
                        position,
                        assignment.employee_id,
                        assignment.seat_id,
                        assignment.reason,
                        assignment.score,
                    )
                    for position, assignment in enumerate(plan.assignments)
                ],
            )
            unassigned_rows = [
                (plan_id, position, UNASSIGNED_EMPLOYEE, employee_id)
                for position, employee_id in enumerate(plan.unassigned_employee_ids)
            ]
            unassigned_rows.extend(
                (plan_id, position, UNASSIGNED_SEAT, seat_id)
                for position, seat_id in enumerate(plan.unassigned_seat_ids)
            )
            cursor.executemany(
                """
                INSERT INTO PlanUnassigned (plan_id, position, entity_type, entity_id)
                VALUES (?, ?, ?, ?);
                """,
                unassigned_rows,
            )
            conn.commit()
        logger.info(
            "Seating plan persisted | plan_id=%s | assignments=%s",
            plan_id,
            len(plan.assignments),
        )
        return plan_id

    def _load_plan(self, cursor: sqlite3.Cursor, row: sqlite3.Row) -> SeatingPlan:
        plan_id = int(row["id"])
        cursor.execute(
            """
            SELECT employee_id, seat_id, reason, score
            FROM PlanAssignments
            WHERE plan_id = ?
            ORDER BY position ASC;
            """,
            (plan_id,),
        )
        assignments = tuple(
            SeatAssignment(
                employee_id=str(item["employee_id"]),
                seat_id=str(item["seat_id"]),
                reason=str(item["reason"]),
                score=float(item["score"]),
            )
            for item in cursor.fetchall()
        )
        cursor.execute(
            """
            SELECT entity_type, entity_id
            FROM PlanUnassigned
            WHERE plan_id = ?
            ORDER BY entity_type ASC, position ASC;
            """,
            (plan_id,),
        )
        unassigned = cursor.fetchall()
        return SeatingPlan(
            plan_id=plan_id,
            name=str(row["name"]),
            description=str(row["description"]),
            parameters=AlgorithmParameters(
                team_proximity_weight=int(row["team_proximity_weight"]),
                tech_stack_weight=int(row["tech_stack_weight"]),
                cross_team_weight=int(row["cross_team_weight"]),
                deadline_weight=int(row["deadline_weight"]),
            ),
            assignments=assignments,
            optimization_score=int(row["optimization_score"]),
            is_active=bool(row["is_active"]),
            created_by=str(row["created_by"]),
            created_at=str(row["created_at"]) if row["created_at"] is not None else None,
            effective_from=(
                str(row["effective_from"]) if row["effective_from"] is not None else None
            ),
            updated_at=str(row["updated_at"]) if row["updated_at"] is not None else None,
            unassigned_employee_ids=tuple(
                str(item["entity_id"])
                for item in unassigned
                if item["entity_type"] == UNASSIGNED_EMPLOYEE
            ),
            unassigned_seat_ids=tuple(
                str(item["entity_id"])
                for item in unassigned
                if item["entity_type"] == UNASSIGNED_SEAT
            ),
        )

    def get_seating_plan(self, plan_id: int) -> Optional[SeatingPlan]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {_PLAN_COLUMNS} FROM SeatingPlans WHERE id = ?;",
                (plan_id,),
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return self._load_plan(cursor, row)

    def list_seating_plans(self) -> list[SeatingPlan]:
        """Return all plans, newest first."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT {_PLAN_COLUMNS} FROM SeatingPlans ORDER BY id DESC;")
            rows = cursor.fetchall()
            return [self._load_plan(cursor, row) for row in rows]

    def get_active_seating_plan(self) -> Optional[SeatingPlan]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                SELECT {_PLAN_COLUMNS}
                FROM SeatingPlans
                WHERE is_active = 1
                ORDER BY effective_from DESC
                LIMIT 1;
                """
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return self._load_plan(cursor, row)

    def activate_seating_plan(self, plan_id: int) -> bool:
        """Deactivate every plan and activate `plan_id` in a single transaction."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM SeatingPlans WHERE id = ?;", (plan_id,))
            if cursor.fetchone() is None:
                return False
            cursor.execute(
                "UPDATE SeatingPlans SET is_active = 0 WHERE is_active = 1 AND id != ?;",
                (plan_id,),
            )
            cursor.execute(
                """
                UPDATE SeatingPlans
                SET is_active = 1, effective_from = CURRENT_TIMESTAMP
                WHERE id = ?;
                """,
                (plan_id,),
            )
            conn.commit()
            return True

    def update_plan_parameters(self, plan_id: int, params: AlgorithmParameters) -> bool:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE SeatingPlans
                SET team_proximity_weight = ?,
                    tech_stack_weight = ?,
                    cross_team_weight = ?,
                    deadline_weight = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?;
                """,
                (
                    params.team_proximity_weight,
                    params.tech_stack_weight,
                    params.cross_team_weight,
                    params.deadline_weight,
                    plan_id,
                ),
            )
            conn.commit()
            return cursor.rowcount > 0

    def delete_seating_plan(self, plan_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM SeatingPlans WHERE id = ?;", (plan_id,))
            conn.commit()
            return cursor.rowcount > 0

    def count_seating_plans(self) -> int:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) AS count FROM SeatingPlans;")
            return int(cursor.fetchone()["count"])

    def count_active_seating_plans(self) -> int:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) AS count FROM SeatingPlans WHERE is_active = 1;")
            return int(cursor.fetchone()["count"])
