"""Application settings resolved from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class Settings:
    app_name: str = "Office Seating Optimizer"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    database_path: Path = Path("data/officeplan.db")

    # Slider defaults shown by the admin console.
    default_team_proximity_weight: int = 75
    default_tech_stack_weight: int = 60
    default_cross_team_weight: int = 40
    default_deadline_weight: int = 85

    seating_solver: str = "greedy"
    seating_solver_max_time_seconds: int = 10
    seating_solver_random_seed: int = 42
    seating_cp_sat_workers: int = 1
    seating_objective_scale: int = 1000
    plan_name_prefix: str = "Seating Plan"

    synthetic_random_seed: int = 7
    synthetic_floor_names: tuple[str, ...] = ("Floor 1", "Floor 2")
    synthetic_employee_count: int = 24
    synthetic_seats_per_zone: int = 5
    synthetic_occupied_probability: float = 0.15
    synthetic_departments: tuple[str, ...] = field(
        default=("Engineering", "Design", "Product", "QA"),
    )
    synthetic_tech_skills: tuple[str, ...] = field(
        default=("python", "react", "typescript", "go", "sql", "figma", "kubernetes"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; tests derive copies with `replace`.

    The synthetic floor names, departments and skill vocabulary are fixed
    tuples and are not read from the environment.
    """
    defaults = Settings()
    return Settings(
        app_name=_env_str("APP_NAME", defaults.app_name),
        app_version=_env_str("APP_VERSION", defaults.app_version),
        log_level=_env_str("LOG_LEVEL", defaults.log_level),
        database_path=Path(_env_str("DATABASE_PATH", str(defaults.database_path))),
        default_team_proximity_weight=_env_int(
            "DEFAULT_TEAM_PROXIMITY_WEIGHT", defaults.default_team_proximity_weight
        ),
        default_tech_stack_weight=_env_int(
            "DEFAULT_TECH_STACK_WEIGHT", defaults.default_tech_stack_weight
        ),
        default_cross_team_weight=_env_int(
            "DEFAULT_CROSS_TEAM_WEIGHT", defaults.default_cross_team_weight
        ),
        default_deadline_weight=_env_int(
            "DEFAULT_DEADLINE_WEIGHT", defaults.default_deadline_weight
        ),
        seating_solver=_env_str("SEATING_SOLVER", defaults.seating_solver),
        seating_solver_max_time_seconds=_env_int(
            "SEATING_SOLVER_MAX_TIME_SECONDS", defaults.seating_solver_max_time_seconds
        ),
        seating_solver_random_seed=_env_int(
            "SEATING_SOLVER_RANDOM_SEED", defaults.seating_solver_random_seed
        ),
        seating_cp_sat_workers=_env_int("SEATING_CP_SAT_WORKERS", defaults.seating_cp_sat_workers),
        seating_objective_scale=_env_int(
            "SEATING_OBJECTIVE_SCALE", defaults.seating_objective_scale
        ),
        plan_name_prefix=_env_str("PLAN_NAME_PREFIX", defaults.plan_name_prefix),
        synthetic_random_seed=_env_int("SYNTHETIC_RANDOM_SEED", defaults.synthetic_random_seed),
        synthetic_employee_count=_env_int(
            "SYNTHETIC_EMPLOYEE_COUNT", defaults.synthetic_employee_count
        ),
        synthetic_seats_per_zone=_env_int(
            "SYNTHETIC_SEATS_PER_ZONE", defaults.synthetic_seats_per_zone
        ),
        synthetic_occupied_probability=_env_float(
            "SYNTHETIC_OCCUPIED_PROBABILITY", defaults.synthetic_occupied_probability
        ),
    )
