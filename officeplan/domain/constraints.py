"""Domain-level validation rules for seating optimization."""

from __future__ import annotations

from dataclasses import dataclass

from officeplan.domain.models import AlgorithmParameters


WEIGHT_MIN = 0
WEIGHT_MAX = 100


@dataclass(frozen=True)
class SolverConfig:
    solver_max_time_seconds: int
    solver_random_seed: int
    objective_scale: int
    cp_sat_workers: int


def validate_algorithm_parameters(params: AlgorithmParameters) -> None:
    for name, value in params.to_dict().items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer")
        if not WEIGHT_MIN <= value <= WEIGHT_MAX:
            raise ValueError(f"{name} must be between {WEIGHT_MIN} and {WEIGHT_MAX}")


def validate_solver_config(config: SolverConfig) -> None:
    if config.solver_max_time_seconds <= 0:
        raise ValueError("solver_max_time_seconds must be > 0")
    if config.solver_random_seed < 0:
        raise ValueError("solver_random_seed must be >= 0")
    if config.objective_scale <= 0:
        raise ValueError("objective_scale must be > 0")
    if config.cp_sat_workers <= 0:
        raise ValueError("cp_sat_workers must be > 0")
