#!/usr/bin/env python3
"""Validate local seating optimizer environment readiness."""

from __future__ import annotations

import importlib
import shutil
import sys
import tempfile
from dataclasses import replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from officeplan.repository.data_repository import DataRepository
from officeplan.services.matching_service import SOLVER_CP_SAT, SeatingOptimizationService
from officeplan.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True
    temp_dir = tempfile.mkdtemp(prefix="officeplan-env-")

    # CHECK 1: Python version >= 3.11
    if sys.version_info >= (3, 11):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.11",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("numpy", "numpy"),
        ("pandas", "pandas"),
        ("ortools", "ortools"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    from importlib.metadata import version

    import_errors: list[str] = []
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            _ = version(dist_name)
        except Exception as exc:  # pragma: no cover - runtime guard
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    try:
        temp_db_path = Path(temp_dir) / "officeplan_validation.db"
        validation_settings = replace(get_settings(), database_path=temp_db_path)
        repository = DataRepository(validation_settings)

        # CHECK 3: Database initialization
        try:
            repository.initialize_database()
            ok, line = _print_result("Database initialization", True)
        except Exception as exc:
            ok, line = _print_result("Database initialization", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 4: Synthetic office seeding
        try:
            repository.seed_synthetic_data()
            employee_count = len(repository.list_employee_records())
            if employee_count != validation_settings.synthetic_employee_count:
                raise RuntimeError(
                    f"expected {validation_settings.synthetic_employee_count} employees, "
                    f"got {employee_count}"
                )
            ok, line = _print_result(
                "Synthetic office",
                True,
                f": {employee_count} employees, {len(repository.list_seat_records())} seats",
            )
        except Exception as exc:
            ok, line = _print_result("Synthetic office", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        service = SeatingOptimizationService(
            repository=repository,
            settings=validation_settings,
        )

        # CHECK 5: Greedy optimization preview
        try:
            result = service.optimize_seating(created_by="validator", persist_outputs=False)
            ok, line = _print_result(
                "Greedy optimization",
                True,
                (
                    f": {len(result.plan.assignments)} assignments, "
                    f"score={result.plan.optimization_score}"
                ),
            )
        except Exception as exc:
            ok, line = _print_result("Greedy optimization", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 6: CP-SAT optimization preview
        try:
            result = service.optimize_seating(
                created_by="validator",
                solver_name=SOLVER_CP_SAT,
                persist_outputs=False,
            )
            ok, line = _print_result(
                "CP-SAT optimization",
                True,
                f": score={result.plan.optimization_score}",
            )
        except Exception as exc:
            ok, line = _print_result("CP-SAT optimization", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    print(SEPARATOR_LINE)
    print(" Office Seating Optimizer Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
