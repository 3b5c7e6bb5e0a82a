from __future__ import annotations

import pytest

from officeplan.utils.config import Settings, get_settings


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    try:
        yield get_settings
    finally:
        get_settings.cache_clear()


def test_solver_naming_and_seed_sizes_read_from_environment(monkeypatch, fresh_settings):
    monkeypatch.setenv("SEATING_OBJECTIVE_SCALE", "500")
    monkeypatch.setenv("PLAN_NAME_PREFIX", "Layout")
    monkeypatch.setenv("SYNTHETIC_EMPLOYEE_COUNT", "10")
    monkeypatch.setenv("SYNTHETIC_SEATS_PER_ZONE", "3")
    monkeypatch.setenv("SYNTHETIC_OCCUPIED_PROBABILITY", "0.25")

    settings = fresh_settings()

    assert settings.seating_objective_scale == 500
    assert settings.plan_name_prefix == "Layout"
    assert settings.synthetic_employee_count == 10
    assert settings.synthetic_seats_per_zone == 3
    assert settings.synthetic_occupied_probability == pytest.approx(0.25)


def test_blank_environment_values_fall_back_to_defaults(monkeypatch, fresh_settings):
    monkeypatch.setenv("PLAN_NAME_PREFIX", "  ")
    monkeypatch.setenv("SYNTHETIC_OCCUPIED_PROBABILITY", "")
    monkeypatch.delenv("SEATING_OBJECTIVE_SCALE", raising=False)

    settings = fresh_settings()
    defaults = Settings()

    assert settings.plan_name_prefix == defaults.plan_name_prefix
    assert settings.synthetic_occupied_probability == defaults.synthetic_occupied_probability
    assert settings.seating_objective_scale == defaults.seating_objective_scale
