"""
app.py: FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires all services, registers routers, and runs startup initialization.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from officeplan.controllers.plan_controller import router as plan_router
from officeplan.controllers.seating_controller import router as seating_router
from officeplan.repository.data_repository import DataRepository
from officeplan.services.matching_service import SeatingOptimizationService
from officeplan.services.plan_service import SeatingPlanService
from officeplan.services.report_service import ReportService
from officeplan.services.simulation_service import SimulationService
from officeplan.utils.config import Settings, get_settings
from officeplan.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Services are created here and exposed through app.state; controllers
    resolve them with FastAPI dependencies.
    """
    settings = settings or get_settings()

    repository = DataRepository(settings)

    optimization_service = SeatingOptimizationService(
        repository=repository,
        settings=settings,
    )
    plan_service = SeatingPlanService(
        repository=repository,
        settings=settings,
    )
    simulation_service = SimulationService(
        repository=repository,
        settings=settings,
        optimization_service=optimization_service,
    )
    report_service = ReportService(
        repository=repository,
        settings=settings,
        plan_service=plan_service,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run startup initialization before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.include_router(seating_router)
    app.include_router(plan_router)

    app.state.repository = repository
    app.state.optimization_service = optimization_service
    app.state.plan_service = plan_service
    app.state.simulation_service = simulation_service
    app.state.report_service = report_service

    return app


def _startup(app: FastAPI) -> None:
    """
    Idempotent startup sequence. Safe to re-run on server restarts.

    The schema must exist before the demo office is seeded; seeding is
    skipped when employees are already present.
    """
    repository: DataRepository = app.state.repository

    logger.info("Startup: initializing database schema")
    repository.initialize_database()

    logger.info("Startup: seeding synthetic office layout")
    repository.seed_synthetic_data()

    logger.info("Startup complete | database=%s", repository.database_path)


# Module-level app object for uvicorn
app = create_app()
