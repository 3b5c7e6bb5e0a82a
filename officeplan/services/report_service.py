"""Tabular reports over seats and stored seating plans."""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd

from officeplan.domain.models import SEAT_STATUSES, ZONE_TYPE_UNKNOWN
from officeplan.repository.data_repository import DataRepository
from officeplan.services.plan_service import SeatingPlanService
from officeplan.utils.config import Settings, get_settings
from officeplan.utils.logger import get_logger


logger = get_logger(__name__)


class ReportService:
    """Aggregates repository rows with pandas for the reports endpoints."""

    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
        plan_service: Optional[SeatingPlanService] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)
        self._plan_service = plan_service or SeatingPlanService(
            repository=self._repository,
            settings=self._settings,
        )

    def _seat_frame(self) -> pd.DataFrame:
        seats = self._repository.list_seat_records()
        return pd.DataFrame(
            [
                {
                    "seat_id": seat.seat_id,
                    "zone_id": seat.zone_id,
                    "floor_id": seat.floor_id,
                    "status": seat.status,
                }
                for seat in seats
            ],
            columns=["seat_id", "zone_id", "floor_id", "status"],
        )

    def seat_utilization(self) -> dict[str, Any]:
        """Seat counts per status plus the occupied share of all seats."""
        frame = self._seat_frame()
        counts = (
            frame["status"]
            .value_counts()
            .reindex(list(SEAT_STATUSES), fill_value=0)
        )
        total_seats = int(len(frame))
        occupied = int(counts.get("occupied", 0))
        utilization_rate = float(occupied / total_seats) if total_seats else 0.0

        by_floor: list[dict[str, Any]] = []
        if total_seats:
            floor_counts = (
                frame.groupby(["floor_id", "status"], sort=True)
                .size()
                .unstack(fill_value=0)
                .reindex(columns=list(SEAT_STATUSES), fill_value=0)
            )
            for floor_id, row in floor_counts.iterrows():
                by_floor.append(
                    {"floor_id": str(floor_id), **{status: int(row[status]) for status in SEAT_STATUSES}}
                )

        return {
            "total_seats": total_seats,
            "by_status": {status: int(counts[status]) for status in SEAT_STATUSES},
            "utilization_rate": utilization_rate,
            "by_floor": by_floor,
        }

    def summarize_plan(self, plan_id: int) -> dict[str, Any]:
        """Per-zone assigned seat count and average assignment score of one plan."""
        plan = self._plan_service.get_plan(plan_id)
        seat_zone = {seat.seat_id: seat.zone_id for seat in self._repository.list_seat_records()}
        zones = {zone.zone_id: zone for zone in self._repository.list_zone_records()}

        frame = pd.DataFrame(
            [
                {
                    "seat_id": item.seat_id,
                    "zone_id": seat_zone.get(item.seat_id, ""),
                    "score": float(item.score),
                }
                for item in plan.assignments
            ],
            columns=["seat_id", "zone_id", "score"],
        )

        zone_rows: list[dict[str, Any]] = []
        if not frame.empty:
            grouped = (
                frame.groupby("zone_id", sort=True)
                .agg(assigned_seats=("seat_id", "count"), average_score=("score", "mean"))
                .reset_index()
            )
            for record in grouped.to_dict(orient="records"):
                zone = zones.get(record["zone_id"])
                zone_rows.append(
                    {
                        "zone_id": record["zone_id"],
                        "zone_name": zone.name if zone is not None else "",
                        "zone_type": zone.zone_type if zone is not None else ZONE_TYPE_UNKNOWN,
                        "assigned_seats": int(record["assigned_seats"]),
                        "average_score": round(float(record["average_score"]), 2),
                    }
                )

        logger.info(
            "Plan summary computed | plan_id=%s | zones=%s | assignments=%s",
            plan_id,
            len(zone_rows),
            len(plan.assignments),
        )
        return {
            "plan_id": plan_id,
            "plan_name": plan.name,
            "optimization_score": plan.optimization_score,
            "total_assignments": len(plan.assignments),
            "unassigned_employee_count": len(plan.unassigned_employee_ids),
            "zones": zone_rows,
        }
