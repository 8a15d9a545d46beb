"""Schémas tableau de bord / Dashboard schemas."""

from pydantic import BaseModel

from fuel_tracker.schemas.refueling import RefuelingRead


class DashboardSummary(BaseModel):
    month: str
    vehicle_count: int = 0
    refueling_count: int = 0
    refueling_liters: float = 0.0
    refueling_cost: float = 0.0
    usage_count: int = 0
    usage_km: int = 0
    usage_cost: float = 0.0
    usage_pending_cost: float = 0.0
    last_refueling: RefuelingRead | None = None
