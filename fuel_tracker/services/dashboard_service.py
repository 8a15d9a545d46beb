"""
Service tableau de bord / Dashboard service.
Totaux du mois civil courant / Current calendar month totals.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable


def in_month(value: str | None, today: date) -> bool:
    """Meme mois et meme annee / Same month and year (local date)."""
    if not value:
        return False
    try:
        day = date.fromisoformat(value[:10])
    except ValueError:
        return False
    return day.year == today.year and day.month == today.month


def _sum(rows: Iterable[Any], attribute: str) -> float:
    return round(sum(float(getattr(row, attribute) or 0) for row in rows), 2)


@dataclass
class MonthlySummary:
    month: str  # YYYY-MM
    vehicle_count: int = 0
    refueling_count: int = 0
    refueling_liters: float = 0.0
    refueling_cost: float = 0.0
    usage_count: int = 0
    usage_km: int = 0
    usage_cost: float = 0.0
    usage_pending_cost: float = 0.0
    last_refueling: Any | None = field(default=None)


class DashboardService:
    """Agregation mensuelle / Monthly aggregation."""

    @staticmethod
    def summarize(
        vehicles: list[Any],
        refuelings: list[Any],
        usages: list[Any],
        today: date | None = None,
    ) -> MonthlySummary:
        today = today or date.today()
        month_refuelings = [r for r in refuelings if in_month(r.date, today)]
        month_usages = [u for u in usages if in_month(u.date, today)]
        pending = [u for u in month_usages if not u.is_paid]

        return MonthlySummary(
            month=f"{today.year:04d}-{today.month:02d}",
            vehicle_count=len(vehicles),
            refueling_count=len(month_refuelings),
            refueling_liters=_sum(month_refuelings, "liters"),
            refueling_cost=_sum(month_refuelings, "total_cost"),
            usage_count=len(month_usages),
            usage_km=sum(u.km_driven or 0 for u in month_usages),
            usage_cost=_sum(month_usages, "total_cost"),
            usage_pending_cost=_sum(pending, "total_cost"),
            last_refueling=max(refuelings, key=lambda r: (r.date, r.id), default=None),
        )
