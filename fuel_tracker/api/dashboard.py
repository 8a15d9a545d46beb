"""Routes tableau de bord / Dashboard routes."""

from fastapi import APIRouter, Depends

from fuel_tracker.api.deps import record_store
from fuel_tracker.models.refueling import Refueling
from fuel_tracker.models.vehicle import Vehicle
from fuel_tracker.models.vehicle_usage import VehicleUsage
from fuel_tracker.schemas.dashboard import DashboardSummary
from fuel_tracker.services.dashboard_service import DashboardService
from fuel_tracker.services.record_store import RecordStore

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
async def dashboard_summary(
    vehicles: RecordStore = Depends(record_store(Vehicle)),
    refuelings: RecordStore = Depends(record_store(Refueling)),
    usages: RecordStore = Depends(record_store(VehicleUsage)),
):
    """Totaux du mois courant / Current month totals."""
    summary = DashboardService.summarize(
        vehicles=await vehicles.list(Vehicle.id),
        refuelings=await refuelings.list(Refueling.date.desc(), Refueling.id.desc()),
        usages=await usages.list(VehicleUsage.date.desc()),
    )
    return DashboardSummary.model_validate(summary, from_attributes=True)
