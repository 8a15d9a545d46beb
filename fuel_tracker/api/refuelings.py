"""Routes Abastecimentos / Refueling API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fuel_tracker.api.deps import get_current_user, record_store
from fuel_tracker.database import get_db
from fuel_tracker.exceptions import FormValidationError, RecordNotFoundError
from fuel_tracker.models.refueling import Refueling
from fuel_tracker.models.user import User
from fuel_tracker.schemas.refueling import RefuelingCreate, RefuelingRead, RefuelingUpdate
from fuel_tracker.services.consumption_calculator import ConsumptionCalculatorService
from fuel_tracker.services.record_store import RecordStore, find_vehicle

router = APIRouter()

refueling_store = record_store(Refueling)

# Colonnes NOT NULL : un null explicite est ignore / NOT NULL columns: explicit nulls are ignored
REQUIRED_FIELDS = ("vehicle_id", "date", "liters", "price_per_liter", "total_cost")


async def _check_vehicle(db: AsyncSession, user: User, vehicle_id: int) -> None:
    if await find_vehicle(db, user.id, vehicle_id) is None:
        raise FormValidationError({"vehicle_id": "Unknown vehicle"})


@router.get("/", response_model=list[RefuelingRead])
async def list_refuelings(
    vehicle_id: int | None = None,
    store: RecordStore = Depends(refueling_store),
):
    """Lister les abastecimentos par date DESC / List refuelings by date DESC."""
    return await store.list(Refueling.date.desc(), Refueling.id.desc(), vehicle_id=vehicle_id)


@router.post("/", response_model=RefuelingRead, status_code=201)
async def create_refueling(
    data: RefuelingCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    store: RecordStore = Depends(refueling_store),
):
    """Créer un abastecimento / Create a refueling; total derived when omitted."""
    await _check_vehicle(db, user, data.vehicle_id)
    fields = data.model_dump()
    if fields["total_cost"] is None:
        fields["total_cost"] = ConsumptionCalculatorService.refueling_total(data.liters, data.price_per_liter)
    return await store.create(fields)


@router.put("/{entry_id}", response_model=RefuelingRead)
async def update_refueling(
    entry_id: int,
    data: RefuelingUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    store: RecordStore = Depends(refueling_store),
):
    """Modifier un abastecimento / Update a refueling."""
    entry = await store.get(entry_id)
    if entry is None:
        raise RecordNotFoundError("Refueling", entry_id)
    fields = data.model_dump(exclude_unset=True)
    for key in REQUIRED_FIELDS:
        if key in fields and fields[key] is None:
            del fields[key]
    if fields.get("vehicle_id") is not None:
        await _check_vehicle(db, user, fields["vehicle_id"])
    # Prix ou litres modifiés sans total explicite / Liters or price changed without explicit total
    if "total_cost" not in fields and ({"liters", "price_per_liter"} & fields.keys()):
        fields["total_cost"] = ConsumptionCalculatorService.refueling_total(
            fields.get("liters") or entry.liters,
            fields.get("price_per_liter") or entry.price_per_liter,
        )
    return await store.update(entry_id, fields)


@router.delete("/{entry_id}", status_code=204)
async def delete_refueling(entry_id: int, store: RecordStore = Depends(refueling_store)):
    """Supprimer un abastecimento / Delete a refueling."""
    await store.delete(entry_id)
