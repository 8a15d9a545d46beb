"""Routes Uso do veículo / Vehicle usage API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from fuel_tracker.api.deps import get_current_user, record_store
from fuel_tracker.database import get_db
from fuel_tracker.exceptions import RecordNotFoundError
from fuel_tracker.models.user import User
from fuel_tracker.models.vehicle import FuelType
from fuel_tracker.models.vehicle_usage import VehicleUsage
from fuel_tracker.schemas.vehicle_usage import (
    ConsumptionComparisonRead,
    DeriveRequest,
    DeriveResponse,
    VehicleUsageFields,
    VehicleUsageRead,
    VehicleUsageUpdate,
)
from fuel_tracker.services.record_store import RecordStore, find_vehicle
from fuel_tracker.services.usage_form import FIELDS, UsageForm, VehicleLookup

router = APIRouter()

usage_store = record_store(VehicleUsage)


async def _vehicle_lookup(db: AsyncSession, owner_id: int, *vehicle_ids: int | None) -> VehicleLookup:
    """Précharger les véhicules pour le formulaire / Preload vehicles for the synchronous form lookup."""
    vehicles = {}
    for vehicle_id in vehicle_ids:
        if vehicle_id is not None and vehicle_id not in vehicles:
            vehicles[vehicle_id] = await find_vehicle(db, owner_id, vehicle_id)
    return vehicles.get


def _snapshot_fields(form: UsageForm) -> VehicleUsageFields:
    values = form.snapshot()
    if isinstance(values["fuel_type"], FuelType):
        values["fuel_type"] = values["fuel_type"].value
    return VehicleUsageFields(**values)


@router.get("/", response_model=list[VehicleUsageRead])
async def list_usage(
    vehicle_id: int | None = None,
    store: RecordStore = Depends(usage_store),
):
    """Lister les sessions, plus récentes d'abord / List sessions, newest first."""
    return await store.list(VehicleUsage.created_at.desc(), VehicleUsage.id.desc(), vehicle_id=vehicle_id)


@router.post("/derive", response_model=DeriveResponse)
async def derive_usage(
    data: DeriveRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Recalculer les champs dérivés / Recompute derived fields.
    Avec `changed_field`, seules les dérivations en aval sont relancées.
    With `changed_field`, only downstream derivations rerun.
    """
    if data.changed_field is not None and data.changed_field not in FIELDS:
        raise HTTPException(status_code=422, detail=f"Unknown field: {data.changed_field}")

    form = UsageForm(await _vehicle_lookup(db, user.id, data.values.vehicle_id))
    form.load(data.values.model_dump(exclude_unset=True))
    if data.changed_field is None:
        updated = form.recompute()
    else:
        updated = form.dispatch(data.changed_field)

    metrics = form.metrics()
    fuel_type = form.values["fuel_type"]
    return DeriveResponse(
        values=_snapshot_fields(form),
        updated_fields=updated,
        cost_per_km=metrics.cost_per_km,
        comparison=ConsumptionComparisonRead(**vars(metrics.comparison)) if metrics.comparison else None,
        fuel_type_label=fuel_type.label if isinstance(fuel_type, FuelType) else None,
    )


@router.post("/", response_model=VehicleUsageRead, status_code=201)
async def create_usage(
    data: VehicleUsageFields,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    store: RecordStore = Depends(usage_store),
):
    """
    Créer une session / Create a usage session.
    Valeurs enregistrées telles que soumises, sans dérivation : le recalcul
    réactif passe par POST /derive. / Values are stored as submitted with no
    derivation; reactive recomputation goes through POST /derive.
    """
    form = UsageForm(await _vehicle_lookup(db, user.id, data.vehicle_id))
    form.load(data.model_dump(exclude_unset=True))
    return await form.submit(store)


@router.put("/{usage_id}", response_model=VehicleUsageRead)
async def update_usage(
    usage_id: int,
    data: VehicleUsageUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    store: RecordStore = Depends(usage_store),
):
    """
    Modifier une session / Update a usage session.
    Champs fusionnés sur l'enregistrement puis stockés sans dérivation
    (voir POST /derive). / Fields are merged onto the stored record and saved
    without derivation (see POST /derive).
    """
    record = await store.get(usage_id)
    if record is None:
        raise RecordNotFoundError("VehicleUsage", usage_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("is_paid") is None:
        changes.pop("is_paid", None)

    lookup = await _vehicle_lookup(db, user.id, record.vehicle_id, changes.get("vehicle_id"))
    form = UsageForm.for_record(record, lookup)
    form.load(changes)
    return await form.submit(store)


@router.delete("/{usage_id}", status_code=204)
async def delete_usage(usage_id: int, store: RecordStore = Depends(usage_store)):
    """Supprimer une session / Delete a usage session."""
    await store.delete(usage_id)
