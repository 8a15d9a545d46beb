"""Routes Véhicules / Vehicle API routes."""

from fastapi import APIRouter, Depends

from fuel_tracker.api.deps import record_store
from fuel_tracker.exceptions import RecordNotFoundError
from fuel_tracker.models.vehicle import Vehicle
from fuel_tracker.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate
from fuel_tracker.services.record_store import RecordStore

router = APIRouter()

vehicle_store = record_store(Vehicle)


@router.get("/", response_model=list[VehicleRead])
async def list_vehicles(store: RecordStore = Depends(vehicle_store)):
    """Lister les véhicules, plus récents d'abord / List vehicles, newest first."""
    return await store.list(Vehicle.created_at.desc(), Vehicle.id.desc())


@router.post("/", response_model=VehicleRead, status_code=201)
async def create_vehicle(data: VehicleCreate, store: RecordStore = Depends(vehicle_store)):
    """Créer un véhicule / Create a vehicle."""
    return await store.create(data.model_dump())


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(vehicle_id: int, store: RecordStore = Depends(vehicle_store)):
    vehicle = await store.get(vehicle_id)
    if vehicle is None:
        raise RecordNotFoundError("Vehicle", vehicle_id)
    return vehicle


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(vehicle_id: int, data: VehicleUpdate, store: RecordStore = Depends(vehicle_store)):
    """Modifier un véhicule / Update a vehicle."""
    fields = data.model_dump(exclude_unset=True)
    for key in ("name", "fuel_type"):
        if key in fields and fields[key] is None:
            del fields[key]
    return await store.update(vehicle_id, fields)


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(vehicle_id: int, store: RecordStore = Depends(vehicle_store)):
    """Supprimer un véhicule et ses registres / Delete a vehicle and its records."""
    await store.delete(vehicle_id)
