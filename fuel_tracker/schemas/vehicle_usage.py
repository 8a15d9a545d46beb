"""Schémas Uso do veículo / Vehicle usage schemas."""

from pydantic import BaseModel, ConfigDict, Field

from fuel_tracker.models.vehicle import FuelType
from fuel_tracker.schemas.vehicle import VehicleRates


class VehicleUsageFields(BaseModel):
    """
    Instantané du formulaire / Form snapshot.
    Les champs obligatoires sont vérifiés par le formulaire, pas ici.
    Required fields are checked by the form, not here.
    """
    vehicle_id: int | None = None
    fuel_type: str | None = None
    initial_odometer: float | None = Field(None, ge=0)
    final_odometer: float | None = Field(None, ge=0)
    km_driven: float | None = Field(None, ge=0)
    estimated_liters: float | None = Field(None, ge=0)
    price_per_liter: float | None = Field(None, ge=0)
    total_cost: float | None = Field(None, ge=0)
    gas_station: str | None = Field(None, max_length=100)
    is_paid: bool = False
    date: str | None = None
    notes: str | None = None


class VehicleUsageUpdate(VehicleUsageFields):
    is_paid: bool | None = None


class VehicleUsageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    vehicle_id: int
    fuel_type: FuelType
    initial_odometer: int | None = None
    final_odometer: int | None = None
    km_driven: int | None = None
    estimated_liters: float | None = None
    price_per_liter: float | None = None
    total_cost: float | None = None
    gas_station: str | None = None
    is_paid: bool
    date: str
    notes: str | None = None
    vehicle: VehicleRates | None = None


class DeriveRequest(BaseModel):
    """Champ modifié + instantané / Changed field plus snapshot."""
    values: VehicleUsageFields
    changed_field: str | None = None


class ConsumptionComparisonRead(BaseModel):
    expected_rate: float
    actual_rate: float
    deviation_pct: float


class DeriveResponse(BaseModel):
    values: VehicleUsageFields
    updated_fields: list[str]
    cost_per_km: float | None = None
    comparison: ConsumptionComparisonRead | None = None
    fuel_type_label: str | None = None
