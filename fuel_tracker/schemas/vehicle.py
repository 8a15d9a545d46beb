"""Schémas Véhicule / Vehicle schemas."""

from pydantic import BaseModel, ConfigDict, Field

from fuel_tracker.models.vehicle import FuelType


class VehicleBase(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    brand: str | None = None
    model: str | None = None
    year: int | None = Field(None, ge=1900, le=2100)
    fuel_type: FuelType = FuelType.GASOLINE
    gasoline_consumption: float | None = Field(None, ge=0)
    ethanol_consumption: float | None = Field(None, ge=0)
    diesel_consumption: float | None = Field(None, ge=0)
    flex_consumption: float | None = Field(None, ge=0)
    electric_consumption: float | None = Field(None, ge=0)
    hybrid_consumption: float | None = Field(None, ge=0)


class VehicleCreate(VehicleBase):
    pass


class VehicleUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=150)
    brand: str | None = None
    model: str | None = None
    year: int | None = Field(None, ge=1900, le=2100)
    fuel_type: FuelType | None = None
    gasoline_consumption: float | None = Field(None, ge=0)
    ethanol_consumption: float | None = Field(None, ge=0)
    diesel_consumption: float | None = Field(None, ge=0)
    flex_consumption: float | None = Field(None, ge=0)
    electric_consumption: float | None = Field(None, ge=0)
    hybrid_consumption: float | None = Field(None, ge=0)


class VehicleRead(VehicleBase):
    model_config = ConfigDict(from_attributes=True)
    id: int


class VehicleRates(BaseModel):
    """Véhicule embarqué dans une session / Vehicle embedded in a usage row."""
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    brand: str | None = None
    model: str | None = None
    gasoline_consumption: float | None = None
    ethanol_consumption: float | None = None
    diesel_consumption: float | None = None
    flex_consumption: float | None = None
    electric_consumption: float | None = None
    hybrid_consumption: float | None = None
