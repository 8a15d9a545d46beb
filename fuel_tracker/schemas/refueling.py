"""Schémas Abastecimento / Refueling schemas."""

from pydantic import BaseModel, ConfigDict, Field

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class RefuelingCreate(BaseModel):
    vehicle_id: int
    date: str = Field(pattern=DATE_PATTERN)
    liters: float = Field(gt=0)
    price_per_liter: float = Field(gt=0)
    total_cost: float | None = Field(None, ge=0)
    odometer: int | None = Field(None, ge=0)
    gas_station: str | None = Field(None, max_length=100)
    notes: str | None = None


class RefuelingUpdate(BaseModel):
    vehicle_id: int | None = None
    date: str | None = Field(None, pattern=DATE_PATTERN)
    liters: float | None = Field(None, gt=0)
    price_per_liter: float | None = Field(None, gt=0)
    total_cost: float | None = Field(None, ge=0)
    odometer: int | None = Field(None, ge=0)
    gas_station: str | None = Field(None, max_length=100)
    notes: str | None = None


class RefuelingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    vehicle_id: int
    date: str
    liters: float
    price_per_liter: float
    total_cost: float
    odometer: int | None = None
    gas_station: str | None = None
    notes: str | None = None
