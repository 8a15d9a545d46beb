"""Modele Vehicule / Vehicle model.

Chaque vehicule declare jusqu'a six taux de consommation, un par carburant.
Each vehicle declares up to six consumption rates, one per fuel type.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fuel_tracker.database import Base


class FuelType(str, enum.Enum):
    """Type de carburant / Fuel type."""
    GASOLINE = "gasoline"
    ETHANOL = "ethanol"
    DIESEL = "diesel"
    FLEX = "flex"
    ELECTRIC = "electric"
    HYBRID = "hybrid"

    @property
    def label(self) -> str:
        return FUEL_TYPE_LABELS[self]

    @property
    def rate_attribute(self) -> str:
        """Colonne du taux declare / Column holding the declared rate."""
        return CONSUMPTION_RATE_ATTRIBUTES[self]


# Libelles affiches (pt-BR) / Display labels (pt-BR)
FUEL_TYPE_LABELS: dict[FuelType, str] = {
    FuelType.GASOLINE: "Gasolina",
    FuelType.ETHANOL: "Etanol",
    FuelType.DIESEL: "Diesel",
    FuelType.FLEX: "Flex",
    FuelType.ELECTRIC: "Elétrico",
    FuelType.HYBRID: "Híbrido",
}

CONSUMPTION_RATE_ATTRIBUTES: dict[FuelType, str] = {
    FuelType.GASOLINE: "gasoline_consumption",
    FuelType.ETHANOL: "ethanol_consumption",
    FuelType.DIESEL: "diesel_consumption",
    FuelType.FLEX: "flex_consumption",
    FuelType.ELECTRIC: "electric_consumption",
    FuelType.HYBRID: "hybrid_consumption",
}


class Vehicle(Base):
    """Vehicule d'un utilisateur / User-owned vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # --- Identification ---
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    brand: Mapped[str | None] = mapped_column(String(50))
    model: Mapped[str | None] = mapped_column(String(50))
    year: Mapped[int | None] = mapped_column(Integer)
    fuel_type: Mapped[FuelType] = mapped_column(Enum(FuelType), default=FuelType.GASOLINE, nullable=False)

    # --- Consommation declaree (km/l ou km/kWh) / Declared consumption (km/l or km/kWh) ---
    gasoline_consumption: Mapped[float | None] = mapped_column(Numeric(6, 2))
    ethanol_consumption: Mapped[float | None] = mapped_column(Numeric(6, 2))
    diesel_consumption: Mapped[float | None] = mapped_column(Numeric(6, 2))
    flex_consumption: Mapped[float | None] = mapped_column(Numeric(6, 2))
    electric_consumption: Mapped[float | None] = mapped_column(Numeric(6, 2))
    hybrid_consumption: Mapped[float | None] = mapped_column(Numeric(6, 2))

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # --- Relations ---
    refuelings: Mapped[list["Refueling"]] = relationship(back_populates="vehicle", passive_deletes=True)
    usages: Mapped[list["VehicleUsage"]] = relationship(back_populates="vehicle", passive_deletes=True)

    def consumption_rates(self) -> dict[FuelType, float | None]:
        """Table des taux declares / Declared rate table keyed by fuel type."""
        rates = {}
        for fuel_type, attribute in CONSUMPTION_RATE_ATTRIBUTES.items():
            value = getattr(self, attribute)
            rates[fuel_type] = float(value) if value is not None else None
        return rates

    def __repr__(self) -> str:
        return f"<Vehicle {self.id} - {self.name}>"
