"""Modele Uso do veiculo / Vehicle usage session model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fuel_tracker.database import Base
from fuel_tracker.models.vehicle import FuelType


class VehicleUsage(Base):
    """Session d'utilisation bornee par deux releves compteur / Usage session bounded by two odometer readings."""
    __tablename__ = "vehicle_usage"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    fuel_type: Mapped[FuelType] = mapped_column(Enum(FuelType), nullable=False)

    initial_odometer: Mapped[int | None] = mapped_column(Integer)
    final_odometer: Mapped[int | None] = mapped_column(Integer)
    km_driven: Mapped[int | None] = mapped_column(Integer)
    estimated_liters: Mapped[float | None] = mapped_column(Numeric(8, 2))
    price_per_liter: Mapped[float | None] = mapped_column(Numeric(6, 3))
    total_cost: Mapped[float | None] = mapped_column(Numeric(10, 2))

    gas_station: Mapped[str | None] = mapped_column(String(100))
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="usages", lazy="joined")

    def __repr__(self) -> str:
        return f"<VehicleUsage {self.date} - {self.km_driven}km - vehicle {self.vehicle_id}>"
