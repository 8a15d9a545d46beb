"""Modele Abastecimento / Refueling event model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fuel_tracker.database import Base


class Refueling(Base):
    """Achat de carburant / Fuel purchase."""
    __tablename__ = "refuelings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    liters: Mapped[float] = mapped_column(Numeric(8, 2), nullable=False)
    price_per_liter: Mapped[float] = mapped_column(Numeric(6, 3), nullable=False)
    total_cost: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    odometer: Mapped[int | None] = mapped_column(Integer)
    gas_station: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="refuelings")

    def __repr__(self) -> str:
        return f"<Refueling {self.date} - {self.liters}L - vehicle {self.vehicle_id}>"
