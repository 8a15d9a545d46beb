"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que Base.metadata les détecte.
Import all models here so Base.metadata picks them up.
"""

from fuel_tracker.models.user import User
from fuel_tracker.models.vehicle import CONSUMPTION_RATE_ATTRIBUTES, FUEL_TYPE_LABELS, FuelType, Vehicle
from fuel_tracker.models.refueling import Refueling
from fuel_tracker.models.vehicle_usage import VehicleUsage

__all__ = [
    "User",
    "Vehicle",
    "FuelType",
    "FUEL_TYPE_LABELS",
    "CONSUMPTION_RATE_ATTRIBUTES",
    "Refueling",
    "VehicleUsage",
]
