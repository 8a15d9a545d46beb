"""Routes API / API routes."""

from fastapi import APIRouter

from fuel_tracker.api import (
    auth,
    vehicles,
    refuelings,
    vehicle_usage,
    dashboard,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(refuelings.router, prefix="/refuelings", tags=["refuelings"])
api_router.include_router(vehicle_usage.router, prefix="/vehicle-usage", tags=["vehicle-usage"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
