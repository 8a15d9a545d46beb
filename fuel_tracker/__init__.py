"""Fuel Tracker - suivi carburant personnel / personal vehicle fuel tracking."""
