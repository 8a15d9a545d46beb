"""Tests des modèles / Model tests."""

from fuel_tracker.models import CONSUMPTION_RATE_ATTRIBUTES, FuelType, Refueling, Vehicle, VehicleUsage


def test_vehicle_repr():
    v = Vehicle(id=1, name="Gol")
    assert "Gol" in repr(v)


def test_refueling_and_usage_repr():
    assert "40L" in repr(Refueling(date="2024-03-01", liters=40, vehicle_id=1))
    assert "450km" in repr(VehicleUsage(date="2024-03-01", km_driven=450, vehicle_id=1))


def test_fuel_type_enum():
    assert [f.value for f in FuelType] == ["gasoline", "ethanol", "diesel", "flex", "electric", "hybrid"]
    assert FuelType("flex") is FuelType.FLEX
    assert FuelType.ELECTRIC.label == "Elétrico"


def test_every_fuel_type_has_a_rate_column():
    assert set(CONSUMPTION_RATE_ATTRIBUTES) == set(FuelType)
    columns = set(Vehicle.__table__.columns.keys())
    for fuel_type in FuelType:
        assert fuel_type.rate_attribute in columns


def test_consumption_rates_table():
    v = Vehicle(id=1, name="Gol", gasoline_consumption=11.2, ethanol_consumption=7.5)
    rates = v.consumption_rates()
    assert rates[FuelType.GASOLINE] == 11.2
    assert rates[FuelType.ETHANOL] == 7.5
    assert rates[FuelType.DIESEL] is None
    assert len(rates) == 6
