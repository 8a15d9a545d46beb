"""Tests des services / Service tests."""

from datetime import date
from types import SimpleNamespace

from fuel_tracker.models.vehicle import FuelType
from fuel_tracker.services.consumption_calculator import ConsumptionCalculatorService as calc, round_half_up
from fuel_tracker.services.dashboard_service import DashboardService, in_month


def test_distance_from_odometers():
    assert calc.distance(10000, 10450) == 450


def test_distance_not_produced_for_zero_or_negative():
    assert calc.distance(10450, 10450) is None
    assert calc.distance(10450, 10000) is None
    assert calc.distance(None, 10000) is None
    assert calc.distance(0, 120) == 120


def test_distance_of_fractional_odometers_is_exact():
    assert calc.distance(10000.1, 10450.3) == 450.2
    assert calc.distance("10000", "10450") == 450


def test_non_numeric_inputs_are_skipped():
    assert calc.distance("abc", 10450) is None
    assert calc.distance(10000, "") is None
    assert calc.estimated_liters("450", "n/a") is None
    assert calc.total_cost(45.0, "abc") is None
    assert calc.cost_per_km(True, 450) is None
    assert calc.compare_consumption(450, float("nan"), 10.0) is None


def test_estimated_liters():
    assert calc.estimated_liters(450, 7.5) == 60.00
    assert calc.estimated_liters(100, 12) == 8.33
    assert calc.estimated_liters(0, 12) == 0.0


def test_estimated_liters_skipped_without_positive_rate():
    assert calc.estimated_liters(100, 0) is None
    assert calc.estimated_liters(100, -3) is None
    assert calc.estimated_liters(100, None) is None
    assert calc.estimated_liters(None, 10) is None


def test_total_cost():
    assert calc.total_cost(60.00, 4.329) == 259.74
    assert calc.total_cost(None, 4.329) is None
    assert calc.total_cost(60.0, None) is None


def test_rounding_is_half_up():
    # 1 / 8 = 0.125 : demi-pair donnerait 0.12 / half-even would give 0.12
    assert calc.estimated_liters(1, 8) == 0.13
    # round(2.675, 2) == 2.67 en binaire / in binary floats
    assert calc.total_cost(1, 2.675) == 2.68
    assert round_half_up(2.5, 0) == 3.0
    assert round_half_up(0.0005, 3) == 0.001


def test_refueling_total():
    assert calc.refueling_total(10, 5) == 50.0
    assert calc.refueling_total(40, 5.899) == 235.96


def test_cost_per_km():
    assert calc.cost_per_km(259.74, 450) == 0.577
    assert calc.cost_per_km(259.74, 0) is None
    assert calc.cost_per_km(None, 450) is None


def test_consumption_comparison_matches_declared_rate():
    comparison = calc.compare_consumption(450, 60.00, 7.5)
    assert comparison.actual_rate == 7.5
    assert comparison.expected_rate == 7.5
    assert comparison.deviation_pct == 0.0


def test_consumption_comparison_sign():
    better = calc.compare_consumption(450, 50, 7.5)
    worse = calc.compare_consumption(450, 75, 7.5)
    assert better.actual_rate == 9.0
    assert better.deviation_pct == 20.0
    assert worse.actual_rate == 6.0
    assert worse.deviation_pct == -20.0


def test_consumption_comparison_skipped():
    assert calc.compare_consumption(450, 0, 7.5) is None
    assert calc.compare_consumption(450, 60, None) is None
    assert calc.compare_consumption(450, 60, 0) is None
    assert calc.compare_consumption(None, 60, 7.5) is None


def test_reference_rate_lookup():
    rates = {FuelType.GASOLINE: 11.0, FuelType.ETHANOL: 7.5, FuelType.FLEX: None}
    assert calc.reference_rate(rates, FuelType.GASOLINE) == 11.0
    assert calc.reference_rate(rates, "ethanol") == 7.5
    assert calc.reference_rate(rates, "diesel") is None
    assert calc.reference_rate(rates, "kerosene") is None
    assert calc.reference_rate(None, "ethanol") is None


def test_flex_rate_falls_back_to_ethanol():
    assert calc.reference_rate({FuelType.ETHANOL: 7.5}, "flex") == 7.5
    assert calc.reference_rate({FuelType.ETHANOL: 7.5, FuelType.FLEX: 8.2}, "flex") == 8.2


def test_in_month():
    today = date(2024, 3, 15)
    assert in_month("2024-03-01", today)
    assert not in_month("2024-02-29", today)
    assert not in_month("2023-03-10", today)
    assert not in_month(None, today)
    assert not in_month("not-a-date", today)


def test_dashboard_summary():
    today = date(2024, 3, 15)
    refuelings = [
        SimpleNamespace(id=1, date="2024-03-02", liters=40, total_cost=235.96),
        SimpleNamespace(id=2, date="2024-03-10", liters=20.5, total_cost=120.0),
        SimpleNamespace(id=3, date="2024-02-27", liters=35, total_cost=200.0),
    ]
    usages = [
        SimpleNamespace(date="2024-03-03", km_driven=450, total_cost=259.74, is_paid=False),
        SimpleNamespace(date="2024-03-04", km_driven=None, total_cost=None, is_paid=False),
        SimpleNamespace(date="2024-03-05", km_driven=100, total_cost=57.72, is_paid=True),
        SimpleNamespace(date="2024-01-05", km_driven=999, total_cost=500.0, is_paid=False),
    ]
    summary = DashboardService.summarize([object(), object()], refuelings, usages, today=today)

    assert summary.month == "2024-03"
    assert summary.vehicle_count == 2
    assert summary.refueling_count == 2
    assert summary.refueling_liters == 60.5
    assert summary.refueling_cost == 355.96
    assert summary.usage_count == 3
    assert summary.usage_km == 550
    assert summary.usage_cost == 317.46
    assert summary.usage_pending_cost == 259.74
    assert summary.last_refueling.id == 2


def test_dashboard_summary_empty():
    summary = DashboardService.summarize([], [], [], today=date(2024, 1, 1))
    assert summary.refueling_count == 0
    assert summary.last_refueling is None
