"""Tests du formulaire d'utilisation / Usage form orchestration tests."""

import asyncio

import pytest

from fuel_tracker.exceptions import FormValidationError, PersistenceError, SubmissionInProgressError
from fuel_tracker.models import Vehicle
from fuel_tracker.services.usage_form import (
    DERIVATIONS,
    Derivation,
    FormMode,
    UsageForm,
    default_values,
    topological_order,
)

VEHICLES = {
    1: Vehicle(id=1, name="Gol", gasoline_consumption=10.0, ethanol_consumption=7.5),
    2: Vehicle(id=2, name="Onix", ethanol_consumption=9.0),
    3: Vehicle(id=3, name="Velho", gasoline_consumption=0),
}


def make_form(**kwargs) -> UsageForm:
    return UsageForm(VEHICLES.get, **kwargs)


def filled_form() -> UsageForm:
    form = make_form()
    form.set_value("vehicle_id", 1)
    form.set_value("fuel_type", "flex")
    form.set_value("price_per_liter", 4.329)
    form.set_value("initial_odometer", 10000)
    form.set_value("final_odometer", 10450)
    return form


class FakeStore:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.created = []
        self.updated = []

    async def create(self, fields):
        if self.fail:
            raise PersistenceError("store unavailable")
        self.created.append(fields)
        return {"id": len(self.created), **fields}

    async def update(self, record_id, fields):
        if self.fail:
            raise PersistenceError("store unavailable")
        self.updated.append((record_id, fields))
        return {"id": record_id, **fields}


class SlowStore:
    def __init__(self):
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def create(self, fields):
        self.entered.set()
        await self.release.wait()
        return fields


def test_derivations_run_in_dependency_order():
    assert [d.target for d in DERIVATIONS] == ["km_driven", "estimated_liters", "total_cost"]


def test_topological_order_rejects_cycles():
    cyclic = (
        Derivation("a", ("b",), lambda form: None),
        Derivation("b", ("a",), lambda form: None),
    )
    with pytest.raises(ValueError):
        topological_order(cyclic)


def test_full_chain_from_odometers():
    form = make_form()
    form.set_value("vehicle_id", 1)
    form.set_value("fuel_type", "flex")
    form.set_value("price_per_liter", 4.329)
    form.set_value("initial_odometer", 10000)
    updated = form.set_value("final_odometer", 10450)

    assert updated == ["km_driven", "estimated_liters", "total_cost"]
    assert form.values["km_driven"] == 450
    assert form.values["estimated_liters"] == 60.00
    assert form.values["total_cost"] == 259.74


def test_metrics():
    metrics = filled_form().metrics()
    assert metrics.cost_per_km == 0.577
    assert metrics.comparison.expected_rate == 7.5
    assert metrics.comparison.actual_rate == 7.5
    assert metrics.comparison.deviation_pct == 0.0


def test_metrics_without_inputs():
    metrics = make_form().metrics()
    assert metrics.cost_per_km is None
    assert metrics.comparison is None


def test_non_increasing_odometer_keeps_km_driven():
    form = make_form()
    form.set_value("km_driven", 300)
    form.set_value("initial_odometer", 500)
    assert form.set_value("final_odometer", 400) == []
    assert form.values["km_driven"] == 300
    form.set_value("final_odometer", 500)
    assert form.values["km_driven"] == 300


def test_zero_rate_leaves_estimate_untouched():
    form = make_form()
    form.set_value("estimated_liters", 12.5)
    form.set_value("vehicle_id", 3)
    form.set_value("fuel_type", "gasoline")
    updated = form.set_value("km_driven", 100)
    assert "estimated_liters" not in updated
    assert form.values["estimated_liters"] == 12.5


def test_missing_rate_leaves_estimate_untouched():
    form = make_form()
    form.set_value("estimated_liters", 12.5)
    form.set_value("vehicle_id", 2)
    form.set_value("fuel_type", "diesel")
    form.set_value("km_driven", 100)
    assert form.values["estimated_liters"] == 12.5


def test_fuel_type_change_rederives_estimate():
    form = make_form()
    form.set_value("vehicle_id", 1)
    form.set_value("km_driven", 450)
    form.set_value("fuel_type", "gasoline")
    assert form.values["estimated_liters"] == 45.0
    form.set_value("fuel_type", "ethanol")
    assert form.values["estimated_liters"] == 60.0


def test_vehicle_change_resets_rate_lookup():
    form = filled_form()
    form.set_value("vehicle_id", 2)
    assert form.values["estimated_liters"] == 50.0
    assert form.values["total_cost"] == 216.45


def test_manual_edit_of_derived_field_survives_unrelated_recompute():
    form = filled_form()
    form.set_value("km_driven", 400)
    assert form.values["estimated_liters"] == 53.33
    assert form.values["total_cost"] == 230.87

    form.set_value("price_per_liter", 5.0)
    assert form.values["km_driven"] == 400
    assert form.values["estimated_liters"] == 53.33
    assert form.values["total_cost"] == 266.65


def test_manual_total_cost_is_not_reverted():
    form = filled_form()
    form.set_value("total_cost", 250.0)
    form.set_value("notes", "viagem")
    form.set_value("is_paid", True)
    assert form.values["total_cost"] == 250.0


def test_setting_same_value_does_nothing():
    form = filled_form()
    form.set_value("total_cost", 250.0)
    assert form.set_value("final_odometer", 10450) == []
    assert form.values["total_cost"] == 250.0


def test_recompute_is_idempotent():
    form = make_form()
    form.load({
        "vehicle_id": 1,
        "fuel_type": "ethanol",
        "initial_odometer": 10000,
        "final_odometer": 10450,
        "price_per_liter": 4.329,
    })
    first_updates = form.recompute()
    first = form.snapshot()
    assert first_updates == ["km_driven", "estimated_liters", "total_cost"]
    assert form.recompute() == []
    assert form.snapshot() == first


def test_load_does_not_derive():
    form = make_form()
    form.load({"vehicle_id": 1, "fuel_type": "ethanol", "initial_odometer": 1, "final_odometer": 11})
    assert form.values["km_driven"] is None
    assert form.vehicle is VEHICLES[1]


def test_dispatch_of_changed_field():
    form = make_form()
    form.load({"vehicle_id": 1, "fuel_type": "ethanol", "km_driven": 75})
    assert form.dispatch("km_driven") == ["estimated_liters"]
    assert form.values["estimated_liters"] == 10.0


def test_unknown_field_is_rejected():
    with pytest.raises(KeyError):
        make_form().set_value("odometer", 10)


async def test_create_submit_resets_form():
    form = filled_form()
    store = FakeStore()
    record = await form.submit(store)

    assert record["km_driven"] == 450
    assert store.created[0]["fuel_type"].value == "flex"
    assert store.created[0]["gas_station"] is None
    assert form.mode is FormMode.CREATE
    assert form.values == default_values()
    assert form.is_open


async def test_submit_rounds_odometers_to_integers():
    form = filled_form()
    form.set_value("final_odometer", 10450.6)
    store = FakeStore()
    await form.submit(store)
    payload = store.created[0]
    assert payload["final_odometer"] == 10451
    assert isinstance(payload["km_driven"], int)


async def test_edit_submit_keeps_values_and_closes():
    record = type("Record", (), {})()
    record.id = 7
    for name, value in filled_form().snapshot().items():
        setattr(record, name, value)

    form = UsageForm.for_record(record, VEHICLES.get)
    assert form.mode is FormMode.EDIT
    form.set_value("is_paid", True)
    store = FakeStore()
    await form.submit(store)

    assert store.updated[0][0] == 7
    assert store.updated[0][1]["is_paid"] is True
    assert form.values["total_cost"] == 259.74
    assert form.is_open is False


async def test_validation_blocks_submission():
    form = make_form()
    form.set_value("date", "")
    store = FakeStore()
    with pytest.raises(FormValidationError) as excinfo:
        await form.submit(store)
    assert set(excinfo.value.errors) == {"vehicle_id", "fuel_type", "date"}
    assert store.created == []


async def test_validation_of_unknown_vehicle_and_fuel():
    form = make_form()
    form.load({"vehicle_id": 99, "fuel_type": "kerosene", "date": "2024-13-40"})
    with pytest.raises(FormValidationError) as excinfo:
        await form.submit(FakeStore())
    assert excinfo.value.errors == {
        "vehicle_id": "Unknown vehicle",
        "fuel_type": "Unknown fuel type",
        "date": "Date must be YYYY-MM-DD",
    }


@pytest.mark.parametrize("value", ["20261019", "2026-W42-1", "2026-10-19T00:00"])
async def test_date_must_be_calendar_day(value):
    form = filled_form()
    form.set_value("date", value)
    with pytest.raises(FormValidationError) as excinfo:
        await form.submit(FakeStore())
    assert excinfo.value.errors == {"date": "Date must be YYYY-MM-DD"}


def test_text_odometers_are_read_as_numbers():
    form = make_form()
    form.set_value("vehicle_id", 1)
    form.set_value("fuel_type", "gasoline")
    form.set_value("initial_odometer", "10000")
    updated = form.set_value("final_odometer", "10450")
    assert updated == ["km_driven", "estimated_liters"]
    assert form.values["km_driven"] == 450
    assert form.values["estimated_liters"] == 45.0


async def test_unparsable_number_is_kept_and_rejected_on_submit():
    form = filled_form()
    assert form.set_value("price_per_liter", "abc") == []
    assert form.values["price_per_liter"] == "abc"
    with pytest.raises(FormValidationError) as excinfo:
        await form.submit(FakeStore())
    assert excinfo.value.errors == {"price_per_liter": "Must be a number"}


async def test_persistence_error_keeps_values():
    form = filled_form()
    before = form.snapshot()
    with pytest.raises(PersistenceError):
        await form.submit(FakeStore(fail=True))
    assert form.snapshot() == before
    assert form.is_submitting is False


async def test_second_submit_while_in_flight_is_refused():
    form = filled_form()
    store = SlowStore()
    task = asyncio.create_task(form.submit(store))
    await store.entered.wait()

    with pytest.raises(SubmissionInProgressError):
        await form.submit(store)

    store.release.set()
    await task
    assert form.is_submitting is False
