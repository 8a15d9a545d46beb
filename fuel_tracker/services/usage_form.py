"""
Orchestrateur du formulaire d'utilisation / Usage session form orchestrator.

Les champs derives sont recalcules par propagation vers l'avant : seul un
changement d'une dependance declaree relance une derivation, dans l'ordre
topologique du graphe. Une saisie manuelle d'un champ derive n'est jamais
verrouillee ni annulee tant que ses dependances ne changent pas.

Derived fields are recomputed push-forward only: a derivation reruns only when
one of its declared dependencies changes, in topological order. A manual edit
of a derived field is kept until one of its dependencies changes again.
"""

import enum
import logging
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable

from fuel_tracker.exceptions import FormValidationError, SubmissionInProgressError
from fuel_tracker.models.vehicle import FuelType, Vehicle
from fuel_tracker.schemas.refueling import DATE_PATTERN
from fuel_tracker.services.consumption_calculator import (
    ConsumptionCalculatorService as calc,
    ConsumptionComparison,
    as_decimal,
    round_half_up,
)

logger = logging.getLogger("fuel_tracker.usage_form")

VehicleLookup = Callable[[int], Vehicle | None]

FIELDS = (
    "vehicle_id",
    "fuel_type",
    "initial_odometer",
    "final_odometer",
    "km_driven",
    "estimated_liters",
    "price_per_liter",
    "total_cost",
    "gas_station",
    "is_paid",
    "date",
    "notes",
)

# Persistes en entier / Persisted as integers
INTEGER_FIELDS = ("initial_odometer", "final_odometer", "km_driven")
NUMERIC_FIELDS = INTEGER_FIELDS + ("estimated_liters", "price_per_liter", "total_cost")


class FormMode(str, enum.Enum):
    CREATE = "CREATE"
    EDIT = "EDIT"


@dataclass(frozen=True)
class Derivation:
    """Champ derive et ses dependances / Derived field and its dependencies."""
    target: str
    depends_on: tuple[str, ...]
    compute: Callable[["UsageForm"], Any]


def topological_order(derivations: tuple[Derivation, ...]) -> tuple[Derivation, ...]:
    """Trier pour qu'un champ soit derive avant ceux qui en dependent / Sort producers before consumers."""
    by_target = {d.target: d for d in derivations}
    ordered: list[Derivation] = []
    visiting: set[str] = set()
    done: set[str] = set()

    def visit(derivation: Derivation) -> None:
        if derivation.target in done:
            return
        if derivation.target in visiting:
            raise ValueError(f"Derivation cycle through {derivation.target}")
        visiting.add(derivation.target)
        for dependency in derivation.depends_on:
            if dependency in by_target:
                visit(by_target[dependency])
        visiting.discard(derivation.target)
        done.add(derivation.target)
        ordered.append(derivation)

    for derivation in derivations:
        visit(derivation)
    return tuple(ordered)


DERIVATIONS = topological_order((
    Derivation(
        "total_cost",
        ("estimated_liters", "price_per_liter"),
        lambda form: calc.total_cost(form.values["estimated_liters"], form.values["price_per_liter"]),
    ),
    Derivation(
        "estimated_liters",
        ("km_driven", "fuel_type", "vehicle_id"),
        lambda form: calc.estimated_liters(form.values["km_driven"], form.reference_rate),
    ),
    Derivation(
        "km_driven",
        ("initial_odometer", "final_odometer"),
        lambda form: calc.distance(form.values["initial_odometer"], form.values["final_odometer"]),
    ),
))


@dataclass(frozen=True)
class UsageMetrics:
    """Indicateurs d'affichage, jamais persistes / Display-only metrics, never persisted."""
    cost_per_km: float | None
    comparison: ConsumptionComparison | None


def default_values(today: date | None = None) -> dict[str, Any]:
    return {
        "vehicle_id": None,
        "fuel_type": None,
        "initial_odometer": None,
        "final_odometer": None,
        "km_driven": None,
        "estimated_liters": None,
        "price_per_liter": None,
        "total_cost": None,
        "gas_station": "",
        "is_paid": False,
        "date": (today or date.today()).isoformat(),
        "notes": "",
    }


class UsageForm:
    """Edition en cours d'une session d'utilisation / One in-progress usage session edit."""

    def __init__(self, vehicle_lookup: VehicleLookup, record_id: int | None = None, today: date | None = None):
        self.vehicle_lookup = vehicle_lookup
        self.record_id = record_id
        self.mode = FormMode.EDIT if record_id is not None else FormMode.CREATE
        self.today = today
        self.values: dict[str, Any] = default_values(today)
        self.vehicle: Vehicle | None = None
        self.is_open = True
        self.is_submitting = False

    @classmethod
    def for_record(cls, record: Any, vehicle_lookup: VehicleLookup) -> "UsageForm":
        """Ouvrir un enregistrement existant / Open an existing record for editing."""
        form = cls(vehicle_lookup, record_id=record.id)
        form.load({name: getattr(record, name) for name in FIELDS})
        return form

    # --- Etat / State ---

    def load(self, values: dict[str, Any]) -> None:
        """Remplir sans deriver / Populate fields without running derivations."""
        for name, value in values.items():
            self._check_field(name)
            self.values[name] = self._coerce(name, value)
        self._select_vehicle()

    def reset(self) -> None:
        self.values = default_values(self.today)
        self.vehicle = None

    def snapshot(self) -> dict[str, Any]:
        return dict(self.values)

    @property
    def reference_rate(self) -> float | None:
        rates = self.vehicle.consumption_rates() if self.vehicle is not None else None
        return calc.reference_rate(rates, self.values["fuel_type"])

    # --- Propagation ---

    def set_value(self, name: str, value: Any) -> list[str]:
        """
        Saisie utilisateur / User edit of one field.
        Retourne les champs derives mis a jour / Returns the derived fields that were updated.
        """
        self._check_field(name)
        value = self._coerce(name, value)
        if self.values[name] == value:
            return []
        self.values[name] = value
        return self.dispatch(name)

    def dispatch(self, changed: str) -> list[str]:
        """Relancer les derivations dependant de `changed` / Rerun derivations depending on `changed`."""
        self._check_field(changed)
        if changed == "vehicle_id":
            self._select_vehicle()
        return self._propagate({changed})

    def recompute(self) -> list[str]:
        """Chaine complete / Full chain, idempotent on an unchanged snapshot."""
        self._select_vehicle()
        return self._propagate(set(FIELDS))

    def metrics(self) -> UsageMetrics:
        values = self.values
        return UsageMetrics(
            cost_per_km=calc.cost_per_km(values["total_cost"], values["km_driven"]),
            comparison=calc.compare_consumption(values["km_driven"], values["estimated_liters"], self.reference_rate),
        )

    def _propagate(self, changed: set[str]) -> list[str]:
        pending = set(changed)
        updated = []
        for derivation in DERIVATIONS:
            if pending.isdisjoint(derivation.depends_on):
                continue
            value = derivation.compute(self)
            if value is None:
                logger.debug("Derivation of %s skipped", derivation.target)
                continue
            if self.values[derivation.target] != value:
                self.values[derivation.target] = value
                pending.add(derivation.target)
                updated.append(derivation.target)
        return updated

    def _select_vehicle(self) -> None:
        vehicle_id = self.values["vehicle_id"]
        self.vehicle = self.vehicle_lookup(vehicle_id) if vehicle_id is not None else None

    # --- Soumission / Submit ---

    def validate(self) -> dict[str, str]:
        errors = {}
        if self.values["vehicle_id"] is None:
            errors["vehicle_id"] = "Vehicle is required"
        elif self.vehicle is None:
            errors["vehicle_id"] = "Unknown vehicle"
        if self.values["fuel_type"] is None:
            errors["fuel_type"] = "Fuel type is required"
        elif not isinstance(self.values["fuel_type"], FuelType):
            errors["fuel_type"] = "Unknown fuel type"
        if not self.values["date"]:
            errors["date"] = "Date is required"
        else:
            try:
                value = str(self.values["date"])
                if not re.fullmatch(DATE_PATTERN, value):
                    raise ValueError(value)
                date.fromisoformat(value)
            except ValueError:
                errors["date"] = "Date must be YYYY-MM-DD"
        for name in NUMERIC_FIELDS:
            if self.values[name] is not None and as_decimal(self.values[name]) is None:
                errors[name] = "Must be a number"
        return errors

    def to_payload(self) -> dict[str, Any]:
        payload = self.snapshot()
        for name in INTEGER_FIELDS:
            if payload[name] is not None:
                payload[name] = int(round_half_up(payload[name], 0))
        for name in ("gas_station", "notes"):
            payload[name] = payload[name] or None
        return payload

    async def submit(self, store) -> Any:
        """
        Valider puis persister / Validate then persist.

        Creation : le formulaire revient aux valeurs par defaut.
        Edition : les valeurs soumises restent, le formulaire se ferme.
        En cas d'erreur de persistance les valeurs sont conservees.
        Create resets to defaults, edit keeps the submitted values and closes.
        On a persistence error the values are kept for resubmission.
        """
        if self.is_submitting:
            raise SubmissionInProgressError("Usage form is already being submitted")
        self._select_vehicle()
        errors = self.validate()
        if errors:
            raise FormValidationError(errors)

        self.is_submitting = True
        try:
            if self.mode is FormMode.EDIT:
                record = await store.update(self.record_id, self.to_payload())
            else:
                record = await store.create(self.to_payload())
        finally:
            self.is_submitting = False

        if self.mode is FormMode.EDIT:
            self.is_open = False
        else:
            self.reset()
        return record

    # --- Interne / Internal ---

    @staticmethod
    def _check_field(name: str) -> None:
        if name not in FIELDS:
            raise KeyError(f"Unknown usage field: {name}")

    @staticmethod
    def _coerce(name: str, value: Any) -> Any:
        if name == "fuel_type" and value is not None:
            try:
                return FuelType(value)
            except ValueError:
                return value
        if name == "is_paid":
            return bool(value)
        if isinstance(value, Decimal):
            return float(value)
        if name in NUMERIC_FIELDS and isinstance(value, str):
            # "" efface, texte illisible garde pour validate() / "" clears, unparsable text is kept for validate()
            if not value.strip():
                return None
            number = as_decimal(value)
            return float(number) if number is not None else value
        return value
