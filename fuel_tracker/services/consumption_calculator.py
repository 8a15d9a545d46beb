"""
Service de calcul de consommation / Consumption calculation service.

Fonctions pures : aucune derivation ne leve d'exception. Une entree absente
(None) ou un diviseur non positif produit None, le champ reste a saisir.
Pure functions: no derivation raises. A missing input (None) or a non-positive
divisor yields None and the field is left for manual entry.

Arrondi demi-haut partout / Round-half-up everywhere.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Mapping

from fuel_tracker.models.vehicle import FuelType

Number = int | float | Decimal
RateTable = Mapping[FuelType, Number | None]


def round_half_up(value: Number, places: int) -> float:
    """Arrondi commercial / Commercial rounding on the decimal form of the value."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def as_decimal(value) -> Decimal | None:
    """Forme decimale d'une saisie, None si non numerique / Decimal form of an input, None if not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


@dataclass(frozen=True)
class ConsumptionComparison:
    """Consommation attendue vs reelle / Expected vs actual consumption."""
    expected_rate: float
    actual_rate: float
    deviation_pct: float


class ConsumptionCalculatorService:
    """Derivations d'une session d'utilisation / Usage session derivations."""

    @staticmethod
    def reference_rate(rates: RateTable | None, fuel_type: FuelType | str | None) -> float | None:
        """
        Taux declare pour le carburant de la session / Declared rate for the session fuel type.
        Flex sans taux flex : repli sur l'ethanol / Flex without a flex rate falls back to ethanol.
        """
        if rates is None or fuel_type is None:
            return None
        try:
            fuel_type = FuelType(fuel_type)
        except ValueError:
            return None
        rate = rates.get(fuel_type)
        if rate is None and fuel_type is FuelType.FLEX:
            rate = rates.get(FuelType.ETHANOL)
        return float(rate) if rate is not None else None

    @staticmethod
    def distance(initial_odometer: Number | None, final_odometer: Number | None) -> Number | None:
        """Km parcourus / Distance driven. None unless final > initial."""
        initial, final = as_decimal(initial_odometer), as_decimal(final_odometer)
        if initial is None or final is None:
            return None
        driven = final - initial
        if driven <= 0:
            return None
        if driven == driven.to_integral_value():
            return int(driven)
        return float(driven)

    @staticmethod
    def estimated_liters(km_driven: Number | None, rate: Number | None) -> float | None:
        """Litres estimes / Estimated volume = km / rate, 2 decimals."""
        km, rate = as_decimal(km_driven), as_decimal(rate)
        if km is None or rate is None or rate <= 0:
            return None
        return round_half_up(km / rate, 2)

    @staticmethod
    def total_cost(estimated_liters: Number | None, price_per_liter: Number | None) -> float | None:
        """Cout total / Total cost = liters x price, 2 decimals."""
        liters, price = as_decimal(estimated_liters), as_decimal(price_per_liter)
        if liters is None or price is None:
            return None
        return round_half_up(liters * price, 2)

    @staticmethod
    def refueling_total(liters: Number, price_per_liter: Number) -> float:
        """Total d'un abastecimento / Refueling total, 2 decimals."""
        return round_half_up(Decimal(str(liters)) * Decimal(str(price_per_liter)), 2)

    @staticmethod
    def cost_per_km(total_cost: Number | None, km_driven: Number | None) -> float | None:
        """Cout par km (affichage) / Cost per km (display only), 3 decimals."""
        cost, km = as_decimal(total_cost), as_decimal(km_driven)
        if cost is None or km is None or km == 0:
            return None
        return round_half_up(cost / km, 3)

    @staticmethod
    def compare_consumption(
        km_driven: Number | None,
        estimated_liters: Number | None,
        expected_rate: Number | None,
    ) -> ConsumptionComparison | None:
        """
        Ecart consommation reelle / declaree (affichage) / Actual vs declared deviation (display only).
        Positif : plus de km par litre que declare / Positive: more km per liter than declared.
        """
        km, liters, expected = as_decimal(km_driven), as_decimal(estimated_liters), as_decimal(expected_rate)
        if km is None or liters is None or liters <= 0:
            return None
        if expected is None or expected <= 0:
            return None
        actual = km / liters
        deviation = (actual - expected) / expected * 100
        return ConsumptionComparison(
            expected_rate=float(expected),
            actual_rate=round_half_up(actual, 2),
            deviation_pct=round_half_up(deviation, 1),
        )
