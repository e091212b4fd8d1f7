"""
Strength Analytics — Display units

Everything is stored and computed in kg. These helpers convert only at the
edge, for labels and chart axes; never feed their output back into the
engine.
"""
from strength_analytics.config import LB_PER_KG, WEIGHT_UNITS
from strength_analytics.errors import ValidationError


def _check_unit(unit: str) -> None:
    if unit not in WEIGHT_UNITS:
        raise ValidationError(f"Unknown weight unit {unit!r}, expected one of {WEIGHT_UNITS}")


def kg_to_lb(kg: float) -> float:
    return round(kg * LB_PER_KG, 2)


def lb_to_kg(lb: float) -> float:
    return round(lb / LB_PER_KG, 2)


def weight_for_display(kg: float, unit: str = "kg") -> float:
    _check_unit(unit)
    return kg_to_lb(kg) if unit == "lb" else kg


def format_weight(kg: float, unit: str = "kg") -> str:
    _check_unit(unit)
    if unit == "lb":
        return f"{kg_to_lb(kg)} lbs"
    return f"{kg:.1f} kg"
