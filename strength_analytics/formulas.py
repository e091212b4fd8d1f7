"""
Strength Analytics — 1RM estimation formulas

Effective reps = reps + RIR: a set left with reps in reserve is credited
with the reps the lifter still had in the tank.

Epley is the default. Brzycki is offered because apps disagree on the
formula; select it per call or with STRENGTH_E1RM_FORMULA.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from strength_analytics import config
from strength_analytics.errors import InvalidWorkoutError, UnknownFormulaError

FORMULAS = ("epley", "brzycki")


def resolve_formula(formula: str | None = None) -> str:
    name = (formula or config.E1RM_FORMULA).strip().lower()
    if name not in FORMULAS:
        raise UnknownFormulaError(name)
    return name


def estimate_1rm(weight: float, reps: int, rir: int = 0, formula: str | None = None) -> float:
    """
    Single-set e1RM from weight and effective reps (reps + rir).

    Epley: w × (1 + r/30). Brzycki: w × 36 / (37 − r), falling back to Epley
    where Brzycki is undefined (r ≥ 37). A set with no completed reps
    estimates nothing and returns 0.
    """
    name = resolve_formula(formula)
    for field, value in (("weight", weight), ("reps", reps), ("rir", rir)):
        if not np.isfinite(value) or value < 0:
            raise InvalidWorkoutError(None, field, value)
    if reps <= 0:
        return 0.0
    r = reps + rir
    if name == "brzycki" and r < config.BRZYCKI_LIMIT:
        return weight * config.BRZYCKI_NUMERATOR / (config.BRZYCKI_LIMIT - r)
    return weight * (1 + r / config.EPLEY_DIVISOR)


def e1rm_column(df: pd.DataFrame, formula: str | None = None) -> pd.Series:
    """Vectorized estimate_1rm over a per-set frame of qualifying rows."""
    name = resolve_formula(formula)
    w = df["weight_kg"].astype(float)
    r = df["effective_reps"].astype(float)
    epley = w * (1 + r / config.EPLEY_DIVISOR)
    if name == "epley":
        return epley
    denom = (config.BRZYCKI_LIMIT - r).where(r < config.BRZYCKI_LIMIT)
    return (w * config.BRZYCKI_NUMERATOR / denom).fillna(epley)
