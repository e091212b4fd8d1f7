"""
Strength Analytics — Intensity distribution

Each set's intensity is weight / best e1RM of the same exercise in the same
workout, so it reads against that day's performance rather than a
historical max. Counts are sets, not workouts.

Zero-weight sets have no defined %1RM and are left out. A workout with a
single set is kept: its only set is compared to its own estimate.
"""
from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd
from loguru import logger

from strength_analytics.config import INTENSITY_BANDS
from strength_analytics.formulas import e1rm_column
from strength_analytics.frames import filter_window, qualifying_sets, workouts_to_dataframe
from strength_analytics.models import DateLike, IntensityDistribution, WorkoutLog

_BAND_NAMES = list(INTENSITY_BANDS)
_BAND_EDGES = [-np.inf] + [lo for lo, _ in list(INTENSITY_BANDS.values())[1:]] + [np.inf]


def intensity_band(pct: pd.Series) -> pd.Series:
    """Band name per %1RM value; lower edge inclusive."""
    return pd.cut(pct, bins=_BAND_EDGES, right=False, labels=_BAND_NAMES)


def calculate_intensity_distribution(
    workouts: Iterable[WorkoutLog],
    exercise_id: str,
    start: DateLike,
    end: DateLike,
    formula: str | None = None,
) -> IntensityDistribution:
    df = filter_window(workouts_to_dataframe(workouts), start, end)
    df = qualifying_sets(df, exercise_id)
    if df.empty:
        return IntensityDistribution()

    df = df.assign(e1rm=e1rm_column(df, formula))
    df["day_e1rm"] = df.groupby("workout_pos")["e1rm"].transform("max")
    loaded = df[df["weight_kg"] > 0]
    if loaded.empty:
        return IntensityDistribution()

    pct = loaded["weight_kg"] / loaded["day_e1rm"] * 100
    counts = intensity_band(pct).value_counts().reindex(_BAND_NAMES, fill_value=0)
    logger.debug(f"[INTENSITY] exercise_id={exercise_id} sets={len(loaded)}")
    return IntensityDistribution(**{name: int(counts[name]) for name in _BAND_NAMES})
