"""
Strength Analytics — Per-set DataFrame

Every computation works on the same flat frame: one row per logged set.
Input validation happens here, once, before any result is produced.
"""
from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd
from loguru import logger

from strength_analytics.config import DAYS_PER_WEEK, MAX_RPE
from strength_analytics.errors import InvalidWorkoutError
from strength_analytics.models import DateLike, WorkoutLog

SET_COLUMNS = [
    "workout_pos", "workout_id", "date", "validated",
    "exercise_id", "exercise_name", "exercise_order", "set_index",
    "weight_kg", "reps", "rir",
    "effective_reps", "volume_kg", "rpe",
]

_NUMERIC_FIELDS = {"weight_kg": "weight", "reps": "reps", "rir": "rir"}


def to_day(value: DateLike) -> pd.Timestamp:
    """Normalize a date/datetime to midnight, keeping the wall-clock day."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()


def _validate(df: pd.DataFrame) -> pd.DataFrame:
    """Numeric weight/reps/rir, or InvalidWorkoutError naming the first bad set."""
    for col, name in _NUMERIC_FIELDS.items():
        # Non-numeric values become NaN and fail the finiteness check
        values = pd.to_numeric(df[col], errors="coerce").astype(float)
        bad = ~np.isfinite(values) | (values < 0)
        if bad.any():
            row = df[bad].iloc[0]
            field = f"{row['exercise_id']}.sets[{row['set_index']}].{name}"
            logger.warning(f"[FRAMES] Rejecting workout {row['workout_id']!r}: {field}={row[col]!r}")
            raise InvalidWorkoutError(row["workout_id"], field, row[col])
        df[col] = values
    return df


def workouts_to_dataframe(workouts: Iterable[WorkoutLog]) -> pd.DataFrame:
    """
    Flatten workouts into one row per set.

    Raises InvalidWorkoutError on negative or non-finite weight/reps/rir.
    Returns an empty frame with the full column set when there are no sets.
    """
    rows = []
    for pos, w in enumerate(workouts):
        day = to_day(w.date)
        for ex in w.exercises:
            for i, s in enumerate(ex.sets):
                rows.append({
                    "workout_pos": pos,
                    "workout_id": w.id,
                    "date": day,
                    "validated": bool(w.validated),
                    "exercise_id": ex.exercise_id,
                    "exercise_name": ex.name,
                    "exercise_order": ex.order,
                    "set_index": i,
                    "weight_kg": s.weight,
                    "reps": s.reps,
                    "rir": s.rir,
                })

    if not rows:
        df = pd.DataFrame(columns=SET_COLUMNS)
        return df.astype({"date": "datetime64[ns]", "weight_kg": float, "reps": float, "rir": float, "volume_kg": float})

    df = _validate(pd.DataFrame(rows))
    df["effective_reps"] = df["reps"] + df["rir"]
    df["volume_kg"] = df["weight_kg"] * df["reps"]
    df["rpe"] = MAX_RPE - df["rir"]
    return df[SET_COLUMNS]


def filter_window(df: pd.DataFrame, start: DateLike, end: DateLike) -> pd.DataFrame:
    """Rows whose day lies in [start, end], inclusive. Reversed windows are empty."""
    lo, hi = to_day(start), to_day(end)
    if df.empty or hi < lo:
        return df.iloc[0:0]
    return df[(df["date"] >= lo) & (df["date"] <= hi)]


def qualifying_sets(df: pd.DataFrame, exercise_id: str | None = None) -> pd.DataFrame:
    """Sets with completed reps, optionally for one exercise."""
    if df.empty:
        return df
    mask = df["reps"] > 0
    if exercise_id is not None:
        mask &= df["exercise_id"] == exercise_id
    return df[mask]


def week_index(dates: pd.Series, start: DateLike) -> pd.Series:
    """Zero-based 7-day bucket counted from start (day granularity)."""
    return ((dates - to_day(start)).dt.days // DAYS_PER_WEEK).astype(int)
