"""
Strength Analytics — Weekly aggregation

Weeks are contiguous 7-day buckets counted from the caller's window start:
week_index = floor((workout_day - start) / 7). Only workouts dated inside
[start, end] (inclusive) count; a reversed window yields nothing.

Output is sparse: weeks without activity are omitted. Use
dense_weekly_frame() to get a continuous 0..max series for bar charts.
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import timedelta
from typing import Iterable, Sequence

import pandas as pd
from loguru import logger

from strength_analytics.config import DAYS_PER_WEEK
from strength_analytics.frames import (
    filter_window,
    qualifying_sets,
    to_day,
    week_index,
    workouts_to_dataframe,
)
from strength_analytics.models import (
    DateLike,
    WeeklyFrequencyPoint,
    WeeklyRPEPoint,
    WeeklyVolumePoint,
    WorkoutLog,
)

_KEYS = ["week_index", "exercise_id"]


def _weekly_sets(
    workouts: Iterable[WorkoutLog],
    start: DateLike,
    end: DateLike,
    exercise_id: str | None,
) -> pd.DataFrame:
    df = workouts_to_dataframe(workouts)
    df = qualifying_sets(filter_window(df, start, end), exercise_id)
    if df.empty:
        return df
    return df.assign(week_index=week_index(df["date"], start))


def build_weekly_volume(
    workouts: Iterable[WorkoutLog],
    start: DateLike,
    end: DateLike,
    exercise_id: str | None = None,
) -> list[WeeklyVolumePoint]:
    """
    Σ weight × reps per (week, exercise). exercise_id=None covers all exercises.

    Buckets whose total is 0 (bodyweight sets only) are omitted.
    """
    df = _weekly_sets(workouts, start, end, exercise_id)
    if df.empty:
        return []
    weekly = (
        df.groupby(_KEYS, sort=True)
        .agg(exercise_name=("exercise_name", "first"), total_volume=("volume_kg", "sum"))
        .reset_index()
    )
    # Bodyweight-only buckets contribute nothing
    weekly = weekly[weekly["total_volume"] > 0]
    logger.debug(f"[WEEKLY] volume exercise_id={exercise_id} buckets={len(weekly)}")
    return [
        WeeklyVolumePoint(
            exercise_id=row.exercise_id,
            exercise_name=row.exercise_name,
            week_index=int(row.week_index),
            total_volume=float(row.total_volume),
        )
        for row in weekly.itertuples(index=False)
    ]


def build_weekly_frequency(
    workouts: Iterable[WorkoutLog],
    start: DateLike,
    end: DateLike,
    exercise_id: str | None = None,
) -> list[WeeklyFrequencyPoint]:
    """Workouts per (week, exercise). A workout counts once however many sets it logs."""
    df = _weekly_sets(workouts, start, end, exercise_id)
    if df.empty:
        return []
    weekly = (
        df.groupby(_KEYS, sort=True)
        .agg(exercise_name=("exercise_name", "first"), sessions=("workout_pos", "nunique"))
        .reset_index()
    )
    logger.debug(f"[WEEKLY] frequency exercise_id={exercise_id} buckets={len(weekly)}")
    return [
        WeeklyFrequencyPoint(
            exercise_id=row.exercise_id,
            exercise_name=row.exercise_name,
            week_index=int(row.week_index),
            sessions=int(row.sessions),
        )
        for row in weekly.itertuples(index=False)
    ]


def build_weekly_rpe(
    workouts: Iterable[WorkoutLog],
    start: DateLike,
    end: DateLike,
    exercise_id: str | None = None,
) -> list[WeeklyRPEPoint]:
    """Average per-set RPE (10 − RIR) per (week, exercise)."""
    df = _weekly_sets(workouts, start, end, exercise_id)
    if df.empty:
        return []
    weekly = (
        df.groupby(_KEYS, sort=True)
        .agg(
            exercise_name=("exercise_name", "first"),
            rpe_sum=("rpe", "sum"),
            n_sets=("rpe", "count"),
        )
        .reset_index()
    )
    # Divide only once every set of the bucket has been summed
    weekly["average_rpe"] = weekly["rpe_sum"] / weekly["n_sets"]
    logger.debug(f"[WEEKLY] rpe exercise_id={exercise_id} buckets={len(weekly)}")
    return [
        WeeklyRPEPoint(
            exercise_id=row.exercise_id,
            exercise_name=row.exercise_name,
            week_index=int(row.week_index),
            average_rpe=float(row.average_rpe),
        )
        for row in weekly.itertuples(index=False)
    ]


_VALUE_FIELDS = {
    WeeklyVolumePoint: "total_volume",
    WeeklyFrequencyPoint: "sessions",
    WeeklyRPEPoint: "average_rpe",
}


def dense_weekly_frame(
    points: Sequence[WeeklyVolumePoint | WeeklyFrequencyPoint | WeeklyRPEPoint],
    start: DateLike,
    value: str | None = None,
) -> pd.DataFrame:
    """
    Pivot a sparse weekly series into a chart-ready frame.

    value names the point field to chart; by default it follows the point
    type (total_volume, sessions or average_rpe).

    Index: week_index 0..max observed. Columns: week_start, then one column
    per exercise_id. Weeks without activity are 0.
    """
    if not points:
        return pd.DataFrame()
    value = value or _VALUE_FIELDS[type(points[0])]
    df = pd.DataFrame([asdict(p) for p in points])
    dense = (
        df.pivot_table(index="week_index", columns="exercise_id", values=value, aggfunc="sum", fill_value=0)
        .reindex(range(int(df["week_index"].max()) + 1), fill_value=0)
    )
    dense.columns.name = None
    dense.index.name = "week_index"
    first_day = to_day(start)
    dense.insert(0, "week_start", [first_day + timedelta(days=DAYS_PER_WEEK * i) for i in dense.index])
    return dense
