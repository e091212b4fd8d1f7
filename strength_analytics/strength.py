"""
Strength Analytics — Estimated 1RM, top sets and PR timeline

One point per workout that holds at least one set with reps > 0 for the
exercise. Same-day workouts stay separate points.
"""
from __future__ import annotations

from typing import Iterable

import pandas as pd
from loguru import logger

from strength_analytics.formulas import e1rm_column
from strength_analytics.frames import qualifying_sets, workouts_to_dataframe
from strength_analytics.models import (
    Estimated1RMPoint,
    LiftedSet,
    PRPoint,
    TopSetPoint,
    WorkoutLog,
)


# ═══════════════════════════════════════════════════════════════════════
# 1. ESTIMATED 1RM SERIES
# ═══════════════════════════════════════════════════════════════════════

def build_e1rm_series(
    workouts: Iterable[WorkoutLog],
    exercise_id: str,
    formula: str | None = None,
) -> list[Estimated1RMPoint]:
    """Best single-set e1RM per workout, oldest first."""
    workouts = list(workouts)
    df = qualifying_sets(workouts_to_dataframe(workouts), exercise_id)
    if df.empty:
        logger.debug(f"[E1RM] exercise_id={exercise_id} no qualifying sets in {len(workouts)} workouts")
        return []

    df = df.assign(e1rm=e1rm_column(df, formula))
    best = (
        df.groupby("workout_pos")
        .agg(date=("date", "first"), exercise_name=("exercise_name", "first"), e1rm=("e1rm", "max"))
        .reset_index()
        .sort_values("date", kind="stable")
    )

    points = [
        Estimated1RMPoint(
            workout_id=workouts[row.workout_pos].id,
            exercise_id=exercise_id,
            exercise_name=row.exercise_name,
            date=workouts[row.workout_pos].date,
            estimated_1rm=float(row.e1rm),
        )
        for row in best.itertuples(index=False)
    ]
    logger.debug(f"[E1RM] exercise_id={exercise_id} points={len(points)}")
    return points


# ═══════════════════════════════════════════════════════════════════════
# 2. TOP SETS
# ═══════════════════════════════════════════════════════════════════════

def build_top_sets(workouts: Iterable[WorkoutLog], exercise_id: str) -> list[TopSetPoint]:
    """
    Heaviest qualifying set per workout, for display as "405×3".

    Ties on weight go to the set with more reps, then to the first logged.
    This is a selection, not an estimate: a lighter set with a higher e1RM
    never wins.
    """
    workouts = list(workouts)
    df = qualifying_sets(workouts_to_dataframe(workouts), exercise_id)
    if df.empty:
        return []

    top = (
        df.sort_values(["workout_pos", "weight_kg", "reps"], ascending=[True, False, False])
        .drop_duplicates("workout_pos", keep="first")
        .sort_values("date", kind="stable")
    )
    points = [
        TopSetPoint(
            workout_id=workouts[row.workout_pos].id,
            exercise_id=exercise_id,
            exercise_name=row.exercise_name,
            date=workouts[row.workout_pos].date,
            top_set=LiftedSet(weight=float(row.weight_kg), reps=int(row.reps)),
        )
        for row in top.itertuples(index=False)
    ]
    logger.debug(f"[TOPSET] exercise_id={exercise_id} points={len(points)}")
    return points


# ═══════════════════════════════════════════════════════════════════════
# 3. PR TIMELINE
# ═══════════════════════════════════════════════════════════════════════

def build_pr_timeline(
    workouts: Iterable[WorkoutLog],
    exercise_id: str,
    formula: str | None = None,
) -> list[PRPoint]:
    """e1RM series with running max; is_pr marks a new best (first point always)."""
    series = build_e1rm_series(workouts, exercise_id, formula)
    if not series:
        return []
    e1rm = pd.Series([p.estimated_1rm for p in series])
    running = e1rm.cummax()
    prev = running.shift(1)
    is_pr = prev.isna() | (e1rm > prev)
    return [
        PRPoint(
            workout_id=p.workout_id,
            date=p.date,
            estimated_1rm=p.estimated_1rm,
            running_max=float(running.iloc[i]),
            is_pr=bool(is_pr.iloc[i]),
        )
        for i, p in enumerate(series)
    ]
