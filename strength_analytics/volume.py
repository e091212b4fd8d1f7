"""
Strength Analytics — Volume totals over a date window

Volume = Σ weight × reps over sets with reps > 0, in kg. Results are
VolumeMaps: a key with no volume reads as 0.0 whether or not it is present.
"""
from __future__ import annotations

from typing import Iterable, Mapping

import pandas as pd
from loguru import logger

from strength_analytics.frames import filter_window, qualifying_sets, workouts_to_dataframe
from strength_analytics.models import DateLike, VolumeMap, WorkoutLog


def _window_sets(workouts: Iterable[WorkoutLog], start: DateLike, end: DateLike) -> pd.DataFrame:
    return qualifying_sets(filter_window(workouts_to_dataframe(workouts), start, end))


def calculate_exercise_volume(
    workouts: Iterable[WorkoutLog],
    exercise_ids: Iterable[str],
    start: DateLike,
    end: DateLike,
) -> VolumeMap:
    """Total volume per requested exercise, in one pass over the log."""
    ids = list(dict.fromkeys(exercise_ids))
    df = _window_sets(workouts, start, end)
    totals = VolumeMap({tid: 0.0 for tid in ids})
    if df.empty or not ids:
        return totals

    summed = df[df["exercise_id"].isin(ids)].groupby("exercise_id")["volume_kg"].sum()
    for tid, vol in summed.items():
        totals[tid] = float(vol)
    logger.debug(f"[VOLUME] exercises={len(ids)} with_volume={int((summed > 0).sum())}")
    return totals


def calculate_muscle_group_volume(
    workouts: Iterable[WorkoutLog],
    body_part_lookup: Mapping[str, str],
    start: DateLike,
    end: DateLike,
) -> VolumeMap:
    """
    Total volume per body part.

    Exercises missing from the lookup are skipped: the catalog is maintained
    elsewhere and may lag behind the log.
    """
    df = _window_sets(workouts, start, end)
    if df.empty:
        return VolumeMap()

    body_part = df["exercise_id"].map(lambda tid: body_part_lookup.get(tid))
    unknown = df.loc[body_part.isna(), "exercise_id"].unique()
    if len(unknown):
        logger.debug(f"[VOLUME] skipping {len(unknown)} exercise(s) without body part: {sorted(unknown)}")

    summed = df.assign(body_part=body_part).dropna(subset=["body_part"]).groupby("body_part")["volume_kg"].sum()
    return VolumeMap({part: float(vol) for part, vol in summed.items()})


def volume_share(volumes: Mapping[str, float]) -> dict:
    """Percentage of total volume per key, one decimal. Empty when total is 0."""
    total = sum(volumes.values())
    if total <= 0:
        return {}
    return {key: round(vol / total * 100, 1) for key, vol in volumes.items()}
