"""
Strength Analytics — Chart date windows

Resolves the progress screens' quick filters into a concrete [start, end]
window, and makes the "validated workouts only" precondition explicit.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable

import pandas as pd

from strength_analytics.config import DATE_RANGE_PRESETS, DEFAULT_RANGE
from strength_analytics.errors import InvalidDateRangeError
from strength_analytics.models import DateLike, WorkoutLog

_OFFSETS = {
    "week": pd.DateOffset(weeks=1),
    "month": pd.DateOffset(months=1),
    "3months": pd.DateOffset(months=3),
    "6months": pd.DateOffset(months=6),
    "year": pd.DateOffset(years=1),
}
_FALLBACK = pd.DateOffset(months=3)


def _as_date(value: DateLike | str) -> date:
    try:
        return pd.Timestamp(value).date()
    except (TypeError, ValueError):
        raise InvalidDateRangeError(f"Not a date: {value!r}") from None


def filter_validated(workouts: Iterable[WorkoutLog], include_unvalidated: bool = False) -> list[WorkoutLog]:
    """Completed workouts only, unless explicitly asked for drafts too."""
    if include_unvalidated:
        return list(workouts)
    return [w for w in workouts if w.validated]


def resolve_date_range(
    filter_type: str | None = None,
    workouts: Iterable[WorkoutLog] = (),
    today: DateLike | None = None,
    custom_start: DateLike | str | None = None,
    custom_end: DateLike | str | None = None,
) -> tuple[date, date]:
    """
    (start, end) for a quick filter.

    - week / month / 3months / 6months / year: back from today (month
      arithmetic clamps to month end, e.g. Mar 31 − 1 month = Feb 28)
    - all: earliest to latest workout; last 3 months when there are none
    - custom: the given bounds; last 3 months if either is missing
    """
    filter_type = filter_type or DEFAULT_RANGE
    if filter_type not in DATE_RANGE_PRESETS:
        raise InvalidDateRangeError(f"Unknown date range {filter_type!r}, expected one of {DATE_RANGE_PRESETS}")

    end = pd.Timestamp(_as_date(today) if today is not None else date.today())

    if filter_type in _OFFSETS:
        return (end - _OFFSETS[filter_type]).date(), end.date()

    if filter_type == "custom":
        if custom_start is None or custom_end is None:
            return (end - _FALLBACK).date(), end.date()
        start, stop = _as_date(custom_start), _as_date(custom_end)
        if stop < start:
            raise InvalidDateRangeError(f"Custom range ends ({stop}) before it starts ({start})")
        return start, stop

    days = [_as_date(w.date) for w in workouts]
    if not days:
        return (end - _FALLBACK).date(), end.date()
    return min(days), max(days)
