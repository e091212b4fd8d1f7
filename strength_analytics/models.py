"""
Strength Analytics — Data model

Input records (WorkoutLog → ExerciseEntry → SetEntry) are immutable snapshots
supplied by the caller. Output points are freshly allocated per call.

All matching uses exercise_id, never display names.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Union

from strength_analytics.errors import InvalidWorkoutError

DateLike = Union[date, datetime]


# ═══════════════════════════════════════════════════════════════════════
# INPUT
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SetEntry:
    weight: float  # kg, 0 = bodyweight
    reps: int
    rir: int = 0


@dataclass(frozen=True)
class ExerciseEntry:
    exercise_id: str
    name: str = ""
    order: int = 0
    sets: tuple[SetEntry, ...] = ()


@dataclass(frozen=True)
class WorkoutLog:
    id: str
    date: DateLike
    exercises: tuple[ExerciseEntry, ...] = ()
    validated: bool = True
    notes: str = ""


# ═══════════════════════════════════════════════════════════════════════
# OUTPUT
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Estimated1RMPoint:
    workout_id: str
    exercise_id: str
    exercise_name: str
    date: DateLike
    estimated_1rm: float


@dataclass(frozen=True)
class LiftedSet:
    weight: float
    reps: int

    def __str__(self) -> str:
        return f"{self.weight:g}×{self.reps}"


@dataclass(frozen=True)
class TopSetPoint:
    workout_id: str
    exercise_id: str
    exercise_name: str
    date: DateLike
    top_set: LiftedSet


@dataclass(frozen=True)
class PRPoint:
    workout_id: str
    date: DateLike
    estimated_1rm: float
    running_max: float
    is_pr: bool


@dataclass(frozen=True)
class WeeklyVolumePoint:
    exercise_id: str
    exercise_name: str
    week_index: int
    total_volume: float


@dataclass(frozen=True)
class WeeklyFrequencyPoint:
    exercise_id: str
    exercise_name: str
    week_index: int
    sessions: int


@dataclass(frozen=True)
class WeeklyRPEPoint:
    exercise_id: str
    exercise_name: str
    week_index: int
    average_rpe: float


@dataclass(frozen=True)
class IntensityDistribution:
    """Counts of qualifying sets per %1RM band (not workouts)."""

    below_60: int = 0
    between_60_and_70: int = 0
    between_70_and_80: int = 0
    between_80_and_90: int = 0
    above_90: int = 0

    @property
    def total(self) -> int:
        return (
            self.below_60 + self.between_60_and_70 + self.between_70_and_80
            + self.between_80_and_90 + self.above_90
        )

    def as_dict(self) -> dict:
        return {
            "below_60": self.below_60,
            "between_60_and_70": self.between_60_and_70,
            "between_70_and_80": self.between_70_and_80,
            "between_80_and_90": self.between_80_and_90,
            "above_90": self.above_90,
        }


class VolumeMap(dict):
    """Key → total volume (kg). Missing keys read as 0.0 and are not inserted."""

    def __missing__(self, key):
        return 0.0

    def get(self, key, default=0.0):
        return super().get(key, default)

    @property
    def total(self) -> float:
        return float(sum(self.values()))


# ═══════════════════════════════════════════════════════════════════════
# RECORD PARSING — JSON export shape
# ═══════════════════════════════════════════════════════════════════════

def _parse_date(value, workout_id) -> DateLike:
    if isinstance(value, (date, datetime)):
        return value
    if isinstance(value, str) and len(value) >= 10:
        try:
            if len(value) == 10:
                return date.fromisoformat(value)
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
    raise InvalidWorkoutError(workout_id, "date", value, "is not an ISO date")


def _number(raw: dict, key: str, workout_id, cast=float):
    value = raw.get(key, 0)
    if value is None:
        return cast(0)
    if isinstance(value, bool):
        raise InvalidWorkoutError(workout_id, key, value, "is not a number")
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise InvalidWorkoutError(workout_id, key, value, "is not a number") from None


def workout_from_record(record: dict) -> WorkoutLog:
    """
    Build a WorkoutLog from one exported workout record.

    Accepts both the camelCase export keys (exerciseId) and snake_case.
    Numeric sanity (no negatives) is enforced by the computations, not here.
    """
    if not isinstance(record, dict):
        raise InvalidWorkoutError(None, "record", type(record).__name__, "is not an object")
    workout_id = record.get("id")
    if workout_id is None:
        raise InvalidWorkoutError(None, "id", None, "is required")
    if "date" not in record:
        raise InvalidWorkoutError(workout_id, "date", None, "is required")

    exercises = []
    for i, ex in enumerate(record.get("exercises") or []):
        exercise_id = ex.get("exerciseId", ex.get("exercise_id"))
        if not exercise_id:
            raise InvalidWorkoutError(workout_id, f"exercises[{i}].exerciseId", exercise_id, "is required")
        sets = tuple(
            SetEntry(
                weight=_number(s, "weight", workout_id),
                reps=_number(s, "reps", workout_id, int),
                rir=_number(s, "rir", workout_id, int),
            )
            for s in (ex.get("sets") or [])
        )
        exercises.append(ExerciseEntry(
            exercise_id=str(exercise_id),
            name=ex.get("name", "") or "",
            order=int(ex.get("order", i) or 0),
            sets=sets,
        ))

    return WorkoutLog(
        id=str(workout_id),
        date=_parse_date(record["date"], workout_id),
        exercises=tuple(exercises),
        validated=bool(record.get("validated", True)),
        notes=record.get("notes", "") or "",
    )


def workouts_from_records(records: Iterable[dict]) -> list[WorkoutLog]:
    return [workout_from_record(r) for r in records]
