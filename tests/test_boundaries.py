"""
Tests for the edges around the engine: record parsing, the per-set frame,
chart date windows, display units and the report CLI.
Run: pytest tests/ -v
"""
import json
from datetime import date, datetime, timedelta, timezone

import pandas as pd
import pytest


def _record(wid="w1", day="2026-01-05", validated=True, sets=None, exercise_id="squat"):
    """Helper: one workout in the JSON export shape."""
    return {
        "id": wid,
        "date": day,
        "notes": "",
        "validated": validated,
        "exercises": [{
            "exerciseId": exercise_id,
            "name": exercise_id.title(),
            "order": 0,
            "sets": sets if sets is not None else [{"weight": 100, "reps": 5, "rir": 2}],
        }],
        "createdAt": "2026-01-05T10:00:00.000Z",
        "updatedAt": "2026-01-05T10:00:00.000Z",
    }


# ═══════════════════════════════════════════════════════════════════════
# RECORD PARSING
# ═══════════════════════════════════════════════════════════════════════

class TestWorkoutFromRecord:
    """Export records → immutable WorkoutLog snapshots."""

    def test_export_shape(self):
        from strength_analytics.models import SetEntry, workout_from_record
        w = workout_from_record(_record(sets=[{"weight": 100, "reps": 5, "rir": 2}, {"weight": 110, "reps": 1, "rir": 0}]))
        assert w.id == "w1"
        assert w.date == date(2026, 1, 5)
        assert w.validated is True
        assert w.exercises[0].exercise_id == "squat"
        assert w.exercises[0].sets == (SetEntry(100.0, 5, 2), SetEntry(110.0, 1, 0))

    def test_snake_case_and_datetime(self):
        from strength_analytics.models import workout_from_record
        w = workout_from_record({
            "id": 7,
            "date": "2026-01-05T18:30:00Z",
            "exercises": [{"exercise_id": "bench", "sets": [{"weight": None, "reps": 8}]}],
        })
        assert w.id == "7"
        assert w.date == datetime(2026, 1, 5, 18, 30, tzinfo=timezone.utc)
        assert w.exercises[0].sets[0].weight == 0.0
        assert w.exercises[0].sets[0].rir == 0

    def test_is_frozen(self):
        from dataclasses import FrozenInstanceError
        from strength_analytics.models import workout_from_record
        w = workout_from_record(_record())
        with pytest.raises(FrozenInstanceError):
            w.validated = False

    def test_missing_id(self):
        from strength_analytics.errors import InvalidWorkoutError
        from strength_analytics.models import workout_from_record
        record = _record()
        del record["id"]
        with pytest.raises(InvalidWorkoutError):
            workout_from_record(record)

    def test_bad_date(self):
        from strength_analytics.errors import InvalidWorkoutError
        from strength_analytics.models import workout_from_record
        with pytest.raises(InvalidWorkoutError) as exc:
            workout_from_record(_record(day="yesterday"))
        assert exc.value.field == "date"

    def test_non_numeric_weight(self):
        from strength_analytics.errors import InvalidWorkoutError
        from strength_analytics.models import workout_from_record
        with pytest.raises(InvalidWorkoutError):
            workout_from_record(_record(sets=[{"weight": "heavy", "reps": 5, "rir": 0}]))

    def test_missing_exercise_id(self):
        from strength_analytics.errors import InvalidWorkoutError
        from strength_analytics.models import workout_from_record
        with pytest.raises(InvalidWorkoutError):
            workout_from_record(_record(exercise_id=""))

    def test_not_an_object(self):
        from strength_analytics.errors import InvalidWorkoutError
        from strength_analytics.models import workouts_from_records
        with pytest.raises(InvalidWorkoutError):
            workouts_from_records([_record(), "oops"])


class TestResultTypes:

    def test_volume_map_defaults_to_zero(self):
        from strength_analytics.models import VolumeMap
        vm = VolumeMap({"squat": 500.0})
        assert vm["bench"] == 0.0
        assert vm.get("bench") == 0.0
        assert "bench" not in vm
        assert vm.total == 500.0

    def test_intensity_total(self):
        from strength_analytics.models import IntensityDistribution
        dist = IntensityDistribution(below_60=2, between_80_and_90=1, above_90=4)
        assert dist.total == 7
        assert sum(dist.as_dict().values()) == 7


# ═══════════════════════════════════════════════════════════════════════
# PER-SET FRAME
# ═══════════════════════════════════════════════════════════════════════

class TestWorkoutsToDataframe:
    """One row per set, validated once."""

    def test_columns_and_derived_values(self):
        from strength_analytics.frames import SET_COLUMNS, workouts_to_dataframe
        from strength_analytics.models import workouts_from_records
        df = workouts_to_dataframe(workouts_from_records([_record(sets=[
            {"weight": 100, "reps": 5, "rir": 2},
            {"weight": 80, "reps": 0, "rir": 0},
        ])]))
        assert list(df.columns) == SET_COLUMNS
        assert len(df) == 2
        assert list(df["effective_reps"]) == [7, 0]
        assert list(df["volume_kg"]) == [500.0, 0.0]
        assert list(df["rpe"]) == [8, 10]

    def test_empty(self):
        from strength_analytics.frames import SET_COLUMNS, workouts_to_dataframe
        df = workouts_to_dataframe([])
        assert df.empty
        assert list(df.columns) == SET_COLUMNS

    def test_dates_normalized_to_day(self):
        from strength_analytics.frames import workouts_to_dataframe
        from strength_analytics.models import workout_from_record
        df = workouts_to_dataframe([workout_from_record(_record(day="2026-01-05T23:45:00+02:00"))])
        assert df["date"].iloc[0] == pd.Timestamp("2026-01-05")

    def test_filter_window(self):
        from strength_analytics.frames import filter_window, workouts_to_dataframe
        from strength_analytics.models import workouts_from_records
        df = workouts_to_dataframe(workouts_from_records([
            _record("a", "2026-01-04"), _record("b", "2026-01-05"),
            _record("c", "2026-01-11"), _record("d", "2026-01-12"),
        ]))
        kept = filter_window(df, date(2026, 1, 5), date(2026, 1, 11))
        assert list(kept["workout_id"]) == ["b", "c"]
        assert filter_window(df, date(2026, 1, 11), date(2026, 1, 5)).empty

    def test_negative_rir_rejected(self):
        from strength_analytics.errors import InvalidWorkoutError
        from strength_analytics.frames import workouts_to_dataframe
        from strength_analytics.models import workouts_from_records
        workouts = workouts_from_records([_record("bad", sets=[{"weight": 100, "reps": 5, "rir": -1}])])
        with pytest.raises(InvalidWorkoutError) as exc:
            workouts_to_dataframe(workouts)
        assert exc.value.workout_id == "bad"
        assert exc.value.field == "squat.sets[0].rir"


# ═══════════════════════════════════════════════════════════════════════
# DATE WINDOWS
# ═══════════════════════════════════════════════════════════════════════

class TestResolveDateRange:
    """Quick filters of the progress screens."""

    TODAY = date(2026, 3, 31)

    def test_week(self):
        from strength_analytics.date_range import resolve_date_range
        assert resolve_date_range("week", today=self.TODAY) == (date(2026, 3, 24), self.TODAY)

    def test_month_clamps_to_month_end(self):
        from strength_analytics.date_range import resolve_date_range
        assert resolve_date_range("month", today=self.TODAY) == (date(2026, 2, 28), self.TODAY)

    def test_three_and_six_months_and_year(self):
        from strength_analytics.date_range import resolve_date_range
        assert resolve_date_range("3months", today=self.TODAY)[0] == date(2025, 12, 31)
        assert resolve_date_range("6months", today=self.TODAY)[0] == date(2025, 9, 30)
        assert resolve_date_range("year", today=self.TODAY)[0] == date(2025, 3, 31)

    def test_all_spans_the_log(self):
        from strength_analytics.date_range import resolve_date_range
        from strength_analytics.models import workouts_from_records
        workouts = workouts_from_records([_record("a", "2026-02-10"), _record("b", "2025-11-02"), _record("c", "2026-01-01")])
        assert resolve_date_range("all", workouts, today=self.TODAY) == (date(2025, 11, 2), date(2026, 2, 10))

    def test_all_without_workouts(self):
        from strength_analytics.date_range import resolve_date_range
        assert resolve_date_range("all", [], today=self.TODAY) == (date(2025, 12, 31), self.TODAY)

    def test_custom(self):
        from strength_analytics.date_range import resolve_date_range
        start, end = resolve_date_range("custom", custom_start="2026-01-01", custom_end="2026-01-31")
        assert (start, end) == (date(2026, 1, 1), date(2026, 1, 31))

    def test_custom_incomplete_falls_back(self):
        from strength_analytics.date_range import resolve_date_range
        assert resolve_date_range("custom", today=self.TODAY, custom_start="2026-01-01") == (
            date(2025, 12, 31), self.TODAY,
        )

    def test_custom_reversed(self):
        from strength_analytics.date_range import resolve_date_range
        from strength_analytics.errors import InvalidDateRangeError
        with pytest.raises(InvalidDateRangeError):
            resolve_date_range("custom", custom_start="2026-02-01", custom_end="2026-01-01")

    def test_unknown_preset(self):
        from strength_analytics.date_range import resolve_date_range
        from strength_analytics.errors import InvalidDateRangeError
        with pytest.raises(InvalidDateRangeError):
            resolve_date_range("fortnight", today=self.TODAY)


class TestFilterValidated:

    def test_drafts_dropped_by_default(self):
        from strength_analytics.date_range import filter_validated
        from strength_analytics.models import workouts_from_records
        workouts = workouts_from_records([_record("done"), _record("draft", validated=False)])
        assert [w.id for w in filter_validated(workouts)] == ["done"]
        assert [w.id for w in filter_validated(workouts, include_unvalidated=True)] == ["done", "draft"]


# ═══════════════════════════════════════════════════════════════════════
# DISPLAY UNITS
# ═══════════════════════════════════════════════════════════════════════

class TestUnits:

    def test_conversions(self):
        from strength_analytics.units import kg_to_lb, lb_to_kg
        assert kg_to_lb(100) == 220.46
        assert lb_to_kg(220.46) == 100.0

    def test_display(self):
        from strength_analytics.units import format_weight, weight_for_display
        assert weight_for_display(100, "kg") == 100
        assert weight_for_display(100, "lb") == 220.46
        assert format_weight(123.333, "kg") == "123.3 kg"
        assert format_weight(100, "lb") == "220.46 lbs"

    def test_unknown_unit(self):
        from strength_analytics.errors import ValidationError
        from strength_analytics.units import format_weight
        with pytest.raises(ValidationError):
            format_weight(100, "stone")


# ═══════════════════════════════════════════════════════════════════════
# REPORT CLI
# ═══════════════════════════════════════════════════════════════════════

def _write_export(tmp_path, records):
    path = tmp_path / "workouts.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


class TestReport:
    """python -m strength_analytics.report"""

    def _records(self):
        start = date(2026, 1, 5)
        return [
            _record(f"w{i}", (start + timedelta(days=d)).isoformat(), sets=[
                {"weight": 100 + i * 5, "reps": 5, "rir": 1},
                {"weight": 80, "reps": 8, "rir": 2},
            ])
            for i, d in enumerate([0, 3, 8, 15])
        ] + [_record("draft", "2026-01-06", validated=False, sets=[{"weight": 300, "reps": 5, "rir": 0}])]

    def test_run_report(self, tmp_path, capsys):
        from strength_analytics.report import run_report
        export = _write_export(tmp_path, self._records())
        catalog = tmp_path / "catalog.json"
        catalog.write_text(json.dumps({"squat": "Legs"}), encoding="utf-8")

        result = run_report(export, "squat", start="2026-01-05", end="2026-01-25", catalog_path=catalog)
        out = capsys.readouterr().out

        assert result["workouts"] == 4  # draft excluded
        assert result["e1rm_points"] == 4
        assert result["prs"] == 4
        assert result["weeks_active"] == 3
        assert sum(result["intensity"].values()) == 8
        assert result["muscle_group_volume"]["Legs"] == pytest.approx(result["exercise_volume"]["squat"])
        assert "e1RM" in out and "Legs" in out

    def test_include_unvalidated(self, tmp_path, capsys):
        from strength_analytics.report import run_report
        export = _write_export(tmp_path, self._records())
        result = run_report(export, "squat", start="2026-01-05", end="2026-01-25", include_unvalidated=True)
        assert result["workouts"] == 5

    def test_main_in_pounds(self, tmp_path, capsys):
        from strength_analytics.report import main
        export = _write_export(tmp_path, {"workouts": self._records()})
        code = main([str(export), "--exercise", "squat", "--range", "all", "--unit", "lb"])
        assert code == 0
        assert "lbs" in capsys.readouterr().out

    def test_main_no_data(self, tmp_path, capsys):
        from strength_analytics.report import main
        export = _write_export(tmp_path, self._records())
        assert main([str(export), "--exercise", "snatch", "--range", "all"]) == 0
        assert "No data" in capsys.readouterr().out

    def test_main_rejects_bad_sets(self, tmp_path, capsys):
        from strength_analytics.report import main
        export = _write_export(tmp_path, [_record(sets=[{"weight": -5, "reps": 5, "rir": 0}])])
        assert main([str(export), "--exercise", "squat", "--range", "all"]) == 1
        assert "❌" in capsys.readouterr().out

    def test_main_missing_file(self, tmp_path, capsys):
        from strength_analytics.report import main
        assert main([str(tmp_path / "nope.json"), "--exercise", "squat"]) == 1

    def test_main_end_without_start(self, tmp_path, capsys):
        from strength_analytics.report import main
        export = _write_export(tmp_path, self._records())
        assert main([str(export), "--exercise", "squat", "--end", "2026-01-25"]) == 1
        assert "--start" in capsys.readouterr().out

    def test_points_outside_window_not_reported(self, tmp_path, capsys):
        from strength_analytics.report import run_report
        export = _write_export(tmp_path, [
            _record("old", "2024-01-01", sets=[{"weight": 120, "reps": 5, "rir": 0}]),
            _record("new", "2026-03-02", sets=[{"weight": 100, "reps": 5, "rir": 0}]),
        ])
        result = run_report(export, "squat", start="2026-03-01", end="2026-03-07")
        out = capsys.readouterr().out

        assert result["e1rm_points"] == 1
        # the older, heavier session still decides PR status
        assert result["prs"] == 0
        assert "2026-03-02" in out
        assert "2024-01-01" not in out
