"""
Strength Analytics — Progress report over a JSON workout export

Run manually: python -m strength_analytics.report workouts.json --exercise squat
"""
from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from strength_analytics.config import DATE_RANGE_PRESETS, INTENSITY_LABELS, WEIGHT_UNITS
from strength_analytics.date_range import filter_validated, resolve_date_range
from strength_analytics.errors import ValidationError
from strength_analytics.frames import to_day
from strength_analytics.intensity import calculate_intensity_distribution
from strength_analytics.models import workouts_from_records
from strength_analytics.strength import build_e1rm_series, build_pr_timeline, build_top_sets
from strength_analytics.units import format_weight
from strength_analytics.volume import calculate_exercise_volume, calculate_muscle_group_volume, volume_share
from strength_analytics.weekly import build_weekly_frequency, build_weekly_rpe, build_weekly_volume


def load_export(path: str | Path) -> list[dict]:
    """Read an export file: a list of workouts, or {"workouts": [...]}."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("workouts", [])
    if not isinstance(data, list):
        raise ValidationError(f"{path}: expected a list of workouts")
    return data


def run_report(
    export_path: str | Path,
    exercise_id: str,
    start: str | None = None,
    end: str | None = None,
    range_name: str | None = None,
    unit: str = "kg",
    catalog_path: str | Path | None = None,
    include_unvalidated: bool = False,
) -> dict:
    """
    Full report pipeline:
    1. Load and parse the export
    2. Keep validated workouts (unless told otherwise)
    3. Resolve the date window
    4. Print every chart's numbers for the exercise
    """
    print("📊 Strength Report — Starting...")
    workouts = filter_validated(workouts_from_records(load_export(export_path)), include_unvalidated)
    print(f"   {len(workouts)} workouts loaded")

    if start:
        window = resolve_date_range("custom", workouts, custom_start=start, custom_end=end or date.today())
    elif end:
        raise ValidationError("--end needs --start")
    else:
        window = resolve_date_range(range_name, workouts)
    start_day, end_day = window
    print(f"   Window: {start_day} → {end_day}")

    lo, hi = to_day(start_day), to_day(end_day)

    def in_window(points):
        return [p for p in points if lo <= to_day(p.date) <= hi]

    # PRs are judged against the whole history, then counted inside the window
    e1rm = in_window(build_e1rm_series(workouts, exercise_id))
    prs = [p for p in in_window(build_pr_timeline(workouts, exercise_id)) if p.is_pr]
    top_sets = in_window(build_top_sets(workouts, exercise_id))

    if not e1rm:
        print(f"\n⬜ No data for {exercise_id}.")
    else:
        print(f"\n🏋️ e1RM ({len(e1rm)} sessions, {len(prs)} PRs):")
        for p in e1rm[-5:]:
            print(f"   {p.date}: {format_weight(p.estimated_1rm, unit)}")
        print("\n🔝 Top sets:")
        for p in top_sets[-5:]:
            print(f"   {p.date}: {format_weight(p.top_set.weight, unit)} x {p.top_set.reps}")

    weekly_vol = build_weekly_volume(workouts, start_day, end_day, exercise_id)
    weekly_freq = {p.week_index: p.sessions for p in build_weekly_frequency(workouts, start_day, end_day, exercise_id)}
    weekly_rpe = {p.week_index: p.average_rpe for p in build_weekly_rpe(workouts, start_day, end_day, exercise_id)}
    if weekly_vol:
        print("\n📅 Weekly:")
        for p in weekly_vol:
            print(
                f"   W{p.week_index}: {format_weight(p.total_volume, unit)} | "
                f"{weekly_freq.get(p.week_index, 0)} sessions | RPE {weekly_rpe.get(p.week_index, 0):.1f}"
            )

    dist = calculate_intensity_distribution(workouts, exercise_id, start_day, end_day)
    if dist.total:
        print("\n🎯 Intensity (sets):")
        for key, count in dist.as_dict().items():
            print(f"   {INTENSITY_LABELS[key]:>7}: {count}")

    all_ids = sorted({ex.exercise_id for w in workouts for ex in w.exercises})
    volumes = calculate_exercise_volume(workouts, all_ids, start_day, end_day)
    shares = volume_share(volumes)
    if shares:
        print("\n📦 Volume by exercise:")
        for tid, vol in sorted(volumes.items(), key=lambda kv: kv[1], reverse=True):
            print(f"   {tid}: {format_weight(vol, unit)} ({shares[tid]}%)")

    muscle = {}
    if catalog_path:
        catalog = json.loads(Path(catalog_path).read_text(encoding="utf-8"))
        muscle = calculate_muscle_group_volume(workouts, catalog, start_day, end_day)
        if muscle:
            print("\n💪 Volume by muscle group:")
            for part, vol in sorted(muscle.items(), key=lambda kv: kv[1], reverse=True):
                print(f"   {part}: {format_weight(vol, unit)}")

    return {
        "workouts": len(workouts),
        "window": window,
        "e1rm_points": len(e1rm),
        "prs": len(prs),
        "weeks_active": len(weekly_vol),
        "intensity": dist.as_dict(),
        "exercise_volume": dict(volumes),
        "muscle_group_volume": dict(muscle),
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Strength progress report from a workout export")
    parser.add_argument("export", help="JSON export file")
    parser.add_argument("--exercise", required=True, help="exercise id to chart")
    parser.add_argument("--start", help="window start, YYYY-MM-DD")
    parser.add_argument("--end", help="window end, YYYY-MM-DD")
    parser.add_argument("--range", dest="range_name", choices=DATE_RANGE_PRESETS, help="quick filter")
    parser.add_argument("--unit", choices=WEIGHT_UNITS, default="kg")
    parser.add_argument("--catalog", help="JSON object mapping exercise id to body part")
    parser.add_argument("--include-unvalidated", action="store_true")
    args = parser.parse_args(argv)

    try:
        run_report(
            args.export, args.exercise,
            start=args.start, end=args.end, range_name=args.range_name,
            unit=args.unit, catalog_path=args.catalog,
            include_unvalidated=args.include_unvalidated,
        )
    except (ValidationError, OSError, json.JSONDecodeError) as e:
        print(f"\n❌ Report FAILED: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
