"""
Strength Analytics — Configuration

All weights are kilograms. Nothing here is mutable at runtime: every tunable
below is only a default, and each computation accepts a per-call override.
"""
import os

# ── Strength estimation ──────────────────────────────────────────────
# Supported: "epley", "brzycki"
E1RM_FORMULA = os.environ.get("STRENGTH_E1RM_FORMULA", "epley").strip().lower()

EPLEY_DIVISOR = 30
BRZYCKI_NUMERATOR = 36
BRZYCKI_LIMIT = 37  # Brzycki is undefined at or above this many reps

# ── Effort ───────────────────────────────────────────────────────────
MAX_RPE = 10  # RPE = MAX_RPE - RIR

# ── Time bucketing ───────────────────────────────────────────────────
DAYS_PER_WEEK = 7

# ── Intensity bands (% of same-day e1RM) ─────────────────────────────
# Lower bound inclusive, upper bound exclusive.
INTENSITY_BANDS = {
    "below_60": (0, 60),
    "between_60_and_70": (60, 70),
    "between_70_and_80": (70, 80),
    "between_80_and_90": (80, 90),
    "above_90": (90, None),
}
INTENSITY_LABELS = {
    "below_60": "<60%",
    "between_60_and_70": "60-70%",
    "between_70_and_80": "70-80%",
    "between_80_and_90": "80-90%",
    "above_90": ">90%",
}

# ── Display ──────────────────────────────────────────────────────────
LB_PER_KG = 2.20462
WEIGHT_UNITS = ("kg", "lb")

# ── Chart windows ────────────────────────────────────────────────────
DATE_RANGE_PRESETS = ("week", "month", "3months", "6months", "year", "all", "custom")
DEFAULT_RANGE = os.environ.get("STRENGTH_DEFAULT_RANGE", "3months")
