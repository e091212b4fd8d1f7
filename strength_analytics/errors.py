"""Error types for the strength analytics engine.

Only malformed input is an error. Empty logs, unknown exercises and empty
windows always produce empty or zero-valued results instead.
"""


class StrengthAnalyticsError(Exception):
    """Base exception for strength analytics errors."""

    pass


class ValidationError(StrengthAnalyticsError, ValueError):
    """Raised when input fails validation (hard stop, no retry)."""

    pass


class InvalidWorkoutError(ValidationError):
    """Raised when a workout record violates the data model.

    Attributes:
        workout_id: Id of the offending workout (None if unknown)
        field: Name of the offending field
        value: The rejected value
    """

    def __init__(self, workout_id, field: str, value, reason: str = "must be a finite number >= 0") -> None:
        self.workout_id = workout_id
        self.field = field
        self.value = value
        super().__init__(f"Workout {workout_id!r}: {field}={value!r} {reason}")


class InvalidDateRangeError(ValidationError):
    """Raised when a chart date window cannot be resolved."""

    pass


class UnknownFormulaError(ValidationError):
    """Raised when an unsupported 1RM estimation formula is requested."""

    def __init__(self, formula: str) -> None:
        self.formula = formula
        super().__init__(f"Unknown 1RM formula: {formula!r}")
