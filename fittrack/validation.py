from __future__ import annotations
from datetime import date
from typing import Optional

from fittrack.errors import ValidationError, ValidationErrorKind as Kind
from fittrack.schemas.workout import WorkoutSessionCreate

MIN_DURATION_MINUTES = 1
MAX_DURATION_MINUTES = 1440  # one day
MIN_INTENSITY = 1
MAX_INTENSITY = 10

def validate_session(session: WorkoutSessionCreate, *, today: Optional[date] = None) -> Optional[ValidationError]:
    """
    Return the first rule the session breaks, or None if it may be stored.

    Order is fixed: duration, date, exercises present, each exercise's
    name/sets/reps, then intensity. No side effects, safe for pre-submit checks.
    """
    today = today or date.today()

    if not MIN_DURATION_MINUTES <= session.duration_minutes <= MAX_DURATION_MINUTES:
        return ValidationError(
            field="duration_minutes",
            kind=Kind.duration_out_of_range,
            reason=f"Duration must be between {MIN_DURATION_MINUTES} and {MAX_DURATION_MINUTES} minutes",
        )

    if session.date > today:
        return ValidationError(
            field="date",
            kind=Kind.future_date,
            reason="Workout date cannot be in the future",
        )

    if not session.exercises:
        return ValidationError(
            field="exercises",
            kind=Kind.no_exercises,
            reason="Add at least one exercise",
        )

    for i, ex in enumerate(session.exercises):
        if not ex.name.strip():
            return ValidationError(
                field=f"exercises[{i}].name",
                kind=Kind.exercise_name_missing,
                reason="Exercise name is required",
            )
        if ex.sets <= 0:
            return ValidationError(
                field=f"exercises[{i}].sets",
                kind=Kind.exercise_sets_invalid,
                reason="Sets must be at least 1",
            )
        if not ex.reps.strip():
            return ValidationError(
                field=f"exercises[{i}].reps",
                kind=Kind.exercise_reps_missing,
                reason="Reps are required",
            )

    if session.intensity is not None and not MIN_INTENSITY <= session.intensity <= MAX_INTENSITY:
        return ValidationError(
            field="intensity",
            kind=Kind.intensity_out_of_range,
            reason=f"Intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}",
        )

    return None
