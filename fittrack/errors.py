"""
Error values returned across the tracking boundary.

Nothing here is raised past WorkoutTrackingFacade; callers inspect the value
(or `facade.last_error`) instead. StorageError is the one exception type, and
it never leaves the storage and service layers.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

class ValidationErrorKind(str, Enum):
    duration_out_of_range = "duration_out_of_range"
    future_date = "future_date"
    no_exercises = "no_exercises"
    exercise_name_missing = "exercise_name_missing"
    exercise_sets_invalid = "exercise_sets_invalid"
    exercise_reps_missing = "exercise_reps_missing"
    intensity_out_of_range = "intensity_out_of_range"
    invalid_pagination = "invalid_pagination"

@dataclass(frozen=True, slots=True)
class ValidationError:
    field: str
    kind: ValidationErrorKind
    reason: str

    @property
    def message(self) -> str:
        return self.reason

@dataclass(frozen=True, slots=True)
class AuthenticationRequiredError:
    message: str = "You must be logged in to track workouts"

@dataclass(frozen=True, slots=True)
class BackendError:
    cause: str
    # True when the write may have landed (e.g. the commit itself failed)
    outcome_unknown: bool = False

    @property
    def message(self) -> str:
        if self.outcome_unknown:
            return ("We couldn't confirm your workout was saved. "
                    "Check your history before retrying to avoid a duplicate.")
        return "Something went wrong talking to storage. Please try again."

@dataclass(frozen=True, slots=True)
class MigrationError:
    cause: str

    @property
    def message(self) -> str:
        return "Your trial workouts could not be transferred. Please try again."

TrackingError = ValidationError | AuthenticationRequiredError | BackendError | MigrationError

class StorageError(Exception):
    """Raised by stores on any persistence failure."""

    def __init__(self, cause: str, *, outcome_unknown: bool = False):
        super().__init__(cause)
        self.cause = cause
        self.outcome_unknown = outcome_unknown
