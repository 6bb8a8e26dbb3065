from fittrack.models.workout_session import WorkoutSessionRow

__all__ = ["WorkoutSessionRow"]
