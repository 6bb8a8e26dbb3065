"""
Aggregate statistics and achievements derived from a full workout history.

Everything here is pure: callers pass the complete (unpaginated) history and
a reference date, nothing is read from storage.
"""
from __future__ import annotations
from datetime import date
from typing import Optional, Sequence

from fittrack.schemas.stats import Achievement, WorkoutStatistics
from fittrack.schemas.workout import WorkoutSession
from fittrack.services.streaks import Streaks, compute_streaks

UNKNOWN_NAME = "Unknown"

def _previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1

def count_by_name(sessions: Sequence[WorkoutSession]) -> dict[str, int]:
    # dict keeps first-seen order, which favorite_name relies on for ties
    counts: dict[str, int] = {}
    for s in sessions:
        key = s.name or UNKNOWN_NAME
        counts[key] = counts.get(key, 0) + 1
    return counts

def favorite(counts: dict[str, int]) -> Optional[str]:
    best: Optional[str] = None
    for name, n in counts.items():
        if best is None or n > counts[best]:
            best = name
    return best

def aggregate_statistics(
    sessions: Sequence[WorkoutSession],
    *,
    today: Optional[date] = None,
    streaks: Optional[Streaks] = None,
) -> WorkoutStatistics:
    today = today or date.today()
    streaks = streaks or compute_streaks(sessions, today=today)

    total = len(sessions)
    total_duration = sum(s.duration_minutes for s in sessions)
    intensities = [s.intensity for s in sessions if s.intensity is not None]

    this_month = (today.year, today.month)
    last_month = _previous_month(*this_month)
    by_name = count_by_name(sessions)

    return WorkoutStatistics(
        total_workouts=total,
        total_duration_minutes=total_duration,
        average_duration_minutes=round(total_duration / total) if total else 0,
        average_intensity=round(sum(intensities) / len(intensities), 1) if intensities else 0.0,
        this_calendar_month_count=sum(1 for s in sessions if (s.date.year, s.date.month) == this_month),
        last_calendar_month_count=sum(1 for s in sessions if (s.date.year, s.date.month) == last_month),
        workouts_by_name=by_name,
        favorite_name=favorite(by_name),
        current_streak=streaks.current,
        longest_streak=streaks.longest,
    )

def _milestone(key: str, name: str, description: str, progress: int, target: int) -> Achievement:
    return Achievement(
        id=key,
        name=name,
        description=description,
        achieved=progress >= target,
        progress=min(progress, target),
        max_progress=target,
    )

def evaluate_achievements(sessions: Sequence[WorkoutSession], stats: WorkoutStatistics) -> list[Achievement]:
    maxed_out = any(s.intensity == 10 for s in sessions)
    return [
        _milestone("first-workout", "First Step", "Complete your first workout",
                   stats.total_workouts, 1),
        _milestone("consistency-streak", "Consistency King", "Work out 5 days in a row",
                   stats.current_streak, 5),
        _milestone("workout-explorer", "Workout Explorer", "Try 5 different types of workouts",
                   len(stats.workouts_by_name), 5),
        _milestone("dedication", "Dedication", "Log 30 workouts total",
                   stats.total_workouts, 30),
        _milestone("intensity-master", "Intensity Master", "Complete a workout with intensity 10",
                   1 if maxed_out else 0, 1),
    ]
