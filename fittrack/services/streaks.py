"""
Consecutive-day streaks over a workout history.

Streaks count calendar days, not sessions: two workouts logged on the same
day are one day of the streak.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from fittrack.schemas.workout import WorkoutSession

ONE_DAY = timedelta(days=1)

@dataclass(frozen=True, slots=True)
class Streaks:
    current: int = 0
    longest: int = 0

def distinct_days_desc(sessions: Iterable[WorkoutSession]) -> list[date]:
    return sorted({s.date for s in sessions}, reverse=True)

def compute_streaks(sessions: Iterable[WorkoutSession], *, today: Optional[date] = None) -> Streaks:
    """
    Current streak: consecutive days ending at the most recent workout, provided
    that workout was today or yesterday; otherwise 0.
    Longest streak: the longest run of consecutive days anywhere in the history.
    """
    today = today or date.today()
    days = distinct_days_desc(sessions)
    if not days:
        return Streaks()

    current = 0
    if today - days[0] <= ONE_DAY:
        current = 1
        for prev, day in zip(days, days[1:]):
            if prev - day != ONE_DAY:
                break
            current += 1

    longest = run = 1
    for prev, day in zip(days, days[1:]):
        run = run + 1 if prev - day == ONE_DAY else 1
        longest = max(longest, run)

    return Streaks(current=current, longest=max(longest, current))
