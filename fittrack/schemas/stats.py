from pydantic import BaseModel, Field

class WorkoutStatistics(BaseModel):
    total_workouts: int = 0
    total_duration_minutes: int = 0
    average_duration_minutes: int = 0
    average_intensity: float = 0.0
    this_calendar_month_count: int = 0
    last_calendar_month_count: int = 0
    workouts_by_name: dict[str, int] = Field(default_factory=dict)
    favorite_name: str | None = None
    current_streak: int = 0
    longest_streak: int = 0

class Achievement(BaseModel):
    id: str
    name: str
    description: str
    achieved: bool
    progress: int
    max_progress: int
