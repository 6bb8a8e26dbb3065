from typing import Annotated
from datetime import date, datetime
from pydantic import BaseModel, Field, StringConstraints

# Notes: trimmed, up to 500 chars
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
NameStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=120)]

# Field types only; the domain rules (ranges, non-empty, no future dates)
# live in fittrack.validation so the first violation comes back as a value.

class WorkoutExercise(BaseModel):
    name: str
    sets: int
    reps: str  # free text: "10", "8-12", "30s"
    weight: float | None = None
    completed: bool = False

class WorkoutSessionCreate(BaseModel):
    date: date
    duration_minutes: int
    exercises: list[WorkoutExercise] = Field(default_factory=list)
    name: NameStr | None = None
    routine_id: str | None = None
    intensity: int | None = None
    notes: NotesStr | None = None
    completed: bool = False

class WorkoutSession(WorkoutSessionCreate):
    id: str
    owner_id: str
    created_at: datetime

    model_config = {"from_attributes": True}

class HistoryPageRead(BaseModel):
    items: list[WorkoutSession]
    total_count: int
    page: int
    page_size: int
