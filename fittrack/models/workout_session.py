import uuid
import datetime as dt
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, Date, DateTime, Index, Integer, JSON, String, Text
from fittrack.db import Base

def _new_id() -> str:
    return str(uuid.uuid4())

def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)

class WorkoutSessionRow(Base):
    __tablename__ = "workout_sessions"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    # Embedded value objects: [{"name", "sets", "reps", "weight", "completed"}, ...]
    exercises: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    routine_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    intensity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("ix_workout_sessions_owner_date", "owner_id", "date"),
    )
