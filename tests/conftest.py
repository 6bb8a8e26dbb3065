"""
Point the app at a throwaway SQLite file before anything imports fittrack.db,
and hand out fresh stores/sessions per test.
"""
import os
import tempfile
from datetime import date, timedelta

_tmpdir = tempfile.mkdtemp(prefix="fittrack-tests-")
_db_path = os.path.join(_tmpdir, "app.db")
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{_db_path}"
os.environ.pop("EPHEMERAL_STORE_DIR", None)

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fittrack.db import Base
from fittrack import models  # noqa: F401  # registers tables
from fittrack.repositories.buckets import InMemoryBucket
from fittrack.repositories.durable_store import DurableStore
from fittrack.repositories.ephemeral_store import EphemeralStore
from fittrack.schemas.workout import WorkoutExercise, WorkoutSessionCreate

# Tables for the app-wide engine used by the HTTP tests
_sync_engine = create_engine(f"sqlite:///{_db_path}")
Base.metadata.create_all(_sync_engine)
_sync_engine.dispose()

TODAY = date(2026, 3, 18)

def days_ago(n: int, today: date = TODAY) -> date:
    return today - timedelta(days=n)

@pytest.fixture
def workout():
    """Factory for a valid session; override any field by keyword."""
    def make(**overrides) -> WorkoutSessionCreate:
        data = dict(
            date=TODAY,
            duration_minutes=45,
            exercises=[WorkoutExercise(name="Squat", sets=3, reps="8-12", weight=60, completed=True)],
            name="Leg day",
            completed=True,
        )
        data.update(overrides)
        return WorkoutSessionCreate(**data)
    return make

@pytest.fixture
def ephemeral():
    return EphemeralStore(InMemoryBucket("demo_workout_sessions"))

@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session = async_sessionmaker(engine, expire_on_commit=False)()
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()

@pytest.fixture
def durable(db):
    return DurableStore(db)
