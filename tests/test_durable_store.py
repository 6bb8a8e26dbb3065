from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from conftest import days_ago
from fittrack.errors import StorageError
from fittrack.repositories.base import Pagination
from fittrack.schemas.workout import WorkoutSession

pytestmark = pytest.mark.asyncio


async def test_save_round_trips_embedded_exercises(durable, workout):
    stored = await durable.save(workout(notes="  felt strong  ", intensity=7), "u1")
    assert stored.id and stored.owner_id == "u1"
    page = await durable.list("u1")
    assert page.total == 1
    got = page.items[0]
    assert got.id == stored.id
    assert got.notes == "felt strong"
    assert got.exercises[0].name == "Squat"
    assert got.exercises[0].reps == "8-12"
    assert got.exercises[0].weight == 60

async def test_rows_are_isolated_by_owner(durable, workout):
    await durable.save(workout(), "u1")
    await durable.save(workout(), "u2")
    await durable.save(workout(), "u2")
    assert await durable.count_for("u1") == 1
    assert (await durable.list("u2")).total == 2

async def test_list_pages_newest_first(durable, workout):
    for n in range(5):
        await durable.save(workout(date=days_ago(n)), "u1")
    page = await durable.list("u1", Pagination(page=2, page_size=2))
    assert [s.date for s in page.items] == [days_ago(2), days_ago(3)]
    assert page.total == 5

async def test_delete_is_owner_scoped(durable, workout):
    stored = await durable.save(workout(), "u1")
    assert await durable.delete(stored.id, "intruder") is False
    assert await durable.delete(stored.id, "u1") is True
    assert await durable.count_for("u1") == 0

async def test_bulk_insert_keeps_created_at_and_reassigns_ids(durable, workout):
    created = datetime(2026, 1, 2, 8, 30, tzinfo=timezone.utc)
    demo = [
        WorkoutSession(**workout(date=days_ago(n)).model_dump(), id=f"demo-session-{n}",
                       owner_id="demo", created_at=created)
        for n in range(2)
    ]
    assert await durable.bulk_insert(demo, "u1") == 2
    page = await durable.list("u1")
    assert page.total == 2
    assert all(s.owner_id == "u1" for s in page.items)
    assert not any(s.id.startswith("demo-session-") for s in page.items)
    assert all(s.created_at.replace(tzinfo=timezone.utc) == created for s in page.items)

async def test_failed_commit_flags_unknown_outcome(durable, db, workout, monkeypatch):
    async def boom():
        raise OperationalError("COMMIT", {}, Exception("connection reset"))
    monkeypatch.setattr(db, "commit", boom)
    with pytest.raises(StorageError) as exc:
        await durable.save(workout(), "u1")
    assert exc.value.outcome_unknown is True

async def test_failed_query_is_a_clean_storage_error(durable, db, monkeypatch):
    async def boom(*a, **kw):
        raise OperationalError("SELECT", {}, Exception("db down"))
    monkeypatch.setattr(db, "execute", boom)
    with pytest.raises(StorageError) as exc:
        await durable.list("u1")
    assert exc.value.outcome_unknown is False
