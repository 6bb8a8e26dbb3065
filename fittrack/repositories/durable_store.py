# fittrack/repositories/durable_store.py
from __future__ import annotations
import logging
from typing import Iterable, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.errors import StorageError
from fittrack.models import WorkoutSessionRow
from fittrack.repositories.base import Page, Pagination
from fittrack.schemas.workout import WorkoutSession, WorkoutSessionCreate

log = logging.getLogger(__name__)

def _row_fields(session: WorkoutSessionCreate) -> dict:
    data = session.model_dump(mode="json", include={"exercises"})
    return dict(
        date=session.date,
        duration_minutes=session.duration_minutes,
        exercises=data["exercises"],
        name=session.name,
        routine_id=session.routine_id,
        intensity=session.intensity,
        notes=session.notes,
        completed=session.completed,
    )

class DurableStore:
    """Multi-tenant store for registered identities; every query is scoped by owner_id."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # READS
    async def list(self, owner_id: str, pagination: Optional[Pagination] = None) -> Page[WorkoutSession]:
        stmt = select(WorkoutSessionRow).where(WorkoutSessionRow.owner_id == owner_id)\
                                        .order_by(WorkoutSessionRow.date.desc(),
                                                  WorkoutSessionRow.created_at.desc())
        if pagination is not None:
            stmt = stmt.limit(pagination.limit).offset(pagination.offset)
        try:
            rows = (await self.db.execute(stmt)).scalars().all()
            total = await self.count_for(owner_id)
        except SQLAlchemyError as e:
            raise StorageError(f"list failed: {e}") from e
        return Page(items=[WorkoutSession.model_validate(r) for r in rows], total=total)

    async def count_for(self, owner_id: str) -> int:
        stmt = select(func.count()).select_from(WorkoutSessionRow)\
                                   .where(WorkoutSessionRow.owner_id == owner_id)
        try:
            return (await self.db.execute(stmt)).scalar_one()
        except SQLAlchemyError as e:
            raise StorageError(f"count failed: {e}") from e

    # WRITES
    async def save(self, session: WorkoutSessionCreate, owner_id: str) -> WorkoutSession:
        row = WorkoutSessionRow(owner_id=owner_id, **_row_fields(session))
        try:
            self.db.add(row)
            await self.db.flush()  # assigns id and created_at
            stored = WorkoutSession.model_validate(row)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"insert failed: {e}") from e
        await self._commit("insert")
        return stored

    async def bulk_insert(self, sessions: Iterable[WorkoutSession], owner_id: str) -> int:
        """Insert many records in one commit, keeping their original created_at."""
        rows = [
            WorkoutSessionRow(owner_id=owner_id, created_at=s.created_at, **_row_fields(s))
            for s in sessions
        ]
        try:
            self.db.add_all(rows)
            await self.db.flush()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"bulk insert failed: {e}") from e
        await self._commit("bulk insert")
        return len(rows)

    async def delete(self, session_id: str, owner_id: str) -> bool:
        stmt = delete(WorkoutSessionRow).where(WorkoutSessionRow.id == session_id,
                                              WorkoutSessionRow.owner_id == owner_id)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"delete failed: {e}") from e
        await self._commit("delete")
        return result.rowcount > 0

    async def _commit(self, what: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            # The server may have applied the write before the error reached us
            raise StorageError(f"{what} commit failed: {e}", outcome_unknown=True) from e
