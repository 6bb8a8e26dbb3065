# fittrack/repositories/ephemeral_store.py
from __future__ import annotations
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from fittrack.errors import StorageError
from fittrack.repositories.base import Page, Pagination, slice_page
from fittrack.repositories.buckets import Bucket
from fittrack.schemas.workout import WorkoutSession, WorkoutSessionCreate

log = logging.getLogger(__name__)

DEMO_ID_PREFIX = "demo-session-"

def sort_newest_first(sessions: list[WorkoutSession]) -> list[WorkoutSession]:
    return sorted(sessions, key=lambda s: (s.date, s.created_at), reverse=True)

class EphemeralStore:
    """
    Device-local store for demo identities.

    The bucket holds one flat list of session records for every owner;
    owner filtering happens here, on read.
    """

    def __init__(self, bucket: Bucket):
        self.bucket = bucket

    # READS
    async def list(self, owner_id: str, pagination: Optional[Pagination] = None) -> Page[WorkoutSession]:
        mine = [s for s in self._load() if s.owner_id == owner_id]
        return slice_page(sort_newest_first(mine), pagination)

    async def count_for(self, owner_id: str) -> int:
        return sum(1 for s in self._load() if s.owner_id == owner_id)

    async def all_records(self) -> list[WorkoutSession]:
        """Every stored record regardless of owner, in insertion order."""
        return self._load()

    # WRITES
    async def save(self, session: WorkoutSessionCreate, owner_id: str) -> WorkoutSession:
        records = self._load()
        stored = WorkoutSession(
            **session.model_dump(),
            id=f"{DEMO_ID_PREFIX}{uuid.uuid4().hex}",
            owner_id=owner_id,
            created_at=datetime.now(timezone.utc),
        )
        records.append(stored)
        self._dump(records)
        return stored

    async def delete(self, session_id: str, owner_id: str) -> bool:
        records = self._load()
        kept = [s for s in records if not (s.id == session_id and s.owner_id == owner_id)]
        if len(kept) == len(records):
            return False
        self._dump(kept)
        return True

    async def clear(self) -> None:
        try:
            self.bucket.clear()
        except OSError as e:
            raise StorageError(f"could not clear bucket {self.bucket.name}: {e}") from e

    # internals
    def _load(self) -> list[WorkoutSession]:
        try:
            raw = self.bucket.get()
        except ValueError as e:
            # bad JSON or bytes that are not UTF-8
            log.warning("bucket %s is unreadable (%s); treating as empty", self.bucket.name, e)
            return []
        except OSError as e:
            raise StorageError(f"could not read bucket {self.bucket.name}: {e}") from e

        if raw is None:
            return []
        if not isinstance(raw, list):
            log.warning("bucket %s does not hold a list; treating as empty", self.bucket.name)
            return []

        sessions: list[WorkoutSession] = []
        for item in raw:
            try:
                sessions.append(WorkoutSession.model_validate(item))
            except PydanticValidationError:
                log.warning("skipping malformed record in bucket %s", self.bucket.name)
        return sessions

    def _dump(self, sessions: list[WorkoutSession]) -> None:
        try:
            self.bucket.set([s.model_dump(mode="json") for s in sessions])
        except OSError as e:
            raise StorageError(f"could not write bucket {self.bucket.name}: {e}") from e
