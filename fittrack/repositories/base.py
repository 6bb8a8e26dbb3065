# fittrack/repositories/base.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Optional, Protocol, Sequence, TypeVar

from fittrack.schemas.workout import WorkoutSession, WorkoutSessionCreate

T = TypeVar("T")

@dataclass(slots=True, frozen=True)
class Pagination:
    page: int       # 1-based
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int

def slice_page(items: Sequence[T], pagination: Optional[Pagination]) -> Page[T]:
    """Cut one page out of an already sorted sequence; total is always the full count."""
    if pagination is None:
        return Page(items=list(items), total=len(items))
    window = items[pagination.offset:pagination.offset + pagination.limit]
    return Page(items=list(window), total=len(items))

class WorkoutStore(Protocol):
    """
    Storage contract shared by the ephemeral and durable backends.

    list() orders by date descending, then created_at descending, so both
    backends hand out identical pages for identical data.
    """

    async def save(self, session: WorkoutSessionCreate, owner_id: str) -> WorkoutSession:
        """Assign id and created_at, persist, return the stored record. Raises StorageError."""
        ...

    async def list(self, owner_id: str, pagination: Optional[Pagination] = None) -> Page[WorkoutSession]:
        ...

    async def delete(self, session_id: str, owner_id: str) -> bool:
        """Remove the record only if owner_id owns it; True if something was removed."""
        ...

    async def count_for(self, owner_id: str) -> int:
        ...
