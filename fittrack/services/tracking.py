"""
WorkoutTrackingFacade: the single entry point UI code talks to.

It picks the ephemeral or durable store from the current identity's mode,
validates before every write, and derives statistics from the full history.
Failures come back as values: the operation returns None/False/an empty
result, `last_error` holds the error, and a Notice goes to the notifier.
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Callable, Optional

from fittrack.errors import (
    AuthenticationRequiredError,
    BackendError,
    StorageError,
    TrackingError,
    ValidationError,
    ValidationErrorKind,
)
from fittrack.notifications import LoggingNotifier, Notice, NoticeKind, Notifier
from fittrack.repositories.base import Page, Pagination, WorkoutStore
from fittrack.repositories.durable_store import DurableStore
from fittrack.repositories.ephemeral_store import EphemeralStore
from fittrack.schemas.identity import Identity
from fittrack.schemas.stats import Achievement, WorkoutStatistics
from fittrack.schemas.workout import WorkoutSession, WorkoutSessionCreate
from fittrack.services.migration import MigrationCoordinator
from fittrack.services.statistics import aggregate_statistics, evaluate_achievements
from fittrack.validation import validate_session

log = logging.getLogger(__name__)

IdentityProvider = Callable[[], Optional[Identity]]

class WorkoutTrackingFacade:
    def __init__(
        self,
        identity_provider: IdentityProvider,
        ephemeral: EphemeralStore,
        durable: DurableStore,
        *,
        notifier: Optional[Notifier] = None,
        today: Callable[[], date] = date.today,
        default_page_size: int = 10,
    ):
        self.identity_provider = identity_provider
        self.ephemeral = ephemeral
        self.durable = durable
        self.notifier = notifier or LoggingNotifier()
        self.today = today
        self.default_page_size = default_page_size

        # Cached view of what the caller has seen; newest first
        self.history: list[WorkoutSession] = []
        self.last_error: Optional[TrackingError] = None

    # ---- helpers ----
    def _store_for(self, identity: Identity) -> WorkoutStore:
        return self.ephemeral if identity.is_demo else self.durable

    def _fail(self, error: TrackingError, kind: NoticeKind) -> None:
        self.last_error = error
        self.notifier.notify(Notice(kind=kind, title="Error", message=error.message))

    def _require_identity(self) -> Optional[Identity]:
        identity = self.identity_provider()
        if identity is None:
            self._fail(AuthenticationRequiredError(), NoticeKind.authentication_required)
        return identity

    def _backend_failure(self, op: str, e: StorageError) -> None:
        log.exception("%s failed: %s (outcome_unknown=%s)", op, e.cause, e.outcome_unknown)
        self._fail(BackendError(cause=e.cause, outcome_unknown=e.outcome_unknown), NoticeKind.backend)

    async def _full_history(self, identity: Identity) -> list[WorkoutSession]:
        page = await self._store_for(identity).list(identity.owner_id)
        return page.items

    # ---- public API ----
    def validate(self, session: WorkoutSessionCreate) -> Optional[ValidationError]:
        """Pre-submit check with the same rules track_workout applies."""
        return validate_session(session, today=self.today())

    async def track_workout(self, session: WorkoutSessionCreate) -> Optional[WorkoutSession]:
        self.last_error = None
        identity = self._require_identity()
        if identity is None:
            return None

        error = self.validate(session)
        if error is not None:
            log.info("rejected workout for owner=%s: %s on %s", identity.owner_id, error.kind.value, error.field)
            self._fail(error, NoticeKind.validation)
            return None

        try:
            stored = await self._store_for(identity).save(session, identity.owner_id)
        except StorageError as e:
            # Never retried here: an unknown outcome plus a retry means a duplicate
            self._backend_failure("save workout", e)
            return None

        self.history.insert(0, stored)
        self.notifier.notify(Notice(kind=NoticeKind.success, title="Success", message="Workout saved successfully"))
        return stored

    async def load_history(self, page: int = 1, page_size: Optional[int] = None) -> Page[WorkoutSession]:
        self.last_error = None
        page_size = self.default_page_size if page_size is None else page_size
        if page < 1 or page_size < 1:
            self._fail(
                ValidationError(field="page" if page < 1 else "page_size",
                                kind=ValidationErrorKind.invalid_pagination,
                                reason="Page and page size must be at least 1"),
                NoticeKind.validation,
            )
            return Page(items=[], total=0)

        identity = self._require_identity()
        if identity is None:
            return Page(items=[], total=0)

        try:
            result = await self._store_for(identity).list(identity.owner_id, Pagination(page, page_size))
        except StorageError as e:
            self._backend_failure("load history", e)
            return Page(items=[], total=0)

        self.history = list(result.items)
        return result

    async def remove_workout(self, session_id: str) -> bool:
        self.last_error = None
        identity = self._require_identity()
        if identity is None:
            return False

        try:
            removed = await self._store_for(identity).delete(session_id, identity.owner_id)
        except StorageError as e:
            self._backend_failure("delete workout", e)
            return False

        if removed:
            self.history = [s for s in self.history if s.id != session_id]
            self.notifier.notify(Notice(kind=NoticeKind.success, title="Success", message="Workout deleted successfully"))
        return removed

    async def get_statistics(self) -> WorkoutStatistics:
        self.last_error = None
        identity = self._require_identity()
        if identity is None:
            return WorkoutStatistics()
        try:
            sessions = await self._full_history(identity)
        except StorageError as e:
            self._backend_failure("load statistics", e)
            return WorkoutStatistics()
        return aggregate_statistics(sessions, today=self.today())

    async def get_achievements(self) -> list[Achievement]:
        self.last_error = None
        identity = self._require_identity()
        if identity is None:
            return []
        try:
            sessions = await self._full_history(identity)
        except StorageError as e:
            self._backend_failure("load achievements", e)
            return []
        stats = aggregate_statistics(sessions, today=self.today())
        return evaluate_achievements(sessions, stats)

    async def transfer_demo_data(self) -> bool:
        """Called once by the auth side right after a demo identity becomes a real one."""
        self.last_error = None
        identity = self.identity_provider()
        if identity is None or identity.is_demo:
            self._fail(AuthenticationRequiredError(message="No registered account to transfer the trial data to"),
                       NoticeKind.authentication_required)
            return False

        coordinator = MigrationCoordinator(self.ephemeral, self.durable)
        if not await coordinator.transfer(identity.owner_id):
            self._fail(coordinator.last_error, NoticeKind.migration)
            return False

        self.history = []
        if coordinator.transferred:
            self.notifier.notify(Notice(kind=NoticeKind.success, title="Data transferred",
                                        message="Your trial workouts have been saved to your account"))
        return True

    async def discard_demo_data(self) -> bool:
        """Sign-out of a demo identity: the ephemeral bucket goes away with it."""
        self.last_error = None
        try:
            await self.ephemeral.clear()
        except StorageError as e:
            self._backend_failure("discard demo data", e)
            return False
        self.history = []
        return True
