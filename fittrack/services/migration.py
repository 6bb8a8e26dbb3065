"""
One-shot transfer of demo (ephemeral) sessions into the durable store.

Sequence: read everything from the ephemeral bucket, bulk insert under the new
owner, then clear the bucket. The two stores share no transaction, so a crash
after the insert but before the clear leaves the records in both places and a
blind retry would duplicate them. Callers must not re-run transfer() when the
outcome of a previous call is unknown.
"""
from __future__ import annotations
import logging
from typing import Optional

from fittrack.errors import MigrationError, StorageError
from fittrack.repositories.durable_store import DurableStore
from fittrack.repositories.ephemeral_store import EphemeralStore

log = logging.getLogger(__name__)

class MigrationCoordinator:
    def __init__(self, ephemeral: EphemeralStore, durable: DurableStore):
        self.ephemeral = ephemeral
        self.durable = durable
        self.last_error: Optional[MigrationError] = None
        self.transferred = 0

    async def transfer(self, owner_id: str) -> bool:
        self.last_error = None
        self.transferred = 0
        try:
            # Demo records have no meaningful prior owner: take them all
            records = await self.ephemeral.all_records()
            if not records:
                log.info("no demo sessions to transfer for owner=%s", owner_id)
                return True

            # bulk_insert drops the ephemeral ids; the durable store assigns new ones
            self.transferred = await self.durable.bulk_insert(records, owner_id)
        except StorageError as e:
            log.exception("demo transfer failed for owner=%s, demo data kept: %s", owner_id, e.cause)
            self.last_error = MigrationError(cause=e.cause)
            return False

        try:
            await self.ephemeral.clear()
        except StorageError as e:
            # Rows are already durable; a retry now would insert them twice
            log.exception("demo sessions copied for owner=%s but bucket not cleared: %s", owner_id, e.cause)
            self.last_error = MigrationError(cause=e.cause)
            return False

        log.info("transferred %d demo sessions to owner=%s", self.transferred, owner_id)
        return True
