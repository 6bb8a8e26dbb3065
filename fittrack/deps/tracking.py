# fittrack/deps/tracking.py
import hashlib
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.db import get_db
from fittrack.deps.auth import get_current_identity
from fittrack.repositories.buckets import InMemoryBucket, bucket_from_settings
from fittrack.repositories.durable_store import DurableStore
from fittrack.repositories.ephemeral_store import EphemeralStore
from fittrack.schemas.identity import Identity
from fittrack.services.tracking import WorkoutTrackingFacade
from fittrack.settings import get_settings

# One bucket per demo identity: the server stands in for many devices at once
_demo_stores: dict[str, EphemeralStore] = {}

def ephemeral_store_for(demo_owner_id: str) -> EphemeralStore:
    s = get_settings()
    digest = hashlib.sha256(demo_owner_id.encode("utf-8")).hexdigest()[:32]
    name = f"{s.EPHEMERAL_BUCKET_NAME}-{digest}"
    store = _demo_stores.get(name)
    if store is None:
        store = EphemeralStore(bucket_from_settings(name, s.EPHEMERAL_STORE_DIR))
        _demo_stores[name] = store
    return store

def get_ephemeral_store(identity: Optional[Identity] = Depends(get_current_identity)) -> EphemeralStore:
    """
    Demo identities get their own bucket. A real identity only reaches the
    bucket of the demo account it was converted from; anyone else gets an
    empty one, so transferring from it moves nothing.
    """
    if identity is not None:
        if identity.is_demo:
            return ephemeral_store_for(identity.owner_id)
        if identity.converted_from:
            return ephemeral_store_for(identity.converted_from)
    return EphemeralStore(InMemoryBucket(get_settings().EPHEMERAL_BUCKET_NAME))

def get_facade(
    db: AsyncSession = Depends(get_db),
    identity: Optional[Identity] = Depends(get_current_identity),
    ephemeral: EphemeralStore = Depends(get_ephemeral_store),
) -> WorkoutTrackingFacade:
    return WorkoutTrackingFacade(
        lambda: identity,
        ephemeral,
        DurableStore(db),
        default_page_size=get_settings().DEFAULT_PAGE_SIZE,
    )
