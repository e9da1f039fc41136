"""Collection repository: loads and saves the whole planner state.

Each collection is one row of ``planner_collections`` holding a JSON array.
Loading reads every row into an :class:`EntityStore`; saving overwrites
every row (last write wins). A missing, unparsable or invalid collection is
logged and loaded as empty rather than failing the request.
"""

import json
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lineplanner.models.collection import StoredCollection
from lineplanner.services.entity_store import COLLECTION_NAMES, EntityStore

logger = logging.getLogger(__name__)


def decode_payload(name: str, payload: str | None) -> Any:
    """Decode one stored JSON array; ``None`` on any decoding problem."""
    if payload is None:
        return None
    try:
        value = json.loads(payload)
    except (TypeError, ValueError):
        logger.warning("Collection %r holds malformed JSON; loading it empty", name)
        return None
    if not isinstance(value, list):
        logger.warning(
            "Collection %r holds %s instead of an array; loading it empty",
            name,
            type(value).__name__,
        )
        return None
    return value


class CollectionRepository:
    """Owns the load/save lifecycle of the planner collections."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def load_raw(self) -> dict[str, Any]:
        """Decoded JSON arrays keyed by collection name; absent rows are omitted."""
        result = await self.db.execute(
            select(StoredCollection).where(StoredCollection.name.in_(COLLECTION_NAMES))
        )
        raw: dict[str, Any] = {}
        for row in result.scalars().all():
            value = decode_payload(row.name, row.payload)
            if value is not None:
                raw[row.name] = value
        return raw

    async def load(self) -> EntityStore:
        store = EntityStore.from_collections(await self.load_raw())
        logger.debug(
            "Loaded store: %d unit(s), %d line(s), %d order(s), %d block(s)",
            len(store.units),
            len(store.lines),
            len(store.orders),
            len(store.blocks),
        )
        return store

    async def save(self, store: EntityStore) -> None:
        """Overwrite every collection with the store's current contents."""
        for name, items in store.to_collections().items():
            await self.db.merge(StoredCollection(name=name, payload=json.dumps(items)))
        await self.db.flush()

    async def is_empty(self) -> bool:
        """True when no units, lines, shifts or orders are stored."""
        store = await self.load()
        return not (store.units or store.lines or store.shifts or store.orders)
