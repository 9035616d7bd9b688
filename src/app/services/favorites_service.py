from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field

from src.app.ports.output import IKeyValueStore
from src.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)

FAVORITES_STORAGE_KEY = "torinogo-favorite-stops"


def decode_favorites(raw: str | None) -> tuple[str, ...]:
    """Parse a stored JSON list of stop ids, dropping duplicates and junk."""

    if not raw:
        return ()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored favorites are not valid JSON; ignoring them")
        return ()
    if not isinstance(data, list):
        logger.warning("Stored favorites are not a list; ignoring them")
        return ()

    seen: dict[str, None] = {}
    for item in data:
        if isinstance(item, str) and item:
            seen.setdefault(item, None)
    return tuple(seen)


def encode_favorites(stop_ids: tuple[str, ...]) -> str:
    return json.dumps(list(dict.fromkeys(stop_ids)))


@dataclass(slots=True)
class FavoritesService:
    """Favorite stop ids kept as a JSON list under one key of a key-value store.

    Storage failures never propagate. A failed read shows as an empty set, a
    failed write is logged and dropped, and a change whose read failed is
    skipped so the stored list is never overwritten from a blind read.
    Changes are serialized so concurrent requests do not lose each other's
    updates.
    """

    store: IKeyValueStore
    storage_key: str = FAVORITES_STORAGE_KEY
    _write_lock: asyncio.Lock = field(
        default_factory=asyncio.Lock, init=False, repr=False
    )

    async def _load(self) -> tuple[str, ...]:
        raw = await asyncio.to_thread(self.store.get_item, self.storage_key)
        return decode_favorites(raw)

    async def get_favorite_ids(self) -> tuple[str, ...]:
        try:
            return await self._load()
        except PersistenceError:
            logger.exception("Error reading favorites from %s", self.storage_key)
            return ()

    async def _save(self, stop_ids: tuple[str, ...]) -> None:
        try:
            await asyncio.to_thread(
                self.store.set_item, self.storage_key, encode_favorites(stop_ids)
            )
        except PersistenceError:
            logger.exception("Error saving favorites to %s", self.storage_key)

    async def _update(self, stop_id: str, *, present: bool | None) -> bool:
        """Set membership (`None` flips it) and return the resulting state."""

        async with self._write_lock:
            try:
                current = await self._load()
            except PersistenceError:
                logger.exception(
                    "Error reading favorites from %s; not updating %s",
                    self.storage_key,
                    stop_id,
                )
                return False

            was_present = stop_id in current
            wanted = not was_present if present is None else present
            if wanted and not was_present:
                await self._save((*current, stop_id))
            elif was_present and not wanted:
                await self._save(tuple(s for s in current if s != stop_id))
            return wanted

    async def add_favorite(self, stop_id: str) -> None:
        await self._update(stop_id, present=True)

    async def remove_favorite(self, stop_id: str) -> None:
        await self._update(stop_id, present=False)

    async def is_favorite(self, stop_id: str) -> bool:
        return stop_id in await self.get_favorite_ids()

    async def toggle_favorite(self, stop_id: str) -> bool:
        """Flip membership and return the new state."""

        return await self._update(stop_id, present=None)
