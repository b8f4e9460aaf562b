"""Roster management on top of the catalog and the roster repository."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy.exc import IntegrityError

from pokearena.catalog import PokeApiClient
from pokearena.domain import models as dm
from pokearena.domain.roster import (
    DEFAULT_MAX_SIZE,
    DuplicateEntryError,
    RosterError,
    RosterFullError,
    ensure_can_add,
)
from pokearena.repository import RecordNotFoundError, SqlRosterRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Add, list and remove roster entries."""

    def __init__(
        self,
        repository: SqlRosterRepository,
        catalog: PokeApiClient,
        *,
        max_size: int = DEFAULT_MAX_SIZE,
    ) -> None:
        self._repository = repository
        self._catalog = catalog
        self.max_size = max_size
        self._add_lock = asyncio.Lock()

    async def list_entries(self, *, refresh: bool = False) -> list[dm.RosterEntry]:
        """Return the roster, optionally re-reading types and stats from the catalog."""

        entries = self._repository.list_entries()
        if not refresh or not entries:
            return entries

        creatures = await self._catalog.get_many(int(entry.pokemon_id) for entry in entries)
        for entry, creature in zip(entries, creatures, strict=True):
            entry.name = creature.name
            entry.image = creature.image
            entry.types = list(creature.types)
            entry.stats = list(creature.stats)
        return entries

    def get_entry(self, entry_id: dm.RosterEntryID) -> dm.RosterEntry:
        return self._repository.get(entry_id)

    async def add(self, key: int | str) -> dm.RosterEntry:
        """Snapshot a catalog creature onto the roster.

        Raises:
            RosterFullError: the roster already holds ``max_size`` entries
            DuplicateEntryError: the creature is already on the roster
            CreatureNotFoundError: the catalog does not know ``key``
        """

        async with self._add_lock:
            entries = self._repository.list_entries()
            if len(entries) >= self.max_size:
                logger.warning("roster full; rejected %s", key)
                raise RosterFullError(self.max_size)

            creature = await self._catalog.get_creature(key)
            try:
                ensure_can_add(entries, creature.id, max_size=self.max_size)
            except RosterError as exc:
                logger.warning("rejected roster add of %s: %s", creature.name, exc)
                raise

            entry = dm.RosterEntry(
                id=None,
                pokemon_id=creature.id,
                name=creature.name,
                image=creature.image,
                types=list(creature.types),
                stats=list(creature.stats),
            )
            try:
                saved = self._repository.add(entry)
            except IntegrityError as exc:
                raise DuplicateEntryError(creature.id, creature.name) from exc

        logger.info("added %s (#%d) to roster as entry %d", saved.name, saved.pokemon_id, saved.id)
        return saved

    def remove(self, entry_id: dm.RosterEntryID) -> None:
        """Delete an entry or raise :class:`RecordNotFoundError`."""

        if not self._repository.delete(entry_id):
            raise RecordNotFoundError(f"Roster entry {int(entry_id)} not found")
        logger.info("removed roster entry %d", int(entry_id))
