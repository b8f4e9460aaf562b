"""Battle orchestration and history management."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from pokearena.catalog import PokeApiClient
from pokearena.domain import models as dm
from pokearena.domain.battle import resolve_battle
from pokearena.domain.enums import BattleMode
from pokearena.models import utc_now
from pokearena.repository import RecordNotFoundError, SqlBattleRepository
from pokearena.services.roster_service import RosterService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Combatant:
    """One side of a battle: a roster entry or a catalog creature."""

    team_id: dm.RosterEntryID | None = None
    pokemon_id: int | str | None = None

    def __post_init__(self) -> None:
        if (self.team_id is None) == (self.pokemon_id is None):
            raise ValueError("exactly one of team_id or pokemon_id is required")


@dataclass(slots=True)
class BattleOutcome:
    """Resolved battle and the history record it produced."""

    result: dm.BattleResult
    record: dm.BattleRecord
    first: dm.Creature
    second: dm.Creature


class BattleService:
    """Resolve battles between creatures and keep the history log."""

    def __init__(
        self,
        roster: RosterService,
        catalog: PokeApiClient,
        history: SqlBattleRepository,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._roster = roster
        self._catalog = catalog
        self._history = history
        self._rng = rng or random.Random()
        self._clock = clock

    def _catalog_key(self, combatant: Combatant) -> int | str:
        # Roster snapshots may be stale; always battle with current catalog stats.
        if combatant.team_id is not None:
            return int(self._roster.get_entry(combatant.team_id).pokemon_id)
        return combatant.pokemon_id

    async def random_opponent(self) -> dm.Creature:
        (creature,) = await self._catalog.random_creatures(1, rng=self._rng)
        return creature

    async def enemy_team(self, size: int) -> list[dm.Creature]:
        """Draw ``size`` random catalog creatures concurrently."""

        if size < 1:
            raise ValueError("team size must be at least 1")
        return await self._catalog.random_creatures(size, rng=self._rng)

    async def battle(
        self,
        first: Combatant,
        second: Combatant | None = None,
        *,
        mode: BattleMode = BattleMode.FULL,
    ) -> BattleOutcome:
        """Fight two creatures and record the result.

        Without ``second`` a random opponent is drawn from the catalog.
        """

        first_key = self._catalog_key(first)
        if second is not None:
            second_loader = self._catalog.get_creature(self._catalog_key(second))
        else:
            second_loader = self.random_opponent()

        loaded = await asyncio.gather(
            self._catalog.get_creature(first_key), second_loader, return_exceptions=True
        )
        for item in loaded:
            if isinstance(item, BaseException):
                raise item
        first_creature, second_creature = loaded

        result = resolve_battle(first_creature, second_creature, mode=mode)
        record = self._history.add(
            dm.BattleRecord(
                id=None,
                first=result.first,
                second=result.second,
                winner=result.winner,
                timestamp=self._clock(),
                details=result.rounds,
            )
        )
        logger.info(
            "battle %d: %s vs %s -> %s (%d-%d)",
            int(record.id),
            result.first,
            result.second,
            result.winner,
            result.first_wins,
            result.second_wins,
        )
        return BattleOutcome(
            result=result, record=record, first=first_creature, second=second_creature
        )

    def history(self, limit: int | None = None) -> list[dm.BattleRecord]:
        """Return recorded battles, newest first."""

        return self._history.list_records(limit)

    def get_record(self, record_id: dm.BattleRecordID) -> dm.BattleRecord:
        return self._history.get(record_id)

    def delete_record(self, record_id: dm.BattleRecordID) -> None:
        if not self._history.delete(record_id):
            raise RecordNotFoundError(f"Battle {int(record_id)} not found")

    def clear_history(self) -> int:
        removed = self._history.clear()
        logger.info("cleared %d battle records", removed)
        return removed
