"""Dataclasses describing creatures, roster entries and battle records.

Persistence adapters translate between these dataclasses and the SQL rows;
the catalog client builds :class:`Creature` values from upstream payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import NewType

# --- Strongly typed identifiers -------------------------------------------------

PokemonID = NewType("PokemonID", int)
RosterEntryID = NewType("RosterEntryID", int)
BattleRecordID = NewType("BattleRecordID", int)


# --- Core dataclasses -----------------------------------------------------------


@dataclass(slots=True)
class StatValue:
    """One base stat of a creature."""

    name: str
    base_stat: int


@dataclass(slots=True)
class Creature:
    """Catalog creature as reported by the upstream API."""

    id: PokemonID
    name: str
    image: str | None = None
    types: list[str] = field(default_factory=list)
    stats: list[StatValue] = field(default_factory=list)
    height: int | None = None
    weight: int | None = None
    abilities: list[str] = field(default_factory=list)

    def stat(self, name: str) -> int:
        """Return the base value for ``name`` or 0 when the creature lacks it."""

        for value in self.stats:
            if value.name == name:
                return value.base_stat
        return 0


@dataclass(slots=True)
class CatalogPage:
    """One page of the catalog listing."""

    page: int
    total_pages: int
    count: int
    results: list[Creature] = field(default_factory=list)


@dataclass(slots=True)
class RosterEntry:
    """Creature saved to the personal roster."""

    id: RosterEntryID | None
    pokemon_id: PokemonID
    name: str
    image: str | None = None
    types: list[str] = field(default_factory=list)
    stats: list[StatValue] = field(default_factory=list)
    added_at: datetime | None = None


@dataclass(slots=True)
class BattleRound:
    """Comparison of a single stat."""

    stat: str
    first_value: int
    second_value: int
    winner: str


@dataclass(slots=True)
class BattleResult:
    """Outcome of comparing two creatures."""

    first: str
    second: str
    winner: str
    loser: str
    rounds: list[BattleRound]
    first_wins: int
    second_wins: int
    first_total: int
    second_total: int


@dataclass(slots=True)
class BattleRecord:
    """Battle stored in the history log."""

    id: BattleRecordID | None
    first: str
    second: str
    winner: str
    timestamp: datetime
    details: list[BattleRound] | None = None
