"""SQLAlchemy-backed repositories for Pokearena."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from pokearena.domain import models as dm
from pokearena.models import BattleRow, RosterEntryRow


class RecordNotFoundError(LookupError):
    """Raised when a roster entry or battle record does not exist."""


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _stats_to_json(stats: list[dm.StatValue]) -> list[dict[str, Any]]:
    return [{"name": stat.name, "base_stat": stat.base_stat} for stat in stats]


def _stats_from_json(raw: list[dict[str, Any]]) -> list[dm.StatValue]:
    return [dm.StatValue(name=item["name"], base_stat=int(item["base_stat"])) for item in raw]


def _rounds_to_json(rounds: list[dm.BattleRound]) -> list[dict[str, Any]]:
    return [
        {
            "stat": round_.stat,
            "pokemon1Value": round_.first_value,
            "pokemon2Value": round_.second_value,
            "winner": round_.winner,
        }
        for round_ in rounds
    ]


def _rounds_from_json(raw: list[dict[str, Any]]) -> list[dm.BattleRound]:
    return [
        dm.BattleRound(
            stat=item["stat"],
            first_value=int(item["pokemon1Value"]),
            second_value=int(item["pokemon2Value"]),
            winner=item["winner"],
        )
        for item in raw
    ]


class SqlRosterRepository:
    """Store roster entries in the ``team_entries`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @staticmethod
    def _to_domain(row: RosterEntryRow) -> dm.RosterEntry:
        return dm.RosterEntry(
            id=dm.RosterEntryID(row.id),
            pokemon_id=dm.PokemonID(row.pokemon_id),
            name=row.name,
            image=row.image,
            types=list(row.types or []),
            stats=_stats_from_json(row.stats or []),
            added_at=_aware(row.created_at),
        )

    def list_entries(self) -> list[dm.RosterEntry]:
        """Return every roster entry in insertion order."""

        with self._session_factory() as session:
            rows = session.scalars(select(RosterEntryRow).order_by(RosterEntryRow.id))
            return [self._to_domain(row) for row in rows]

    def get(self, entry_id: dm.RosterEntryID) -> dm.RosterEntry:
        """Load one entry or raise :class:`RecordNotFoundError`."""

        with self._session_factory() as session:
            row = session.get(RosterEntryRow, int(entry_id))
            if row is None:
                raise RecordNotFoundError(f"Roster entry {int(entry_id)} not found")
            return self._to_domain(row)

    def count(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(RosterEntryRow)) or 0

    def add(self, entry: dm.RosterEntry) -> dm.RosterEntry:
        """Persist a new entry and return it with its assigned id."""

        row = RosterEntryRow(
            pokemon_id=int(entry.pokemon_id),
            name=entry.name,
            image=entry.image,
            types=list(entry.types),
            stats=_stats_to_json(entry.stats),
        )
        with self._session_factory() as session, session.begin():
            session.add(row)
            session.flush()
            return self._to_domain(row)

    def delete(self, entry_id: dm.RosterEntryID) -> bool:
        """Remove an entry; return False when it did not exist."""

        with self._session_factory() as session, session.begin():
            row = session.get(RosterEntryRow, int(entry_id))
            if row is None:
                return False
            session.delete(row)
            return True


class SqlBattleRepository:
    """Store battle records in the ``battles`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @staticmethod
    def _to_domain(row: BattleRow) -> dm.BattleRecord:
        details = _rounds_from_json(row.battle_details) if row.battle_details is not None else None
        return dm.BattleRecord(
            id=dm.BattleRecordID(row.id),
            first=row.pokemon1,
            second=row.pokemon2,
            winner=row.winner,
            timestamp=_aware(row.timestamp),
            details=details,
        )

    def list_records(self, limit: int | None = None) -> list[dm.BattleRecord]:
        """Return records newest first."""

        stmt = select(BattleRow).order_by(BattleRow.timestamp.desc(), BattleRow.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._session_factory() as session:
            return [self._to_domain(row) for row in session.scalars(stmt)]

    def get(self, record_id: dm.BattleRecordID) -> dm.BattleRecord:
        with self._session_factory() as session:
            row = session.get(BattleRow, int(record_id))
            if row is None:
                raise RecordNotFoundError(f"Battle {int(record_id)} not found")
            return self._to_domain(row)

    def add(self, record: dm.BattleRecord) -> dm.BattleRecord:
        """Persist a record and return it with its assigned id."""

        row = BattleRow(
            pokemon1=record.first,
            pokemon2=record.second,
            winner=record.winner,
            timestamp=record.timestamp,
            battle_details=_rounds_to_json(record.details) if record.details is not None else None,
        )
        with self._session_factory() as session, session.begin():
            session.add(row)
            session.flush()
            return self._to_domain(row)

    def delete(self, record_id: dm.BattleRecordID) -> bool:
        with self._session_factory() as session, session.begin():
            row = session.get(BattleRow, int(record_id))
            if row is None:
                return False
            session.delete(row)
            return True

    def clear(self) -> int:
        """Delete every record and return how many were removed."""

        with self._session_factory() as session, session.begin():
            result = session.execute(delete(BattleRow))
            return result.rowcount or 0
