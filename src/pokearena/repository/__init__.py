"""Persistence adapters for roster entries and battle history."""

from pokearena.repository.sql_store import (
    RecordNotFoundError,
    SqlBattleRepository,
    SqlRosterRepository,
)

__all__ = ["RecordNotFoundError", "SqlBattleRepository", "SqlRosterRepository"]
