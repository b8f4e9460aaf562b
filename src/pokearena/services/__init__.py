"""Service layer for Pokearena.

Services combine the pure domain rules with the catalog client and the SQL
repositories:

- RosterService: list, add and remove roster entries (max six, no duplicates)
- BattleService: resolve battles, draw random opponents, manage battle history

Production wiring lives in :mod:`pokearena.api.runtime`. Tests inject an
``httpx.MockTransport`` into the catalog client and an in-memory SQLite
session factory into the repositories.
"""

from pokearena.services.battle_service import BattleOutcome, BattleService, Combatant
from pokearena.services.roster_service import RosterService

__all__ = [
    "BattleOutcome",
    "BattleService",
    "Combatant",
    "RosterService",
]
