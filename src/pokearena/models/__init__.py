"""SQLAlchemy models for the Pokearena service.

This module exports the declarative base and the two persisted tables:
roster entries and battle history.
"""

from .base import Base, TimestampCreatedMixin, utc_now
from .battle import BattleRow
from .roster import RosterEntryRow

__all__ = [
    "Base",
    "BattleRow",
    "RosterEntryRow",
    "TimestampCreatedMixin",
    "utc_now",
]
