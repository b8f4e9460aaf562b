"""Roster entry model.

Each row is a snapshot of a catalog creature taken when it joined the roster.
"""

from typing import Any

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampCreatedMixin


class RosterEntryRow(Base, TimestampCreatedMixin):
    """Creature saved to the roster.

    Attributes:
        id: Primary key (the "team id" clients use for removal)
        pokemon_id: Catalog identifier, unique across the roster
        name: Display name
        image: Sprite URL
        types: JSON array of type names
        stats: JSON array of {"name", "base_stat"} objects
    """

    __tablename__ = "team_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    pokemon_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    image: Mapped[str | None] = mapped_column(String, nullable=True)
    types: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    stats: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<RosterEntryRow(id={self.id}, pokemon_id={self.pokemon_id}, name='{self.name}')>"
