"""Battle history model."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class BattleRow(Base):
    """Recorded battle between two creatures.

    Attributes:
        id: Primary key
        pokemon1: Name of the first creature
        pokemon2: Name of the second creature
        winner: Name of the winning creature
        timestamp: When the battle was fought
        battle_details: Optional JSON array of per-stat rounds
    """

    __tablename__ = "battles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    pokemon1: Mapped[str] = mapped_column(String, nullable=False)
    pokemon2: Mapped[str] = mapped_column(String, nullable=False)
    winner: Mapped[str] = mapped_column(String, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    battle_details: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)

    __table_args__ = (Index("idx_battles_timestamp", "timestamp"),)

    def __repr__(self) -> str:
        return f"<BattleRow(id={self.id}, {self.pokemon1} vs {self.pokemon2}, winner='{self.winner}')>"
