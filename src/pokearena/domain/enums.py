"""Enumerations used across the Pokearena domain."""

from __future__ import annotations

from enum import StrEnum


class StatName(StrEnum):
    """Base stats reported by the catalog."""

    HP = "hp"
    ATTACK = "attack"
    DEFENSE = "defense"
    SPECIAL_ATTACK = "special-attack"
    SPECIAL_DEFENSE = "special-defense"
    SPEED = "speed"


class BattleMode(StrEnum):
    """Which stats a battle compares."""

    FULL = "full"
    QUICK = "quick"


TIE = "tie"

BATTLE_STATS: dict[BattleMode, tuple[StatName, ...]] = {
    BattleMode.FULL: (
        StatName.HP,
        StatName.ATTACK,
        StatName.DEFENSE,
        StatName.SPEED,
        StatName.SPECIAL_ATTACK,
        StatName.SPECIAL_DEFENSE,
    ),
    BattleMode.QUICK: (StatName.HP, StatName.ATTACK, StatName.SPEED),
}
