"""Stat-comparison battle rules."""

from __future__ import annotations

from pokearena.domain.enums import BATTLE_STATS, TIE, BattleMode
from pokearena.domain.models import BattleRound, BattleResult, Creature


def compare_stat(first: Creature, second: Creature, stat: str) -> BattleRound:
    """Compare one stat; the higher value takes the round, equal values tie."""

    first_value = first.stat(stat)
    second_value = second.stat(stat)
    if first_value > second_value:
        winner = first.name
    elif second_value > first_value:
        winner = second.name
    else:
        winner = TIE
    return BattleRound(
        stat=stat, first_value=first_value, second_value=second_value, winner=winner
    )


def resolve_battle(
    first: Creature,
    second: Creature,
    *,
    mode: BattleMode = BattleMode.FULL,
) -> BattleResult:
    """Resolve a battle by counting the stats each side wins.

    The first creature wins only with strictly more rounds; a level count goes
    to the second creature. Stats a creature lacks count as 0.
    """

    rounds: list[BattleRound] = []
    first_wins = second_wins = 0
    first_total = second_total = 0

    for stat in BATTLE_STATS[mode]:
        round_ = compare_stat(first, second, stat)
        rounds.append(round_)
        first_total += round_.first_value
        second_total += round_.second_value
        if round_.first_value > round_.second_value:
            first_wins += 1
        elif round_.second_value > round_.first_value:
            second_wins += 1

    if first_wins > second_wins:
        winner, loser = first.name, second.name
    else:
        winner, loser = second.name, first.name

    return BattleResult(
        first=first.name,
        second=second.name,
        winner=winner,
        loser=loser,
        rounds=rounds,
        first_wins=first_wins,
        second_wins=second_wins,
        first_total=first_total,
        second_total=second_total,
    )
