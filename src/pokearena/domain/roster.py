"""Roster membership rules."""

from __future__ import annotations

from collections.abc import Sequence

from pokearena.domain.models import PokemonID, RosterEntry

DEFAULT_MAX_SIZE = 6


class RosterError(ValueError):
    """Base class for rejected roster changes."""


class RosterFullError(RosterError):
    """Raised when the roster already holds the maximum number of entries."""

    def __init__(self, max_size: int) -> None:
        super().__init__(f"Roster is full: at most {max_size} entries allowed")
        self.max_size = max_size


class DuplicateEntryError(RosterError):
    """Raised when a creature is already on the roster."""

    def __init__(self, pokemon_id: PokemonID, name: str | None = None) -> None:
        label = name or f"#{int(pokemon_id)}"
        super().__init__(f"{label} is already on the roster")
        self.pokemon_id = pokemon_id


def find_entry(entries: Sequence[RosterEntry], pokemon_id: PokemonID) -> RosterEntry | None:
    for entry in entries:
        if entry.pokemon_id == pokemon_id:
            return entry
    return None


def ensure_can_add(
    entries: Sequence[RosterEntry],
    pokemon_id: PokemonID,
    *,
    max_size: int = DEFAULT_MAX_SIZE,
) -> None:
    """Raise a :class:`RosterError` if ``pokemon_id`` cannot join the roster.

    Capacity is checked before duplicates so a full roster always reports full.
    """

    if len(entries) >= max_size:
        raise RosterFullError(max_size)
    existing = find_entry(entries, pokemon_id)
    if existing is not None:
        raise DuplicateEntryError(pokemon_id, existing.name)
