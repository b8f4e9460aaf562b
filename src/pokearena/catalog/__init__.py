"""Client for the public creature catalog."""

from pokearena.catalog.client import (
    CatalogError,
    CreatureNotFoundError,
    PokeApiClient,
    creature_from_payload,
)

__all__ = [
    "CatalogError",
    "CreatureNotFoundError",
    "PokeApiClient",
    "creature_from_payload",
]
