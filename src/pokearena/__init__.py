"""Pokearena: creature catalog, roster and stat battles over PokeAPI."""

__version__ = "0.1.0"
