"""Domain layer for Pokearena.

Plain dataclasses for creatures, roster entries and battle records plus the
pure rule functions that operate on them (battle scoring, roster limits).
Nothing in here performs I/O; the catalog client and the SQL repositories
translate to and from these types.
"""

from . import battle, enums, models, roster

__all__ = ["battle", "enums", "models", "roster"]
