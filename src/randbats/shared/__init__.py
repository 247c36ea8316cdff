"""Shared components for the team generators.

This module contains:
- Data loaders: Species, move, ability and item data plus set catalogs
- Formats: Team size, move limits and custom bans
- PRNG: The seeded random source all draws go through
"""

from randbats.shared.data_loader import (
    AbilityData,
    Dex,
    ItemData,
    MoveData,
    SetsRepository,
    SpeciesData,
    normalize_name,
)
from randbats.shared.formats import Format
from randbats.shared.prng import PRNG, fast_pop

__all__ = [
    # Data
    "Dex",
    "SpeciesData",
    "MoveData",
    "AbilityData",
    "ItemData",
    "SetsRepository",
    "normalize_name",
    # Rules
    "Format",
    # Randomness
    "PRNG",
    "fast_pop",
]
