"""Random battle team generation.

This package provides:
- Teambuilder: random, factory, curated and chaos team generators
- Shared: game data access, format rules and the seeded random source
"""

__version__ = "0.1.0"

from randbats.config import GeneratorConfig, generator_config
from randbats.errors import (
    PoolInsufficientError,
    TeamGenerationError,
    UnsupportedFormatError,
)
from randbats.teambuilder.dispatch import create_generator, get_team

__all__ = [
    "GeneratorConfig",
    "generator_config",
    "TeamGenerationError",
    "UnsupportedFormatError",
    "PoolInsufficientError",
    "create_generator",
    "get_team",
]
