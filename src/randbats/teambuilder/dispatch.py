"""Generator selection by format team kind."""

import logging

from randbats.config import GeneratorConfig
from randbats.errors import UnsupportedFormatError
from randbats.shared.data_loader import Dex, SetsRepository
from randbats.shared.formats import Format
from randbats.shared.prng import PRNG, Seed
from randbats.teambuilder.base import TeamGeneratorBase
from randbats.teambuilder.chaos import ChaosTeams
from randbats.teambuilder.factory import FactoryTeams
from randbats.teambuilder.generator import RandomTeams
from randbats.teambuilder.team_repr import RandomSet

logger = logging.getLogger(__name__)

TEAM_GENERATORS: tuple[type[TeamGeneratorBase], ...] = (RandomTeams, FactoryTeams, ChaosTeams)


def create_generator(
    format: Format,
    dex: Dex,
    sets: SetsRepository | None = None,
    prng: PRNG | Seed | None = None,
    config: GeneratorConfig | None = None,
) -> TeamGeneratorBase:
    """Create the generator for a format's team kind.

    Raises:
        UnsupportedFormatError: No generator handles the team kind
    """
    for generator_class in TEAM_GENERATORS:
        if format.team in generator_class.team_methods:
            logger.debug(f"Using {generator_class.__name__} for {format.id} ({format.team})")
            return generator_class(format, dex, sets=sets, prng=prng, config=config)
    raise UnsupportedFormatError(f"No team generator for '{format.team}' teams", format_id=format.id)


def get_team(
    format: Format,
    dex: Dex,
    sets: SetsRepository | None = None,
    prng: PRNG | Seed | None = None,
    config: GeneratorConfig | None = None,
) -> list[RandomSet]:
    """Generate one team for a format.

    Args:
        format: The format to generate for
        dex: Reference data
        sets: Set catalogs
        prng: A PRNG to share, or a seed; random when omitted
        config: Generator tunables

    Returns:
        The generated team
    """
    return create_generator(format, dex, sets=sets, prng=prng, config=config).get_team()
