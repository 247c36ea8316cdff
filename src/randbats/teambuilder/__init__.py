"""Teambuilder module for random battle formats.

The teambuilder constructs teams using:
1. Role sets culled into movesets, then ability, item and level heuristics
2. Curated set templates under team composition caps (factory formats)
3. Unconstrained random draws (Challenge Cup, Hackmons Cup)

Key components:
- RandomTeams: Random battle teams from role sets
- FactoryTeams: Battle Factory, BSS Factory and CAP 1v1 teams
- ChaosTeams: Challenge Cup and Hackmons Cup teams
- MovesetBuilder/MoveCuller/MoveCounter: Moveset construction
- get_team/create_generator: Generator selection by format
"""

from randbats.teambuilder.abilities import select_ability, should_cull_ability
from randbats.teambuilder.base import TeamGeneratorBase
from randbats.teambuilder.chaos import ChaosTeams
from randbats.teambuilder.dispatch import TEAM_GENERATORS, create_generator, get_team
from randbats.teambuilder.factory import FactoryTeams
from randbats.teambuilder.generator import RandomTeams
from randbats.teambuilder.items import get_item
from randbats.teambuilder.move_counter import MoveCounter, query_moves
from randbats.teambuilder.move_culler import MoveCuller
from randbats.teambuilder.moveset import MovesetBuilder
from randbats.teambuilder.team_repr import (
    BuildContext,
    FactoryTeamData,
    RandomSet,
    TeamDetails,
    team_to_showdown_paste,
)

__all__ = [
    "TeamGeneratorBase",
    "RandomTeams",
    "FactoryTeams",
    "ChaosTeams",
    "TEAM_GENERATORS",
    "create_generator",
    "get_team",
    "MoveCounter",
    "query_moves",
    "MoveCuller",
    "MovesetBuilder",
    "select_ability",
    "should_cull_ability",
    "get_item",
    "RandomSet",
    "TeamDetails",
    "BuildContext",
    "FactoryTeamData",
    "team_to_showdown_paste",
]
