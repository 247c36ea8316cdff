"""Team representation for the teambuilder.

This module handles:
1. The generated set record returned to callers
2. Team-scoped state accumulated while a team is assembled
3. Team serialization (to Showdown paste format)
"""

from collections import Counter
from dataclasses import dataclass, field

from randbats.shared.data_loader import Dex, SpeciesData, normalize_name

STAT_NAMES = {"hp": "HP", "atk": "Atk", "def": "Def", "spa": "SpA", "spd": "SpD", "spe": "Spe"}


@dataclass(frozen=True)
class RandomSet:
    """One fully specified Pokemon placed into a generated team.

    Sets built by the random generator carry move ids and a role; curated
    and chaos sets carry move names, a nature and happiness.
    """

    name: str
    species: str
    gender: str
    shiny: bool
    level: int
    moves: tuple[str, ...]
    ability: str
    evs: dict[str, int]
    ivs: dict[str, int]
    item: str
    tera_type: str | None = None
    role: str | None = None
    nature: str | None = None
    happiness: int | None = None
    gigantamax: bool = False


@dataclass
class TeamDetails:
    """Team-wide flags fed back into later builds of the same team.

    Created per team attempt and discarded on retry.
    """

    rain: int = 0
    sun: int = 0
    sand: int = 0
    snow: int = 0
    spikes: int = 0
    stealth_rock: int = 0
    sticky_web: int = 0
    toxic_spikes: int = 0
    defog: int = 0
    rapid_spin: int = 0
    screens: int = 0
    tera_blast: int = 0
    illusion: int = 0  # 1-based slot of the Illusion user

    def record(self, pokemon_set: RandomSet, slot: int) -> None:
        """Track what an accepted set brings to the team.

        Args:
            pokemon_set: The accepted set (moves are ids)
            slot: Number of members on the team including this one
        """
        moves = pokemon_set.moves
        ability = pokemon_set.ability
        if ability == "Drizzle" or "raindance" in moves:
            self.rain = 1
        if ability == "Drought" or "sunnyday" in moves:
            self.sun = 1
        if ability == "Sand Stream":
            self.sand = 1
        if ability == "Snow Warning" or "snowscape" in moves or "chillyreception" in moves:
            self.snow = 1
        if "spikes" in moves:
            self.spikes += 1
        if "stealthrock" in moves:
            self.stealth_rock = 1
        if "stickyweb" in moves:
            self.sticky_web = 1
        if "toxicspikes" in moves:
            self.toxic_spikes = 1
        if "defog" in moves:
            self.defog = 1
        if "rapidspin" in moves or "mortalspin" in moves or "tidyup" in moves:
            self.rapid_spin = 1
        if "auroraveil" in moves or ("reflect" in moves and "lightscreen" in moves):
            self.screens = 1
        if pokemon_set.role == "Tera Blast user":
            self.tera_blast = 1
        if ability == "Illusion":
            self.illusion = slot


@dataclass
class BuildContext:
    """Everything about the build in progress that the heuristics inspect."""

    species: SpeciesData
    types: list[str]
    abilities: list[str]  # candidate abilities, in slot order
    team_details: TeamDetails
    tera_type: str
    role: str
    is_lead: bool = False
    is_doubles: bool = False

    def has_ability(self, *names: str) -> bool:
        return any(name in self.abilities for name in names)


@dataclass
class FactoryTeamData:
    """Team composition state for curated-pool generators."""

    type_count: Counter = field(default_factory=Counter)
    type_combo_count: Counter = field(default_factory=Counter)
    base_formes: set[str] = field(default_factory=set)
    has: Counter = field(default_factory=Counter)
    weaknesses: Counter = field(default_factory=Counter)
    resistances: Counter = field(default_factory=Counter)
    weather: str | None = None
    force_result: bool = False


def team_to_showdown_paste(team: list[RandomSet], dex: Dex | None = None) -> str:
    """Convert a generated team to Showdown paste format.

    Move and item ids are shown by name when a dex is given.

    Example output:
    Dragapult @ Choice Specs
    Ability: Infiltrator
    Level: 80
    Tera Type: Ghost
    EVs: 84 HP / 85 Atk / 85 Def / 85 SpA / 85 SpD / 85 Spe
    - Shadow Ball
    - Draco Meteor

    (blank line between Pokemon)
    """
    lines = []

    for pokemon in team:
        header = pokemon.species
        if pokemon.name and normalize_name(pokemon.name) != normalize_name(pokemon.species):
            header = f"{pokemon.name} ({pokemon.species})"
        if pokemon.gender in ("M", "F"):
            header += f" ({pokemon.gender})"
        if pokemon.item:
            lines.append(f"{header} @ {_display_name(pokemon.item, dex, 'item')}")
        else:
            lines.append(header)

        lines.append(f"Ability: {pokemon.ability}")
        if pokemon.level != 100:
            lines.append(f"Level: {pokemon.level}")
        if pokemon.shiny:
            lines.append("Shiny: Yes")
        if pokemon.happiness is not None and pokemon.happiness != 255:
            lines.append(f"Happiness: {pokemon.happiness}")
        if pokemon.tera_type:
            lines.append(f"Tera Type: {pokemon.tera_type}")

        ev_parts = [f"{value} {STAT_NAMES.get(stat, stat)}" for stat, value in pokemon.evs.items() if value > 0]
        if ev_parts:
            lines.append(f"EVs: {' / '.join(ev_parts)}")

        if pokemon.nature:
            lines.append(f"{pokemon.nature} Nature")

        # IVs (only if non-standard)
        iv_parts = [f"{value} {STAT_NAMES.get(stat, stat)}" for stat, value in pokemon.ivs.items() if value != 31]
        if iv_parts:
            lines.append(f"IVs: {' / '.join(iv_parts)}")

        for move in pokemon.moves:
            lines.append(f"- {_display_name(move, dex, 'move')}")

        lines.append("")

    return "\n".join(lines)


def _display_name(name: str, dex: Dex | None, kind: str) -> str:
    if dex is None:
        return name
    entry = dex.get_move(name) if kind == "move" else dex.get_item(name)
    return entry.name if entry else name
