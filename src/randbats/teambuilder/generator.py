"""Random team generation.

Teams are built one Pokemon at a time. Each species is drawn from the
set catalog, checked against team-wide limits (types, weaknesses, type
combinations, slot restrictions), then given a set:
1. A role set is sampled and its move pool culled into a moveset
2. An ability is picked from the species' abilities
3. An item is picked from the item rule chains
4. Level, EVs and IVs are fitted to the result

Accepted sets update team-wide details (weather, hazards, screens) that
steer later builds of the same team.
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import Any

from randbats.errors import TeamGenerationError
from randbats.shared.data_loader import SpeciesData, normalize_name
from randbats.teambuilder.abilities import select_ability
from randbats.teambuilder.base import TeamGeneratorBase
from randbats.teambuilder.items import get_item
from randbats.teambuilder.move_counter import query_moves
from randbats.teambuilder.move_culler import remove_move
from randbats.teambuilder.moveset import MovesetBuilder
from randbats.teambuilder.team_repr import BuildContext, RandomSet, TeamDetails

logger = logging.getLogger(__name__)

# Default level by tier when the set data gives none
TIER_LEVELS = {
    "Uber": 76,
    "OU": 80,
    "UUBL": 81,
    "UU": 82,
    "RUBL": 83,
    "RU": 84,
    "NUBL": 85,
    "NU": 86,
    "PUBL": 87,
    "PU": 88,
    "(PU)": 88,
    "NFE": 88,
}
DEFAULT_LEVEL = 80

PIKACHU_CAPS = ["", "-Original", "-Hoenn", "-Sinnoh", "-Unova", "-Kalos", "-Alola", "-Partner", "-World"]

# Species with Last Respects shouldn't lead
NO_LEAD_SPECIES = ("Basculegion", "Houndstone")

# Below this level, a species can't take the last slot behind Zoroark
ILLUSION_MIN_LAST_LEVEL = 72


class RandomTeams(TeamGeneratorBase):
    """Generates random battle teams from per-species role sets."""

    team_methods = {"random": "random_team"}

    def _species_sets(self, is_doubles: bool) -> Any:
        return self.sets.doubles_sets if is_doubles else self.sets.random_sets

    def get_level(self, species: SpeciesData, is_doubles: bool = False) -> int:
        """Level for a species: format override, set data, then tier scale."""
        if self.adjust_level:
            return self.adjust_level
        level = self._species_sets(is_doubles).get(species.id, {}).get("level")
        if level:
            return level
        return TIER_LEVELS.get(species.tier, DEFAULT_LEVEL)

    def random_set(
        self,
        species: "str | SpeciesData",
        team_details: TeamDetails | None = None,
        is_lead: bool = False,
        is_doubles: bool = False,
    ) -> RandomSet:
        """Build one set for a species.

        Args:
            species: Species name, id or data
            team_details: Details of the team so far
            is_lead: Whether this is the first member
            is_doubles: Whether doubles set data and items apply

        Returns:
            The finished set (moves are ids)
        """
        team_details = team_details or TeamDetails()
        species_data = self.dex.get_species(species)
        if species_data is None:
            raise ValueError(f"Unknown species: {species}")
        species = species_data

        forme = species.name
        if isinstance(species.battle_only, str):
            # Only change the forme; the species keeps its own moves and typing
            forme = species.battle_only
        if species.cosmetic_formes:
            forme = self.sample([species.name, *species.cosmetic_formes])

        sets = self._species_sets(is_doubles)[species.id]["sets"]
        possible_sets = [s for s in sets if not (team_details.tera_blast and s["role"] == "Tera Blast user")]
        set_data = self.sample(possible_sets)
        role = set_data["role"]
        move_ids = []
        for move_name in set_data["movepool"]:
            move = self.dex.get_move(move_name)
            move_ids.append(move.id if move else normalize_name(move_name))
        move_pool = list(dict.fromkeys(move_ids))
        tera_type = self.sample_if_array(set_data["teraTypes"])

        if self.format.game_type in ("multi", "freeforall") and "allyswitch" in move_pool:
            # Ally Switch fails in multi battles
            if len(move_pool) > self.max_move_count:
                remove_move(move_pool, "allyswitch")
            else:
                move_pool[move_pool.index("allyswitch")] = "sleeptalk"

        evs = {"hp": 85, "atk": 85, "def": 85, "spa": 85, "spd": 85, "spe": 85}
        ivs = {"hp": 31, "atk": 31, "def": 31, "spa": 31, "spd": 31, "spe": 31}

        types = list(species.types)
        abilities = list(dict.fromkeys(species.abilities.values()))
        hidden = species.abilities.get("H")
        if species.unreleased_hidden and hidden in abilities:
            abilities.remove(hidden)

        ctx = BuildContext(
            species=species,
            types=types,
            abilities=abilities,
            team_details=team_details,
            tera_type=tera_type,
            role=role,
            is_lead=is_lead,
            is_doubles=is_doubles,
        )

        moves = MovesetBuilder(self.dex, self.prng, ctx, move_pool, self.max_move_count).build()
        counter = query_moves(self.dex, moves, species.types, tera_type, abilities)
        ability = select_ability(self.dex, self.prng, moves, counter, ctx, self.config.min_ability_rating)
        item = get_item(self.dex, self.prng, ability, moves, counter, ctx)

        if species.base_species == "Pikachu":
            forme = "Pikachu" + self.sample(PIKACHU_CAPS)

        level = self.get_level(species, is_doubles)

        # Prepare optimal HP
        sr_immunity = ability == "Magic Guard" or item == "Heavy-Duty Boots"
        sr_weakness = 0 if sr_immunity else self.dex.get_effectiveness("Rock", species)
        while evs["hp"] > 1:
            hp = (2 * species.base_stats["hp"] + ivs["hp"] + evs["hp"] // 4 + 100) * level // 100 + 10
            if "substitute" in moves and item in ("Sitrus Berry", "Salac Berry"):
                # Two Substitutes should activate Sitrus Berry
                if hp % 4 == 0:
                    break
            elif ("bellydrum" in moves or "filletaway" in moves) and (
                item == "Sitrus Berry" or ability == "Gluttony"
            ):
                # Belly Drum should activate Sitrus Berry
                if hp % 2 == 0:
                    break
            else:
                # Maximize number of Stealth Rock switch-ins
                if sr_weakness <= 0 or hp % (4 / sr_weakness) > 0 or item in ("Leftovers", "Life Orb"):
                    break
            evs["hp"] -= 4

        # Minimize confusion damage
        if self._no_attack_stat_moves(moves) and "transform" not in moves:
            evs["atk"] = 0
            ivs["atk"] = 0

        if "gyroball" in moves or "trickroom" in moves:
            evs["spe"] = 0
            ivs["spe"] = 0

        return RandomSet(
            name=species.base_species,
            species=forme,
            gender=species.gender,
            shiny=self.random_chance(1, self.config.shiny_odds),
            level=level,
            moves=tuple(moves),
            ability=ability,
            evs=evs,
            ivs=ivs,
            item=item,
            tera_type=tera_type,
            role=role,
        )

    def _no_attack_stat_moves(self, moves: list[str]) -> bool:
        for move_id in moves:
            move = self.dex.get_move(move_id)
            if move is None or move.damage_callback or move.damage:
                continue
            if move.category == "Physical" and move.id not in ("bodypress", "foulplay"):
                return False
        return True

    def get_pokemon_pool(
        self,
        type_name: str,
        pokemon_to_exclude: list[RandomSet] | None = None,
        is_monotype: bool = False,
        is_doubles: bool = False,
    ) -> tuple[list[str], list[str]]:
        """Species in the set catalog eligible for this team.

        Returns:
            (species keys, distinct base species)
        """
        exclude = {normalize_name(p.species) for p in pokemon_to_exclude or []}
        pokemon_pool = []
        base_species_pool: list[str] = []
        for key in self._species_sets(is_doubles):
            species = self.dex.get_species(key)
            if species is None:
                logger.debug(f"Skipping unknown species in set data: {key}")
                continue
            if species.gen > self.gen or species.id in exclude:
                continue
            if is_monotype and type_name not in species.types:
                continue
            pokemon_pool.append(key)
            if species.base_species not in base_species_pool:
                base_species_pool.append(species.base_species)
        return pokemon_pool, base_species_pool

    def random_team(self) -> list[RandomSet]:
        """Generate a full random team.

        Raises:
            UnsupportedFormatError: The format has custom bans
            TeamGenerationError: The species pool ran out before the team filled
        """
        self.enforce_no_direct_custom_banlist_changes()

        seed = self.prng.seed
        pokemon: list[RandomSet] = []

        is_monotype = bool(self.force_monotype) or self.format.has_rule("sametypeclause")
        is_doubles = self.format.is_doubles
        type_name = self.force_monotype or self.sample(self.dex.type_names())

        potd = None
        if self.config.potd and self.format.has_rule("potd"):
            potd = self.dex.get_species(self.config.potd)

        type_count: Counter = Counter()
        type_combo_count: Counter = Counter()
        type_weaknesses: Counter = Counter()
        team_details = TeamDetails()
        limit_factor = self.limit_factor()
        combo_cap = self.config.monotype_type_combo_cap if is_monotype else self.config.type_combo_cap

        pokemon_pool, base_species_pool = self.get_pokemon_pool(type_name, pokemon, is_monotype, is_doubles)
        while base_species_pool and len(pokemon) < self.max_team_size:
            base_species = self.sample_no_replace(base_species_pool)
            current_species_pool = [
                species for species in (self.dex.get_species(key) for key in pokemon_pool)
                if species is not None and species.base_species == base_species
            ]
            species = self.sample(current_species_pool)

            # Illusion shouldn't be on the last slot
            if species.base_species == "Zoroark" and len(pokemon) >= self.max_team_size - 1:
                continue

            # If Zoroark is in the team, the last slot should not be a low level Pokemon
            if (
                any(p.name == "Zoroark" for p in pokemon)
                and len(pokemon) >= self.max_team_size - 1
                and self.get_level(species, is_doubles) < ILLUSION_MIN_LAST_LEVEL
                and not self.adjust_level
            ):
                continue

            if species.base_species in NO_LEAD_SPECIES and not pokemon:
                continue

            types = species.types
            type_combo = ",".join(sorted(types))

            if not is_monotype:
                # Limit two of any type
                if any(type_count[t] >= self.config.type_cap * limit_factor for t in types):
                    logger.debug(f"Skipping {species.name}: type cap")
                    continue

                # Limit three weak to any type
                weak_to = [t for t in self.dex.type_names() if self.dex.get_effectiveness(t, species) > 0]
                if any(type_weaknesses[t] >= self.config.weakness_cap * limit_factor for t in weak_to):
                    logger.debug(f"Skipping {species.name}: weakness cap")
                    continue

            # Limit one of any type combination, two in Monotype
            if not self.force_monotype and type_combo_count[type_combo] >= combo_cap * limit_factor:
                logger.debug(f"Skipping {species.name}: type combination cap")
                continue

            # The Pokemon of the Day
            if potd is not None and (len(pokemon) == 1 or self.max_team_size == 1):
                species = potd

            pokemon_set = self.random_set(species, team_details, len(pokemon) == 0, is_doubles)
            pokemon.append(pokemon_set)

            if len(pokemon) == self.max_team_size:
                # Zoroark takes the level of the last Pokemon
                if team_details.illusion:
                    index = team_details.illusion - 1
                    pokemon[index] = replace(pokemon[index], level=pokemon[-1].level)
                # Don't bother tracking details for the last Pokemon
                break

            for t in types:
                type_count[t] += 1
            type_combo_count[type_combo] += 1
            for t in self.dex.type_names():
                if self.dex.get_effectiveness(t, species) > 0:
                    type_weaknesses[t] += 1

            team_details.record(pokemon_set, len(pokemon))

        if len(pokemon) < self.max_team_size:
            raise TeamGenerationError(
                f"Could not build a random team for {self.format.id} (seed={seed})",
                seed=seed,
                format_id=self.format.id,
            )

        logger.info(f"Generated {self.format.id} team: {', '.join(p.species for p in pokemon)}")
        return pokemon
