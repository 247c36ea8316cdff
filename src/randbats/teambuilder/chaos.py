"""Challenge Cup and Hackmons Cup team generators.

Both draw species uniformly by National Dex number and fill in the rest
at random:
- Challenge Cup keeps sets legal: a legal forme, one of the species'
  abilities and moves from its learnset.
- Hackmons Cup ignores legality: items, abilities and moves are drawn
  without replacement from the format's whole pools.
"""

import logging
import math
from typing import Any

from randbats.shared.data_loader import STAT_IDS, ItemData, SpeciesData, normalize_name
from randbats.teambuilder.base import TeamGeneratorBase
from randbats.teambuilder.team_repr import RandomSet

logger = logging.getLogger(__name__)

# Highest National Dex number per generation
LAST_DEX_NUMBER = {1: 151, 2: 251, 3: 386, 4: 493, 5: 649, 6: 721, 7: 807, 8: 898, 9: 1010}

EV_BUDGET = 510
EV_STAT_CAP = 255

# Lowest modified base stat total (Sunkern), used as the level-balance target
MBST_TARGET = 1307

# Formes whose own learnset is missing or incomplete
BASE_LEARNSET_FORMES = ("gastrodoneast", "pumpkaboosuper", "zygarde10")

# Nonstandard status that still counts as a real Pokemon
UNOBTAINABLE = "Unobtainable"

# Tags describing whether a species exists in the current game
EXISTENCE_TAGS = ("past", "future", "lgpe", "unobtainable", "cap", "custom", "nonexistent")


def _is_bad_item(item: ItemData) -> bool:
    """TRs and Poke Balls crowd out everything else."""
    return item.name.startswith("TR") or item.is_pokeball


def balanced_level(stats: dict[str, int]) -> int:
    """Level at which a species' modified stat total reaches the target.

    Assumes 31 IVs and 85 EVs in every stat. Attack stats are scaled by
    level a second time since damage is roughly proportional to level.
    """
    base = {stat: stats[stat] * 2 + 31 + 21 + 100 for stat in STAT_IDS}
    mbst = base["hp"] + 10 + sum(base[stat] + 5 for stat in STAT_IDS[1:])

    # Initial guess underestimates
    level = math.floor(100 * MBST_TARGET / mbst)
    while level < 100:
        mbst = math.floor(base["hp"] * level / 100 + 10)
        mbst += math.floor((base["atk"] * level / 100 + 5) * level / 100)
        mbst += math.floor(base["def"] * level / 100 + 5)
        mbst += math.floor((base["spa"] * level / 100 + 5) * level / 100)
        mbst += math.floor(base["spd"] * level / 100 + 5)
        mbst += math.floor(base["spe"] * level / 100 + 5)
        if mbst >= MBST_TARGET:
            break
        level += 1
    return level


class ChaosTeams(TeamGeneratorBase):
    """Generates Challenge Cup and Hackmons Cup teams."""

    team_methods = {
        "randomCC": "random_cc_team",
        "randomHC": "random_hc_team",
    }

    def random_n_pokemon(
        self,
        n: int,
        required_type: str | None = None,
        min_source_gen: int | None = None,
        require_moves: bool = False,
        use_bans: bool = False,
    ) -> list[str]:
        """Pick n random species with distinct National Dex numbers.

        Args:
            n: Number of species
            required_type: Only species of this type
            min_source_gen: Only species from this generation onwards
            require_moves: Only species that learn moves in this generation
            use_bans: Filter species through the format's custom bans

        Returns:
            Forme names, one per Dex number

        Raises:
            ValueError: n is out of range or the type is unknown
            PoolInsufficientError: Too few legal Dex numbers
        """
        last = LAST_DEX_NUMBER.get(self.gen, LAST_DEX_NUMBER[9])
        if n <= 0 or n > last:
            raise ValueError(f"n must be a number between 1 and {last} (got {n})")
        if required_type and required_type not in self.dex.type_names():
            raise ValueError(f'"{required_type}" is not a valid type.')

        pool: list[int] = []
        species_pool: list[SpeciesData] = []
        for species in self.dex.all_species():
            if required_type and required_type not in species.types:
                continue
            if use_bans:
                if self._is_species_banned(species):
                    continue
            else:
                if species.is_nonstandard and species.is_nonstandard != UNOBTAINABLE:
                    continue
                if species.gen > self.gen:
                    continue
                if require_moves and not self._learns_moves_in_gen(species):
                    continue
                if min_source_gen and species.gen < min_source_gen:
                    continue
            num = species.num
            if num <= 0 or num > last:
                continue
            species_pool.append(species)
            if num not in pool:
                pool.append(num)

        self.enforce_custom_pool_size("Pokemon", pool, n, "Max Team Size")

        dex_numbers = {self.sample_no_replace(pool): i for i in range(n)}
        formes: list[list[str]] = [[] for _ in range(n)]
        for species in species_pool:
            if species.num in dex_numbers:
                formes[dex_numbers[species.num]].append(species.name)

        return [self.sample(names) for names in formes]

    def _learns_moves_in_gen(self, species: SpeciesData) -> bool:
        learnset = self.dex.get_learnset(species.id) or {}
        return any(
            source.startswith(str(self.gen)) for sources in learnset.values() for source in sources
        )

    def _is_species_banned(self, species: SpeciesData) -> bool:
        """Check a species against the format's custom rules.

        Species rules win over base species rules, which win over
        ``pokemontag:`` rules. Species that don't exist in the current game
        are banned unless a rule allows them.
        """
        if self.format.is_unbanned(species.id):
            return False
        if self.format.is_banned("pokemon", species.id):
            return True
        is_mega = species.forme.startswith("Mega")
        if is_mega and self.format.tag_rule("mega") is False:
            return True
        if self.format.is_banned("basepokemon", species.base_species):
            return True
        if self.format.is_unbanned(species.base_species):
            base = self.dex.get_species(species.base_species)
            if base is None or base.is_nonstandard == species.is_nonstandard:
                return False

        nonexistent = bool(species.is_nonstandard) and species.is_nonstandard != UNOBTAINABLE
        tags = []
        if species.is_nonstandard:
            tags.append(normalize_name(species.is_nonstandard))
        if nonexistent:
            tags.append("nonexistent")
        if is_mega:
            tags.append("mega")
        if species.tier:
            tags.append(normalize_name(species.tier))
        for tag in tags:
            rule = self.format.tag_rule(tag)
            if rule is True and (tag in EXISTENCE_TAGS or not nonexistent):
                return False
            if rule is False:
                return True
        return nonexistent or self.format.tag_rule("allpokemon") is False

    def random_evs(self) -> dict[str, int]:
        """Random EVs within the total budget and per-stat cap."""
        evs = {stat: 0 for stat in STAT_IDS}
        ev_pool = EV_BUDGET
        while ev_pool > 0:
            stat = self.sample(STAT_IDS)
            amount = self.random(min(EV_STAT_CAP + 1 - evs[stat], ev_pool + 1))
            evs[stat] += amount
            ev_pool -= amount
        return evs

    def random_ivs(self) -> dict[str, int]:
        return {stat: self.random(32) for stat in STAT_IDS}

    def _level_for(self, species: SpeciesData) -> int:
        if self.adjust_level:
            return self.adjust_level
        stats = species.base_stats
        if species.base_species == "Wishiwashi":
            # Use the School Form's much higher stats
            school = self.dex.get_species("wishiwashischool")
            if school is not None:
                stats = school.base_stats
        return balanced_level(stats)

    def _random_tera_type(self) -> str | None:
        return self.sample(self.dex.type_names()) if self.gen == 9 else None

    def _legal_move_pool(self, species: SpeciesData) -> list[str]:
        """Moves the species can learn in this generation."""
        if species.name == "Smeargle":
            return [
                move.id for move in self.dex.all_moves()
                if not (move.is_nonstandard or move.is_z or move.is_max or move.real_move)
            ]

        gen_prefix = str(self.gen)
        learnset = self.dex.get_learnset(species.id)
        if species.id in BASE_LEARNSET_FORMES or not learnset:
            learnset = self.dex.get_learnset(species.base_species)
        pool = ["struggle"]
        if learnset:
            pool = [
                move_id for move_id, sources in learnset.items()
                if any(source.startswith(gen_prefix) for source in sources)
            ]
        if species.changes_from:
            base_learnset = self.dex.get_learnset(species.changes_from) or {}
            base_pool = [
                move_id for move_id, sources in base_learnset.items()
                if any(source.startswith(gen_prefix) for source in sources)
            ]
            pool = list(dict.fromkeys(pool + base_pool))
        return pool

    def _forme_locked_by(self, item: ItemData, forme: str) -> bool:
        """Whether the item forces a forme change on this base forme."""
        if not item.forced_forme:
            return False
        forced = self.dex.get_species(item.forced_forme)
        return forced is not None and forme == forced.base_species

    def random_cc_team(self) -> list[RandomSet]:
        """Generate a Challenge Cup team.

        Raises:
            UnsupportedFormatError: The format has custom bans
            ValueError: A species needs a held item but has no base forme
        """
        self.enforce_no_direct_custom_banlist_changes()

        legal_items = [item for item in self.dex.all_items() if item.gen <= self.gen and not item.is_nonstandard]
        team: list[RandomSet] = []

        for forme in self.random_n_pokemon(self.max_team_size, self.force_monotype, require_moves=True):
            species = self.dex.get_species(forme)
            if species.is_nonstandard:
                species = self.dex.get_species(species.base_species) or species

            # Random legal item, rerolling bad items most of the time
            item: ItemData | None = None
            if self.gen >= 2 and legal_items:
                item = self.sample(legal_items)
                while _is_bad_item(item) and self.random_chance(19, 20):
                    item = self.sample(legal_items)
            item_id = item.id if item else ""

            # Make sure the forme is legal
            if species.battle_only:
                if isinstance(species.battle_only, str):
                    species = self.dex.get_species(species.battle_only) or species
                else:
                    species = self.dex.get_species(self.sample(list(species.battle_only))) or species
                forme = species.name
            elif species.required_items and not any(normalize_name(req) == item_id for req in species.required_items):
                if not species.changes_from:
                    raise ValueError(f"{species.name} needs a changes_from value")
                species = self.dex.get_species(species.changes_from)
                forme = species.name

            # A base forme shouldn't hold a forme-changing item
            if item is not None and self._forme_locked_by(item, forme):
                candidates = [i for i in legal_items if not self._forme_locked_by(i, forme)]
                item = self.sample(candidates) if candidates else None

            abilities = [
                name for name in dict.fromkeys(species.abilities.values())
                if (self.dex.get_ability(name) is None or self.dex.get_ability(name).gen <= self.gen)
            ]
            ability = "No Ability" if self.gen <= 2 or not abilities else self.sample(abilities)

            moves = self.multiple_samples_no_replace(self._legal_move_pool(species), self.max_move_count)

            team.append(
                RandomSet(
                    name=species.base_species,
                    species=species.name,
                    gender=species.gender,
                    item=item.name if item else "",
                    ability=ability,
                    moves=tuple(moves),
                    evs=self.random_evs(),
                    ivs=self.random_ivs(),
                    nature=self.sample(self.dex.natures) if self.dex.natures else "",
                    level=self._level_for(species),
                    happiness=self.random(256),
                    shiny=self.random_chance(1, self.config.shiny_odds),
                    tera_type=self._random_tera_type(),
                )
            )

        logger.info(f"Generated Challenge Cup team: {', '.join(p.species for p in team)}")
        return team

    def _hc_pool(self, kind: str, entries: list[Any], use_bans: bool) -> list[Any]:
        """Entries of one kind available to Hackmons Cup.

        Without custom bans, anything released in this generation. With
        custom bans, anything not banned; nonstandard entries need an
        explicit unban.
        """
        if not use_bans:
            return [entry for entry in entries if entry.gen <= self.gen and not entry.is_nonstandard]
        pool = []
        for entry in entries:
            if self.format.is_banned(kind, entry.id):
                continue
            if entry.is_nonstandard and entry.is_nonstandard != UNOBTAINABLE and not self.format.is_unbanned(entry.id):
                continue
            pool.append(entry)
        return pool

    def random_hc_team(self) -> list[RandomSet]:
        """Generate a Hackmons Cup team.

        Raises:
            UnsupportedFormatError: The format has combination bans
            PoolInsufficientError: Bans leave too few items, abilities or moves
        """
        has_custom_bans = self.format.has_direct_custom_bans()
        if has_custom_bans:
            self.enforce_no_direct_complex_bans()

        item_pool: list[ItemData] = []
        if self.gen > 1:
            item_pool = self._hc_pool("item", self.dex.all_items(), has_custom_bans)
            self.enforce_custom_pool_size("item", item_pool, self.max_team_size, "Max Team Size")

        ability_pool = []
        if self.gen > 2:
            ability_pool = self._hc_pool("ability", self.dex.all_abilities(), has_custom_bans)
            self.enforce_custom_pool_size("ability", ability_pool, self.max_team_size, "Max Team Size")

        move_pool = self._hc_pool("move", self.dex.all_moves(), has_custom_bans)
        self.enforce_custom_pool_size(
            "move", move_pool, self.max_team_size * self.max_move_count, "Max Team Size * Max Move Count"
        )

        nature_pool = list(self.dex.natures) if self.gen > 2 else []

        team: list[RandomSet] = []
        for forme in self.random_n_pokemon(self.max_team_size, self.force_monotype, use_bans=has_custom_bans):
            species = self.dex.get_species(forme)

            # Random unique item; TRs and balls are usually thrown back
            item = ""
            if item_pool:
                item_data = self.sample_no_replace(item_pool)
                while (
                    _is_bad_item(item_data)
                    and self.random_chance(19, 20)
                    and len(item_pool) > self.max_team_size
                ):
                    item_data = self.sample_no_replace(item_pool)
                item = item_data.name

            ability = "No Ability"
            if ability_pool:
                ability = self.sample_no_replace(ability_pool).name

            moves = [move.id for move in self.multiple_samples_no_replace(move_pool, self.max_move_count)]

            if self.gen == 6:
                evs = self.random_evs()
            else:
                evs = {stat: self.random(EV_STAT_CAP + 1) for stat in STAT_IDS}

            team.append(
                RandomSet(
                    name=species.base_species,
                    species=species.name,
                    gender=species.gender,
                    item=item,
                    ability=ability,
                    moves=tuple(moves),
                    evs=evs,
                    ivs=self.random_ivs(),
                    nature=self.sample(nature_pool) if nature_pool else "",
                    level=self._level_for(species),
                    happiness=self.random(256),
                    shiny=self.random_chance(1, self.config.shiny_odds),
                    tera_type=self._random_tera_type(),
                )
            )

        logger.info(f"Generated Hackmons Cup team: {', '.join(p.species for p in team)}")
        return team
