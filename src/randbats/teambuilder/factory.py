"""Curated-pool team generators.

Battle Factory and BSS Factory teams are assembled from hand-built set
templates instead of role sets. A team is built greedily under
composition caps and then checked by a quality gate; failing attempts
are retried from scratch with a fresh team state. Once the retry depth
reaches the configured maximum, the remaining attempts accept any
template and skip the quality gate.

CAP 1v1 teams sample a template per species with no team-level caps.
"""

import logging
from collections.abc import Callable
from typing import Any

from randbats.errors import TeamGenerationError
from randbats.shared.data_loader import SpeciesData, normalize_name
from randbats.teambuilder.base import TeamGeneratorBase
from randbats.teambuilder.team_repr import FactoryTeamData, RandomSet

logger = logging.getLogger(__name__)

FACTORY_TIERS = ["Uber", "OU", "UU", "RU", "NU", "PU", "LC"]

# Species ranked above the factory tier are skipped
TIER_VALUES = {
    "Uber": 5,
    "OU": 4, "UUBL": 4,
    "UU": 3, "RUBL": 3,
    "RU": 2, "NUBL": 2,
    "NU": 1, "PUBL": 1,
    "PU": 0,
}

FACTORY_ITEMS_MAX = {"choicespecs": 1, "choiceband": 1, "choicescarf": 1}
FACTORY_MOVES_MAX = {
    "rapidspin": 1,
    "batonpass": 1,
    "stealthrock": 1,
    "defog": 1,
    "spikes": 1,
    "toxicspikes": 1,
}
BSS_MOVES_MAX = {
    "batonpass": 1,
    "stealthrock": 1,
    "toxicspikes": 1,
    "trickroom": 1,
    "auroraveil": 1,
}

# Move id -> family the team needs at least one member of
FACTORY_REQUIRED_MOVES = {
    "stealthrock": "hazardSet",
    "rapidspin": "hazardClear",
    "defog": "hazardClear",
}
FACTORY_REQUIRED_FAMILIES = ("hazardSet", "hazardClear")

# Weather-setting ability id -> weather
WEATHER_ABILITIES = {
    "drizzle": "raindance",
    "drought": "sunnyday",
    "snowwarning": "hail",
    "sandstream": "sandstorm",
}

# Abilities assumed to cover a type the species would otherwise be weak to
FACTORY_RESISTANCE_ABILITIES = {
    "dryskin": ["Water"], "waterabsorb": ["Water"], "stormdrain": ["Water"],
    "flashfire": ["Fire"], "heatproof": ["Fire"],
    "lightningrod": ["Electric"], "motordrive": ["Electric"], "voltabsorb": ["Electric"],
    "sapsipper": ["Grass"],
    "thickfat": ["Ice", "Fire"],
    "levitate": ["Ground"],
}
BSS_RESISTANCE_ABILITIES = {
    "waterabsorb": ["Water"],
    "flashfire": ["Fire"],
    "lightningrod": ["Electric"], "voltabsorb": ["Electric"],
    "thickfat": ["Ice", "Fire"],
    "levitate": ["Ground"],
}

# Drought and Drizzle users count as their own type combination
WEATHER_COMBO_ABILITIES = ("Drought", "Drizzle")

# Species draws allowed per pool entry before a BSS attempt is abandoned
BSS_DRAWS_PER_SPECIES = 10

DEFAULT_EVS = {"hp": 0, "atk": 0, "def": 0, "spa": 0, "spd": 0, "spe": 0}
DEFAULT_IVS = {"hp": 31, "atk": 31, "def": 31, "spa": 31, "spd": 31, "spe": 31}


def _first_variant(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _move_slots(template: dict[str, Any]) -> list[list[str]]:
    """Move slots of a template, each a list of interchangeable moves."""
    return [slot if isinstance(slot, list) else [slot] for slot in template.get("moves", [])]


class FactoryTeams(TeamGeneratorBase):
    """Generates Battle Factory, BSS Factory and CAP 1v1 teams."""

    team_methods = {
        "randomFactory": "random_factory_team",
        "randomBSSFactory": "random_bss_factory_team",
        "randomCAP1v1": "random_cap1v1_team",
    }

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        # Sampled once so that both sides of a battle share the tier
        self.factory_tier: str | None = None
        # Retry depth of the last team returned
        self.factory_depth = 0

    def _filter_templates(
        self,
        templates: list[dict[str, Any]],
        team_data: FactoryTeamData,
        moves_max: dict[str, int],
        required_moves: dict[str, str],
        items_max: dict[str, int] | None = None,
        reject_weather: bool = False,
    ) -> dict[str, Any] | None:
        """Pick a template that fits the team so far.

        Templates adding a required move family the team lacks are
        preferred. With no eligible template, forced mode picks any
        template and otherwise None is returned.
        """
        effective_pool: list[tuple[dict[str, Any], list[int] | None]] = []
        priority_pool = []
        for template in templates:
            if items_max:
                item_id = normalize_name(_first_variant(template.get("item")) or "")
                if item_id in items_max and team_data.has[item_id] >= items_max[item_id]:
                    continue

            ability_id = normalize_name(_first_variant(template.get("ability")) or "")
            if reject_weather and team_data.weather and ability_id in WEATHER_ABILITIES:
                # Reject a second weather setter
                continue

            reject = False
            has_required_move = False
            variants = []
            for slot in _move_slots(template):
                variant_index = self.random(len(slot))
                move_id = normalize_name(slot[variant_index])
                if move_id in moves_max and team_data.has[move_id] >= moves_max[move_id]:
                    reject = True
                    break
                if move_id in required_moves and not team_data.has[required_moves[move_id]]:
                    has_required_move = True
                variants.append(variant_index)
            if reject:
                continue
            effective_pool.append((template, variants))
            if has_required_move:
                priority_pool.append((template, variants))

        if priority_pool:
            effective_pool = priority_pool

        if not effective_pool:
            if not team_data.force_result:
                return None
            effective_pool = [(template, None) for template in templates]

        template, variants = self.sample(effective_pool)
        moves = []
        for i, slot in enumerate(_move_slots(template)):
            moves.append(slot[variants[i]] if variants is not None else self.sample(slot))
        return {"template": template, "moves": moves}

    def _gender(self, template: dict[str, Any], species: SpeciesData) -> str:
        return template.get("gender") or species.gender or ("M" if self.random_chance(1, 2) else "F")

    def _shiny(self, template: dict[str, Any]) -> bool:
        if "shiny" in template:
            return bool(template["shiny"])
        return self.random_chance(1, self.config.shiny_odds)

    def random_factory_set(
        self, species: SpeciesData, team_data: FactoryTeamData, tier: str
    ) -> RandomSet | None:
        """Build a Battle Factory set for a species, or None if no template fits."""
        templates = self.sets.factory_sets[tier][species.id]["sets"]
        picked = self._filter_templates(
            templates, team_data, FACTORY_MOVES_MAX, FACTORY_REQUIRED_MOVES, FACTORY_ITEMS_MAX, reject_weather=True
        )
        if picked is None:
            return None
        template = picked["template"]

        item = self.sample_if_array(template.get("item"))
        ability = self.sample_if_array(template.get("ability"))
        nature = self.sample_if_array(template.get("nature"))
        level = self.adjust_level or template.get("level") or (5 if tier == "LC" else 100)

        return RandomSet(
            name=template.get("name") or species.base_species,
            species=template.get("species") or species.name,
            gender=self._gender(template, species),
            shiny=self._shiny(template),
            level=level,
            moves=tuple(picked["moves"]),
            ability=ability or species.abilities.get("0", "No Ability"),
            evs={**DEFAULT_EVS, **template.get("evs", {})},
            ivs={**DEFAULT_IVS, **template.get("ivs", {})},
            item=item or "",
            nature=nature or "Serious",
            happiness=template.get("happiness", 255),
        )

    def random_bss_factory_set(self, species: SpeciesData, team_data: FactoryTeamData) -> RandomSet | None:
        """Build a BSS Factory set for a species, or None if no template fits."""
        templates = self.sets.bss_factory_sets[species.id]["sets"]
        picked = self._filter_templates(templates, team_data, BSS_MOVES_MAX, {})
        if picked is None:
            return None
        template = picked["template"]

        ability = self.sample_if_array(template.get("ability"))
        return RandomSet(
            name=template.get("nickname") or template.get("name") or species.base_species,
            species=template.get("species") or species.name,
            gender=self._gender(template, species),
            shiny=self._shiny(template),
            level=self.adjust_level or template.get("level") or 50,
            moves=tuple(picked["moves"]),
            ability=ability or species.abilities.get("0", "No Ability"),
            evs={**DEFAULT_EVS, **template.get("evs", {})},
            ivs={**DEFAULT_IVS, **template.get("ivs", {})},
            item=self.sample_if_array(template.get("item")) or "",
            nature=template.get("nature") or "Serious",
            happiness=template.get("happiness", 255),
            gigantamax=bool(template.get("gigantamax")),
        )

    def _record_member(
        self,
        team_data: FactoryTeamData,
        species: SpeciesData,
        pokemon_set: RandomSet,
        type_combo: str,
        resistance_abilities: dict[str, list[str]],
        required_moves: dict[str, str],
    ) -> None:
        """Update team composition state after a set is accepted."""
        types = species.types
        for type_name in types:
            team_data.type_count[type_name] += 1
        team_data.type_combo_count[type_combo] += 1
        team_data.base_formes.add(species.base_species)
        team_data.has[normalize_name(pokemon_set.item)] += 1

        ability_id = normalize_name(pokemon_set.ability)
        if ability_id in WEATHER_ABILITIES:
            team_data.weather = WEATHER_ABILITIES[ability_id]

        for move in pokemon_set.moves:
            move_id = normalize_name(move)
            team_data.has[move_id] += 1
            if move_id in required_moves:
                team_data.has[required_moves[move_id]] = 1

        for type_name in self.dex.type_names():
            # Cover any major weakness with at least one resistance
            if team_data.resistances[type_name] >= 1:
                continue
            if type_name in resistance_abilities.get(ability_id, ()) or not self.dex.get_immunity(type_name, types):
                team_data.resistances[type_name] += 1
                team_data.weaknesses[type_name] = 0
                continue
            type_mod = self.dex.get_effectiveness(type_name, types)
            if type_mod < 0:
                team_data.resistances[type_name] += 1
                team_data.weaknesses[type_name] = 0
            elif type_mod > 0:
                team_data.weaknesses[type_name] += 1

    def _passes_quality_gate(self, team_data: FactoryTeamData, required_families: tuple[str, ...]) -> bool:
        if team_data.force_result:
            return True
        for family in required_families:
            if not team_data.has[family]:
                logger.debug(f"Team rejected: missing {family}")
                return False
        for type_name, count in team_data.weaknesses.items():
            if count >= self.config.weakness_threshold:
                logger.debug(f"Team rejected: {count} members weak to {type_name}")
                return False
        return True

    def _retry(
        self, attempt: Callable[[bool], list[RandomSet] | None], max_depth: int, label: str
    ) -> list[RandomSet]:
        """Run team attempts until one succeeds.

        Args:
            attempt: Callable taking force_result, returning a team or None
            max_depth: Attempts before forced acceptance begins
            label: Generator name for messages

        Raises:
            TeamGenerationError: Forced attempts also failed to fill the team
        """
        seed = self.prng.seed
        for depth in range(max_depth + self.config.forced_attempt_limit):
            force_result = depth >= max_depth
            team = attempt(force_result)
            if team is not None:
                self.factory_depth = depth
                if force_result:
                    logger.warning(f"{label} team for {self.format.id} force-accepted at depth {depth}")
                logger.info(f"Generated {label} team after {depth + 1} attempt(s)")
                return team
            logger.debug(f"{label} attempt {depth} failed, retrying")
        raise TeamGenerationError(
            f"Could not build a {label} team for {self.format.id} (seed={seed})",
            seed=seed,
            format_id=self.format.id,
        )

    def random_factory_team(self) -> list[RandomSet]:
        """Generate a Battle Factory team.

        Raises:
            UnsupportedFormatError: The format has custom bans
            TeamGenerationError: The tier's pool cannot fill a team
        """
        self.enforce_no_direct_custom_banlist_changes()
        if self.factory_tier is None:
            self.factory_tier = self.sample(FACTORY_TIERS)
        return self._retry(self._factory_attempt, self.config.factory_max_depth, "Battle Factory")

    def _factory_attempt(self, force_result: bool) -> list[RandomSet] | None:
        tier = self.factory_tier
        pokemon: list[RandomSet] = []
        pokemon_pool = list(self.sets.factory_sets.get(tier, {}))
        team_data = FactoryTeamData(force_result=force_result)
        limit_factor = self.limit_factor()

        while pokemon_pool and len(pokemon) < self.max_team_size:
            species = self.dex.get_species(self.sample_no_replace(pokemon_pool))
            if species is None:
                continue

            if tier in TIER_VALUES and species.tier in TIER_VALUES and TIER_VALUES[species.tier] > TIER_VALUES[tier]:
                continue

            # Species Clause
            if species.base_species in team_data.base_formes:
                continue

            pokemon_set = self.random_factory_set(species, team_data, tier)
            if pokemon_set is None:
                continue

            types = species.types
            # Limit two of each type, most of the time
            if any(
                team_data.type_count[t] >= self.config.type_cap * limit_factor and self.random_chance(4, 5)
                for t in types
            ):
                continue

            type_combo = ",".join(sorted(types))
            combo_key = pokemon_set.ability if pokemon_set.ability in WEATHER_COMBO_ABILITIES else type_combo
            if team_data.type_combo_count[combo_key] >= self.config.type_combo_cap * limit_factor:
                continue

            pokemon.append(pokemon_set)
            self._record_member(
                team_data, species, pokemon_set, type_combo, FACTORY_RESISTANCE_ABILITIES, FACTORY_REQUIRED_MOVES
            )

        if len(pokemon) < self.max_team_size:
            return None
        if not self._passes_quality_gate(team_data, FACTORY_REQUIRED_FAMILIES):
            return None
        return pokemon

    def random_bss_factory_team(self) -> list[RandomSet]:
        """Generate a BSS Factory team.

        Raises:
            UnsupportedFormatError: The format has custom bans
            TeamGenerationError: The pool cannot fill a team
        """
        self.enforce_no_direct_custom_banlist_changes()
        return self._retry(self._bss_attempt, self.config.bss_max_depth, "BSS Factory")

    def _sample_by_usage(self, pokemon_pool: list[str], team_data: FactoryTeamData) -> str | None:
        """Usage-weighted species draw, skipping species already on the team."""
        weights = []
        for key in pokemon_pool:
            species = self.dex.get_species(key)
            if species is not None and species.base_species in team_data.base_formes:
                continue
            weights.append((key, self.sets.bss_factory_sets[key].get("usage", 0)))
        total = sum(usage for _, usage in weights)
        if total <= 0:
            return None
        target = self.random() * total
        running = 0.0
        for key, usage in weights:
            running += usage
            if target < running:
                return key
        return weights[-1][0]

    def _bss_attempt(self, force_result: bool) -> list[RandomSet] | None:
        pokemon: list[RandomSet] = []
        pokemon_pool = list(self.sets.bss_factory_sets)
        team_data = FactoryTeamData(force_result=force_result)

        for _ in range(len(pokemon_pool) * BSS_DRAWS_PER_SPECIES):
            if len(pokemon) >= self.max_team_size:
                break
            key = self._sample_by_usage(pokemon_pool, team_data)
            if key is None:
                break
            species = self.dex.get_species(key)
            if species is None:
                continue
            if self.force_monotype and self.force_monotype not in species.types:
                continue

            # Limit two of any type, most of the time
            types = species.types
            if any(team_data.type_count[t] > 1 and self.random_chance(4, 5) for t in types):
                continue

            pokemon_set = self.random_bss_factory_set(species, team_data)
            if pokemon_set is None:
                continue

            type_combo = ",".join(sorted(types))
            combo_key = pokemon_set.ability if pokemon_set.ability in WEATHER_COMBO_ABILITIES else type_combo
            if team_data.type_combo_count[combo_key]:
                continue

            # Item Clause
            if team_data.has[normalize_name(pokemon_set.item)]:
                continue

            pokemon.append(pokemon_set)
            self._record_member(team_data, species, pokemon_set, combo_key, BSS_RESISTANCE_ABILITIES, {})

        if len(pokemon) < self.max_team_size:
            return None
        if not self._passes_quality_gate(team_data, ()):
            return None
        return pokemon

    def random_cap1v1_team(self) -> list[RandomSet]:
        """Generate a CAP 1v1 team from the CAP 1v1 templates.

        Raises:
            UnsupportedFormatError: The format has custom bans
            ValueError: A template names an unknown species
        """
        self.enforce_no_direct_custom_banlist_changes()

        pokemon: list[RandomSet] = []
        pokemon_pool = list(self.sets.cap1v1_sets)
        while pokemon_pool and len(pokemon) < self.max_team_size:
            key = self.sample_no_replace(pokemon_pool)
            species = self.dex.get_species(key)
            if species is None:
                raise ValueError(f"Invalid Pokemon {key!r} in {self.format.id}")
            if self.force_monotype and self.force_monotype not in species.types:
                continue

            template = self.sample(self.sets.cap1v1_sets[key])
            pokemon.append(
                RandomSet(
                    name=species.base_species,
                    species=species.name,
                    gender=species.gender,
                    item=self.sample_if_array(template.get("item")) or "",
                    ability=self.sample_if_array(template.get("ability")),
                    shiny=self.random_chance(1, self.config.shiny_odds),
                    level=self.adjust_level or 100,
                    evs={**DEFAULT_EVS, **template.get("evs", {})},
                    nature=template.get("nature"),
                    ivs={**DEFAULT_IVS, **(template.get("ivs") or {})},
                    moves=tuple(self.sample_if_array(move) for move in template.get("moves", [])),
                )
            )
        logger.info(f"Generated CAP 1v1 team: {', '.join(p.species for p in pokemon)}")
        return pokemon
