"""Data loaders for Pokemon reference data and set catalogs.

This module handles:
1. Loading static Pokemon data (species, moves, abilities, items, learnsets)
2. Building the type chart used for effectiveness checks
3. Loading the curated set catalogs the generators sample from

Data comes either from Showdown-shaped JSON dumps or from poke-env's
bundled GenData.
"""

import json
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)

STAT_IDS = ("hp", "atk", "def", "spa", "spd", "spe")

# Types that exist in the data but are never assigned to a species
NONSTANDARD_TYPES = frozenset({"Stellar", "???"})

# Showdown typechart damageTaken codes -> damage multiplier
DAMAGE_TAKEN_MULTIPLIERS = {0: 1.0, 1: 2.0, 2: 0.5, 3: 0.0}


def normalize_name(name: str) -> str:
    """Normalize a Pokemon/move/item name for lookup.

    Converts to lowercase and removes everything but letters and digits.
    """
    return re.sub(r"[^a-z0-9]", "", str(name).lower())


def _gen_from_num(num: int, thresholds: Iterable[tuple[int, int]], default: int) -> int:
    for minimum, gen in thresholds:
        if num >= minimum:
            return gen
    return default


SPECIES_GEN_THRESHOLDS = (
    (906, 9), (810, 8), (722, 7), (650, 6), (494, 5), (387, 4), (252, 3), (152, 2), (1, 1),
)
MOVE_GEN_THRESHOLDS = (
    (827, 9), (743, 8), (622, 7), (560, 6), (468, 5), (355, 4), (252, 3), (166, 2), (1, 1),
)
ITEM_GEN_THRESHOLDS = ((1124, 9), (927, 8), (689, 7), (577, 6), (537, 5), (377, 4), (1, 3))
ABILITY_GEN_THRESHOLDS = ((268, 9), (234, 8), (192, 7), (165, 6), (124, 5), (77, 4), (1, 3))

# Regional formes are newer than their dex number suggests
FORME_GENS = {"Paldea": 9, "Hisui": 8, "Galar": 8, "Gmax": 8, "Alola": 7, "Mega": 6, "Primal": 6}


def _as_tuple(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass
class SpeciesData:
    """Static data for a Pokemon species or forme.

    This represents the species without any battle-specific information
    (EVs, moveset choice, etc.)
    """

    id: str
    name: str
    num: int
    types: tuple[str, ...]
    base_stats: dict[str, int]  # hp, atk, def, spa, spd, spe
    abilities: dict[str, str]  # slot ("0", "1", "H", "S") -> ability name
    base_species: str
    forme: str = ""
    gen: int = 9
    tier: str = ""
    nfe: bool = False
    gender: str = ""  # "M", "F", "N" or "" for mixed
    required_items: tuple[str, ...] = ()
    required_move: str | None = None
    battle_only: str | tuple[str, ...] | None = None
    cosmetic_formes: tuple[str, ...] = ()
    changes_from: str | None = None
    unreleased_hidden: bool = False
    is_nonstandard: str | None = None

    @property
    def base_stat_total(self) -> int:
        return sum(self.base_stats.values())

    @classmethod
    def from_showdown(
        cls, species_id: str, data: Mapping[str, Any], formats_data: Mapping[str, Any] | None = None
    ) -> "SpeciesData":
        """Build species data from a Showdown pokedex entry."""
        formats_data = formats_data or {}
        name = data.get("name", species_id)
        num = data.get("num", 0)
        forme = data.get("forme", "")
        gen = data.get("gen")
        if gen is None:
            gen = _gen_from_num(num, SPECIES_GEN_THRESHOLDS, 0)
            for keyword, forme_gen in FORME_GENS.items():
                if keyword in forme:
                    gen = max(gen, forme_gen)
                    break

        battle_only = data.get("battleOnly")
        if isinstance(battle_only, list):
            battle_only = tuple(battle_only)

        return cls(
            id=normalize_name(species_id),
            name=name,
            num=num,
            types=tuple(data.get("types", ["Normal"])),
            base_stats={stat: data.get("baseStats", {}).get(stat, 0) for stat in STAT_IDS},
            abilities=dict(data.get("abilities", {})),
            base_species=data.get("baseSpecies", name),
            forme=forme,
            gen=gen,
            tier=formats_data.get("tier", data.get("tier", "")),
            nfe=bool(data.get("nfe", data.get("evos"))),
            gender=data.get("gender", ""),
            required_items=_as_tuple(data.get("requiredItems") or data.get("requiredItem")),
            required_move=data.get("requiredMove"),
            battle_only=battle_only,
            cosmetic_formes=_as_tuple(data.get("cosmeticFormes")),
            changes_from=data.get("changesFrom") or (battle_only if isinstance(battle_only, str) else None),
            unreleased_hidden=bool(data.get("unreleasedHidden")),
            is_nonstandard=formats_data.get("isNonstandard", data.get("isNonstandard")),
        )


@dataclass
class MoveData:
    """Static data for a move."""

    id: str
    name: str
    type: str
    category: str  # Physical, Special, Status
    base_power: int = 0
    accuracy: int | bool = True
    priority: int = 0
    flags: dict[str, Any] = field(default_factory=dict)  # contact, bite, punch, sound, etc.
    secondary: dict[str, Any] | None = None
    has_sheer_force: bool = False
    multihit: int | tuple[int, int] | None = None
    recoil: tuple[int, int] | None = None
    has_crash_damage: bool = False
    drain: tuple[int, int] | None = None
    damage: int | str | None = None  # fixed damage, or "level"
    damage_callback: bool = False
    base_power_callback: bool = False
    gen: int = 9
    is_nonstandard: str | None = None
    is_z: bool = False
    is_max: bool = False
    real_move: str | None = None

    @property
    def is_damaging(self) -> bool:
        """Base power above the weak-move threshold, multi-hit, or variable power."""
        return self.base_power > 30 or bool(self.multihit) or self.base_power_callback

    @property
    def secondary_chance(self) -> int:
        if not self.secondary:
            return 0
        return self.secondary.get("chance") or 0

    @classmethod
    def from_showdown(cls, move_id: str, data: Mapping[str, Any]) -> "MoveData":
        """Build move data from a Showdown moves entry."""
        multihit = data.get("multihit")
        if isinstance(multihit, list):
            multihit = tuple(multihit)
        gen = data.get("gen") or _gen_from_num(data.get("num", 0), MOVE_GEN_THRESHOLDS, 0)
        return cls(
            id=normalize_name(move_id),
            name=data.get("name", move_id),
            type=data.get("type", "Normal"),
            category=data.get("category", "Status"),
            base_power=data.get("basePower", 0) or 0,
            accuracy=data.get("accuracy", True),
            priority=data.get("priority", 0),
            flags=dict(data.get("flags", {})),
            secondary=data.get("secondary"),
            has_sheer_force=bool(data.get("hasSheerForce")),
            multihit=multihit,
            recoil=tuple(data["recoil"]) if data.get("recoil") else None,
            has_crash_damage=bool(data.get("hasCrashDamage")),
            drain=tuple(data["drain"]) if data.get("drain") else None,
            damage=data.get("damage"),
            damage_callback=bool(data.get("damageCallback")),
            base_power_callback=bool(data.get("basePowerCallback")),
            gen=gen,
            is_nonstandard=data.get("isNonstandard"),
            is_z=bool(data.get("isZ")),
            is_max=bool(data.get("isMax")),
            real_move=data.get("realMove"),
        )


@dataclass
class ItemData:
    """Static data for a held item."""

    id: str
    name: str
    gen: int = 9
    is_nonstandard: str | None = None
    is_pokeball: bool = False
    forced_forme: str | None = None

    @classmethod
    def from_showdown(cls, item_id: str, data: Mapping[str, Any]) -> "ItemData":
        return cls(
            id=normalize_name(item_id),
            name=data.get("name", item_id),
            gen=data.get("gen") or _gen_from_num(data.get("num", 0), ITEM_GEN_THRESHOLDS, 3),
            is_nonstandard=data.get("isNonstandard"),
            is_pokeball=bool(data.get("isPokeball")),
            forced_forme=data.get("forcedForme"),
        )


@dataclass
class AbilityData:
    """Static data for an ability."""

    id: str
    name: str
    rating: float = 0
    gen: int = 9
    is_nonstandard: str | None = None

    @classmethod
    def from_showdown(cls, ability_id: str, data: Mapping[str, Any]) -> "AbilityData":
        return cls(
            id=normalize_name(ability_id),
            name=data.get("name", ability_id),
            rating=data.get("rating", 0),
            gen=data.get("gen") or _gen_from_num(data.get("num", 0), ABILITY_GEN_THRESHOLDS, 3),
            is_nonstandard=data.get("isNonstandard"),
        )


class Dex:
    """Reference catalog for one generation.

    Provides:
    - Species, move, ability and item lookup by name or id
    - Learnsets and natures
    - Type names and type effectiveness
    """

    def __init__(
        self,
        species: dict[str, SpeciesData],
        moves: dict[str, MoveData],
        abilities: dict[str, AbilityData] | None = None,
        items: dict[str, ItemData] | None = None,
        learnsets: dict[str, dict[str, list[str]]] | None = None,
        natures: list[str] | None = None,
        type_chart: dict[str, dict[str, float]] | None = None,
        nonstandard_types: Iterable[str] = NONSTANDARD_TYPES,
    ):
        """Initialize the dex.

        Args:
            species: Species by id
            moves: Moves by id
            abilities: Abilities by id
            items: Items by id
            learnsets: Move id -> learn sources, by species id
            natures: Nature names
            type_chart: Defending type -> attacking type -> damage multiplier
            nonstandard_types: Type names left out of type_names()
        """
        self.species = species
        self.moves = moves
        self.abilities = dict(abilities or {})
        self.items = items or {}
        self.learnsets = learnsets or {}
        self.natures = natures or []
        self.type_chart = type_chart or {}
        self.nonstandard_types = set(nonstandard_types)

        # Abilities referenced by species but missing from the ability data get rated 0
        for entry in self.species.values():
            for ability in entry.abilities.values():
                ability_id = normalize_name(ability)
                if ability_id not in self.abilities:
                    self.abilities[ability_id] = AbilityData(id=ability_id, name=ability)

    @classmethod
    def from_dicts(
        cls,
        pokedex: Mapping[str, Any],
        moves: Mapping[str, Any],
        abilities: Mapping[str, Any] | None = None,
        items: Mapping[str, Any] | None = None,
        learnsets: Mapping[str, Any] | None = None,
        natures: Mapping[str, Any] | None = None,
        typechart: Mapping[str, Any] | None = None,
        formats_data: Mapping[str, Any] | None = None,
    ) -> "Dex":
        """Build a dex from Showdown-shaped mappings."""
        formats_data = formats_data or {}
        chart, nonstandard = _chart_from_showdown(typechart or {})
        return cls(
            species={
                normalize_name(key): SpeciesData.from_showdown(key, data, formats_data.get(key))
                for key, data in pokedex.items()
            },
            moves={normalize_name(key): MoveData.from_showdown(key, data) for key, data in moves.items()},
            abilities={
                normalize_name(key): AbilityData.from_showdown(key, data)
                for key, data in (abilities or {}).items()
            },
            items={normalize_name(key): ItemData.from_showdown(key, data) for key, data in (items or {}).items()},
            learnsets={
                normalize_name(key): dict(data.get("learnset", data))
                for key, data in (learnsets or {}).items()
            },
            natures=[data.get("name", key) for key, data in (natures or {}).items()],
            type_chart=chart,
            nonstandard_types=NONSTANDARD_TYPES | nonstandard,
        )

    @classmethod
    def from_json_dir(cls, data_dir: Path | str) -> "Dex":
        """Load a dex from a directory of Showdown JSON dumps.

        Expects pokedex.json, moves.json and typechart.json; abilities.json,
        items.json, learnsets.json, natures.json and formats-data.json are
        optional.
        """
        data_dir = Path(data_dir)

        def read(name: str, required: bool = False) -> dict[str, Any]:
            path = data_dir / name
            if not path.exists():
                if required:
                    raise FileNotFoundError(f"Missing dex file: {path}")
                logger.debug(f"Optional dex file not found: {path}")
                return {}
            with open(path) as f:
                return json.load(f)

        dex = cls.from_dicts(
            pokedex=read("pokedex.json", required=True),
            moves=read("moves.json", required=True),
            abilities=read("abilities.json"),
            items=read("items.json"),
            learnsets=read("learnsets.json"),
            natures=read("natures.json"),
            typechart=read("typechart.json", required=True),
            formats_data=read("formats-data.json"),
        )
        logger.info(f"Loaded dex from {data_dir}: {len(dex.species)} species, {len(dex.moves)} moves")
        return dex

    @classmethod
    def from_poke_env(
        cls,
        gen: int = 9,
        abilities: Mapping[str, Any] | None = None,
        items: Mapping[str, Any] | None = None,
    ) -> "Dex":
        """Load a dex from poke-env's bundled data.

        poke-env ships no ability ratings or items, so those can be passed
        in as Showdown-shaped mappings.
        """
        from poke_env.data import GenData

        gen_data = GenData.from_gen(gen)
        chart = {
            defender.title(): {attacker.title(): float(mult) for attacker, mult in row.items()}
            for defender, row in gen_data.type_chart.items()
        }
        dex = cls.from_dicts(
            pokedex=gen_data.pokedex,
            moves=gen_data.moves,
            abilities=abilities,
            items=items,
            learnsets=gen_data.learnset,
            natures=gen_data.natures,
        )
        dex.type_chart = chart
        logger.info(f"Loaded gen {gen} dex from poke-env: {len(dex.species)} species")
        return dex

    def get_species(self, name: "str | SpeciesData") -> SpeciesData | None:
        """Get species data by name or id."""
        if isinstance(name, SpeciesData):
            return name
        return self.species.get(normalize_name(name))

    def get_move(self, name: str) -> MoveData | None:
        """Get move data by name or id."""
        return self.moves.get(normalize_name(name))

    def get_ability(self, name: str) -> AbilityData | None:
        """Get ability data by name or id."""
        return self.abilities.get(normalize_name(name))

    def get_item(self, name: str) -> ItemData | None:
        """Get item data by name or id."""
        return self.items.get(normalize_name(name))

    def get_learnset(self, species_id: str) -> dict[str, list[str]] | None:
        return self.learnsets.get(normalize_name(species_id))

    def all_species(self) -> list[SpeciesData]:
        return list(self.species.values())

    def all_moves(self) -> list[MoveData]:
        return list(self.moves.values())

    def all_abilities(self) -> list[AbilityData]:
        return list(self.abilities.values())

    def all_items(self) -> list[ItemData]:
        return list(self.items.values())

    @cached_property
    def status_move_ids(self) -> list[str]:
        return [move.id for move in self.moves.values() if move.category == "Status"]

    def type_names(self) -> list[str]:
        """All standard type names, in type chart order."""
        return [name for name in self.type_chart if name not in self.nonstandard_types]

    def _defending_types(self, target: "SpeciesData | Iterable[str]") -> tuple[str, ...]:
        if isinstance(target, SpeciesData):
            return target.types
        if isinstance(target, str):
            return (target,)
        return tuple(target)

    def get_effectiveness(self, attacking_type: str, target: "SpeciesData | Iterable[str]") -> int:
        """Type effectiveness as a sum over the defending types.

        Each defending type contributes +1 when weak, -1 when resistant and
        0 otherwise (immunities included; see get_immunity).

        Args:
            attacking_type: Type of the attack
            target: Species or its types

        Returns:
            Positive when weak, negative when resisted, zero when neutral
        """
        total = 0
        for defending_type in self._defending_types(target):
            multiplier = self.type_chart.get(defending_type, {}).get(attacking_type, 1.0)
            if multiplier > 1:
                total += 1
            elif 0 < multiplier < 1:
                total -= 1
        return total

    def get_immunity(self, attacking_type: str, target: "SpeciesData | Iterable[str]") -> bool:
        """False if any defending type is immune to the attacking type."""
        for defending_type in self._defending_types(target):
            if self.type_chart.get(defending_type, {}).get(attacking_type, 1.0) == 0:
                return False
        return True


def _chart_from_showdown(typechart: Mapping[str, Any]) -> tuple[dict[str, dict[str, float]], set[str]]:
    """Convert a Showdown typechart (damageTaken codes) to multipliers.

    Returns:
        (chart, names of types flagged nonstandard)
    """
    type_names = [data.get("name", key.title()) for key, data in typechart.items()]
    chart: dict[str, dict[str, float]] = {}
    nonstandard: set[str] = set()
    for (key, data), name in zip(typechart.items(), type_names):
        if data.get("isNonstandard"):
            nonstandard.add(name)
        damage_taken = data.get("damageTaken", {})
        chart[name] = {
            attacker: DAMAGE_TAKEN_MULTIPLIERS.get(code, 1.0)
            for attacker, code in damage_taken.items()
            if attacker in type_names
        }
    return chart, nonstandard


@dataclass(frozen=True)
class SetsRepository:
    """Read-only catalogs of per-species sets the generators sample from.

    - random_sets: species id -> {"level": int, "sets": [{role, movepool, teraTypes}]}
    - random_doubles_sets: same shape, for doubles formats
    - factory_sets: tier -> species id -> {"sets": [template, ...]}
    - bss_factory_sets: species id -> {"usage": float, "sets": [template, ...]}
    - cap1v1_sets: species name -> [template, ...]
    """

    random_sets: Mapping[str, Any] = field(default_factory=dict)
    random_doubles_sets: Mapping[str, Any] | None = None
    factory_sets: Mapping[str, Any] = field(default_factory=dict)
    bss_factory_sets: Mapping[str, Any] = field(default_factory=dict)
    cap1v1_sets: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("random_sets", "random_doubles_sets", "factory_sets", "bss_factory_sets", "cap1v1_sets"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    @property
    def doubles_sets(self) -> Mapping[str, Any]:
        """Doubles sets, falling back to the singles sets."""
        return self.random_doubles_sets if self.random_doubles_sets is not None else self.random_sets

    @classmethod
    def from_json_dir(cls, data_dir: Path | str) -> "SetsRepository":
        """Load set catalogs from a directory.

        Reads random-sets.json, random-doubles-sets.json, factory-sets.json,
        bss-factory-sets.json and cap-1v1-sets.json; missing files leave the
        catalog empty.
        """
        data_dir = Path(data_dir)
        catalogs: dict[str, Any] = {}
        for attr, filename in (
            ("random_sets", "random-sets.json"),
            ("random_doubles_sets", "random-doubles-sets.json"),
            ("factory_sets", "factory-sets.json"),
            ("bss_factory_sets", "bss-factory-sets.json"),
            ("cap1v1_sets", "cap-1v1-sets.json"),
        ):
            path = data_dir / filename
            if path.exists():
                with open(path) as f:
                    catalogs[attr] = json.load(f)
                logger.debug(f"Loaded {filename}: {len(catalogs[attr])} entries")
        return cls(**catalogs)
