"""Ability selection for random sets.

Candidates are ranked by rating, abilities that don't fit the moveset or
team are culled, and the final pick is a biased shuffle of the top three.
"""

from collections.abc import Callable
from dataclasses import dataclass

from randbats.shared.data_loader import AbilityData, Dex, normalize_name
from randbats.shared.prng import PRNG
from randbats.teambuilder.move_counter import MoveCounter
from randbats.teambuilder.team_repr import BuildContext


@dataclass
class AbilityContext:
    """What an ability rule can look at."""

    dex: Dex
    moves: list[str]
    counter: MoveCounter
    build: BuildContext

    def has_move(self, *move_ids: str) -> bool:
        return any(move_id in self.moves for move_id in move_ids)

    def has_ability(self, *names: str) -> bool:
        return self.build.has_ability(*names)

    @property
    def species_id(self) -> str:
        return self.build.species.id

    @property
    def role(self) -> str:
        return self.build.role

    def effectiveness(self, type_name: str) -> int:
        return self.dex.get_effectiveness(type_name, self.build.species)


AbilityRule = Callable[[AbilityContext], bool]

# Always culled
ABILITY_BLACKLIST = frozenset({
    "Flare Boost", "Gluttony", "Hydration", "Ice Body", "Immunity", "Insomnia", "Own Tempo",
    "Quick Feet", "Rain Dish", "Snow Cloak", "Steadfast", "Steam Engine",
})


def _needs_own_tag(ability: str) -> AbilityRule:
    tag = normalize_name(ability)
    return lambda c: not c.counter.get(tag)


def _cull_chlorophyll(c: AbilityContext) -> bool:
    if c.has_ability("Harvest"):
        return True
    return not c.has_move("sunnyday") and not c.build.team_details.sun and c.species_id != "lilligant"


def _cull_intimidate(c: AbilityContext) -> bool:
    if c.has_ability("Hustle"):
        return True
    if c.has_ability("Sheer Force") and c.counter.get("sheerforce"):
        return True
    return c.has_ability("Stakeout") or c.has_move("substitute")


def _cull_sheer_force(c: AbilityContext) -> bool:
    if c.species_id == "braviaryhisui" and c.role == "Wallbreaker":
        return True
    return not c.counter.get("sheerforce") or c.has_ability("Guts", "Sharpness", "Slush Rush")


def _cull_volt_absorb(c: AbilityContext) -> bool:
    if c.has_ability("Iron Fist") and c.counter.iron_fist >= 2:
        return True
    return c.effectiveness("Electric") < -1


# True means the ability is culled
ABILITY_CULL_RULES: dict[str, AbilityRule] = {
    # Abilities which are primarily useful for certain moves
    "Contrary": _needs_own_tag("Contrary"),
    "Serene Grace": _needs_own_tag("Serene Grace"),
    "Skill Link": _needs_own_tag("Skill Link"),
    "Strong Jaw": _needs_own_tag("Strong Jaw"),
    "Chlorophyll": _cull_chlorophyll,
    "Cloud Nine": lambda c: c.species_id != "golduck",
    "Competitive": lambda c: c.species_id == "kilowattrel",
    "Compound Eyes": lambda c: not c.counter.get("inaccurate"),
    "No Guard": lambda c: not c.counter.get("inaccurate"),
    "Cursed Body": lambda c: c.has_ability("Infiltrator"),
    "Defiant": lambda c: (
        not c.counter.get("Physical") or (c.has_ability("Prankster") and c.has_move("thunderwave", "taunt"))
    ),
    "Flash Fire": lambda c: c.species_id != "houndoom" and c.effectiveness("Fire") >= 1,
    "Guts": lambda c: not c.has_move("facade", "sleeptalk"),
    "Harvest": lambda c: not c.has_move("substitute"),
    "Hustle": lambda c: c.counter.get("Physical") < 2,
    "Inner Focus": lambda c: c.counter.get("Physical") < 2,
    "Infiltrator": lambda c: (
        (c.has_move("rest") and c.has_move("sleeptalk")) or (c.build.is_doubles and c.has_ability("Clear Body"))
    ),
    "Intimidate": _cull_intimidate,
    "Iron Fist": lambda c: not c.counter.iron_fist,
    "Justified": lambda c: not c.counter.get("Physical"),
    "Mold Breaker": lambda c: c.has_ability("Sharpness"),
    "Moxie": lambda c: not c.counter.get("Physical") or c.has_move("stealthrock"),
    "Overgrow": lambda c: not c.counter.get("Grass"),
    "Prankster": lambda c: not c.counter.get("Status"),
    "Pressure": lambda c: bool(c.counter.get("setup")) or c.counter.get("Status") < 2 or c.build.is_doubles,
    "Reckless": lambda c: not c.counter.get("recoil"),
    "Rock Head": lambda c: not c.counter.get("recoil"),
    "Sand Force": lambda c: not c.build.team_details.sand,
    "Sand Veil": lambda c: not c.build.team_details.sand,
    "Sand Rush": lambda c: not c.build.team_details.sand,
    "Sap Sipper": lambda c: c.species_id == "wyrdeer",
    "Seed Sower": lambda c: c.role == "Bulky Support",
    "Shed Skin": lambda c: c.species_id == "seviper",
    "Sheer Force": _cull_sheer_force,
    "Slush Rush": lambda c: not c.build.team_details.snow,
    "Solar Power": lambda c: not c.build.team_details.sun,
    "Stakeout": lambda c: len(c.counter.damaging_moves) < 1,
    "Sturdy": lambda c: bool(c.counter.get("recoil")),
    "Swarm": lambda c: not c.counter.get("Bug") or bool(c.counter.get("recovery")),
    "Sweet Veil": lambda c: "Grass" in c.build.types,
    "Swift Swim": lambda c: not c.has_move("raindance") and not c.build.team_details.rain,
    "Synchronize": lambda c: c.species_id not in ("umbreon", "rabsca"),
    "Technician": lambda c: not c.counter.get("technician") or c.has_ability("Punk Rock"),
    "Tinted Lens": lambda c: c.species_id == "braviaryhisui" and c.role == "Fast Support",
    "Unburden": lambda c: c.has_ability("Prankster") or not c.counter.get("setup"),
    "Volt Absorb": _cull_volt_absorb,
    "Water Absorb": lambda c: c.species_id == "quagsire",
    "Weak Armor": lambda c: c.has_move("shellsmash"),
}

# Checked in order before culling; the first match wins outright
ABILITY_OVERRIDES: tuple[tuple[AbilityRule, str], ...] = (
    (lambda c: c.species_id == "arcaninehisui", "Rock Head"),
    (lambda c: c.species_id == "staraptor", "Reckless"),
    (lambda c: c.species_id == "enamorus" and c.has_move("calmmind"), "Cute Charm"),
    (lambda c: c.has_ability("Corrosion") and c.has_move("toxic"), "Corrosion"),
    (lambda c: c.has_ability("Guts") and c.has_move("facade", "sleeptalk"), "Guts"),
    (lambda c: c.has_ability("Serene Grace") and c.has_move("headbutt"), "Serene Grace"),
    (lambda c: c.has_ability("Technician") and bool(c.counter.get("technician")), "Technician"),
    (lambda c: c.has_ability("Own Tempo") and c.has_move("petaldance"), "Own Tempo"),
    (lambda c: c.has_ability("Slush Rush") and c.has_move("snowscape"), "Slush Rush"),
)


def should_cull_ability(ability: str, ctx: AbilityContext) -> bool:
    """Whether an ability is a poor fit for this build."""
    if ability in ABILITY_BLACKLIST:
        return True
    rule = ABILITY_CULL_RULES.get(ability)
    return rule(ctx) if rule else False


def _swap(abilities: list[AbilityData], i: int, j: int) -> None:
    abilities[i], abilities[j] = abilities[j], abilities[i]


def select_ability(
    dex: Dex,
    prng: PRNG,
    moves: list[str],
    counter: MoveCounter,
    build: BuildContext,
    min_rating: float = 1,
) -> str:
    """Pick the ability for a build.

    Args:
        dex: Reference data
        prng: Random source
        moves: The chosen moves
        counter: Counter for the chosen moves
        build: The build in progress
        min_rating: Abilities rated below this are never preferred

    Returns:
        The ability name
    """
    ability_data = [dex.get_ability(name) or AbilityData(id=normalize_name(name), name=name) for name in build.abilities]
    ability_data.sort(key=lambda ability: -ability.rating)

    if len(ability_data) <= 1:
        return ability_data[0].name if ability_data else "No Ability"

    ctx = AbilityContext(dex=dex, moves=moves, counter=counter, build=build)
    for predicate, ability in ABILITY_OVERRIDES:
        if predicate(ctx):
            return ability

    allowed = [
        ability for ability in ability_data
        if ability.rating >= min_rating and not should_cull_ability(ability.name, ctx)
    ]
    # If all abilities are culled, re-allow all
    if not allowed:
        allowed = ability_data

    if len(allowed) == 1:
        return allowed[0].name

    # Biased shuffle: closer ratings swap more often
    if len(allowed) > 2 and allowed[0].rating - 0.5 <= allowed[2].rating:
        if allowed[1].rating <= allowed[2].rating:
            if prng.random_chance(1, 2):
                _swap(allowed, 1, 2)
        elif prng.random_chance(1, 3):
            _swap(allowed, 1, 2)
        if allowed[0].rating <= allowed[1].rating:
            if prng.random_chance(2, 3):
                _swap(allowed, 0, 1)
        elif prng.random_chance(1, 2):
            _swap(allowed, 0, 1)
    else:
        if allowed[0].rating <= allowed[1].rating:
            if prng.random_chance(1, 2):
                _swap(allowed, 0, 1)
        elif allowed[0].rating - 0.5 <= allowed[1].rating:
            if prng.random_chance(1, 3):
                _swap(allowed, 0, 1)

    return allowed[0].name
