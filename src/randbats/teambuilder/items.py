"""Item selection for random sets.

Items come from three ordered rule chains: a priority chain checked first,
a doubles chain for doubles formats, then the general chain. The first
rule whose condition holds decides the item.
"""

from collections.abc import Callable
from dataclasses import dataclass

from randbats.shared.data_loader import Dex
from randbats.shared.prng import PRNG
from randbats.teambuilder.move_counter import MoveCounter
from randbats.teambuilder.team_repr import BuildContext


@dataclass
class ItemContext:
    """What an item rule can look at."""

    dex: Dex
    prng: PRNG
    ability: str
    moves: list[str]
    counter: MoveCounter
    build: BuildContext

    def has(self, *move_ids: str) -> bool:
        """True if any of the moves is in the moveset."""
        return any(move_id in self.moves for move_id in move_ids)

    def stat(self, stat_id: str) -> int:
        return self.build.species.base_stats[stat_id]

    @property
    def species_id(self) -> str:
        return self.build.species.id

    @property
    def role(self) -> str:
        return self.build.role

    @property
    def types(self) -> list[str]:
        return self.build.types

    @property
    def damaging(self) -> int:
        return len(self.counter.damaging_moves)

    @property
    def defensive_total(self) -> int:
        return self.stat("hp") + self.stat("def") + self.stat("spd")

    def effectiveness(self, type_name: str) -> int:
        return self.dex.get_effectiveness(type_name, self.build.species)

    def chance(self, numerator: int, denominator: int) -> bool:
        return self.prng.random_chance(numerator, denominator)


@dataclass(frozen=True)
class ItemRule:
    """`pick` is an item name, or a callable drawing one when the rule fires."""

    name: str
    when: Callable[[ItemContext], bool]
    pick: str | Callable[[ItemContext], str]


def select_item(chain: tuple[ItemRule, ...], ctx: ItemContext) -> str | None:
    """Item from the first matching rule, or None if no rule matches."""
    for rule in chain:
        if rule.when(ctx):
            return rule.pick(ctx) if callable(rule.pick) else rule.pick
    return None


def _required_item(c: ItemContext) -> str:
    required = c.build.species.required_items
    # Arceus always gets its plate
    if c.build.species.base_species == "Arceus":
        return required[0]
    return c.prng.sample(required)


def _trick_item(c: ItemContext) -> str:
    if 60 <= c.stat("spe") <= 108 and c.role != "Wallbreaker":
        return "Choice Scarf"
    return "Choice Band" if c.counter.get("Physical") > c.counter.get("Special") else "Choice Specs"


PRIORITY_ITEMS: tuple[ItemRule, ...] = (
    ItemRule("required item", lambda c: bool(c.build.species.required_items), _required_item),
    ItemRule("av pivot", lambda c: c.role == "AV Pivot", "Assault Vest"),
    ItemRule(
        "booster energy",
        lambda c: c.role == "Bulky Setup" and c.ability in ("Quark Drive", "Protosynthesis"),
        "Booster Energy",
    ),
    ItemRule("pikachu", lambda c: c.species_id == "pikachu", "Light Ball"),
    ItemRule("regieleki", lambda c: c.species_id == "regieleki", "Magnet"),
    ItemRule(
        "forced scarf",
        lambda c: c.ability == "Imposter" or (c.species_id == "magnezone" and c.has("bodypress")),
        "Choice Scarf",
    ),
    ItemRule("belly drum substitute", lambda c: c.has("bellydrum") and c.has("substitute"), "Salac Berry"),
    ItemRule(
        "sitrus activation",
        lambda c: c.ability in ("Cheek Pouch", "Cud Chew", "Harvest") or c.has("bellydrum", "filletaway"),
        "Sitrus Berry",
    ),
    ItemRule("item swap", lambda c: c.has("healingwish", "switcheroo", "trick"), _trick_item),
    ItemRule(
        "status orb",
        lambda c: (c.ability == "Guts" or c.has("facade")) and not c.has("sleeptalk"),
        lambda c: "Toxic Orb" if "Fire" in c.types or c.ability == "Toxic Boost" else "Flame Orb",
    ),
    ItemRule(
        "recoil-free life orb",
        lambda c: (c.ability == "Magic Guard" and c.damaging > 1)
        or (c.ability == "Sheer Force" and bool(c.counter.get("sheerforce"))),
        "Life Orb",
    ),
    ItemRule("shell smash", lambda c: c.has("shellsmash"), "White Herb"),
    ItemRule("population bomb", lambda c: c.has("populationbomb"), "Wide Lens"),
    ItemRule("stuff cheeks", lambda c: c.has("stuffcheeks"), "Salac Berry"),
    ItemRule(
        "unburden",
        lambda c: c.ability == "Unburden",
        lambda c: "White Herb" if c.has("closecombat") else "Sitrus Berry",
    ),
    # Empty string: Acrobatics wants no item
    ItemRule(
        "acrobatics",
        lambda c: c.has("acrobatics"),
        lambda c: "Grassy Seed" if c.ability == "Grassy Surge" else "",
    ),
    ItemRule("screens", lambda c: c.has("auroraveil") or (c.has("lightscreen") and c.has("reflect")), "Light Clay"),
    ItemRule(
        "rest",
        lambda c: c.has("rest") and not c.has("sleeptalk") and c.ability not in ("Natural Cure", "Shed Skin"),
        "Chesto Berry",
    ),
    ItemRule(
        "scyther",
        lambda c: c.species_id == "scyther",
        lambda c: "Eviolite" if c.build.is_lead else "Heavy-Duty Boots",
    ),
    ItemRule("nfe", lambda c: c.build.species.nfe, "Eviolite"),
    ItemRule("rock weak", lambda c: c.effectiveness("Rock") >= 2, "Heavy-Duty Boots"),
)


def _doubles_band_or_scarf(c: ItemContext) -> str:
    if (
        not c.counter.get("priority") and c.ability != "Speed Boost"
        and 60 <= c.stat("spe") <= 100 and c.chance(1, 2)
    ):
        return "Choice Scarf"
    return "Choice Band"


def _doubles_specs_or_scarf(c: ItemContext) -> str:
    return "Choice Scarf" if 60 <= c.stat("spe") <= 100 and c.chance(1, 2) else "Choice Specs"


def _doubles_specs_condition(c: ItemContext) -> bool:
    if c.counter.get("Special") >= 4 and (
        any(t in c.types for t in ("Dragon", "Fighting", "Rock")) or c.has("voltswitch")
    ):
        return True
    return (
        c.counter.get("Special") >= 3 and c.has("flipturn", "uturn")
        and not c.has("acidspray") and not c.has("electroweb")
    )


DOUBLES_ITEMS: tuple[ItemRule, ...] = (
    ItemRule(
        "spread scarf",
        lambda c: c.has("dragonenergy", "eruption", "waterspout") and c.damaging >= 4,
        "Choice Scarf",
    ),
    ItemRule(
        "blizzard",
        lambda c: c.has("blizzard") and c.ability != "Snow Warning" and not c.build.team_details.snow,
        "Blunder Policy",
    ),
    ItemRule(
        "rock weak",
        lambda c: c.effectiveness("Rock") >= 2 and "Flying" not in c.types,
        "Heavy-Duty Boots",
    ),
    ItemRule(
        "physical choice",
        lambda c: c.counter.get("Physical") >= 4
        and not c.has("fakeout", "feint", "rapidspin", "suckerpunch")
        and (any(t in c.types for t in ("Dragon", "Fighting", "Rock")) or c.has("flipturn", "uturn")),
        _doubles_band_or_scarf,
    ),
    ItemRule("special choice", _doubles_specs_condition, _doubles_specs_or_scarf),
    ItemRule(
        "frail life orb",
        lambda c: (c.defensive_total < 250 and c.ability == "Regenerator")
        or c.build.species.name == "Pheromosa",
        "Life Orb",
    ),
    ItemRule("assault vest", lambda c: c.damaging >= 4 and c.defensive_total >= 275, "Assault Vest"),
    ItemRule(
        "attacker",
        lambda c: c.damaging >= 3 and c.stat("spe") >= 60
        and c.ability not in ("Multiscale", "Sturdy")
        and not c.has(
            "acidspray", "clearsmog", "electroweb", "fakeout", "feint", "icywind",
            "incinerate", "naturesmadness", "rapidspin", "snarl", "uturn",
        ),
        lambda c: "Sitrus Berry" if c.ability == "Defeatist" or c.defensive_total >= 275 else "Life Orb",
    ),
)


def _physical_choice(c: ItemContext) -> str:
    scarf_reqs = (
        c.role != "Wallbreaker"
        and (c.stat("atk") >= 100 or c.ability in ("Huge Power", "Pure Power"))
        and 60 <= c.stat("spe") <= 108
        and c.ability != "Speed Boost" and not c.counter.get("priority") and not c.has("aquastep")
    )
    return "Choice Scarf" if scarf_reqs and c.chance(1, 2) else "Choice Band"


def _special_choice(c: ItemContext) -> str:
    scarf_reqs = (
        c.role != "Wallbreaker"
        and c.stat("spa") >= 100
        and 60 <= c.stat("spe") <= 108
        and c.ability not in ("Speed Boost", "Tinted Lens") and not c.counter.get("Physical")
    )
    return "Choice Scarf" if scarf_reqs and c.chance(1, 2) else "Choice Specs"


SINGLES_ITEMS: tuple[ItemRule, ...] = (
    ItemRule(
        "physical choice",
        lambda c: c.counter.get("Physical") >= 4
        and not c.has("fakeout", "firstimpression", "flamecharge", "rapidspin", "ruination", "superfang"),
        _physical_choice,
    ),
    ItemRule("shed tail", lambda c: c.counter.get("Physical") == 3 and c.has("shedtail"), "Choice Scarf"),
    ItemRule(
        "special choice",
        lambda c: c.counter.get("Special") >= 4
        or (c.counter.get("Special") >= 3 and c.has("flipturn", "partingshot", "uturn")),
        _special_choice,
    ),
    ItemRule(
        "assault vest",
        lambda c: c.damaging >= 4 and c.role not in ("Fast Attacker", "Wallbreaker"),
        "Assault Vest",
    ),
    ItemRule(
        "weakness policy",
        lambda c: bool(c.counter.get("speedsetup")) and c.effectiveness("Ground") < 1,
        "Weakness Policy",
    ),
    ItemRule("urshifu", lambda c: c.species_id == "urshifurapidstrike", "Punching Glove"),
    ItemRule("lokix", lambda c: c.species_id == "lokix" and c.role == "Wallbreaker", "Life Orb"),
    ItemRule("toxtricity", lambda c: c.species_id == "toxtricity" and c.has("shiftgear"), "Throat Spray"),
    ItemRule("substitute", lambda c: c.has("substitute") or c.ability == "Moody", "Leftovers"),
    ItemRule(
        "no hazard removal",
        lambda c: not c.build.team_details.defog and not c.build.team_details.rapid_spin
        and c.effectiveness("Rock") >= 1,
        "Heavy-Duty Boots",
    ),
    ItemRule(
        "pivot boots",
        lambda c: c.role == "Fast Support" and c.has("defog", "rapidspin", "uturn", "voltswitch")
        and "Flying" not in c.types and c.ability != "Levitate",
        "Heavy-Duty Boots",
    ),
    # Low priority
    ItemRule("outrage", lambda c: c.has("outrage"), "Lum Berry"),
    ItemRule(
        "ground weak",
        lambda c: c.role not in ("Fast Attacker", "Tera Blast user") and c.effectiveness("Ground") >= 2,
        "Air Balloon",
    ),
    ItemRule(
        "rocky helmet",
        lambda c: (c.species_id == "garchomp" and c.role == "Fast Support")
        or (c.ability == "Regenerator" and "Water" in c.types and c.stat("def") >= 110 and c.chance(1, 3)),
        "Rocky Helmet",
    ),
    ItemRule(
        "lead sash",
        lambda c: c.role == "Fast Support" and c.build.is_lead
        and not c.counter.get("recovery") and not c.counter.get("recoil")
        and c.defensive_total < 300,
        "Focus Sash",
    ),
    ItemRule(
        "bulky", lambda c: c.role in ("Bulky Attacker", "Bulky Support", "Bulky Setup"), "Leftovers"
    ),
    ItemRule(
        "fast support",
        lambda c: c.role in ("Fast Support", "Fast Bulky Setup"),
        lambda c: "Life Orb" if c.damaging >= 3 else "Leftovers",
    ),
    ItemRule(
        "attacker",
        lambda c: c.role in ("Fast Attacker", "Setup Sweeper", "Tera Blast user", "Wallbreaker"),
        "Life Orb",
    ),
)


def get_item(
    dex: Dex,
    prng: PRNG,
    ability: str,
    moves: list[str],
    counter: MoveCounter,
    build: BuildContext,
) -> str:
    """Pick the item for a build.

    Returns:
        The item name; an empty string means no item
    """
    ctx = ItemContext(dex=dex, prng=prng, ability=ability, moves=moves, counter=counter, build=build)
    item = select_item(PRIORITY_ITEMS, ctx)
    if item is None and build.is_doubles:
        item = select_item(DOUBLES_ITEMS, ctx)
    if item is None:
        item = select_item(SINGLES_ITEMS, ctx)
    # Fallback
    if item is None:
        item = "Sitrus Berry" if build.is_doubles else "Leftovers"

    # For Trick / Switcheroo
    if item == "Leftovers" and "Poison" in build.types and build.tera_type == "Poison":
        item = "Black Sludge"
    return item
