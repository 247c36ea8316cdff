"""Move classification for random set building.

The MoveCounter summarizes what the moves chosen so far do (types,
categories, setup, recovery, ...) so the culling, ability and item
heuristics can ask about the moveset without re-reading every move.
"""

from collections import Counter
from collections.abc import Iterable

from randbats.shared.data_loader import Dex, MoveData

# Moves that restore HP
RECOVERY_MOVES = (
    "healorder", "milkdrink", "moonlight", "morningsun", "recover", "roost", "shoreup",
    "slackoff", "softboiled", "strengthsap", "synthesis",
)
# Moves that drop the user's stats
CONTRARY_MOVES = (
    "armorcannon", "closecombat", "leafstorm", "makeitrain", "overheat", "spinout",
    "superpower", "vcreate",
)
# Moves that boost Attack
PHYSICAL_SETUP = (
    "bellydrum", "bulkup", "coil", "curse", "dragondance", "honeclaws", "howl", "meditate",
    "poweruppunch", "swordsdance", "tidyup",
)
# Moves that boost Special Attack
SPECIAL_SETUP = (
    "calmmind", "chargebeam", "geomancy", "nastyplot", "quiverdance", "tailglow", "torchsong",
)
# Moves that boost Attack and Special Attack
MIXED_SETUP = (
    "clangoroussoul", "growth", "happyhour", "holdhands", "noretreat", "shellsmash", "workup",
)
# Moves that only boost Speed
SPEED_SETUP = ("agility", "autotomize", "rockpolish")
SETUP = (
    "acidarmor", "agility", "autotomize", "bellydrum", "bulkup", "calmmind", "coil", "curse",
    "dragondance", "flamecharge", "growth", "honeclaws", "howl", "irondefense", "meditate",
    "nastyplot", "noretreat", "poweruppunch", "quiverdance", "rockpolish", "shellsmash",
    "shiftgear", "swordsdance", "tailglow", "tidyup", "trailblaze", "workup",
)
# Moves that shouldn't be the only STAB moves
NO_STAB = (
    "accelerock", "aquajet", "beakblast", "bounce", "breakingswipe", "chatter", "chloroblast",
    "clearsmog", "dragontail", "eruption", "explosion", "fakeout", "flamecharge", "flipturn",
    "iceshard", "icywind", "incinerate", "machpunch", "meteorbeam", "mortalspin", "pluck",
    "pursuit", "quickattack", "reversal", "saltcure", "selfdestruct", "shadowsneak", "skydrop",
    "snarl", "steelbeam", "suckerpunch", "uturn", "watershuriken", "vacuumwave", "voltswitch",
    "waterspout",
)
HAZARDS = ("spikes", "stealthrock", "stickyweb", "toxicspikes")

# Moves that should be paired together when possible
MOVE_PAIRS = (
    ("lightscreen", "reflect"),
    ("sleeptalk", "rest"),
    ("protect", "wish"),
)

# Normal moves take these types under the matching ability
ATE_ABILITIES = {
    "Aerilate": "Flying",
    "Galvanize": "Electric",
    "Pixilate": "Fairy",
    "Refrigerate": "Ice",
}

# Moves that adopt the user's primary type
TYPE_ADOPTING_MOVES = ("judgment", "revelationdance")

LIST_TAGS = (
    ("recovery", RECOVERY_MOVES),
    ("contrary", CONTRARY_MOVES),
    ("physicalsetup", PHYSICAL_SETUP),
    ("specialsetup", SPECIAL_SETUP),
    ("mixedsetup", MIXED_SETUP),
    ("speedsetup", SPEED_SETUP),
    ("setup", SETUP),
    ("hazards", HAZARDS),
)


def serene_grace_benefits(move: MoveData) -> bool:
    return 20 <= move.secondary_chance < 100


def effective_move_type(
    move: MoveData,
    types: list[str] | tuple[str, ...],
    abilities: Iterable[str],
    tera_type: str | None,
    ate: bool = True,
    tera: bool = True,
) -> str:
    """The type a move will actually hit with.

    Args:
        move: The move
        types: The user's types
        abilities: The user's candidate abilities
        tera_type: The user's Tera type
        ate: Apply -ate abilities to Normal moves
        tera: Let Tera Blast take the Tera type

    Returns:
        The effective type name
    """
    move_type = move.type
    if move.id in TYPE_ADOPTING_MOVES:
        move_type = types[0]
    if ate and move_type == "Normal":
        for ability, ate_type in ATE_ABILITIES.items():
            if ability in abilities:
                move_type = ate_type
    if tera and move.id == "terablast" and tera_type:
        move_type = tera_type
    return move_type


class MoveCounter(Counter):
    """Multiset of move tags, plus damaging moves, STAB and punch counts."""

    def __init__(self) -> None:
        super().__init__()
        self.damaging_moves: dict[str, MoveData] = {}
        self.stab_counter = 0
        self.iron_fist = 0

    def add(self, tag: str) -> None:
        self[tag] += 1

    def get(self, tag: str, default: int = 0) -> int:  # type: ignore[override]
        return super().get(tag, default)

    def set(self, tag: str, value: int) -> None:
        self[tag] = value

    def recompute(
        self,
        dex: Dex,
        moves: Iterable[str],
        types: list[str] | tuple[str, ...],
        tera_type: str | None,
        abilities: Iterable[str] = (),
    ) -> "MoveCounter":
        """Rebuild the counter from scratch for the given moves.

        Unknown moves contribute no tags.
        """
        self.clear()
        self.damaging_moves = {}
        self.stab_counter = 0
        self.iron_fist = 0
        abilities = list(abilities)

        categories = {"Physical": 0, "Special": 0, "Status": 0}
        for move_id in moves:
            move = dex.get_move(move_id)
            if move is None:
                continue
            move_type = effective_move_type(move, types, abilities, tera_type)

            if move.damage or move.damage_callback:
                # Moves that do a set amount of damage
                self.add("damage")
                self.damaging_moves[move.id] = move
            else:
                categories[move.category] = categories.get(move.category, 0) + 1

            if move.id == "lowkick" or (move.base_power and move.base_power <= 60 and move.id != "rapidspin"):
                self.add("technician")
            if isinstance(move.multihit, tuple) and move.multihit[1] == 5:
                self.add("skilllink")
            if move.recoil or move.has_crash_damage:
                self.add("recoil")
            if move.drain:
                self.add("drain")

            if move.is_damaging:
                if move.id not in NO_STAB:
                    self.add(move_type)
                    if move_type in types:
                        self.stab_counter += 1
                    if tera_type == move_type:
                        self.add("stabtera")
                if move.flags.get("bite"):
                    self.add("strongjaw")
                if move.flags.get("punch"):
                    self.iron_fist += 1
                if move.flags.get("sound"):
                    self.add("sound")
                if move.priority != 0 or (move.id == "grassyglide" and "Grassy Surge" in abilities):
                    self.add("priority")
                self.damaging_moves[move.id] = move

            if move.secondary or move.has_sheer_force:
                self.add("sheerforce")
                if serene_grace_benefits(move):
                    self.add("serenegrace")

            if move.accuracy is not True and move.accuracy and move.accuracy < 90:
                self.add("inaccurate")

            for tag, members in LIST_TAGS:
                if move.id in members:
                    self.add(tag)

        self.set("Physical", categories["Physical"])
        self.set("Special", categories["Special"])
        self.set("Status", categories["Status"])
        return self


def query_moves(
    dex: Dex,
    moves: Iterable[str],
    types: list[str] | tuple[str, ...],
    tera_type: str | None,
    abilities: Iterable[str] = (),
) -> MoveCounter:
    """Build a fresh MoveCounter for a moveset."""
    return MoveCounter().recompute(dex, moves, types, tera_type, abilities)
