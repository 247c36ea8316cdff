"""Shared fixtures: a compact Showdown-shaped dex, set catalogs and formats."""

import pytest

from randbats.config import GeneratorConfig
from randbats.shared.data_loader import Dex, SetsRepository, SpeciesData
from randbats.shared.formats import Format
from randbats.teambuilder.team_repr import BuildContext, TeamDetails

TYPES = [
    "Normal", "Fire", "Water", "Electric", "Grass", "Ice", "Fighting", "Poison", "Ground",
    "Flying", "Psychic", "Bug", "Rock", "Ghost", "Dragon", "Dark", "Steel", "Fairy",
]

# Defending type -> (weak to, resists, immune to)
TYPE_MATCHUPS = {
    "Normal": (["Fighting"], [], ["Ghost"]),
    "Fire": (["Water", "Ground", "Rock"], ["Fire", "Grass", "Ice", "Bug", "Steel", "Fairy"], []),
    "Water": (["Electric", "Grass"], ["Fire", "Water", "Ice", "Steel"], []),
    "Electric": (["Ground"], ["Electric", "Flying", "Steel"], []),
    "Grass": (["Fire", "Ice", "Poison", "Flying", "Bug"], ["Water", "Electric", "Grass", "Ground"], []),
    "Ice": (["Fire", "Fighting", "Rock", "Steel"], ["Ice"], []),
    "Fighting": (["Flying", "Psychic", "Fairy"], ["Bug", "Rock", "Dark"], []),
    "Poison": (["Ground", "Psychic"], ["Grass", "Fighting", "Poison", "Bug", "Fairy"], []),
    "Ground": (["Water", "Grass", "Ice"], ["Poison", "Rock"], ["Electric"]),
    "Flying": (["Electric", "Ice", "Rock"], ["Grass", "Fighting", "Bug"], ["Ground"]),
    "Psychic": (["Bug", "Ghost", "Dark"], ["Fighting", "Psychic"], []),
    "Bug": (["Fire", "Flying", "Rock"], ["Grass", "Fighting", "Ground"], []),
    "Rock": (["Water", "Grass", "Fighting", "Ground", "Steel"], ["Normal", "Fire", "Poison", "Flying"], []),
    "Ghost": (["Ghost", "Dark"], ["Poison", "Bug"], ["Normal", "Fighting"]),
    "Dragon": (["Ice", "Dragon", "Fairy"], ["Fire", "Water", "Electric", "Grass"], []),
    "Dark": (["Fighting", "Bug", "Fairy"], ["Ghost", "Dark"], ["Psychic"]),
    "Steel": (
        ["Fire", "Fighting", "Ground"],
        ["Normal", "Grass", "Ice", "Flying", "Psychic", "Bug", "Rock", "Dragon", "Steel", "Fairy"],
        ["Poison"],
    ),
    "Fairy": (["Poison", "Steel"], ["Fighting", "Bug", "Dark"], ["Dragon"]),
}


def build_typechart() -> dict:
    """Showdown typechart with damageTaken codes (1 weak, 2 resist, 3 immune)."""
    chart = {}
    for defender, (weak, resist, immune) in TYPE_MATCHUPS.items():
        damage_taken = {attacker: 0 for attacker in TYPES}
        damage_taken.update({attacker: 1 for attacker in weak})
        damage_taken.update({attacker: 2 for attacker in resist})
        damage_taken.update({attacker: 3 for attacker in immune})
        # Weather and status keys are not types
        damage_taken["sandstorm"] = 0
        chart[defender.lower()] = {"damageTaken": damage_taken}
    chart["stellar"] = {"isNonstandard": "Future", "damageTaken": {}}
    return chart


def _species(num, types, stats, abilities, **extra):
    hp, atk, df, spa, spd, spe = stats
    entry = {
        "num": num,
        "types": types,
        "baseStats": {"hp": hp, "atk": atk, "def": df, "spa": spa, "spd": spd, "spe": spe},
        "abilities": abilities,
    }
    entry.update(extra)
    return entry


POKEDEX = {
    "snorlax": _species(
        143, ["Normal"], (160, 110, 65, 65, 110, 30),
        {"0": "Thick Fat", "1": "Immunity", "H": "Gluttony"}, name="Snorlax", tier="RU",
    ),
    "vaporeon": _species(
        134, ["Water"], (130, 65, 60, 110, 95, 65),
        {"0": "Water Absorb", "H": "Hydration"}, name="Vaporeon", tier="NU",
    ),
    "jolteon": _species(
        135, ["Electric"], (65, 65, 60, 110, 95, 130),
        {"0": "Volt Absorb", "H": "Quick Feet"}, name="Jolteon", tier="NU",
    ),
    "dusknoir": _species(
        477, ["Ghost"], (45, 100, 135, 65, 135, 45),
        {"0": "Pressure", "H": "Frisk"}, name="Dusknoir", tier="PU",
    ),
    "garchomp": _species(
        445, ["Dragon", "Ground"], (108, 130, 95, 80, 85, 102),
        {"0": "Sand Veil", "H": "Rough Skin"}, name="Garchomp", tier="OU",
    ),
    "tinkaton": _species(
        959, ["Fairy", "Steel"], (85, 75, 77, 70, 105, 94),
        {"0": "Mold Breaker", "1": "Own Tempo", "H": "Pickpocket"}, name="Tinkaton", tier="OU",
    ),
    "cinderace": _species(
        815, ["Fire"], (80, 116, 75, 65, 75, 119),
        {"0": "Blaze", "H": "Libero"}, name="Cinderace", tier="UU",
    ),
    "gallade": _species(
        475, ["Psychic", "Fighting"], (68, 125, 65, 65, 115, 80),
        {"0": "Steadfast", "1": "Sharpness", "H": "Justified"}, name="Gallade", tier="RU",
    ),
    "venusaur": _species(
        3, ["Grass", "Poison"], (80, 82, 83, 100, 100, 80),
        {"0": "Overgrow", "H": "Chlorophyll"}, name="Venusaur", tier="UU",
    ),
    "rotom": _species(
        479, ["Electric", "Ghost"], (50, 50, 77, 95, 77, 91),
        {"0": "Levitate"}, name="Rotom", tier="PU",
    ),
    "rotomwash": _species(
        479, ["Electric", "Water"], (50, 65, 107, 105, 107, 86),
        {"0": "Levitate"}, name="Rotom-Wash", baseSpecies="Rotom", forme="Wash", tier="UU",
    ),
    "pikachustarter": _species(
        25, ["Electric"], (45, 80, 50, 75, 60, 120),
        {"0": "Static"}, name="Pikachu-Starter", baseSpecies="Pikachu", forme="Starter",
        isNonstandard="LGPE",
    ),
}


def _move(name, move_type, category, base_power=0, accuracy=True, **extra):
    entry = {
        "name": name,
        "type": move_type,
        "category": category,
        "basePower": base_power,
        "accuracy": accuracy,
        "priority": 0,
        "flags": {},
    }
    entry.update(extra)
    return entry


def _status(name, move_type="Normal", **extra):
    return _move(name, move_type, "Status", **extra)


MOVES = {
    "tackle": _move("Tackle", "Normal", "Physical", 40, 100, flags={"contact": 1}),
    "bodyslam": _move("Body Slam", "Normal", "Physical", 85, 100, secondary={"chance": 30, "status": "par"}),
    "doubleedge": _move("Double-Edge", "Normal", "Physical", 120, 100, recoil=[33, 100]),
    "extremespeed": _move("Extreme Speed", "Normal", "Physical", 80, 100, priority=2),
    "hypervoice": _move("Hyper Voice", "Normal", "Special", 90, 100, flags={"sound": 1}),
    "rapidspin": _move("Rapid Spin", "Normal", "Physical", 50, 100),
    "terablast": _move("Tera Blast", "Normal", "Special", 80, 100),
    "struggle": _move("Struggle", "Normal", "Physical", 50, True, isNonstandard=None),
    "flamethrower": _move("Flamethrower", "Fire", "Special", 90, 100, secondary={"chance": 10, "status": "brn"}),
    "fireblast": _move("Fire Blast", "Fire", "Special", 110, 85, secondary={"chance": 10, "status": "brn"}),
    "pyroball": _move("Pyro Ball", "Fire", "Physical", 120, 90, secondary={"chance": 10, "status": "brn"}),
    "surf": _move("Surf", "Water", "Special", 90, 100),
    "hydropump": _move("Hydro Pump", "Water", "Special", 110, 80),
    "scald": _move("Scald", "Water", "Special", 80, 100, secondary={"chance": 30, "status": "brn"}),
    "aquajet": _move("Aqua Jet", "Water", "Physical", 40, 100, priority=1),
    "thunderbolt": _move("Thunderbolt", "Electric", "Special", 90, 100, secondary={"chance": 10, "status": "par"}),
    "voltswitch": _move("Volt Switch", "Electric", "Special", 70, 100),
    "gigadrain": _move("Giga Drain", "Grass", "Special", 75, 100, drain=[1, 2]),
    "leafstorm": _move("Leaf Storm", "Grass", "Special", 130, 90),
    "sludgebomb": _move("Sludge Bomb", "Poison", "Special", 90, 100, secondary={"chance": 30, "status": "psn"}),
    "icebeam": _move("Ice Beam", "Ice", "Special", 90, 100, secondary={"chance": 10, "status": "frz"}),
    "closecombat": _move("Close Combat", "Fighting", "Physical", 120, 100),
    "drainpunch": _move("Drain Punch", "Fighting", "Physical", 75, 100, drain=[1, 2], flags={"punch": 1}),
    "machpunch": _move("Mach Punch", "Fighting", "Physical", 40, 100, priority=1, flags={"punch": 1}),
    "seismictoss": _move("Seismic Toss", "Fighting", "Physical", 0, 100, damage="level"),
    "earthquake": _move("Earthquake", "Ground", "Physical", 100, 100),
    "earthpower": _move("Earth Power", "Ground", "Special", 90, 100, secondary={"chance": 10}),
    "bravebird": _move("Brave Bird", "Flying", "Physical", 120, 100, recoil=[33, 100]),
    "acrobatics": _move("Acrobatics", "Flying", "Physical", 55, 100),
    "psychic": _move("Psychic", "Psychic", "Special", 90, 100, secondary={"chance": 10}),
    "psyshock": _move("Psyshock", "Psychic", "Special", 80, 100),
    "psychocut": _move("Psycho Cut", "Psychic", "Physical", 70, 100),
    "uturn": _move("U-turn", "Bug", "Physical", 70, 100),
    "stoneedge": _move("Stone Edge", "Rock", "Physical", 100, 80),
    "shadowball": _move("Shadow Ball", "Ghost", "Special", 80, 100, secondary={"chance": 20}),
    "shadowsneak": _move("Shadow Sneak", "Ghost", "Physical", 40, 100, priority=1),
    "poltergeist": _move("Poltergeist", "Ghost", "Physical", 110, 90),
    "outrage": _move("Outrage", "Dragon", "Physical", 120, 100),
    "dragonclaw": _move("Dragon Claw", "Dragon", "Physical", 80, 100),
    "knockoff": _move("Knock Off", "Dark", "Physical", 65, 100),
    "suckerpunch": _move("Sucker Punch", "Dark", "Physical", 70, 100, priority=1),
    "crunch": _move("Crunch", "Dark", "Physical", 80, 100, flags={"bite": 1}, secondary={"chance": 20}),
    "foulplay": _move("Foul Play", "Dark", "Physical", 95, 100),
    "ironhead": _move("Iron Head", "Steel", "Physical", 80, 100, secondary={"chance": 30}),
    "gigatonhammer": _move("Gigaton Hammer", "Steel", "Physical", 160, 100),
    "playrough": _move("Play Rough", "Fairy", "Physical", 90, 90, secondary={"chance": 10}),
    "moonblast": _move("Moonblast", "Fairy", "Special", 95, 100, secondary={"chance": 30}),
    "hiddenpower": _move("Hidden Power", "Normal", "Special", 60, 100, isNonstandard="Past"),
    "swordsdance": _status("Swords Dance"),
    "dragondance": _status("Dragon Dance", "Dragon"),
    "calmmind": _status("Calm Mind", "Psychic"),
    "nastyplot": _status("Nasty Plot", "Dark"),
    "agility": _status("Agility", "Psychic"),
    "shellsmash": _status("Shell Smash"),
    "bellydrum": _status("Belly Drum"),
    "recover": _status("Recover"),
    "synthesis": _status("Synthesis", "Grass"),
    "rest": _status("Rest", "Psychic"),
    "sleeptalk": _status("Sleep Talk"),
    "allyswitch": _status("Ally Switch", "Psychic", priority=2),
    "protect": _status("Protect"),
    "wish": _status("Wish"),
    "substitute": _status("Substitute"),
    "stealthrock": _status("Stealth Rock", "Rock"),
    "spikes": _status("Spikes", "Ground"),
    "stickyweb": _status("Sticky Web", "Bug"),
    "defog": _status("Defog", "Flying"),
    "reflect": _status("Reflect", "Psychic"),
    "lightscreen": _status("Light Screen", "Psychic"),
    "toxic": _status("Toxic", "Poison", accuracy=90),
    "willowisp": _status("Will-O-Wisp", "Fire", accuracy=85),
    "thunderwave": _status("Thunder Wave", "Electric", accuracy=90),
    "trick": _status("Trick", "Psychic"),
    "haze": _status("Haze", "Ice"),
    "encore": _status("Encore"),
    "trickroom": _status("Trick Room", "Psychic"),
}

ABILITIES = {
    "thickfat": {"name": "Thick Fat", "rating": 3.5},
    "immunity": {"name": "Immunity", "rating": 2},
    "gluttony": {"name": "Gluttony", "rating": 1.5},
    "waterabsorb": {"name": "Water Absorb", "rating": 3.5},
    "hydration": {"name": "Hydration", "rating": 1.5},
    "voltabsorb": {"name": "Volt Absorb", "rating": 3.5},
    "quickfeet": {"name": "Quick Feet", "rating": 2.5},
    "pressure": {"name": "Pressure", "rating": 2.5},
    "frisk": {"name": "Frisk", "rating": 1.5},
    "sandveil": {"name": "Sand Veil", "rating": 1.5},
    "roughskin": {"name": "Rough Skin", "rating": 2.5},
    "moldbreaker": {"name": "Mold Breaker", "rating": 3},
    "owntempo": {"name": "Own Tempo", "rating": 1.5},
    "pickpocket": {"name": "Pickpocket", "rating": 1},
    "blaze": {"name": "Blaze", "rating": 2},
    "libero": {"name": "Libero", "rating": 4.5},
    "steadfast": {"name": "Steadfast", "rating": 1},
    "sharpness": {"name": "Sharpness", "rating": 3.5},
    "justified": {"name": "Justified", "rating": 2.5},
    "overgrow": {"name": "Overgrow", "rating": 2},
    "chlorophyll": {"name": "Chlorophyll", "rating": 3},
    "levitate": {"name": "Levitate", "rating": 3.5},
    "static": {"name": "Static", "rating": 2},
    "guts": {"name": "Guts", "rating": 3.5},
    "intimidate": {"name": "Intimidate", "rating": 3.5},
    "drizzle": {"name": "Drizzle", "rating": 4},
    "pixilate": {"name": "Pixilate", "rating": 4},
    "contrary": {"name": "Contrary", "rating": 4.5},
    "rockhead": {"name": "Rock Head", "rating": 3},
    "flashfire": {"name": "Flash Fire", "rating": 3.5},
    "noability": {"name": "No Ability", "rating": 0.1, "isNonstandard": "Past"},
}

ITEMS = {
    "leftovers": {"name": "Leftovers", "num": 234},
    "lifeorb": {"name": "Life Orb", "num": 270},
    "choicescarf": {"name": "Choice Scarf", "num": 287},
    "choiceband": {"name": "Choice Band", "num": 220},
    "choicespecs": {"name": "Choice Specs", "num": 297},
    "heavydutyboots": {"name": "Heavy-Duty Boots", "num": 1120, "gen": 8},
    "sitrusberry": {"name": "Sitrus Berry", "num": 158},
    "focussash": {"name": "Focus Sash", "num": 275},
    "assaultvest": {"name": "Assault Vest", "num": 640},
    "tr01": {"name": "TR01", "num": 1130, "gen": 8},
    "pokeball": {"name": "Poke Ball", "num": 4, "isPokeball": True},
    "oldamber": {"name": "Old Amber", "num": 103, "isNonstandard": "Past"},
}


def _learnset(*move_ids, source="9L1"):
    return {"learnset": {move_id: [source] for move_id in move_ids}}


LEARNSETS = {
    "snorlax": _learnset("bodyslam", "earthquake", "rest", "sleeptalk", "swordsdance", "crunch", "tackle"),
    "vaporeon": _learnset("scald", "surf", "icebeam", "wish", "protect", "haze", "toxic"),
    "jolteon": _learnset("thunderbolt", "voltswitch", "shadowball", "terablast", "calmmind", "substitute"),
    "dusknoir": _learnset("poltergeist", "shadowsneak", "willowisp", "trickroom", "earthquake", "knockoff"),
    "garchomp": _learnset("earthquake", "stealthrock", "spikes", "dragonclaw", "outrage", "stoneedge"),
    "tinkaton": _learnset("gigatonhammer", "playrough", "stealthrock", "knockoff", "encore", "thunderwave"),
    "cinderace": _learnset("pyroball", "uturn", "suckerpunch", "knockoff", "closecombat"),
    "gallade": _learnset("psychocut", "closecombat", "swordsdance", "knockoff", "drainpunch"),
    "venusaur": _learnset("gigadrain", "sludgebomb", "earthpower", "synthesis", "toxic", "knockoff"),
    "rotom": _learnset("thunderbolt", "shadowball", "voltswitch", "trick", "willowisp"),
    "rotomwash": _learnset("hydropump"),
    "pikachustarter": _learnset("thunderbolt", source="7L1"),
}

NATURES = {
    "adamant": {"name": "Adamant"},
    "modest": {"name": "Modest"},
    "jolly": {"name": "Jolly"},
    "timid": {"name": "Timid"},
    "bold": {"name": "Bold"},
    "serious": {"name": "Serious"},
}


def _role(role, movepool, tera_types):
    return {"role": role, "movepool": movepool, "teraTypes": tera_types}


# No type, weakness or type combination is shared often enough to hit a team cap
RANDOM_SETS = {
    "snorlax": {"level": 86, "sets": [
        _role("Bulky Setup", ["Body Slam", "Earthquake", "Rest", "Sleep Talk", "Swords Dance", "Crunch"],
              ["Ghost", "Fairy"]),
    ]},
    "vaporeon": {"level": 88, "sets": [
        _role("Bulky Support", ["Scald", "Wish", "Protect", "Ice Beam", "Haze", "Toxic"], ["Ghost", "Fairy"]),
    ]},
    "jolteon": {"level": 87, "sets": [
        _role("Fast Attacker", ["Thunderbolt", "Volt Switch", "Shadow Ball", "Hyper Voice", "Tera Blast"],
              ["Ice", "Electric"]),
        _role("Tera Blast user", ["Thunderbolt", "Tera Blast", "Calm Mind", "Substitute", "Shadow Ball"], ["Ice"]),
    ]},
    "dusknoir": {"level": 88, "sets": [
        _role("Bulky Support", ["Poltergeist", "Shadow Sneak", "Will-O-Wisp", "Trick Room", "Earthquake",
                                "Knock Off"], ["Dark", "Fairy"]),
    ]},
    "garchomp": {"level": 77, "sets": [
        _role("Fast Support", ["Earthquake", "Stealth Rock", "Spikes", "Dragon Claw", "Outrage", "Stone Edge"],
              ["Ground", "Steel"]),
        _role("Setup Sweeper", ["Earthquake", "Swords Dance", "Outrage", "Stone Edge", "Iron Head"],
              ["Ground", "Steel"]),
    ]},
    "tinkaton": {"level": 83, "sets": [
        _role("Bulky Support", ["Gigaton Hammer", "Play Rough", "Stealth Rock", "Knock Off", "Encore",
                                "Thunder Wave"], ["Steel", "Water"]),
    ]},
    "cinderace": {"level": 78, "sets": [
        _role("Fast Attacker", ["Pyro Ball", "U-turn", "Sucker Punch", "Knock Off", "Close Combat"],
              ["Fire", "Fighting"]),
    ]},
    "gallade": {"level": 84, "sets": [
        _role("Setup Sweeper", ["Psycho Cut", "Close Combat", "Swords Dance", "Knock Off", "Drain Punch"],
              ["Fighting", "Dark"]),
    ]},
    "venusaur": {"level": 85, "sets": [
        _role("Bulky Support", ["Giga Drain", "Sludge Bomb", "Earth Power", "Synthesis", "Toxic", "Knock Off"],
              ["Water", "Steel"]),
    ]},
}


def _template(species, item, ability, moves, nature="Jolly", **extra):
    template = {
        "species": species,
        "item": item,
        "ability": ability,
        "nature": nature,
        "evs": {"atk": 252, "spe": 252, "hp": 4},
        "moves": [[move] if isinstance(move, str) else move for move in moves],
    }
    template.update(extra)
    return template


# Six species whose weaknesses never stack to three
FACTORY_SETS = {
    "OU": {
        "garchomp": {"sets": [
            _template("Garchomp", "Life Orb", "Rough Skin", ["Stealth Rock", "Earthquake", "Outrage", "Stone Edge"]),
        ]},
        "dusknoir": {"sets": [
            _template("Dusknoir", "Leftovers", "Pressure", ["Rapid Spin", "Poltergeist", "Will-O-Wisp", "Knock Off"]),
        ]},
        "cinderace": {"sets": [
            _template("Cinderace", "Choice Band", "Libero", ["Pyro Ball", "U-turn", "Sucker Punch", "Knock Off"]),
        ]},
        "vaporeon": {"sets": [
            _template("Vaporeon", "Leftovers", "Water Absorb", ["Scald", "Wish", "Protect", ["Ice Beam", "Haze"]],
                      nature="Bold"),
        ]},
        "jolteon": {"sets": [
            _template("Jolteon", "Choice Specs", "Volt Absorb",
                      ["Thunderbolt", "Volt Switch", "Shadow Ball", "Hyper Voice"], nature="Timid"),
        ]},
        "gallade": {"sets": [
            _template("Gallade", "Choice Scarf", "Sharpness", ["Psycho Cut", "Close Combat", "Knock Off", "Trick"]),
        ]},
    },
}

BSS_FACTORY_SETS = {
    "garchomp": {"usage": 30.5, "sets": [
        _template("Garchomp", "Life Orb", "Rough Skin", ["Earthquake", "Outrage", "Stone Edge", "Protect"]),
    ]},
    "dusknoir": {"usage": 5.0, "sets": [
        _template("Dusknoir", "Sitrus Berry", "Pressure", ["Trick Room", "Poltergeist", "Will-O-Wisp", "Protect"]),
    ]},
    "cinderace": {"usage": 12.0, "sets": [
        _template("Cinderace", "Focus Sash", "Libero", ["Pyro Ball", "U-turn", "Sucker Punch", "Protect"]),
    ]},
    "vaporeon": {"usage": 8.0, "sets": [
        _template("Vaporeon", "Leftovers", "Water Absorb", ["Scald", "Wish", "Protect", "Ice Beam"]),
    ]},
    "jolteon": {"usage": 9.0, "sets": [
        _template("Jolteon", "Choice Specs", "Volt Absorb", ["Thunderbolt", "Volt Switch", "Shadow Ball", "Tera Blast"]),
    ]},
    "gallade": {"usage": 10.0, "sets": [
        _template("Gallade", "Choice Scarf", "Sharpness", ["Psycho Cut", "Close Combat", "Knock Off", "Trick"]),
    ]},
}

CAP1V1_SETS = {
    "Garchomp": [
        {"item": ["Choice Scarf", "Life Orb"], "ability": "Rough Skin", "nature": "Jolly",
         "evs": {"atk": 252, "spe": 252}, "moves": [["Earthquake", "Stone Edge"], "Outrage", "Swords Dance"]},
    ],
    "Vaporeon": [
        {"item": "Leftovers", "ability": ["Water Absorb", "Hydration"], "nature": "Bold",
         "evs": {"hp": 252, "def": 252}, "moves": ["Scald", "Wish", "Protect", "Ice Beam"]},
    ],
    "Cinderace": [
        {"item": "Life Orb", "ability": "Libero", "nature": "Jolly",
         "evs": {"atk": 252, "spe": 252}, "ivs": {"spa": 0}, "moves": ["Pyro Ball", "U-turn", "Sucker Punch"]},
    ],
}


@pytest.fixture
def dex() -> Dex:
    """A small gen 9 dex built from Showdown-shaped data."""
    return Dex.from_dicts(
        pokedex=POKEDEX,
        moves=MOVES,
        abilities=ABILITIES,
        items=ITEMS,
        learnsets=LEARNSETS,
        natures=NATURES,
        typechart=build_typechart(),
    )


@pytest.fixture
def sets() -> SetsRepository:
    """Set catalogs for every generator."""
    return SetsRepository(
        random_sets=RANDOM_SETS,
        factory_sets=FACTORY_SETS,
        bss_factory_sets=BSS_FACTORY_SETS,
        cap1v1_sets=CAP1V1_SETS,
    )


@pytest.fixture
def config() -> GeneratorConfig:
    """Default tunables, independent of the environment."""
    return GeneratorConfig(potd=None)


@pytest.fixture
def make_format():
    """Factory for formats with test-friendly defaults."""

    def _make(team: str = "random", **kwargs) -> Format:
        kwargs.setdefault("id", f"gen9{team.lower()}")
        return Format(team=team, **kwargs)

    return _make


@pytest.fixture
def make_build(dex):
    """Factory for BuildContext objects around a species in the dex."""

    def _make(
        species: "str | SpeciesData",
        role: str = "Fast Attacker",
        tera_type: str = "Normal",
        abilities: list[str] | None = None,
        team_details: TeamDetails | None = None,
        **kwargs,
    ) -> BuildContext:
        data = species if isinstance(species, SpeciesData) else dex.get_species(species)
        return BuildContext(
            species=data,
            types=list(data.types),
            abilities=abilities if abilities is not None else list(dict.fromkeys(data.abilities.values())),
            team_details=team_details or TeamDetails(),
            tera_type=tera_type,
            role=role,
            **kwargs,
        )

    return _make
