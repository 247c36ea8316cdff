"""Move pool culling.

Removes candidates from a move pool that would clash with moves already
chosen, until the moveset plus the pool fits in the move limit.
"""

from dataclasses import dataclass

from randbats.shared.data_loader import Dex
from randbats.shared.prng import fast_pop
from randbats.teambuilder.move_counter import (
    HAZARDS,
    MOVE_PAIRS,
    PHYSICAL_SETUP,
    SETUP,
    SPECIAL_SETUP,
    SPEED_SETUP,
)
from randbats.teambuilder.team_repr import BuildContext

PIVOTING_MOVES = ("chillyreception", "flipturn", "partingshot", "shedtail", "teleport", "uturn", "voltswitch")
MAGNEZONE_MOVES = ("bodypress", "mirrorcoat", "steelbeam")

# Stands in for every Status move in the dex
ALL_STATUS_MOVES = ("<status>",)


@dataclass(frozen=True)
class IncompatibilityRule:
    """Moves in `moves_a` and `moves_b` should not appear together.

    `exempt_species` lists species ids the rule does not apply to.
    """

    moves_a: tuple[str, ...]
    moves_b: tuple[str, ...]
    exempt_species: frozenset[str] = frozenset()


def _rule(a: str | tuple[str, ...], b: str | tuple[str, ...], exempt: tuple[str, ...] = ()) -> IncompatibilityRule:
    return IncompatibilityRule(
        moves_a=(a,) if isinstance(a, str) else a,
        moves_b=(b,) if isinstance(b, str) else b,
        exempt_species=frozenset(exempt),
    )


INCOMPATIBLE_MOVES: tuple[IncompatibilityRule, ...] = (
    # These moves don't mesh well with other aspects of the set
    _rule(ALL_STATUS_MOVES, ("healingwish", "memento", "switcheroo", "trick"), exempt=("spidops",)),
    _rule(SETUP, PIVOTING_MOVES, exempt=("scyther", "scizor")),
    _rule(SETUP, HAZARDS),
    _rule(SETUP, ("defog", "nuzzle", "toxic", "waterspout", "yawn")),
    _rule(PHYSICAL_SETUP, PHYSICAL_SETUP),
    _rule(SPECIAL_SETUP, "thunderwave"),
    _rule("substitute", PIVOTING_MOVES),
    _rule(SPEED_SETUP, ("aquajet", "rest", "trickroom")),
    _rule("curse", "rapidspin"),
    _rule("dragondance", "dracometeor"),
    # These attacks are redundant with each other
    _rule("psychic", "psyshock"),
    _rule("surf", "hydropump"),
    _rule("wavecrash", "liquidation"),
    _rule("freezedry", "icebeam"),
    _rule(("airslash", "bravebird", "hurricane"), ("airslash", "bravebird", "hurricane")),
    _rule("knockoff", "foulplay"),
    _rule("doubleedge", "headbutt"),
    _rule("fireblast", ("fierydance", "flamethrower")),
    _rule("lavaplume", "magmastorm"),
    _rule("thunderpunch", "wildcharge"),
    _rule("gunkshot", ("direclaw", "poisonjab")),
    _rule("aurasphere", "focusblast"),
    _rule("closecombat", "drainpunch"),
    _rule("bugbite", "pounce"),
    _rule("bittermalice", "shadowball"),
    _rule(("dragonpulse", "spacialrend"), "dracometeor"),
    # These status moves are redundant with each other
    _rule(("taunt", "strengthsap"), "encore"),
    _rule("toxic", "willowisp"),
    _rule(("thunderwave", "toxic", "willowisp"), "toxicspikes"),
    # Species hardcodes: Landorus, Persian and Seviper, Beartic
    _rule("nastyplot", "rockslide"),
    _rule("switcheroo", ("fakeout", "suckerpunch")),
    _rule("snowscape", "swordsdance"),
)

# Applied after the Cryogonal Haze removal
LATE_INCOMPATIBLE_MOVES: tuple[IncompatibilityRule, ...] = (
    _rule(MAGNEZONE_MOVES, MAGNEZONE_MOVES),
)


def remove_move(move_pool: list[str], move_id: str) -> bool:
    """Remove a move from the pool if present."""
    if move_id not in move_pool:
        return False
    fast_pop(move_pool, move_pool.index(move_id))
    return True


class MoveCuller:
    """Culls a move pool against the moves already chosen."""

    def __init__(self, dex: Dex, max_move_count: int):
        self.dex = dex
        self.max_move_count = max_move_count

    def _fits(self, moves: list[str], move_pool: list[str]) -> bool:
        return len(moves) + len(move_pool) <= self.max_move_count

    def _resolve(self, move_ids: tuple[str, ...]) -> tuple[str, ...] | list[str]:
        return self.dex.status_move_ids if move_ids is ALL_STATUS_MOVES else move_ids

    def incompatible_moves(
        self,
        moves: list[str],
        move_pool: list[str],
        moves_a: tuple[str, ...] | list[str],
        moves_b: tuple[str, ...] | list[str],
    ) -> None:
        """Remove pool moves that clash with chosen moves, starting with moves_a."""
        if self._fits(moves, move_pool):
            return
        for chosen in moves:
            if chosen in moves_b:
                for candidate in moves_a:
                    if candidate != chosen and remove_move(move_pool, candidate):
                        if self._fits(moves, move_pool):
                            return
            if chosen in moves_a:
                for candidate in moves_b:
                    if candidate != chosen and remove_move(move_pool, candidate):
                        if self._fits(moves, move_pool):
                            return

    def _apply_rules(
        self,
        rules: tuple[IncompatibilityRule, ...],
        moves: list[str],
        move_pool: list[str],
        species_id: str,
    ) -> None:
        for rule in rules:
            if species_id in rule.exempt_species:
                continue
            self.incompatible_moves(moves, move_pool, self._resolve(rule.moves_a), self._resolve(rule.moves_b))

    def cull(self, moves: list[str], move_pool: list[str], ctx: BuildContext) -> None:
        """Cull the pool in place until moves plus pool fit the move limit.

        Args:
            moves: Moves chosen so far
            move_pool: Remaining candidates (mutated)
            ctx: The build in progress
        """
        if self._fits(moves, move_pool):
            return

        # Two open slots and only one unpaired move: drop the unpaired move
        if len(moves) == self.max_move_count - 2:
            unpaired = list(move_pool)
            for first, second in MOVE_PAIRS:
                if first in move_pool and second in move_pool:
                    remove_move(unpaired, first)
                    remove_move(unpaired, second)
            if len(unpaired) == 1:
                remove_move(move_pool, unpaired[0])

        # Paired moves can't both fit in one open slot
        if len(moves) == self.max_move_count - 1:
            for first, second in MOVE_PAIRS:
                if first in move_pool and second in move_pool:
                    remove_move(move_pool, first)
                    remove_move(move_pool, second)

        # Team-based culls
        team = ctx.team_details
        if team.stealth_rock:
            remove_move(move_pool, "stealthrock")
        if self._fits(moves, move_pool):
            return
        if team.defog or team.rapid_spin:
            remove_move(move_pool, "defog")
            remove_move(move_pool, "rapidspin")
        if team.sticky_web:
            remove_move(move_pool, "stickyweb")

        species_id = ctx.species.id
        self._apply_rules(INCOMPATIBLE_MOVES, moves, move_pool, species_id)

        if not team.defog and not team.rapid_spin and species_id == "cryogonal":
            remove_move(move_pool, "haze")

        self._apply_rules(LATE_INCOMPATIBLE_MOVES, moves, move_pool, species_id)
