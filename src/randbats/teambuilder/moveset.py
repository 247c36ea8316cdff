"""Moveset building for random sets.

A moveset is built in phases: mandatory moves, STAB enforcement, Tera STAB,
hardcoded moves, role requirements (recovery, setup, coverage, priority),
then random fill. Every added move is followed by a culling pass over the
remaining pool.
"""

import logging
from collections.abc import Callable

from randbats.shared.data_loader import Dex
from randbats.shared.prng import PRNG
from randbats.teambuilder.move_counter import (
    MOVE_PAIRS,
    NO_STAB,
    RECOVERY_MOVES,
    SETUP,
    SPEED_SETUP,
    MoveCounter,
    effective_move_type,
    query_moves,
)
from randbats.teambuilder.move_culler import MoveCuller, remove_move
from randbats.teambuilder.team_repr import BuildContext

logger = logging.getLogger(__name__)

MoveEnforcementChecker = Callable[[list[str], MoveCounter, BuildContext], bool]


def _grass_checker(pool: list[str], counter: MoveCounter, ctx: BuildContext) -> bool:
    if "leafstorm" in pool:
        return True
    return not counter.get("Grass") and (
        ctx.species.base_stats["atk"] >= 100 or "Electric" in ctx.types or ctx.has_ability("Seed Sower")
    )


def _poison_checker(pool: list[str], counter: MoveCounter, ctx: BuildContext) -> bool:
    if "Ground" in ctx.types:
        return False
    return not counter.get("Poison")


def _psychic_checker(pool: list[str], counter: MoveCounter, ctx: BuildContext) -> bool:
    if counter.get("Psychic"):
        return False
    if any(move in pool for move in ("calmmind", "psychicfangs", "psychocut")):
        return True
    return ctx.has_ability("Psychic Surge") or "Fire" in ctx.types


def _steel_checker(pool: list[str], counter: MoveCounter, ctx: BuildContext) -> bool:
    if ctx.species.base_stats["atk"] < 95:
        return False
    return not counter.get("Steel")


def _water_checker(pool: list[str], counter: MoveCounter, ctx: BuildContext) -> bool:
    if ctx.species.id == "quagsire":
        return False
    return not counter.get("Water")


def _missing(type_name: str) -> MoveEnforcementChecker:
    return lambda pool, counter, ctx: not counter.get(type_name)


# Whether a STAB move of the given type should still be forced
MOVE_ENFORCEMENT_CHECKERS: dict[str, MoveEnforcementChecker] = {
    "Bug": lambda pool, counter, ctx: "megahorn" in pool,
    "Dark": _missing("Dark"),
    "Dragon": lambda pool, counter, ctx: not counter.get("Dragon") and "dualwingbeat" not in pool,
    "Electric": _missing("Electric"),
    "Fairy": _missing("Fairy"),
    "Fighting": _missing("Fighting"),
    "Fire": _missing("Fire"),
    "Flying": _missing("Flying"),
    "Ghost": _missing("Ghost"),
    "Grass": _grass_checker,
    "Ground": _missing("Ground"),
    "Ice": _missing("Ice"),
    "Normal": lambda pool, counter, ctx: "boomburst" in pool,
    "Poison": _poison_checker,
    "Psychic": _psychic_checker,
    "Rock": lambda pool, counter, ctx: not counter.get("Rock") and ctx.species.base_stats["atk"] >= 80,
    "Steel": _steel_checker,
    "Water": _water_checker,
}

RECOVERY_ROLES = ("Bulky Support", "Bulky Attacker", "Bulky Setup")
NO_COVERAGE_ROLES = ("AV Pivot", "Fast Support", "Bulky Support")
PRIORITY_ROLES = ("Bulky Attacker", "Bulky Setup")


class MovesetBuilder:
    """Builds the moveset for one random set.

    The move pool passed in is consumed: chosen and culled moves are
    removed from it.
    """

    def __init__(
        self,
        dex: Dex,
        prng: PRNG,
        ctx: BuildContext,
        move_pool: list[str],
        max_move_count: int = 4,
    ):
        self.dex = dex
        self.prng = prng
        self.ctx = ctx
        self.move_pool = move_pool
        self.max_move_count = max_move_count
        self.culler = MoveCuller(dex, max_move_count)
        self.moves: list[str] = []
        self.counter = MoveCounter()

    @property
    def full(self) -> bool:
        return len(self.moves) >= self.max_move_count

    def add_move(self, move_id: str) -> MoveCounter:
        """Add a move, recount, and cull the pool."""
        if self.full or move_id in self.moves:
            return self.counter
        self.moves.append(move_id)
        remove_move(self.move_pool, move_id)
        self.counter = query_moves(
            self.dex, self.moves, self.ctx.species.types, self.ctx.tera_type, self.ctx.abilities
        )
        self.culler.cull(self.moves, self.move_pool, self.ctx)
        return self.counter

    def _add_sampled(self, candidates: list[str]) -> None:
        if candidates:
            self.add_move(self.prng.sample(candidates))

    def _stab_candidates(self, accept: Callable[[str], bool], ate: bool = True, tera: bool = True) -> list[str]:
        """Damaging pool moves whose effective type passes `accept`."""
        candidates = []
        for move_id in self.move_pool:
            move = self.dex.get_move(move_id)
            if move is None or move_id in NO_STAB or not move.is_damaging:
                continue
            move_type = effective_move_type(
                move, self.ctx.types, self.ctx.abilities, self.ctx.tera_type, ate=ate, tera=tera
            )
            if accept(move_type):
                candidates.append(move_id)
        return candidates

    def _first_attack_type(self) -> str | None:
        for move_id in self.moves:
            move = self.dex.get_move(move_id)
            if move is not None and move.is_damaging:
                return effective_move_type(move, self.ctx.types, self.ctx.abilities, self.ctx.tera_type)
        return None

    def build(self) -> list[str]:
        """Run every phase and return the chosen move ids."""
        ctx = self.ctx
        self.counter = query_moves(self.dex, self.moves, ctx.species.types, ctx.tera_type, ctx.abilities)
        self.culler.cull(self.moves, self.move_pool, ctx)

        # Small pools take every move
        if len(self.move_pool) <= self.max_move_count:
            self.moves.extend(self.move_pool)
            self.move_pool.clear()
            return self.moves

        # Mandatory moves
        if ctx.role == "Tera Blast user":
            self.add_move("terablast")
        if ctx.species.required_move:
            required = self.dex.get_move(ctx.species.required_move)
            self.add_move(required.id if required else ctx.species.required_move)

        # Enforce STAB for each type that still wants one
        for type_name in ctx.types:
            checker = MOVE_ENFORCEMENT_CHECKERS.get(type_name)
            if checker is None or not checker(self.move_pool, self.counter, ctx):
                continue
            self._add_sampled(self._stab_candidates(lambda move_type: move_type == type_name))

        # If no STAB move was added yet, add one
        if not self.counter.stab_counter:
            self._add_sampled(self._stab_candidates(lambda move_type: move_type in ctx.types))

        # Enforce Tera STAB
        if not self.counter.get("stabtera") and ctx.role != "Bulky Support":
            self._add_sampled(
                self._stab_candidates(lambda move_type: move_type == ctx.tera_type, ate=False, tera=False)
            )

        # Hardcoded moves
        if "facade" in self.move_pool and ctx.has_ability("Guts"):
            self.add_move("facade")
        for move_id in ("stickyweb", "revivalblessing"):
            if move_id in self.move_pool:
                self.add_move(move_id)
        if "toxic" in self.move_pool and ctx.species.id == "grafaiai":
            self.add_move("toxic")

        # Enforce recovery
        if ctx.role in RECOVERY_ROLES:
            self._add_sampled([move_id for move_id in self.move_pool if move_id in RECOVERY_MOVES])

        # Enforce setup, preferring a non-Speed setup move
        if "Setup" in ctx.role or ctx.role == "Tera Blast user":
            non_speed = [m for m in self.move_pool if m in SETUP and m not in SPEED_SETUP]
            if non_speed:
                self._add_sampled(non_speed)
            else:
                self._add_sampled([m for m in self.move_pool if m in SETUP])

        # Enforce a coverage move
        if ctx.role not in NO_COVERAGE_ROLES and len(self.counter.damaging_moves) <= 1:
            current_type = self._first_attack_type()
            self._add_sampled(self._stab_candidates(lambda move_type: move_type != current_type, tera=False))

        # Enforce STAB priority
        if ctx.role in PRIORITY_ROLES:
            priority_moves = []
            for move_id in self.move_pool:
                move = self.dex.get_move(move_id)
                if move is None:
                    continue
                move_type = effective_move_type(move, ctx.types, ctx.abilities, ctx.tera_type, tera=False)
                if move_type in ctx.types and move.priority > 0 and move.category != "Status":
                    priority_moves.append(move_id)
            self._add_sampled(priority_moves)

        # Fill the remaining slots randomly
        while not self.full and self.move_pool:
            if len(self.moves) + len(self.move_pool) <= self.max_move_count:
                self.moves.extend(self.move_pool)
                self.move_pool.clear()
                break
            move_id = self.prng.sample(self.move_pool)
            self.add_move(move_id)
            for first, second in MOVE_PAIRS:
                if move_id == first and second in self.move_pool:
                    self.add_move(second)
                if move_id == second and first in self.move_pool:
                    self.add_move(first)

        logger.debug(f"Moveset for {ctx.species.name} ({ctx.role}): {self.moves}")
        return self.moves
