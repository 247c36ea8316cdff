"""Shared plumbing for the team generators."""

import logging
import math
from collections.abc import Sequence
from typing import Any, TypeVar

from randbats.config import GeneratorConfig, generator_config
from randbats.errors import PoolInsufficientError, UnsupportedFormatError
from randbats.shared.data_loader import Dex, SetsRepository
from randbats.shared.formats import Format
from randbats.shared.prng import PRNG, Seed
from randbats.teambuilder.team_repr import RandomSet

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TeamGeneratorBase:
    """Holds the format, data and random source a generator draws from.

    Subclasses map format team kinds to their generating methods in
    `team_methods`.
    """

    team_methods: dict[str, str] = {}

    def __init__(
        self,
        format: Format,
        dex: Dex,
        sets: SetsRepository | None = None,
        prng: PRNG | Seed | None = None,
        config: GeneratorConfig | None = None,
    ):
        """Initialize the generator.

        Args:
            format: The format to generate for
            dex: Reference data for the format's generation
            sets: Set catalogs
            prng: A PRNG to share, or a seed for a new one
            config: Generator tunables; defaults to the global config
        """
        self.format = format
        self.dex = dex
        self.sets = sets or SetsRepository()
        self.config = config or generator_config
        self.gen = format.gen
        self.max_team_size = format.max_team_size
        self.max_move_count = format.max_move_count
        self.adjust_level = format.adjust_level
        self.force_monotype = format.force_monotype
        self.set_seed(prng)

    def set_seed(self, prng: PRNG | Seed | None = None) -> None:
        self.prng = prng if isinstance(prng, PRNG) else PRNG(prng)

    def get_team(self) -> list[RandomSet]:
        """Generate a team with the method the format's team kind names."""
        method = self.team_methods.get(self.format.team)
        if method is None:
            raise UnsupportedFormatError(
                f"{type(self).__name__} cannot generate '{self.format.team}' teams",
                seed=self.prng.seed,
                format_id=self.format.id,
            )
        return getattr(self, method)()

    # Random helpers

    def random(self, m: float | None = None, n: float | None = None) -> Any:
        return self.prng.next(m, n)

    def random_chance(self, numerator: int, denominator: int) -> bool:
        return self.prng.random_chance(numerator, denominator)

    def sample(self, items: Sequence[T]) -> T:
        return self.prng.sample(items)

    def sample_if_array(self, item: Any) -> Any:
        if isinstance(item, (list, tuple)):
            return self.sample(item)
        return item

    def sample_no_replace(self, items: list[T]) -> T | None:
        return self.prng.sample_no_replace(items)

    def multiple_samples_no_replace(self, items: list[T], n: int) -> list[T]:
        """Remove up to n random elements; fewer if the list runs out."""
        samples = []
        while len(samples) < n and items:
            samples.append(self.sample_no_replace(items))
        return samples

    def limit_factor(self) -> int:
        """Scale for team-wide caps; the default and minimum is 1."""
        return math.floor(self.max_team_size / self.config.team_size_reference + 0.5) or 1

    # Custom rule guards

    def enforce_no_direct_custom_banlist_changes(self) -> None:
        if self.format.has_direct_custom_bans():
            raise UnsupportedFormatError(
                f"Custom bans are not currently supported in {self.format.name}.",
                seed=self.prng.seed,
                format_id=self.format.id,
            )

    def enforce_no_direct_complex_bans(self) -> None:
        if self.format.has_complex_bans():
            raise UnsupportedFormatError(
                f"Complex bans are not currently supported in {self.format.name}.",
                seed=self.prng.seed,
                format_id=self.format.id,
            )

    def enforce_custom_pool_size(self, kind: str, pool: Sequence[Any], required: int, explanation: str) -> None:
        """Raise if a legal pool cannot supply the team after simple bans."""
        if len(pool) >= required:
            return
        raise PoolInsufficientError(
            f"Legal {kind} count is insufficient to support {explanation} ({len(pool)} / {required}).",
            available=len(pool),
            required=required,
            seed=self.prng.seed,
            format_id=self.format.id,
        )
