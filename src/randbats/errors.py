"""Errors raised by the team generators."""

from typing import Any


class TeamGenerationError(Exception):
    """A team could not be generated.

    Carries the seed the generator started from and the format being
    generated so a failure can be reproduced.
    """

    def __init__(
        self,
        message: str,
        seed: Any = None,
        format_id: str | None = None,
    ):
        super().__init__(message)
        self.seed = seed
        self.format_id = format_id


class UnsupportedFormatError(TeamGenerationError):
    """The format asks for something the generator cannot honour.

    Raised for direct custom bans on formats that do not support them and
    for team kinds no generator knows about.
    """


class PoolInsufficientError(TeamGenerationError):
    """A candidate pool is smaller than the team requires."""

    def __init__(
        self,
        message: str,
        available: int,
        required: int,
        seed: Any = None,
        format_id: str | None = None,
    ):
        super().__init__(message, seed=seed, format_id=format_id)
        self.available = available
        self.required = required
