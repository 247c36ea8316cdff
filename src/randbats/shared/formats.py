"""Format descriptions consumed by the generators.

A Format carries what the generators need to know about a battle format:
team size, move limit, level override, forced monotype, rules and custom
bans. Loading formats from a server configuration is out of scope; formats
are built directly or from plain mappings.
"""

from dataclasses import dataclass
from typing import Any

from randbats.shared.data_loader import normalize_name

GAME_TYPES = ("singles", "doubles", "triples", "multi", "freeforall")

# Custom rule prefixes that change the banlist directly
BAN_PREFIXES = ("-", "*")
UNBAN_PREFIX = "+"


@dataclass(frozen=True)
class Format:
    """A battle format as seen by the team generators."""

    id: str
    name: str = ""
    team: str = "random"
    game_type: str = "singles"
    gen: int = 9
    max_team_size: int = 6
    max_move_count: int = 4
    adjust_level: int | None = None
    force_monotype: str | None = None
    rules: frozenset[str] = frozenset()
    custom_rules: tuple[str, ...] = ()
    banlist: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if self.game_type not in GAME_TYPES:
            raise ValueError(f"Unknown game type: {self.game_type}")
        if self.max_team_size < 1:
            raise ValueError(f"max_team_size must be positive, got {self.max_team_size}")
        if not self.name:
            object.__setattr__(self, "name", self.id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Format":
        """Build a Format from a Showdown-style format entry."""
        format_id = normalize_name(data.get("id") or data["name"])
        return cls(
            id=format_id,
            name=data.get("name", format_id),
            team=data.get("team", "random"),
            game_type=data.get("gameType", "singles"),
            gen=data.get("gen", 9),
            max_team_size=data.get("maxTeamSize", 6),
            max_move_count=data.get("maxMoveCount", 4),
            adjust_level=data.get("adjustLevel"),
            force_monotype=data.get("forceMonotype"),
            rules=frozenset(normalize_name(rule) for rule in data.get("ruleset", [])),
            custom_rules=tuple(data.get("customRules", [])),
            banlist=frozenset(data.get("banlist", [])),
        )

    @property
    def is_doubles(self) -> bool:
        return self.game_type != "singles"

    def has_rule(self, rule: str) -> bool:
        return normalize_name(rule) in self.rules

    @property
    def banned_ids(self) -> set[str]:
        """Ids banned by custom rules, minus those unbanned again."""
        banned: set[str] = set()
        unbanned: set[str] = set()
        for rule in self.custom_rules:
            if rule.startswith(BAN_PREFIXES):
                banned.add(normalize_name(rule[1:]))
            elif rule.startswith(UNBAN_PREFIX):
                unbanned.add(normalize_name(rule[1:]))
        return banned - unbanned

    @property
    def unbanned_ids(self) -> set[str]:
        return {
            normalize_name(rule[1:]) for rule in self.custom_rules if rule.startswith(UNBAN_PREFIX)
        }

    def has_direct_custom_bans(self) -> bool:
        """Whether custom rules add or remove bans."""
        return any(rule.startswith((*BAN_PREFIXES, UNBAN_PREFIX)) for rule in self.custom_rules)

    def has_complex_bans(self) -> bool:
        """Whether custom rules use combination bans (e.g. ``-Move + Ability``)."""
        return any("+" in rule and not rule.startswith(UNBAN_PREFIX) for rule in self.custom_rules)

    def is_banned(self, kind: str, entry_id: str) -> bool:
        """Whether an entry of the given kind (pokemon, item, ability, move) is banned.

        Args:
            kind: Entry kind, used for ``kind:id`` banlist entries
            entry_id: Normalized id of the entry

        Returns:
            True if the banlist or a custom rule bans it
        """
        entry_id = normalize_name(entry_id)
        if entry_id in self.unbanned_ids:
            return False
        return f"{kind}:{entry_id}" in self.banlist or entry_id in self.banned_ids

    def is_unbanned(self, entry_id: str) -> bool:
        """Whether a custom rule explicitly allows the entry."""
        return normalize_name(entry_id) in self.unbanned_ids

    def tag_rule(self, tag: str) -> bool | None:
        """How custom rules treat a ``pokemontag:`` tag.

        Returns:
            True if allowed, False if banned, None if no rule names it
        """
        tag_id = normalize_name(f"pokemontag:{tag}")
        if tag_id in self.unbanned_ids:
            return True
        if tag_id in self.banned_ids or f"pokemontag:{normalize_name(tag)}" in self.banlist:
            return False
        return None
