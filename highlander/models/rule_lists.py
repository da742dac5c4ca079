"""
Rule Lists — Format Overrides.

Three name sets adjust the default legality signal:
- banned: revokes legality even for secondary-legal cards
- allowed: grants legality regardless of the secondary-format flag
- singleton_exceptions: cards permitted in any number of copies

INVARIANT: Rule lists are loaded once at startup and never mutated.
Engines receive them by reference.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RuleLists:
    """Immutable banned / allowed / singleton-exception name sets."""

    banned: frozenset[str] = field(default_factory=frozenset)
    allowed: frozenset[str] = field(default_factory=frozenset)
    singleton_exceptions: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_iterables(
        cls,
        banned: Iterable[str] | None = None,
        allowed: Iterable[str] | None = None,
        singleton_exceptions: Iterable[str] | None = None,
    ) -> "RuleLists":
        """Build rule lists from any iterables of names."""
        return cls(
            banned=frozenset(banned or ()),
            allowed=frozenset(allowed or ()),
            singleton_exceptions=frozenset(singleton_exceptions or ()),
        )

    def is_banned(self, name: str) -> bool:
        return name in self.banned

    def is_allowed(self, name: str) -> bool:
        return name in self.allowed

    def may_break_singleton(self, name: str) -> bool:
        """True if the card may appear in multiple copies."""
        return name in self.singleton_exceptions
