"""
Legality Verdict — Structured Result of a Deck Check.

A verdict is produced fresh per evaluation and never mutated.

INVARIANT: Each issue field is None when its sub-check passed and a
human-readable message otherwise. Callers should branch on None, not on
the wording.
"""

from dataclasses import dataclass, field
from typing import Any

# Every Highlander deck is exactly this many cards, commander included
REQUIRED_DECK_SIZE = 100

BASIC_LAND_NAMES = frozenset({"Plains", "Island", "Swamp", "Mountain", "Forest", "Wastes"})


@dataclass(frozen=True, slots=True)
class LegalIssues:
    """Per-rule explanations; None means the rule passed."""

    size: str | None = None
    commander: str | None = None
    commander_type: str | None = None
    color_identity: str | None = None
    singleton: str | None = None
    illegal_cards: str | None = None
    reserved_list: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "size": self.size,
            "commander": self.commander,
            "commanderType": self.commander_type,
            "colorIdentity": self.color_identity,
            "singleton": self.singleton,
            "illegalCards": self.illegal_cards,
            "reservedList": self.reserved_list,
        }


@dataclass(frozen=True, slots=True)
class LegalityVerdict:
    """
    Outcome of evaluating one deck.

    Attributes:
        legal: True only if every construction rule passed
        commander: Commander name as cited in the deck list
        deck_size: Sum of all quantities, commander included
        required_size: Always REQUIRED_DECK_SIZE
        color_identity: Commander's identity in WUBRG order (empty if unknown)
        illegal_cards: Distinct names that are unknown or not legal
        color_identity_violations: Distinct names outside the commander's identity
        non_singleton_cards: Distinct names present in more than one copy
        reserved_list_cards: Distinct names on the Reserved List (informational)
        legal_issues: Per-rule explanations
    """

    legal: bool
    commander: str
    deck_size: int
    required_size: int = REQUIRED_DECK_SIZE
    color_identity: tuple[str, ...] = ()
    illegal_cards: tuple[str, ...] = ()
    color_identity_violations: tuple[str, ...] = ()
    non_singleton_cards: tuple[str, ...] = ()
    reserved_list_cards: tuple[str, ...] = ()
    legal_issues: LegalIssues = field(default_factory=LegalIssues)

    def to_dict(self) -> dict[str, Any]:
        """Render the camelCase wire shape."""
        return {
            "legal": self.legal,
            "commander": self.commander,
            "colorIdentity": list(self.color_identity),
            "deckSize": self.deck_size,
            "requiredSize": self.required_size,
            "illegalCards": list(self.illegal_cards),
            "colorIdentityViolations": list(self.color_identity_violations),
            "nonSingletonCards": list(self.non_singleton_cards),
            "reservedListCards": list(self.reserved_list_cards),
            "legalIssues": self.legal_issues.to_dict(),
        }
