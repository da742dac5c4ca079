"""
Bracket Models.

A bracket is a power-level bucket (1 = lowest). The classifier compares
category counts against one BracketRequirements row per bracket.
"""

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class BracketRequirements:
    """
    Allowances for a single bracket.

    Counts use math.inf for "unlimited".
    """

    max_mass_land_denial: float
    max_extra_turns: float
    max_tutors: float
    max_game_changers: float
    max_two_card_combos: float
    allows_extra_turn_chaining: bool
    allows_early_game_combos: bool


@dataclass(frozen=True, slots=True)
class ComboMatch:
    """A catalogued two-card combo found in the deck."""

    cards: tuple[str, str]
    is_early_game: bool
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "cards": list(self.cards),
            "isEarlyGame": self.is_early_game,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class BracketDetails:
    """Explanations attached to a bracket analysis."""

    minimum_bracket_reason: str = ""
    recommended_bracket_reason: str = ""
    bracket_requirements_failed: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "minimumBracketReason": self.minimum_bracket_reason,
            "recommendedBracketReason": self.recommended_bracket_reason,
            "bracketRequirementsFailed": list(self.bracket_requirements_failed),
        }


@dataclass(frozen=True, slots=True)
class BracketAnalysis:
    """
    Result of classifying a deck.

    Category tuples hold lower-cased names in input order, one entry per
    occurrence in the input.
    """

    mass_land_denial: tuple[str, ...] = ()
    extra_turns: tuple[str, ...] = ()
    tutors: tuple[str, ...] = ()
    game_changers: tuple[str, ...] = ()
    two_card_combos: tuple[ComboMatch, ...] = ()
    minimum_bracket: int = 1
    recommended_bracket: int = 1
    details: BracketDetails = field(default_factory=BracketDetails)

    @property
    def has_early_game_combos(self) -> bool:
        return any(combo.is_early_game for combo in self.two_card_combos)

    def to_dict(self) -> dict[str, Any]:
        """Render the camelCase wire shape."""
        return {
            "massLandDenial": list(self.mass_land_denial),
            "extraTurns": list(self.extra_turns),
            "tutors": list(self.tutors),
            "gameChangers": list(self.game_changers),
            "twoCardCombos": [combo.to_dict() for combo in self.two_card_combos],
            "minimumBracket": self.minimum_bracket,
            "recommendedBracket": self.recommended_bracket,
            "details": self.details.to_dict(),
        }


def format_allowance(value: float) -> str:
    """Render an allowance for messages ("unlimited" for infinity)."""
    if math.isinf(value):
        return "unlimited"
    return str(int(value))
