from highlander.models.bracket import (
    BracketAnalysis,
    BracketDetails,
    BracketRequirements,
    ComboMatch,
)
from highlander.models.card import CardFace, CardKind, CardRecord, classify_card
from highlander.models.deck import DeckEntry, DeckList
from highlander.models.failure import (
    FailureDetail,
    FailureKind,
    KnownError,
    UnknownFailure,
)
from highlander.models.legality import (
    BASIC_LAND_NAMES,
    REQUIRED_DECK_SIZE,
    LegalIssues,
    LegalityVerdict,
)
from highlander.models.rule_lists import RuleLists

__all__ = [
    "BASIC_LAND_NAMES",
    "REQUIRED_DECK_SIZE",
    "BracketAnalysis",
    "BracketDetails",
    "BracketRequirements",
    "CardFace",
    "CardKind",
    "CardRecord",
    "ComboMatch",
    "DeckEntry",
    "DeckList",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "LegalIssues",
    "LegalityVerdict",
    "RuleLists",
    "UnknownFailure",
    "classify_card",
]
