"""
Highlander services.

Card lookup, rule lists, legality evaluation and bracket classification.
"""

from highlander.services.bracket_classifier import classify_bracket
from highlander.services.card_resolver import resolve_card
from highlander.services.card_store import (
    CardReferenceStore,
    CardStore,
    CardStoreError,
    CardStoreRegistry,
    build_card_store,
    card_store_registry,
    load_card_store,
)
from highlander.services.legality_engine import (
    LegalityEngine,
    evaluate_deck_legality,
    is_card_legal,
)
from highlander.services.rule_lists import (
    RuleListError,
    get_rule_lists,
    load_rule_lists,
)

__all__ = [
    "CardReferenceStore",
    "CardStore",
    "CardStoreError",
    "CardStoreRegistry",
    "LegalityEngine",
    "RuleListError",
    "build_card_store",
    "card_store_registry",
    "classify_bracket",
    "evaluate_deck_legality",
    "get_rule_lists",
    "is_card_legal",
    "load_card_store",
    "load_rule_lists",
    "resolve_card",
]
