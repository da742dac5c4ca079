"""
Legality Rule Engine.

Evaluates a normalized deck list against the Highlander construction rules:

1. Commander exists, is a creature, and is itself legal
2. Every card resolves and is legal (allow list > ban list > secondary flag)
3. Singleton: one copy per name except basic lands and listed exceptions
4. Color identity: every card within the commander's identity
5. Size: exactly REQUIRED_DECK_SIZE cards, commander included

INVARIANTS:
- evaluate() is a pure function of (deck, store, rules); it never raises for
  a well-formed DeckList and never mutates the store
- Every check runs even after an earlier one fails, so all diagnostics are
  available in one verdict
- Unknown cards are verdict data (illegal_cards), not exceptions
"""

import logging

from highlander.models.card import CardRecord, sort_colors
from highlander.models.deck import DeckEntry, DeckList
from highlander.models.legality import (
    BASIC_LAND_NAMES,
    REQUIRED_DECK_SIZE,
    LegalIssues,
    LegalityVerdict,
)
from highlander.models.rule_lists import RuleLists
from highlander.services.card_resolver import resolve_card
from highlander.services.card_store import CardReferenceStore

logger = logging.getLogger(__name__)


def is_card_legal(name: str, record: CardRecord, rules: RuleLists) -> bool:
    """
    Decide whether a resolved card may be played.

    The allow list grants legality regardless of the secondary-format flag
    and wins over the ban list. The ban list revokes legality for otherwise
    secondary-legal cards. Both the cited name and the record's full name
    are consulted, so a list entry for "Front // Back" also covers "Front".

    Args:
        name: Card name as cited in the deck list
        record: Resolved card record
        rules: Format rule lists

    Returns:
        True if the card is legal in the format
    """
    if rules.is_allowed(name) or rules.is_allowed(record.name):
        return True
    if rules.is_banned(name) or rules.is_banned(record.name):
        return False
    return record.secondary_legal


class LegalityEngine:
    """
    Deck legality evaluator bound to a card store and rule lists.

    Both collaborators are held by reference and only read.
    """

    def __init__(self, store: CardReferenceStore, rules: RuleLists) -> None:
        self._store = store
        self._rules = rules

    def evaluate(self, deck: DeckList) -> LegalityVerdict:
        """
        Evaluate every construction rule for a deck.

        Args:
            deck: Normalized deck list

        Returns:
            LegalityVerdict with all checks computed
        """
        resolved: dict[str, CardRecord | None] = {}

        def lookup(name: str) -> CardRecord | None:
            if name not in resolved:
                resolved[name] = resolve_card(name, self._store)
            return resolved[name]

        commander = deck.commander
        all_entries: tuple[DeckEntry, ...] = (commander, *deck.main_deck)

        # Commander checks
        commander_record = lookup(commander.name)
        commander_found = commander_record is not None
        commander_is_creature = commander_record is not None and commander_record.is_creature
        commander_legal = commander_record is not None and is_card_legal(
            commander.name, commander_record, self._rules
        )

        # Per-card legality
        illegal_cards: dict[str, None] = {}
        for entry in all_entries:
            record = lookup(entry.name)
            if record is None or not is_card_legal(entry.name, record, self._rules):
                illegal_cards[entry.name] = None

        non_singleton_cards = self._find_non_singleton(deck)

        # Color identity (only meaningful once the commander is known)
        color_identity: frozenset[str] = frozenset()
        color_violations: dict[str, None] = {}
        if commander_record is not None:
            color_identity = commander_record.color_identity
            for entry in deck.main_deck:
                record = lookup(entry.name)
                if record is not None and not record.color_identity <= color_identity:
                    color_violations[entry.name] = None

        reserved_cards: dict[str, None] = {}
        for entry in all_entries:
            record = lookup(entry.name)
            if record is not None and record.reserved:
                reserved_cards[entry.name] = None

        deck_size = deck.total_cards()
        size_ok = deck_size == REQUIRED_DECK_SIZE

        issues = LegalIssues(
            size=(
                None
                if size_ok
                else f"Deck size incorrect: has {deck_size} cards, needs {REQUIRED_DECK_SIZE}"
            ),
            commander=self._commander_issue(commander.name, commander_found, commander_legal),
            commander_type=self._commander_type_issue(commander_found, commander_is_creature),
            color_identity=self._color_identity_issue(commander_found, bool(color_violations)),
            singleton=(
                "Deck contains multiple copies of cards that aren't allowed to break "
                "the singleton rule"
                if non_singleton_cards
                else None
            ),
            illegal_cards=(
                "Deck contains cards that aren't legal in the format" if illegal_cards else None
            ),
            reserved_list=(
                "Deck contains cards from the Reserved List" if reserved_cards else None
            ),
        )

        legal = (
            size_ok
            and commander_found
            and commander_is_creature
            and commander_legal
            and not color_violations
            and not non_singleton_cards
            and not illegal_cards
        )

        logger.debug(
            "Evaluated deck for %s: legal=%s size=%d illegal=%d",
            commander.name,
            legal,
            deck_size,
            len(illegal_cards),
        )

        return LegalityVerdict(
            legal=legal,
            commander=commander.name,
            deck_size=deck_size,
            required_size=REQUIRED_DECK_SIZE,
            color_identity=sort_colors(color_identity),
            illegal_cards=tuple(illegal_cards),
            color_identity_violations=tuple(color_violations),
            non_singleton_cards=tuple(non_singleton_cards),
            reserved_list_cards=tuple(reserved_cards),
            legal_issues=issues,
        )

    def _find_non_singleton(self, deck: DeckList) -> list[str]:
        """
        Names whose copies across the whole deck exceed one.

        Quantities for a name cited on several lines are summed first. The
        commander always counts as exactly one copy.
        """
        counts: dict[str, int] = {}

        def add(name: str, quantity: int) -> None:
            if name in BASIC_LAND_NAMES or self._rules.may_break_singleton(name):
                return
            counts[name] = counts.get(name, 0) + quantity

        add(deck.commander.name, 1)
        for entry in deck.main_deck:
            add(entry.name, entry.quantity)

        return [name for name, count in counts.items() if count > 1]

    @staticmethod
    def _commander_issue(name: str, found: bool, legal: bool) -> str | None:
        if not found:
            return f"Commander '{name}' not found in card database"
        if not legal:
            return "Commander is not legal in the format"
        return None

    @staticmethod
    def _commander_type_issue(found: bool, is_creature: bool) -> str | None:
        if not found:
            return "Commander type unknown: card not found"
        if not is_creature:
            return "Commander must be a creature"
        return None

    @staticmethod
    def _color_identity_issue(commander_found: bool, has_violations: bool) -> str | None:
        if not commander_found:
            return "Color identity not checked: commander not found"
        if has_violations:
            return "Cards outside commander's color identity"
        return None


def evaluate_deck_legality(
    deck: DeckList,
    store: CardReferenceStore,
    rules: RuleLists,
) -> LegalityVerdict:
    """
    Evaluate a deck against the format rules.

    Convenience wrapper around LegalityEngine for one-off checks.
    """
    return LegalityEngine(store, rules).evaluate(deck)
