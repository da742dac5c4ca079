"""
Commander bracket API endpoint.

Classifies a deck into a power bracket. The deck comes from loose deck
list text or from a Moxfield deck id.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Query

from highlander.models.failure import FailureKind, KnownError
from highlander.parsers.deck_list import MAX_LOOSE_DECK_CARDS, FormatError, parse_card_names
from highlander.scrapers.moxfield import fetch_deck
from highlander.services.bracket_classifier import classify_bracket

router = APIRouter(tags=["bracket"])


@router.get("/commander-bracket")
def commander_bracket(
    deck_list: Annotated[str | None, Query(alias="deckList")] = None,
    deck_id: Annotated[str | None, Query(alias="deckId")] = None,
    power_score: Annotated[float | None, Query(alias="powerScore")] = None,
) -> dict[str, Any]:
    """
    Classify a deck into a commander bracket.

    deckId takes precedence over deckList when both are given.
    """
    if deck_id:
        deck = fetch_deck(deck_id)
        if deck.total_cards() > MAX_LOOSE_DECK_CARDS:
            raise FormatError(f"Deck has more than {MAX_LOOSE_DECK_CARDS} cards")
        card_names = deck.card_names()
    elif deck_list:
        card_names = parse_card_names(deck_list)
    else:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="No deck information provided",
        )

    return classify_bracket(card_names, power_score).to_dict()
