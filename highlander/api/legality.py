"""
Legality API endpoint.

Accepts a deck either as structured entries or as raw deck list text and
returns the legality verdict. An illegal deck is a 200 response with
"legal": false; only malformed input is an error.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from highlander.api.dependencies import get_card_store, get_rules
from highlander.models.deck import DeckEntry, DeckList
from highlander.models.failure import FailureKind, KnownError
from highlander.models.rule_lists import RuleLists
from highlander.parsers.deck_list import FormatError, InvalidQuantityError, parse_deck_list
from highlander.services.card_store import CardStore
from highlander.services.legality_engine import LegalityEngine

router = APIRouter(tags=["legality"])


class DeckCardModel(BaseModel):
    """One deck entry in a legality request."""

    quantity: int
    name: str

    def to_entry(self) -> DeckEntry:
        if self.quantity < 1:
            raise InvalidQuantityError(f"{self.quantity} {self.name}")
        if not self.name.strip():
            raise FormatError("Card entry has no name")
        return DeckEntry(name=self.name, quantity=self.quantity)


class LegalityCheckRequest(BaseModel):
    """Request body for POST /check-legality."""

    model_config = ConfigDict(populate_by_name=True)

    cards: list[DeckCardModel] | None = Field(
        default=None,
        description="Main deck entries (used with commander)",
    )
    commander: DeckCardModel | None = Field(
        default=None,
        description="Commander entry (used with cards)",
    )
    deck_list: str | None = Field(
        default=None,
        alias="deckList",
        description="Raw deck list text: main deck, blank line, commander",
        examples=["1 Counterspell\n98 Island\n\n1 Niv-Mizzet, Parun"],
    )

    def to_deck_list(self) -> DeckList:
        """
        Normalize the request into a DeckList.

        Raises:
            DeckListError: If the raw text or an entry is malformed
            KnownError: If neither form of deck was provided
        """
        if self.deck_list is not None:
            return parse_deck_list(self.deck_list)

        if self.cards is None or self.commander is None:
            raise KnownError(
                kind=FailureKind.INVALID_INPUT,
                message="Invalid deck data",
                detail="Provide either 'cards' and 'commander' or 'deckList'",
            )

        return DeckList(
            main_deck=tuple(card.to_entry() for card in self.cards),
            commander=self.commander.to_entry(),
        )


@router.post("/check-legality")
async def check_legality(
    request: LegalityCheckRequest,
    store: Annotated[CardStore, Depends(get_card_store)],
    rules: Annotated[RuleLists, Depends(get_rules)],
) -> dict[str, Any]:
    """
    Check a deck against the format rules.

    Every check is computed; see legalIssues for the individual results.
    """
    deck = request.to_deck_list()
    verdict = LegalityEngine(store, rules).evaluate(deck)
    return verdict.to_dict()
