"""
Deck import API endpoint.

Fetches a public Moxfield deck and returns it in the shape accepted by
POST /check-legality.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Query

from highlander.models.failure import FailureKind, KnownError
from highlander.scrapers.moxfield import fetch_deck

logger = logging.getLogger(__name__)

router = APIRouter(tags=["decks"])


@router.get("/fetch-deck")
def fetch_moxfield_deck(
    deck_id: Annotated[str | None, Query(alias="id")] = None,
) -> dict[str, Any]:
    """
    Fetch and normalize a Moxfield deck.

    Returns {"cards": [...], "commander": {...}}.
    """
    if not deck_id:
        raise KnownError(kind=FailureKind.INVALID_INPUT, message="No deck ID provided")

    logger.info("Fetching Moxfield deck %s", deck_id)
    return fetch_deck(deck_id).to_dict()
