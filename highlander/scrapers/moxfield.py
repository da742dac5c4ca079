"""
Moxfield deck fetcher.

Fetches a public deck from the Moxfield v2 API and normalizes it into a
DeckList.

Retries on 429 and on network errors with a growing per-request timeout
(base * 1.5^attempt, capped). Any other non-success status is reported
with the upstream status code.
"""

import logging
import re
import time
from typing import Any

import httpx

from highlander.config import (
    FETCH_BACKOFF_FACTOR,
    MAX_FETCH_TIMEOUT_SECONDS,
    settings,
)
from highlander.models.deck import DeckList
from highlander.models.failure import FailureKind, KnownError
from highlander.parsers.moxfield import normalize_moxfield_deck

logger = logging.getLogger(__name__)

# Moxfield public ids: letters, digits and hyphens
DECK_ID_PATTERN = re.compile(r"^[a-zA-Z0-9\-]+$")
MAX_DECK_ID_LENGTH = 100


class InvalidDeckIdError(KnownError):
    """Raised when a deck id is empty, too long or has unexpected characters."""

    def __init__(self, deck_id: str):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid deck ID format",
            detail=deck_id[:MAX_DECK_ID_LENGTH],
            status_code=400,
        )


class DeckFetchError(KnownError):
    """Raised when Moxfield cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: int, detail: str | None = None):
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=message,
            detail=detail,
            status_code=status_code,
        )


def validate_deck_id(deck_id: str) -> bool:
    """Check a deck id before it is put into an upstream URL."""
    if not deck_id or len(deck_id) > MAX_DECK_ID_LENGTH:
        return False
    return DECK_ID_PATTERN.match(deck_id) is not None


def backoff_timeout(attempt: int) -> float:
    """Request timeout (and retry delay) in seconds for the given attempt number."""
    return min(
        settings.fetch_timeout_seconds * FETCH_BACKOFF_FACTOR**attempt,
        MAX_FETCH_TIMEOUT_SECONDS,
    )


def _request_headers() -> dict[str, str]:
    return {"Accept": "application/json", "User-Agent": settings.user_agent}


def fetch_moxfield_payload(deck_id: str, client: httpx.Client | None = None) -> dict[str, Any]:
    """
    Fetch the raw Moxfield payload for a deck.

    Args:
        deck_id: Moxfield public deck id
        client: Optional httpx client for connection reuse

    Returns:
        Decoded JSON payload

    Raises:
        InvalidDeckIdError: If the id fails validation
        DeckFetchError: If the upstream request fails after retries
    """
    if not validate_deck_id(deck_id):
        raise InvalidDeckIdError(deck_id)

    if client is None:
        with httpx.Client(follow_redirects=True) as owned_client:
            return _fetch_with_retries(deck_id, owned_client)
    return _fetch_with_retries(deck_id, client)


def _fetch_with_retries(deck_id: str, client: httpx.Client) -> dict[str, Any]:
    url = f"{settings.moxfield_api_base}/{deck_id}"
    max_retries = settings.fetch_max_retries

    for attempt in range(max_retries + 1):
        if attempt > 0:
            logger.info("Retrying fetch for deck %s (attempt %d/%d)", deck_id, attempt, max_retries)

        try:
            response = client.get(url, headers=_request_headers(), timeout=backoff_timeout(attempt))
        except httpx.TransportError as e:
            if attempt < max_retries:
                logger.warning("Network error fetching deck %s: %s", deck_id, e)
                time.sleep(backoff_timeout(attempt + 1))
                continue
            raise DeckFetchError(
                "Request timeout or network error fetching deck from Moxfield",
                status_code=504,
                detail=type(e).__name__,
            ) from e

        if response.status_code == 429 and attempt < max_retries:
            logger.warning("Moxfield rate limited deck %s", deck_id)
            time.sleep(backoff_timeout(attempt + 1))
            continue

        if not response.is_success:
            raise DeckFetchError(
                f"Failed to fetch deck: {response.reason_phrase}",
                status_code=response.status_code,
            )

        logger.info("Fetched deck %s", deck_id)
        try:
            return response.json()
        except ValueError as e:
            raise DeckFetchError(
                "Moxfield returned an unreadable response",
                status_code=502,
                detail=str(e),
            ) from e

    raise DeckFetchError("Failed to fetch deck after multiple attempts", status_code=500)


def fetch_deck(deck_id: str, client: httpx.Client | None = None) -> DeckList:
    """
    Fetch a Moxfield deck and normalize it.

    Raises:
        InvalidDeckIdError: If the id fails validation
        DeckFetchError: If the upstream request fails
        FormatError: If the deck has no commander or an empty mainboard
    """
    payload = fetch_moxfield_payload(deck_id, client)
    return normalize_moxfield_deck(payload)
