"""
Card reference store.

Holds the card snapshot in memory and answers name lookups for the
legality engine.

INVARIANTS:
1. A CardStore is immutable once built; lookups never mutate it
2. Malformed snapshot records are quarantined at load time, never indexed
3. Reloads build a new store and swap the reference (copy-on-write)
"""

import json
import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from highlander.config import settings
from highlander.models.card import CardRecord
from highlander.models.failure import FailureKind, KnownError
from highlander.parsers.scryfall import (
    InvalidCardRecordError,
    is_card_eligible,
    parse_card_record,
)

logger = logging.getLogger(__name__)


class CardReferenceStore(Protocol):
    """What the legality engine needs from a card source."""

    def find_by_name(self, name: str) -> list[CardRecord]: ...

    def find_by_face_name(self, name: str) -> list[CardRecord]: ...


class CardStoreError(KnownError):
    """Raised when the card snapshot cannot be loaded."""

    def __init__(self, detail: str):
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message="Card data is not available yet.",
            detail=detail,
            status_code=503,
        )


class CardStore:
    """
    Read-only index of card records.

    Records keep their snapshot order inside each lookup bucket so that
    "first match" is deterministic.
    """

    def __init__(self, records: Iterable[CardRecord] = ()) -> None:
        by_name: dict[str, list[CardRecord]] = {}
        by_face: dict[str, list[CardRecord]] = {}
        count = 0

        for record in records:
            by_name.setdefault(record.name, []).append(record)
            for face_name in dict.fromkeys(face.name for face in record.faces):
                by_face.setdefault(face_name, []).append(record)
            count += 1

        self._by_name = {name: tuple(bucket) for name, bucket in by_name.items()}
        self._by_face = {name: tuple(bucket) for name, bucket in by_face.items()}
        self._count = count

    def __len__(self) -> int:
        return self._count

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def find_by_name(self, name: str) -> list[CardRecord]:
        """All records whose primary name is exactly `name`."""
        return list(self._by_name.get(name, ()))

    def find_by_face_name(self, name: str) -> list[CardRecord]:
        """All multi-faced records with a face named exactly `name`."""
        return list(self._by_face.get(name, ()))


def build_card_store(
    raw_cards: Iterable[Any],
    secondary_format: str | None = None,
) -> CardStore:
    """
    Parse raw Scryfall card objects into a CardStore.

    Malformed records are skipped and logged, not propagated. Records that
    can never appear in a deck (tokens, emblems, non-paper cards) are dropped.

    Args:
        raw_cards: Raw card objects (already decoded JSON)
        secondary_format: Legality key for the default signal. Defaults to settings

    Returns:
        CardStore with every valid record
    """
    if secondary_format is None:
        secondary_format = settings.secondary_format

    records: list[CardRecord] = []
    quarantined = 0
    ineligible = 0

    for raw in raw_cards:
        try:
            record = parse_card_record(raw, secondary_format)
        except InvalidCardRecordError as e:
            quarantined += 1
            logger.warning("Skipping card record: %s", e)
            continue
        if not is_card_eligible(raw):
            ineligible += 1
            continue
        records.append(record)

    if quarantined:
        logger.warning("Quarantined %d malformed card records", quarantined)
    if ineligible:
        logger.debug("Dropped %d ineligible card records", ineligible)

    return CardStore(records)


def load_card_store(path: Path | None = None, secondary_format: str | None = None) -> CardStore:
    """
    Load the card snapshot from disk.

    Args:
        path: Path to the JSON snapshot. Defaults to settings.card_cache_path
        secondary_format: Legality key for the default signal. Defaults to settings

    Returns:
        CardStore built from the snapshot

    Raises:
        CardStoreError: If the file is missing, unreadable or not a JSON array
    """
    if path is None:
        path = settings.card_cache_path

    if not path.exists():
        raise CardStoreError(
            f"Card snapshot not found at {path}. "
            "Run `python -m highlander.jobs.download_cards` first."
        )

    try:
        with open(path, encoding="utf-8") as f:
            raw_cards = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CardStoreError(f"Could not read card snapshot {path}: {e}") from e

    if not isinstance(raw_cards, list):
        raise CardStoreError(f"Card snapshot {path} is not a JSON array")

    store = build_card_store(raw_cards, secondary_format)
    logger.info("Loaded %d cards from %s", len(store), path)
    return store


class CardStoreRegistry:
    """
    Holds the current CardStore and swaps it atomically.

    Readers take a reference once per evaluation and keep using it even if
    a reload replaces the store mid-request.
    """

    def __init__(self, store: CardStore | None = None) -> None:
        self._lock = threading.Lock()
        self._store = store

    @property
    def is_loaded(self) -> bool:
        with self._lock:
            return self._store is not None

    def current(self) -> CardStore:
        """
        Get the current store.

        Raises:
            CardStoreError: If no store has been loaded yet
        """
        with self._lock:
            store = self._store
        if store is None:
            raise CardStoreError("Card store has not been loaded")
        return store

    def replace(self, store: CardStore) -> CardStore | None:
        """Install a new store, returning the previous one."""
        with self._lock:
            previous = self._store
            self._store = store
        return previous

    def reload(self, path: Path | None = None) -> CardStore:
        """Load a fresh snapshot and swap it in."""
        store = load_card_store(path)
        self.replace(store)
        return store

    def clear(self) -> None:
        with self._lock:
            self._store = None


card_store_registry = CardStoreRegistry()
