"""
Tests for the card reference store.

These tests verify:
1. Lookups are exact and never expose the store's internals
2. Malformed snapshot records are quarantined without failing the load
3. Registry swaps are atomic and a failed reload keeps the previous store
"""

import json
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from highlander.models.card import CardRecord
from highlander.services.card_store import (
    CardStore,
    CardStoreError,
    CardStoreRegistry,
    build_card_store,
    load_card_store,
)

RawCard = Callable[..., dict[str, Any]]


class TestCardStore:
    """Tests for name and face lookups."""

    def test_lookup_by_name(self) -> None:
        """find_by_name returns every record with that exact name."""
        a = CardRecord(name="Opt")
        b = CardRecord(name="Opt", layout="token")
        store = CardStore([a, b, CardRecord(name="Shock")])

        assert store.find_by_name("Opt") == [a, b]
        assert store.find_by_name("opt") == []

    def test_lookup_by_face_name(self, card_store: CardStore) -> None:
        """Multi-faced cards are indexed by each face name."""
        matches = card_store.find_by_face_name("Insectile Aberration")

        assert [record.name for record in matches] == [
            "Delver of Secrets // Insectile Aberration"
        ]

    def test_len_and_contains(self, card_store: CardStore, card_records) -> None:
        """len() counts records and `in` checks primary names."""
        assert len(card_store) == len(card_records)
        assert "Opt" in card_store
        assert "Nope" not in card_store

    def test_lookup_returns_copy(self, card_store: CardStore) -> None:
        """Mutating a lookup result does not change the store."""
        card_store.find_by_name("Opt").clear()

        assert len(card_store.find_by_name("Opt")) == 1


class TestBuildCardStore:
    """Tests for building a store from raw Scryfall objects."""

    def test_parses_valid_records(self, scryfall_card: RawCard) -> None:
        """Valid records are parsed into CardRecords."""
        store = build_card_store(
            [scryfall_card("Opt", color_identity=["U"])], secondary_format="pioneer"
        )

        record = store.find_by_name("Opt")[0]
        assert record.color_identity == frozenset({"U"})
        assert record.secondary_legal is True

    def test_quarantines_malformed_records(
        self, scryfall_card: RawCard, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Bad records are skipped with a warning; good ones survive."""
        missing_legalities = scryfall_card("Broken")
        del missing_legalities["legalities"]

        store = build_card_store(
            [scryfall_card("Opt"), missing_legalities, "not a card", {"name": 7}],
            secondary_format="pioneer",
        )

        assert len(store) == 1
        assert "Opt" in store
        assert "Quarantined 3 malformed card records" in caplog.text

    def test_quarantines_record_with_non_list_faces(self, scryfall_card: RawCard) -> None:
        """A wrongly typed card_faces field skips that record, not the whole load."""
        store = build_card_store(
            [scryfall_card("Opt"), scryfall_card("Bad", card_faces=5)],
            secondary_format="pioneer",
        )

        assert len(store) == 1
        assert "Bad" not in store

    def test_drops_ineligible_records(self, scryfall_card: RawCard) -> None:
        """Tokens, emblems and digital-only cards never enter the store."""
        store = build_card_store(
            [
                scryfall_card("Opt"),
                scryfall_card("Goblin", layout="token", type_line="Token Creature — Goblin"),
                scryfall_card("Emblem — Chandra", type_line="Emblem"),
                scryfall_card("Digital Card", games=["arena"]),
            ],
            secondary_format="pioneer",
        )

        assert len(store) == 1

    def test_secondary_format_selects_legality_key(self, scryfall_card: RawCard) -> None:
        """The configured format decides which legality flag is read."""
        raw = scryfall_card("Sol Ring", legalities={"pioneer": "not_legal", "commander": "legal"})

        pioneer = build_card_store([raw], secondary_format="pioneer")
        commander = build_card_store([raw], secondary_format="commander")

        assert pioneer.find_by_name("Sol Ring")[0].secondary_legal is False
        assert commander.find_by_name("Sol Ring")[0].secondary_legal is True


class TestLoadCardStore:
    """Tests for loading the on-disk snapshot."""

    def test_loads_snapshot(self, tmp_path: Path, scryfall_card: RawCard) -> None:
        """Every valid record in the file is indexed."""
        path = tmp_path / "cards.json"
        path.write_text(json.dumps([scryfall_card("Opt"), scryfall_card("Shock")]))

        store = load_card_store(path, secondary_format="pioneer")

        assert len(store) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing snapshot is a 503-class error, not an empty store."""
        with pytest.raises(CardStoreError) as exc_info:
            load_card_store(tmp_path / "missing.json")

        assert exc_info.value.status_code == 503

    def test_invalid_json(self, tmp_path: Path) -> None:
        """An unparseable file raises CardStoreError."""
        path = tmp_path / "cards.json"
        path.write_text("{not json")

        with pytest.raises(CardStoreError):
            load_card_store(path)

    def test_not_an_array(self, tmp_path: Path) -> None:
        """A top-level object instead of an array is rejected."""
        path = tmp_path / "cards.json"
        path.write_text(json.dumps({"data": []}))

        with pytest.raises(CardStoreError, match="Card data"):
            load_card_store(path)


class TestCardStoreRegistry:
    """Tests for swapping the current store."""

    def test_current_before_load_raises(self) -> None:
        """Asking for a store before one is installed fails loudly."""
        registry = CardStoreRegistry()

        assert registry.is_loaded is False
        with pytest.raises(CardStoreError):
            registry.current()

    def test_replace_swaps_whole_store(self) -> None:
        """Readers holding the old store keep seeing it after a swap."""
        old = CardStore([CardRecord(name="Opt")])
        new = CardStore([CardRecord(name="Shock")])
        registry = CardStoreRegistry(old)

        held = registry.current()
        previous = registry.replace(new)

        assert previous is old
        assert held is old
        assert "Opt" in held
        assert registry.current() is new

    def test_reload_from_disk(self, tmp_path: Path, scryfall_card: RawCard) -> None:
        """reload() installs a store built from the given snapshot."""
        path = tmp_path / "cards.json"
        path.write_text(json.dumps([scryfall_card("Opt")]))
        registry = CardStoreRegistry()

        registry.reload(path)

        assert "Opt" in registry.current()

    def test_failed_reload_keeps_previous_store(self, tmp_path: Path) -> None:
        """A reload error leaves the current store in place."""
        store = CardStore([CardRecord(name="Opt")])
        registry = CardStoreRegistry(store)

        with pytest.raises(CardStoreError):
            registry.reload(tmp_path / "missing.json")

        assert registry.current() is store

    def test_concurrent_readers_see_complete_stores(self) -> None:
        """Every read returns one of the installed stores, never anything else."""
        stores = [CardStore([CardRecord(name=f"Card {i}")]) for i in range(20)]
        registry = CardStoreRegistry(stores[0])
        seen: list[CardStore] = []

        def reader() -> None:
            for _ in range(200):
                seen.append(registry.current())

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for store in stores[1:]:
            registry.replace(store)
        for thread in threads:
            thread.join()

        assert all(any(s is store for store in stores) for s in seen)
        assert registry.current() is stores[-1]

    def test_clear(self) -> None:
        """clear() returns the registry to the unloaded state."""
        registry = CardStoreRegistry(CardStore())

        registry.clear()

        assert registry.is_loaded is False
