"""Shared fixtures: a small card store, rule lists and raw Scryfall card builders."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from highlander.models.card import CardFace, CardRecord
from highlander.models.deck import DeckEntry, DeckList
from highlander.models.rule_lists import RuleLists
from highlander.services.card_store import CardStore, card_store_registry
from highlander.services.rule_lists import get_rule_lists

COMMANDER = "Niv-Mizzet, Parun"


@pytest.fixture(autouse=True)
def reset_reference_data() -> Iterator[None]:
    """Start every test without a loaded card store or cached rule lists."""
    card_store_registry.clear()
    get_rule_lists.cache_clear()
    yield
    card_store_registry.clear()
    get_rule_lists.cache_clear()


def card(
    name: str,
    colors: str = "",
    type_line: str = "Instant",
    legal: bool = True,
    **kwargs: Any,
) -> CardRecord:
    """Shorthand CardRecord builder; colors is a string like "UR"."""
    return CardRecord(
        name=name,
        color_identity=frozenset(colors),
        type_line=type_line,
        secondary_legal=legal,
        **kwargs,
    )


@pytest.fixture
def card_records() -> list[CardRecord]:
    return [
        card(COMMANDER, "UR", "Legendary Creature — Dragon Wizard"),
        card("Island", type_line="Basic Land — Island"),
        card("Mountain", type_line="Basic Land — Mountain"),
        card("Forest", type_line="Basic Land — Forest"),
        card("Opt", "U"),
        card("Lightning Strike", "R"),
        card("Counterspell", "U"),
        card("Llanowar Elves", "G", "Creature — Elf Druid"),
        card("Rat Colony", "B", "Creature — Rat"),
        card("Teferi, Hero of Dominaria", "WU", "Legendary Planeswalker — Teferi"),
        card("Oko, Thief of Crowns", "GU", "Legendary Planeswalker — Oko", legal=False),
        card("Sol Ring", type_line="Artifact", legal=False),
        card(
            "Lion's Eye Diamond",
            type_line="Artifact",
            legal=False,
            reserved=True,
        ),
        card("Ornithopter", type_line="Artifact Creature — Thopter", reserved=True),
        card("Shivan Dragon", "R", "Creature — Dragon"),
        card(
            "Delver of Secrets // Insectile Aberration",
            "U",
            "Creature — Human Wizard // Creature — Human Insect",
            layout="transform",
            faces=(CardFace("Delver of Secrets"), CardFace("Insectile Aberration")),
        ),
        card("Goblin", "R", "Token Creature — Goblin", layout="token"),
        card("Treasure", type_line="Token Artifact — Treasure", layout="token"),
    ]


@pytest.fixture
def card_store(card_records: list[CardRecord]) -> CardStore:
    return CardStore(card_records)


@pytest.fixture
def rules() -> RuleLists:
    return RuleLists.from_iterables(
        banned=["Teferi, Hero of Dominaria", "Oko, Thief of Crowns"],
        allowed=["Oko, Thief of Crowns"],
        singleton_exceptions=["Rat Colony"],
    )


@pytest.fixture
def make_deck() -> Callable[..., DeckList]:
    """Build a DeckList from (quantity, name) pairs."""

    def _make(
        main: list[tuple[int, str]],
        commander: str = COMMANDER,
        commander_quantity: int = 1,
    ) -> DeckList:
        return DeckList(
            main_deck=tuple(DeckEntry(name=name, quantity=qty) for qty, name in main),
            commander=DeckEntry(name=commander, quantity=commander_quantity),
        )

    return _make


@pytest.fixture
def legal_main_deck() -> list[tuple[int, str]]:
    """99 cards inside U/R, all legal, no duplicates outside basics."""
    return [
        (1, "Opt"),
        (1, "Lightning Strike"),
        (1, "Counterspell"),
        (48, "Island"),
        (48, "Mountain"),
    ]


@pytest.fixture
def scryfall_card() -> Callable[..., dict[str, Any]]:
    """Build raw Scryfall-shaped card objects."""

    def _make(name: str, **overrides: Any) -> dict[str, Any]:
        raw: dict[str, Any] = {
            "name": name,
            "legalities": {"pioneer": "legal", "commander": "legal"},
            "games": ["paper", "arena"],
            "layout": "normal",
            "type_line": "Instant",
            "set_type": "expansion",
            "color_identity": [],
        }
        raw.update(overrides)
        return raw

    return _make
