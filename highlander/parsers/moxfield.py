"""
Parser for Moxfield v2 deck payloads.

Payload shape (only the fields used here):
    {
        "commanders": {"<key>": {"quantity": 1, "card": {"name": "..."}}},
        "mainboard": {"<key>": {"quantity": 1, "card": {"name": "..."}}}
    }

Only the first commander is kept and always counted once.
"""

from typing import Any

from highlander.models.deck import DeckEntry, DeckList
from highlander.parsers.deck_list import FormatError, InvalidQuantityError


def _card_name(entry: Any) -> str | None:
    if not isinstance(entry, dict):
        return None
    card = entry.get("card")
    if not isinstance(card, dict):
        return None
    name = card.get("name")
    return name if isinstance(name, str) and name else None


def _section(payload: dict[str, Any], key: str) -> list[Any]:
    section = payload.get(key) or {}
    if isinstance(section, dict):
        return list(section.values())
    if isinstance(section, list):
        return section
    raise FormatError(f"'{key}' must be an object")


def normalize_moxfield_deck(payload: dict[str, Any]) -> DeckList:
    """
    Convert a Moxfield deck payload into a DeckList.

    Args:
        payload: Decoded JSON from the Moxfield v2 deck endpoint

    Returns:
        DeckList with the first commander and every mainboard entry

    Raises:
        FormatError: If there is no commander, no mainboard, or a card has no name
        InvalidQuantityError: If a mainboard quantity is not a positive integer
    """
    if not isinstance(payload, dict):
        raise FormatError("Deck payload must be an object")

    commanders = _section(payload, "commanders")
    commander_name = _card_name(commanders[0]) if commanders else None
    if commander_name is None:
        raise FormatError("No commander found in deck")

    main_deck: list[DeckEntry] = []
    for entry in _section(payload, "mainboard"):
        name = _card_name(entry)
        if name is None:
            raise FormatError("Mainboard entry has no card name")

        quantity = entry.get("quantity")
        # bool is an int subclass; reject it explicitly
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantityError(f"{quantity} {name}")

        main_deck.append(DeckEntry(name=name, quantity=quantity))

    if not main_deck:
        raise FormatError("Deck contains no cards in the mainboard")

    return DeckList(
        main_deck=tuple(main_deck),
        commander=DeckEntry(name=commander_name, quantity=1),
    )
