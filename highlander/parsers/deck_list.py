"""
Parser for the plain-text deck list format.

Format:
    <quantity> <card name>      (main deck, one line per card)
    <blank line>                (separator)
    <quantity> <card name>      (commander)

Example:
    1 Lightning Bolt
    1 Counterspell
    45 Island

    1 Niv-Mizzet, Parun

Anything after the commander line is ignored.
"""

import re

from highlander.models.deck import DeckEntry, DeckList
from highlander.models.failure import FailureKind, KnownError
from highlander.models.legality import REQUIRED_DECK_SIZE

# Pattern: "4 Lightning Bolt" -> (quantity token, name)
# Only the first whitespace run splits; the name is kept verbatim
DECK_LINE_PATTERN = re.compile(r"^(\S+)(?:\s+(.*))?$")

# ASCII digits only
QUANTITY_PATTERN = re.compile(r"[0-9]+")

# Pattern for the bracket endpoint: "1x Sol Ring", "1 Sol Ring" or "Sol Ring"
# Groups: (optional count, card_name)
CARD_NAME_LINE_PATTERN = re.compile(r"(?:^|\s)(?:(\d+)x?\s+)?(.+)$")

# Upper bound on cards in a loose deck list (commander decks plus sideboard slack)
MAX_LOOSE_DECK_CARDS = 2 * REQUIRED_DECK_SIZE


class DeckListError(KnownError):
    """Base class for deck list normalization failures."""

    def __init__(
        self,
        message: str,
        kind: FailureKind = FailureKind.INVALID_DECK_FORMAT,
        detail: str | None = None,
    ):
        super().__init__(kind=kind, message=message, detail=detail, status_code=400)


class FormatError(DeckListError):
    """Raised when the deck list structure is wrong (separator, commander, names)."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(f"Invalid deck list format: {message}", detail=detail)


class InvalidQuantityError(DeckListError):
    """Raised when a line's quantity is not a positive integer."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(
            f"Invalid quantity in line: {line}",
            kind=FailureKind.INVALID_QUANTITY,
        )


def parse_quantity(token: str, line: str) -> int:
    """Parse a positive integer quantity, naming the offending line on failure."""
    if QUANTITY_PATTERN.fullmatch(token) is None:
        raise InvalidQuantityError(line)
    quantity = int(token)
    if quantity < 1:
        raise InvalidQuantityError(line)
    return quantity


def parse_deck_line(line: str) -> DeckEntry:
    """
    Parse one "<quantity> <name>" line.

    Raises:
        InvalidQuantityError: If the quantity is not a positive integer
        FormatError: If the line has a quantity but no card name
    """
    match = DECK_LINE_PATTERN.match(line)
    if match is None:
        raise FormatError("Empty card line")

    quantity_token, name = match.groups()
    quantity = parse_quantity(quantity_token, line)

    if not name:
        raise FormatError(f"Missing card name in line: {line}")

    return DeckEntry(name=name, quantity=quantity)


def parse_deck_list(raw_text: str) -> DeckList:
    """
    Parse a raw text deck list into a DeckList.

    Args:
        raw_text: Deck list text as submitted

    Returns:
        DeckList with main deck entries in input order

    Raises:
        FormatError: If there is no separator line or no commander line
        InvalidQuantityError: If any quantity is not a positive integer
    """
    lines = [line.strip() for line in raw_text.split("\n")]

    try:
        separator = lines.index("")
    except ValueError:
        raise FormatError("No separator line found") from None

    commander_line = next((line for line in lines[separator + 1 :] if line), None)
    if commander_line is None:
        raise FormatError("No commander found")

    main_deck = tuple(parse_deck_line(line) for line in lines[:separator])
    commander = parse_deck_line(commander_line)

    return DeckList(main_deck=main_deck, commander=commander)


def parse_card_names(text: str) -> list[str]:
    """
    Parse a loose deck list into a flat list of card names.

    Lines look like "1x Card Name", "1 Card Name" or just "Card Name".
    A count expands to that many copies. Blank lines and lines starting
    with "//" are skipped. An unrecognized line is taken as a card name.

    Args:
        text: Deck list text

    Returns:
        One name per physical card, in input order

    Raises:
        FormatError: If the list holds more than MAX_LOOSE_DECK_CARDS cards
    """
    names: list[str] = []

    for line in text.split("\n"):
        line = line.strip()
        if not line or line.startswith("//"):
            continue

        match = CARD_NAME_LINE_PATTERN.match(line)
        if not match:
            continue

        count_token, name = match.groups()
        # Reject long digit runs before int()
        if count_token and len(count_token.lstrip("0")) > len(str(MAX_LOOSE_DECK_CARDS)):
            raise FormatError(f"Deck list has more than {MAX_LOOSE_DECK_CARDS} cards")
        count = int(count_token) if count_token else 1
        if len(names) + count > MAX_LOOSE_DECK_CARDS:
            raise FormatError(f"Deck list has more than {MAX_LOOSE_DECK_CARDS} cards")
        names.extend([name.strip()] * count)

    return names
