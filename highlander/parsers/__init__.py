from highlander.parsers.deck_list import (
    DeckListError,
    FormatError,
    InvalidQuantityError,
    parse_card_names,
    parse_deck_list,
)
from highlander.parsers.moxfield import normalize_moxfield_deck
from highlander.parsers.scryfall import (
    InvalidCardRecordError,
    is_card_eligible,
    parse_card_record,
    trim_card_data,
)

__all__ = [
    "DeckListError",
    "FormatError",
    "InvalidCardRecordError",
    "InvalidQuantityError",
    "is_card_eligible",
    "normalize_moxfield_deck",
    "parse_card_names",
    "parse_card_record",
    "parse_deck_list",
    "trim_card_data",
]
