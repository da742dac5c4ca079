"""
Card Resolution.

Maps a card name cited in a deck list to a single CardRecord.

INVARIANTS:
1. Tokens are never resolvable as deck cards
2. When several records share a name, the first physical one wins
3. A name matching only one face of a multi-faced card resolves to the
   owning card, looked up again by its full name (one level deep)
4. Resolution never raises: an unknown name resolves to None
"""

from highlander.models.card import CardKind, CardRecord, classify_card
from highlander.services.card_store import CardReferenceStore


def first_physical(records: list[CardRecord]) -> CardRecord | None:
    """Return the first non-token record, or None if all are tokens."""
    for record in records:
        if classify_card(record) is CardKind.PHYSICAL:
            return record
    return None


def resolve_card(name: str, store: CardReferenceStore) -> CardRecord | None:
    """
    Resolve a cited card name against the store.

    Args:
        name: Card name as written in the deck list
        store: Card reference store

    Returns:
        The resolved CardRecord, or None if the card cannot be found
    """
    matches = store.find_by_name(name)
    if matches:
        return first_physical(matches)

    # Cited by one face of a multi-faced card ("Front" for "Front // Back")
    owner = first_physical(store.find_by_face_name(name))
    if owner is None or owner.name == name:
        return None
    return first_physical(store.find_by_name(owner.name))
