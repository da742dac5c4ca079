from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """
    One line of a deck list.

    Attributes:
        name: Card name exactly as cited in the list
        quantity: Number of copies claimed (positive)
    """

    name: str
    quantity: int

    def to_dict(self) -> dict[str, Any]:
        return {"quantity": self.quantity, "name": self.name}


@dataclass(frozen=True, slots=True)
class DeckList:
    """
    A normalized deck: main deck lines plus the commander.

    Built once per request by a normalizer and never mutated.
    The commander quantity is expected to be 1 but is not enforced here.
    """

    main_deck: tuple[DeckEntry, ...]
    commander: DeckEntry

    def total_cards(self) -> int:
        """Sum of every quantity, commander included."""
        return sum(entry.quantity for entry in self.main_deck) + self.commander.quantity

    def card_names(self) -> list[str]:
        """One name per physical card, commander first."""
        names = [self.commander.name] * self.commander.quantity
        for entry in self.main_deck:
            names.extend([entry.name] * entry.quantity)
        return names

    def to_dict(self) -> dict[str, Any]:
        """Render the request shape accepted by POST /check-legality."""
        return {
            "cards": [entry.to_dict() for entry in self.main_deck],
            "commander": self.commander.to_dict(),
        }
