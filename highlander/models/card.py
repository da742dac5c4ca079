"""
Card Reference Models.

A CardRecord is the read-only view of one entry of the card snapshot.
Names are NOT unique: reprints, tokens and their namesake cards can share
a name, so every consumer must go through classification before trusting
a record as a deck card.
"""

from dataclasses import dataclass, field
from enum import Enum

# Layouts that only ever describe tokens
TOKEN_LAYOUTS = frozenset({"token", "double_faced_token"})

# Canonical WUBRG ordering for rendering color identities
COLOR_ORDER = ("W", "U", "B", "R", "G")


class CardKind(str, Enum):
    """Whether a record is a real card or a token."""

    PHYSICAL = "physical"
    TOKEN = "token"


@dataclass(frozen=True, slots=True)
class CardFace:
    """One named face of a multi-faced card."""

    name: str


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    A card from the reference snapshot.

    Attributes:
        name: Primary name ("Front // Back" for multi-faced cards)
        color_identity: Color symbols in the card's identity (empty = colorless)
        type_line: Full type line (e.g., "Legendary Creature — Dragon Wizard")
        layout: Scryfall layout (normal, transform, token, ...)
        secondary_legal: True if legal in the reference constructed format
        faces: Named faces for multi-faced cards, empty otherwise
        reserved: True if the card is on the Reserved List
    """

    name: str
    color_identity: frozenset[str] = field(default_factory=frozenset)
    type_line: str = ""
    layout: str = "normal"
    secondary_legal: bool = False
    faces: tuple[CardFace, ...] = ()
    reserved: bool = False

    @property
    def face_names(self) -> frozenset[str]:
        """Names of every face on this card."""
        return frozenset(face.name for face in self.faces)

    @property
    def is_creature(self) -> bool:
        """True if the type line mentions Creature."""
        return "creature" in self.type_line.lower()


def classify_card(record: CardRecord) -> CardKind:
    """
    Classify a record as a physical card or a token.

    A record is a token when its layout is a token layout or its type line
    mentions "token" in any case.
    """
    if record.layout in TOKEN_LAYOUTS:
        return CardKind.TOKEN
    if "token" in record.type_line.lower():
        return CardKind.TOKEN
    return CardKind.PHYSICAL


def sort_colors(colors: frozenset[str] | set[str]) -> tuple[str, ...]:
    """Render a color set in WUBRG order, unknown symbols last."""
    known = [c for c in COLOR_ORDER if c in colors]
    unknown = sorted(c for c in colors if c not in COLOR_ORDER)
    return tuple(known + unknown)
