"""
Scryfall card record parsing.

Converts raw Scryfall card objects into CardRecord values. This is the
deserialization boundary for the card snapshot: records missing required
fields are rejected here instead of surfacing as missing-key errors inside
the legality engine.

Bulk data: https://scryfall.com/docs/api/bulk-data
"""

from typing import Any

from highlander.models.card import CardFace, CardRecord

# Fields every snapshot record must carry
REQUIRED_FIELDS = ("name", "legalities", "games")

# Fields kept when trimming bulk data for the on-disk cache
CACHED_FIELDS = (
    "name",
    "oracle_id",
    "legalities",
    "games",
    "layout",
    "type_line",
    "set_type",
    "card_faces",
    "color_identity",
    "reserved",
)

# Card types that never appear in constructed decks
EXCLUDED_TYPES = ("vanguard", "scheme", "conspiracy", "phenomenon")


class InvalidCardRecordError(ValueError):
    """Raised when a raw card object is missing required fields or has bad types."""

    def __init__(self, reason: str, name: str | None = None):
        self.reason = reason
        self.name = name
        label = f" '{name}'" if name else ""
        super().__init__(f"Invalid card record{label}: {reason}")


def is_card_eligible(card: dict[str, Any]) -> bool:
    """
    Check if a raw card belongs in the snapshot at all.

    Excludes non-paper cards, tokens, memorabilia, emblems and
    casual-only card types.
    """
    if "paper" not in (card.get("games") or []):
        return False

    layout = str(card.get("layout") or "").lower()
    type_line = str(card.get("type_line") or "").lower()
    set_type = str(card.get("set_type") or "").lower()
    name = str(card.get("name") or "").lower()

    if "token" in layout or "token" in type_line:
        return False
    if "memorabilia" in set_type or "token" in set_type:
        return False
    if "emblem" in name:
        return False

    return not any(excluded in type_line for excluded in EXCLUDED_TYPES)


def trim_card_data(card: dict[str, Any]) -> dict[str, Any]:
    """Keep only the fields the snapshot needs."""
    return {key: card[key] for key in CACHED_FIELDS if key in card}


def parse_card_record(card: dict[str, Any], secondary_format: str) -> CardRecord:
    """
    Build a CardRecord from a raw Scryfall card object.

    Args:
        card: Raw card object
        secondary_format: Legality key used as the default signal (e.g. "pioneer")

    Returns:
        Parsed CardRecord

    Raises:
        InvalidCardRecordError: If required fields are missing or malformed
    """
    if not isinstance(card, dict):
        raise InvalidCardRecordError(f"expected an object, got {type(card).__name__}")

    name = card.get("name")
    label = name if isinstance(name, str) else None
    for key in REQUIRED_FIELDS:
        if key not in card:
            raise InvalidCardRecordError(f"missing '{key}'", label)

    if not isinstance(name, str) or not name:
        raise InvalidCardRecordError("name must be a non-empty string")

    legalities = card["legalities"]
    if not isinstance(legalities, dict):
        raise InvalidCardRecordError("legalities must be an object", name)

    if not isinstance(card["games"], list):
        raise InvalidCardRecordError("games must be a list", name)

    color_identity = card.get("color_identity") or []
    if not isinstance(color_identity, list):
        raise InvalidCardRecordError("color_identity must be a list", name)

    card_faces = card.get("card_faces") or []
    if not isinstance(card_faces, list):
        raise InvalidCardRecordError("card_faces must be a list", name)

    faces: list[CardFace] = []
    for face in card_faces:
        face_name = face.get("name") if isinstance(face, dict) else None
        if isinstance(face_name, str) and face_name:
            faces.append(CardFace(name=face_name))

    return CardRecord(
        name=name,
        color_identity=frozenset(str(color) for color in color_identity),
        type_line=str(card.get("type_line") or ""),
        layout=str(card.get("layout") or "normal"),
        secondary_legal=legalities.get(secondary_format) == "legal",
        faces=tuple(faces),
        reserved=bool(card.get("reserved", False)),
    )
