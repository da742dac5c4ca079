"""
Tests for Scryfall record parsing at the snapshot boundary.

Malformed records must raise InvalidCardRecordError here so the store can
quarantine them; nothing downstream sees a half-parsed card.
"""

from collections.abc import Callable
from typing import Any

import pytest

from highlander.parsers.scryfall import (
    CACHED_FIELDS,
    InvalidCardRecordError,
    is_card_eligible,
    parse_card_record,
    trim_card_data,
)

RawCard = Callable[..., dict[str, Any]]


class TestParseCardRecord:
    """Tests for building CardRecords from raw Scryfall objects."""

    def test_basic_fields(self, scryfall_card: RawCard) -> None:
        """Name, identity, type and the secondary flag are read."""
        raw = scryfall_card(
            "Niv-Mizzet, Parun",
            color_identity=["U", "R"],
            type_line="Legendary Creature — Dragon Wizard",
            reserved=False,
        )

        record = parse_card_record(raw, "pioneer")

        assert record.name == "Niv-Mizzet, Parun"
        assert record.color_identity == frozenset({"U", "R"})
        assert record.is_creature is True
        assert record.secondary_legal is True
        assert record.faces == ()

    def test_not_legal_in_secondary_format(self, scryfall_card: RawCard) -> None:
        """Only the exact value "legal" counts; "restricted" and "banned" do not."""
        for status in ("not_legal", "banned", "restricted"):
            raw = scryfall_card("Card", legalities={"pioneer": status})
            assert parse_card_record(raw, "pioneer").secondary_legal is False

    def test_missing_format_key(self, scryfall_card: RawCard) -> None:
        """A format absent from legalities means not legal."""
        raw = scryfall_card("Card", legalities={})

        assert parse_card_record(raw, "pioneer").secondary_legal is False

    def test_card_faces(self, scryfall_card: RawCard) -> None:
        """Named faces are kept; faces without a name are skipped."""
        raw = scryfall_card(
            "Fire // Ice",
            layout="split",
            card_faces=[{"name": "Fire"}, {"name": "Ice"}, {"oracle_text": "no name"}],
        )

        record = parse_card_record(raw, "pioneer")

        assert record.face_names == frozenset({"Fire", "Ice"})

    def test_reserved_flag(self, scryfall_card: RawCard) -> None:
        """The Reserved List flag is carried through."""
        raw = scryfall_card("Gaea's Cradle", reserved=True)

        assert parse_card_record(raw, "pioneer").reserved is True

    @pytest.mark.parametrize("missing", ["name", "legalities", "games"])
    def test_missing_required_field(self, scryfall_card: RawCard, missing: str) -> None:
        """Each required field is named in the error."""
        raw = scryfall_card("Opt")
        del raw[missing]

        with pytest.raises(InvalidCardRecordError, match=missing):
            parse_card_record(raw, "pioneer")

    def test_bad_field_types(self, scryfall_card: RawCard) -> None:
        """Wrongly typed fields are rejected instead of crashing later."""
        with pytest.raises(InvalidCardRecordError):
            parse_card_record(scryfall_card("Opt", legalities=["pioneer"]), "pioneer")
        with pytest.raises(InvalidCardRecordError):
            parse_card_record(scryfall_card("Opt", color_identity="U"), "pioneer")
        with pytest.raises(InvalidCardRecordError, match="card_faces"):
            parse_card_record(scryfall_card("Opt", card_faces=5), "pioneer")
        with pytest.raises(InvalidCardRecordError):
            parse_card_record(scryfall_card(""), "pioneer")

    def test_not_an_object(self) -> None:
        """Non-object records are rejected."""
        with pytest.raises(InvalidCardRecordError):
            parse_card_record(["Opt"], "pioneer")  # type: ignore[arg-type]


class TestIsCardEligible:
    """Tests for the snapshot eligibility filter."""

    def test_regular_paper_card(self, scryfall_card: RawCard) -> None:
        """A normal paper card is eligible."""
        assert is_card_eligible(scryfall_card("Opt")) is True

    def test_digital_only(self, scryfall_card: RawCard) -> None:
        """Cards not printed on paper are excluded."""
        assert is_card_eligible(scryfall_card("Opt", games=["arena", "mtgo"])) is False

    @pytest.mark.parametrize(
        "overrides",
        [
            {"layout": "token"},
            {"layout": "double_faced_token"},
            {"type_line": "Token Creature — Elf"},
            {"set_type": "token"},
            {"set_type": "memorabilia"},
            {"type_line": "Vanguard"},
            {"type_line": "Scheme"},
            {"type_line": "Conspiracy"},
            {"type_line": "Phenomenon"},
        ],
    )
    def test_excluded(self, scryfall_card: RawCard, overrides: dict[str, Any]) -> None:
        """Tokens, memorabilia and casual-only types are excluded."""
        assert is_card_eligible(scryfall_card("Thing", **overrides)) is False

    def test_emblem(self, scryfall_card: RawCard) -> None:
        """Emblems are excluded by name."""
        assert is_card_eligible(scryfall_card("Nissa Emblem")) is False


class TestTrimCardData:
    """Tests for trimming records to the cached fields."""

    def test_keeps_only_cached_fields(self, scryfall_card: RawCard) -> None:
        """Fields outside CACHED_FIELDS are dropped."""
        raw = scryfall_card("Opt", oracle_text="Scry 1.", prices={"usd": "0.10"})

        trimmed = trim_card_data(raw)

        assert set(trimmed) <= set(CACHED_FIELDS)
        assert "oracle_text" not in trimmed
        assert trimmed["name"] == "Opt"
