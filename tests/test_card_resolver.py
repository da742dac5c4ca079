"""Tests for card classification and name resolution."""

from highlander.models.card import CardFace, CardKind, CardRecord, classify_card
from highlander.services.card_resolver import first_physical, resolve_card
from highlander.services.card_store import CardStore


def make_dfc(name: str, *faces: str, layout: str = "transform") -> CardRecord:
    return CardRecord(
        name=name,
        layout=layout,
        type_line="Creature",
        faces=tuple(CardFace(face) for face in faces),
        secondary_legal=True,
    )


class TestClassifyCard:
    """Tests for telling tokens apart from deck cards."""

    def test_normal_card_is_physical(self) -> None:
        """A regular card is physical."""
        assert classify_card(CardRecord(name="Opt")) is CardKind.PHYSICAL

    def test_token_layout(self) -> None:
        """Token layouts are tokens regardless of type line."""
        assert classify_card(CardRecord(name="Elf", layout="token")) is CardKind.TOKEN
        assert (
            classify_card(CardRecord(name="Incubator", layout="double_faced_token"))
            is CardKind.TOKEN
        )

    def test_token_type_line_any_case(self) -> None:
        """A "token" type line marks a token, case-insensitively."""
        record = CardRecord(name="Clue", type_line="TOKEN Artifact — Clue")

        assert classify_card(record) is CardKind.TOKEN


class TestResolveCard:
    """Tests for resolving a cited name to one card record."""

    def test_exact_name(self, card_store: CardStore) -> None:
        """A unique physical name resolves to itself."""
        record = resolve_card("Opt", card_store)

        assert record is not None
        assert record.name == "Opt"

    def test_unknown_name(self, card_store: CardStore) -> None:
        """Unknown names resolve to None instead of raising."""
        assert resolve_card("No Such Card", card_store) is None

    def test_single_token_match_is_not_found(self, card_store: CardStore) -> None:
        """A token is never a deck card."""
        assert resolve_card("Goblin", card_store) is None

    def test_prefers_physical_over_token(self) -> None:
        """When a token shares a card's name, the card wins."""
        token = CardRecord(name="Ragavan", layout="token", type_line="Token Creature")
        real = CardRecord(name="Ragavan", type_line="Legendary Creature — Monkey Pirate")
        store = CardStore([token, real])

        assert resolve_card("Ragavan", store) is real

    def test_only_tokens_is_not_found(self) -> None:
        """Several token records with one name still resolve to None."""
        store = CardStore(
            [
                CardRecord(name="Soldier", layout="token"),
                CardRecord(name="Soldier", type_line="Token Creature — Soldier"),
            ]
        )

        assert resolve_card("Soldier", store) is None

    def test_first_physical_match_wins(self) -> None:
        """Among several physical records the first in snapshot order wins."""
        first = CardRecord(name="Opt", secondary_legal=True)
        second = CardRecord(name="Opt", secondary_legal=False)
        store = CardStore([first, second])

        assert resolve_card("Opt", store) is first

    def test_front_face_resolves_to_owner(self) -> None:
        """A face name resolves to the multi-faced card that owns it."""
        dfc = make_dfc("Brazen Borrower // Petty Theft", "Brazen Borrower", "Petty Theft")
        store = CardStore([dfc])

        assert resolve_card("Brazen Borrower", store) is dfc
        assert resolve_card("Petty Theft", store) is dfc

    def test_token_face_owner_is_not_found(self) -> None:
        """Faces of double-faced tokens do not resolve."""
        token = make_dfc("Human // Wolf", "Human", "Wolf", layout="double_faced_token")
        store = CardStore([token])

        assert resolve_card("Wolf", store) is None

    def test_face_match_is_not_partial(self) -> None:
        """Face matching is exact, not substring."""
        dfc = make_dfc("Fire // Ice", "Fire", "Ice")
        store = CardStore([dfc])

        assert resolve_card("Fir", store) is None


class TestFirstPhysical:
    """Tests for picking the first non-token record."""

    def test_empty(self) -> None:
        """No records means no match."""
        assert first_physical([]) is None

    def test_skips_tokens(self) -> None:
        """Leading tokens are passed over."""
        token = CardRecord(name="Bird", layout="token")
        real = CardRecord(name="Bird")

        assert first_physical([token, real]) is real
