"""Tests for CardStore."""

import itertools
import logging

import pytest

from cardflow.models import CardDraft, CardStatus, CardUpdate
from cardflow.store import CardStore, generate_cards, new_card_id


@pytest.fixture
def store() -> CardStore:
    """A store with nine generated cards and predictable new ids."""
    counter = itertools.count(1)
    return CardStore(
        generate_cards(9),
        default_count=9,
        id_factory=lambda: f"new-{next(counter)}",
    )


class TestCardStoreEdits:
    """Tests for edits on the authoritative sequence."""

    def test_add_inserts_front(self, store: CardStore):
        cards = store.add(CardDraft(title="Fresh", status=CardStatus.DONE))
        assert cards[0].id == "new-1"
        assert cards[0].status == CardStatus.DONE
        assert len(cards) == 10

    def test_add_with_given_id(self, store: CardStore):
        cards = store.add(CardDraft(title="Fresh"), card_id="card-chosen")
        assert cards[0].id == "card-chosen"
        assert store.update("card-chosen", CardUpdate(title="Renamed"))[0].title == "Renamed"

    def test_update(self, store: CardStore):
        cards = store.update("card-0", CardUpdate(title="Renamed"))
        assert cards[0].title == "Renamed"

    def test_update_leaving_card_invalid(self, store: CardStore, caplog):
        """More checklist items done than exist is rejected, not raised."""
        before = store.cards
        with caplog.at_level(logging.WARNING):
            cards = store.update("card-0", CardUpdate(checklist_done=2))
        assert cards == before
        assert "rejected changes for card-0" in caplog.text

    def test_delete(self, store: CardStore):
        cards = store.delete("card-4")
        assert "card-4" not in [card.id for card in cards]
        assert len(cards) == 8

    def test_move(self, store: CardStore):
        cards = store.move("card-0", CardStatus.DONE, "card-7")
        ids = [card.id for card in cards]
        assert ids.index("card-0") == ids.index("card-7") - 1
        assert cards[ids.index("card-0")].status == CardStatus.DONE

    def test_reorder(self, store: CardStore):
        cards = store.reorder("card-2", "card-0")
        assert [card.id for card in cards[:3]] == ["card-2", "card-0", "card-1"]

    @pytest.mark.parametrize(
        "call",
        [
            lambda s: s.update("missing", CardUpdate(title="x")),
            lambda s: s.delete("missing"),
            lambda s: s.move("missing", CardStatus.DONE),
            lambda s: s.reorder("missing", "card-0"),
            lambda s: s.reorder("card-0", "missing"),
        ],
    )
    def test_unknown_ids_leave_sequence_unchanged(self, store: CardStore, call):
        """Edits on unknown ids are ignored."""
        before = store.cards
        assert call(store) == before

    def test_returns_copy(self, store: CardStore):
        """Callers cannot mutate the store through a returned list."""
        cards = store.cards
        cards.clear()
        assert len(store) == 9


class TestCardStoreRegenerate:
    """Tests for regenerate and reset."""

    def test_regenerate(self, store: CardStore):
        cards = store.regenerate(30)
        assert len(cards) == 30
        assert cards == generate_cards(30)

    def test_reset_uses_default_count(self, store: CardStore):
        store.regenerate(30)
        assert len(store.reset()) == 9


class TestNewCardId:
    """Tests for new card ids."""

    def test_unique(self):
        assert new_card_id() != new_card_id()

    def test_does_not_collide_with_generated(self):
        generated = {card.id for card in generate_cards(100)}
        assert new_card_id() not in generated
