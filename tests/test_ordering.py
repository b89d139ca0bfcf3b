"""Tests for the sequence splice operations."""

import pytest

from cardflow.exceptions import CardNotFoundError
from cardflow.models import Card, CardStatus, CardUpdate
from cardflow.store import ordering


def make_card(card_id: str, status: CardStatus = CardStatus.TODO) -> Card:
    """Helper to build a minimal card."""
    return Card(id=card_id, title=card_id.upper(), status=status)


@pytest.fixture
def abc() -> list[Card]:
    """[A(todo), B(todo), C(done)]."""
    return [
        make_card("a"),
        make_card("b"),
        make_card("c", CardStatus.DONE),
    ]


class TestLookup:
    """Tests for index helpers."""

    def test_index_of(self, abc: list[Card]):
        assert ordering.index_of(abc, "c") == 2

    def test_index_of_missing_raises(self, abc: list[Card]):
        with pytest.raises(CardNotFoundError) as exc:
            ordering.index_of(abc, "zzz")
        assert exc.value.card_id == "zzz"

    def test_first_index_with_status(self, abc: list[Card]):
        assert ordering.first_index_with_status(abc, CardStatus.DONE) == 2
        assert ordering.first_index_with_status(abc, CardStatus.IN_PROGRESS) is None


class TestInsertUpdateDelete:
    """Tests for add, update and delete splices."""

    def test_insert_front(self, abc: list[Card]):
        result = ordering.insert_front(abc, make_card("z"))
        assert ordering.id_order(result) == ["z", "a", "b", "c"]
        assert len(abc) == 3

    def test_update_keeps_position(self, abc: list[Card]):
        result = ordering.update_card(abc, "b", CardUpdate(title="Bee"))
        assert ordering.id_order(result) == ["a", "b", "c"]
        assert result[1].title == "Bee"
        assert abc[1].title == "B"

    def test_update_status_keeps_position(self, abc: list[Card]):
        """Changing status through update does not splice the card."""
        result = ordering.update_card(abc, "a", CardUpdate(status=CardStatus.DONE))
        assert ordering.id_order(result) == ["a", "b", "c"]
        assert result[0].status == CardStatus.DONE

    def test_delete(self, abc: list[Card]):
        result = ordering.delete_card(abc, "b")
        assert ordering.id_order(result) == ["a", "c"]
        assert len(result) == len(abc) - 1

    def test_delete_missing_raises(self, abc: list[Card]):
        with pytest.raises(CardNotFoundError):
            ordering.delete_card(abc, "zzz")


class TestMoveCard:
    """Tests for moving a card between columns."""

    def test_move_before_anchor(self, abc: list[Card]):
        """move(A, done, anchor C) gives [B, A(done), C]."""
        result = ordering.move_card(abc, "a", CardStatus.DONE, "c")
        assert ordering.id_order(result) == ["b", "a", "c"]
        assert result[1].status == CardStatus.DONE

    def test_move_without_anchor_goes_before_first_in_column(self, abc: list[Card]):
        result = ordering.move_card(abc, "a", CardStatus.DONE)
        assert ordering.id_order(result) == ["b", "a", "c"]

    def test_move_into_empty_column_appends(self, abc: list[Card]):
        result = ordering.move_card(abc, "a", CardStatus.IN_PROGRESS)
        assert ordering.id_order(result) == ["b", "c", "a"]
        assert result[-1].status == CardStatus.IN_PROGRESS

    def test_missing_anchor_falls_back(self, abc: list[Card]):
        result = ordering.move_card(abc, "a", CardStatus.DONE, "zzz")
        assert ordering.id_order(result) == ["b", "a", "c"]

    def test_same_status_is_noop(self, abc: list[Card]):
        """Moving a card into its own column changes nothing."""
        result = ordering.move_card(abc, "a", CardStatus.TODO, "b")
        assert result == abc

    def test_length_preserved(self, abc: list[Card]):
        result = ordering.move_card(abc, "c", CardStatus.TODO, "a")
        assert len(result) == len(abc)
        assert ordering.id_order(result) == ["c", "a", "b"]

    def test_unknown_card_raises(self, abc: list[Card]):
        with pytest.raises(CardNotFoundError):
            ordering.move_card(abc, "zzz", CardStatus.DONE)

    def test_input_untouched(self, abc: list[Card]):
        ordering.move_card(abc, "a", CardStatus.DONE, "c")
        assert abc[0].status == CardStatus.TODO


class TestReorderCards:
    """Tests for reordering within a column."""

    @pytest.fixture
    def todo(self) -> list[Card]:
        return [make_card("a"), make_card("b"), make_card("c")]

    def test_reorder_to_front(self, todo: list[Card]):
        """reorder(C, A) on [A, B, C] gives [C, A, B]."""
        result = ordering.reorder_cards(todo, "c", "a")
        assert ordering.id_order(result) == ["c", "a", "b"]

    def test_reorder_down(self, todo: list[Card]):
        result = ordering.reorder_cards(todo, "a", "c")
        assert ordering.id_order(result) == ["b", "c", "a"]

    def test_reorder_not_self_inverse(self, todo: list[Card]):
        """Applying the same reorder twice does not restore the order."""
        once = ordering.reorder_cards(todo, "c", "a")
        twice = ordering.reorder_cards(once, "c", "a")
        assert ordering.id_order(twice) == ["a", "c", "b"]

    def test_swap_back_restores(self, todo: list[Card]):
        """Reordering adjacent cards and then swapping back restores order."""
        swapped = ordering.reorder_cards(todo, "b", "a")
        assert ordering.id_order(swapped) == ["b", "a", "c"]
        restored = ordering.reorder_cards(swapped, "a", "b")
        assert ordering.id_order(restored) == ["a", "b", "c"]

    def test_length_preserved(self, todo: list[Card]):
        assert len(ordering.reorder_cards(todo, "b", "c")) == 3

    def test_unknown_over_raises(self, todo: list[Card]):
        with pytest.raises(CardNotFoundError):
            ordering.reorder_cards(todo, "a", "zzz")
