"""Tests for FilterEngine."""

import pytest

from cardflow.models import STATUSES, UNBOUNDED, Bounded, Card, CardStatus
from cardflow.store import FilterEngine, generate_cards, is_search_query


@pytest.fixture(scope="module")
def five_thousand() -> list[Card]:
    """The default generated board."""
    return generate_cards(5000)


@pytest.fixture
def engine() -> FilterEngine:
    return FilterEngine()


def visible(n: int) -> dict[CardStatus, Bounded]:
    return {status: Bounded(n=n) for status in STATUSES}


class TestIsSearchQuery:
    """Tests for search detection."""

    def test_blank_is_not_search(self):
        assert not is_search_query("")
        assert not is_search_query("   ")

    def test_text_is_search(self):
        assert is_search_query(" task ")


class TestBrowse:
    """Tests for filtering without a search."""

    def test_lists_sliced_to_visible_count(self, engine: FilterEngine, five_thousand: list[Card]):
        result = engine.run(five_thousand, "", visible(50))
        assert not result.is_search
        for status in STATUSES:
            assert len(result.columns[status]) == 50
        assert result.totals == {
            CardStatus.TODO: 1667,
            CardStatus.IN_PROGRESS: 1667,
            CardStatus.DONE: 1666,
        }
        assert not result.capped

    def test_columns_keep_sequence_order(self, engine: FilterEngine, five_thousand: list[Card]):
        result = engine.run(five_thousand, "", visible(3))
        assert [card.id for card in result.columns[CardStatus.IN_PROGRESS]] == [
            "card-1667",
            "card-1668",
            "card-1669",
        ]

    def test_missing_limit_is_unbounded(self, engine: FilterEngine):
        cards = generate_cards(9)
        result = engine.run(cards, "", {})
        assert all(len(result.columns[status]) == 3 for status in STATUSES)

    def test_blank_query_does_not_search(self, engine: FilterEngine):
        """Whitespace-only queries show the normal board."""
        result = engine.run(generate_cards(9), "   ", visible(2), Bounded(n=1))
        assert not result.is_search
        assert all(len(result.columns[status]) == 2 for status in STATUSES)


class TestSearch:
    """Tests for text search."""

    def test_task_5_over_default_board(self, engine: FilterEngine, five_thousand: list[Card]):
        """Search totals count every match; lists stop at the search cap."""
        result = engine.run(five_thousand, "task 5", visible(50), Bounded(n=100))
        assert result.is_search
        # 5, 50-59 and 500-599 in each column
        assert result.totals == dict.fromkeys(STATUSES, 111)
        for status in STATUSES:
            cards = result.columns[status]
            assert len(cards) == 100
            assert all(card.matches("task 5") for card in cards)
        assert result.capped

    def test_sum_of_totals_equals_match_count(
        self, engine: FilterEngine, five_thousand: list[Card]
    ):
        result = engine.run(five_thousand, "task 12", visible(50), UNBOUNDED)
        matches = [card for card in five_thousand if card.matches("task 12")]
        assert result.total == len(matches)
        assert sum(len(cards) for cards in result.columns.values()) == len(matches)

    def test_case_insensitive(self, engine: FilterEngine):
        result = engine.run(generate_cards(9), "TASK 2", visible(50), Bounded(n=100))
        assert result.total == 3

    def test_matches_description(self, engine: FilterEngine):
        result = engine.run(generate_cards(9), "description for", visible(50))
        assert result.total == 9

    def test_search_ignores_visible_count(self, engine: FilterEngine, five_thousand: list[Card]):
        """While searching the search cap replaces the disclosure limit."""
        result = engine.run(five_thousand, "task 1", visible(5), Bounded(n=100))
        assert all(len(result.columns[status]) == 100 for status in STATUSES)

    def test_not_capped_when_under_cap(self, engine: FilterEngine):
        result = engine.run(generate_cards(9), "task 1", visible(50), Bounded(n=100))
        assert result.total == 3
        assert not result.capped

    def test_no_matches(self, engine: FilterEngine):
        result = engine.run(generate_cards(9), "zebra", visible(50), Bounded(n=100))
        assert result.total == 0
        assert all(cards == [] for cards in result.columns.values())

    def test_query_is_not_trimmed(self, engine: FilterEngine):
        """Surrounding spaces are part of the needle."""
        result = engine.run(generate_cards(9), " task 1 ", visible(50), Bounded(n=100))
        assert result.total == 0
