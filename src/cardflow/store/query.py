"""Search and per-column slicing over the card sequence."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ..models import STATUSES, UNBOUNDED, Card, CardStatus, SliceLimit


def is_search_query(query: str) -> bool:
    """A query only counts as a search once it has non-blank text."""
    return bool(query.strip())


@dataclass
class QueryResult:
    """Per-column slices and unsliced totals."""

    columns: dict[CardStatus, list[Card]] = field(default_factory=dict)
    totals: dict[CardStatus, int] = field(default_factory=dict)
    is_search: bool = False
    capped: bool = False  # A column was cut short by the search cap

    @property
    def total(self) -> int:
        return sum(self.totals.values())


class FilterEngine:
    """Filters the sequence by text and slices each column."""

    def run(
        self,
        cards: Sequence[Card],
        query: str,
        limits: Mapping[CardStatus, SliceLimit],
        search_cap: SliceLimit = UNBOUNDED,
    ) -> QueryResult:
        """Filter ``cards`` and slice each column.

        Args:
            cards: The full ordered sequence
            query: Search text; matched case-insensitively against title
                and description when it has non-blank content
            limits: Per-column disclosure limits used when not searching
            search_cap: Per-column cap used instead of ``limits`` while
                searching

        Returns:
            Sliced columns in sequence order plus the unsliced totals.
        """
        searching = is_search_query(query)
        needle = query.lower()

        partitioned: dict[CardStatus, list[Card]] = {status: [] for status in STATUSES}
        for card in cards:
            if searching and not card.matches(needle):
                continue
            partitioned[card.status].append(card)

        result = QueryResult(is_search=searching)
        for status in STATUSES:
            matched = partitioned[status]
            limit = search_cap if searching else limits.get(status, UNBOUNDED)
            result.columns[status] = limit.apply(matched)
            result.totals[status] = len(matched)
            if searching and search_cap.caps(len(matched)):
                result.capped = True
        return result
