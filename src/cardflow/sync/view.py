"""Filtered per-column view and its optimistic re-slice."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ..exceptions import CardNotFoundError
from ..models import STATUSES, Card, CardStatus, SliceLimit
from ..models.messages import Filtered


def _empty_columns() -> dict[CardStatus, list[Card]]:
    return {status: [] for status in STATUSES}


@dataclass
class BoardView:
    """What the board shows: sliced columns plus unsliced totals."""

    columns: dict[CardStatus, list[Card]] = field(default_factory=_empty_columns)
    totals: dict[CardStatus, int] = field(default_factory=lambda: dict.fromkeys(STATUSES, 0))
    is_search: bool = False
    capped: bool = False

    @classmethod
    def from_reply(cls, reply: Filtered) -> BoardView:
        return cls(
            columns={status: list(reply.columns.get(status, [])) for status in STATUSES},
            totals={status: reply.totals.get(status, 0) for status in STATUSES},
            is_search=reply.is_search,
            capped=reply.capped,
        )

    def flattened(self) -> list[Card]:
        """All shown cards as one sequence, columns in display order."""
        return [card for status in STATUSES for card in self.columns[status]]

    def reslice(
        self,
        mutate: Callable[[list[Card]], list[Card]],
        before: Card | None,
        after: Card | None,
        limit_for: Callable[[CardStatus], SliceLimit],
    ) -> BoardView:
        """
        Apply an edit to the shown cards without asking the worker.

        ``mutate`` is the same splice that was applied to the mirror, run
        here on the concatenated columns; if the affected card is not
        loaded the shown cards stay as they are. Totals are adjusted from
        the affected card alone.

        Args:
            mutate: Splice on the flattened shown cards
            before: The affected card before the edit (None for an add),
                or None if it does not count toward the totals
            after: The affected card after the edit (None for a delete),
                or None if it does not count toward the totals
            limit_for: Per-column slice limit to re-apply afterwards

        Returns:
            A new view.
        """
        flat = self.flattened()
        try:
            flat = mutate(flat)
        except CardNotFoundError:
            pass
        if after is None and before is not None:
            # The card no longer qualifies (deleted or filtered out)
            flat = [card for card in flat if card.id != before.id]

        totals = dict(self.totals)
        if before is not None:
            totals[before.status] = max(0, totals[before.status] - 1)
        if after is not None:
            totals[after.status] += 1

        columns = _empty_columns()
        for card in flat:
            columns[card.status].append(card)

        capped = False
        for status in STATUSES:
            limit = limit_for(status)
            columns[status] = limit.apply(columns[status])
            if self.is_search and limit.caps(totals[status]):
                capped = True

        return BoardView(columns=columns, totals=totals, is_search=self.is_search, capped=capped)
