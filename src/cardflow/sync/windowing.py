"""Windowing: how many cards each column discloses and renders.

Two independent limits apply to a column:

- the disclosure limit (``VisibilityState``), a per-column ceiling on how
  many matching cards are fetched from the worker, raised in chunks as the
  user scrolls toward the bottom;
- the render window (``compute_render_window``), a sliding index range over
  the disclosed cards. Cards outside it are replaced by spacer height so
  only a screenful of widgets exists at once. It never changes ordering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..models import STATUSES, CardStatus

logger = logging.getLogger(__name__)


class VisibilityState:
    """Per-column disclosure limits."""

    def __init__(self, initial_load: int = 50, load_more_chunk: int = 30) -> None:
        self.initial_load = initial_load
        self.load_more_chunk = load_more_chunk
        self._counts: dict[CardStatus, int] = dict.fromkeys(STATUSES, initial_load)

    def __getitem__(self, status: CardStatus) -> int:
        return self._counts[status]

    def as_dict(self) -> dict[CardStatus, int]:
        return dict(self._counts)

    def reset(self) -> None:
        """Return every column to the initial load size."""
        self._counts = dict.fromkeys(STATUSES, self.initial_load)

    def load_more(self, status: CardStatus, total: int) -> bool:
        """
        Disclose another chunk of a column.

        The new count is clamped to ``total``, so a column left with more
        disclosed than it holds (after deletions, say) drops back to its
        total. That is the only way a count goes down outside ``reset``.

        Returns:
            True if the count changed
        """
        current = self._counts[status]
        count = min(current + self.load_more_chunk, max(total, 0))
        if count == current:
            return False
        self._counts[status] = count
        logger.debug(
            "load_more %s: %d -> %d (total %d)", status.value, current, self._counts[status], total
        )
        return True


def should_load_more(
    scroll_offset: int,
    viewport_height: int,
    content_height: int,
    threshold: int,
) -> bool:
    """Whether the viewport bottom is within ``threshold`` of the content end."""
    if content_height <= 0:
        return False
    remaining = content_height - (scroll_offset + viewport_height)
    return remaining <= threshold


@dataclass(frozen=True)
class RenderWindow:
    """Slice ``[start, end)`` of a column's disclosed cards to render."""

    start: int
    end: int
    top_spacer: int  # Height standing in for cards[:start]
    bottom_spacer: int  # Height standing in for cards[end:]

    @property
    def size(self) -> int:
        return self.end - self.start

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.end


def compute_render_window(
    count: int,
    scroll_offset: int,
    viewport_height: int,
    item_height: int,
    gap: int = 0,
    buffer: int = 5,
) -> RenderWindow:
    """
    Work out which cards of a scrolled column need real widgets.

    Every card is assumed to take ``item_height`` plus ``gap``. The cards
    overlapping the viewport are widened by ``buffer`` on both sides.

    Args:
        count: Number of disclosed cards in the column
        scroll_offset: Distance scrolled from the top
        viewport_height: Visible height of the scroll container
        item_height: Estimated height of one card
        gap: Space between consecutive cards
        buffer: Extra cards rendered above and below the viewport

    Returns:
        The render window with spacer heights for the skipped cards.
    """
    if count <= 0:
        return RenderWindow(0, 0, 0, 0)

    stride = max(1, item_height + gap)
    scroll_offset = max(0, scroll_offset)
    first_visible = min(count - 1, scroll_offset // stride)
    last_visible = min(count, -(-(scroll_offset + max(viewport_height, 0)) // stride))

    start = max(0, first_visible - buffer)
    end = min(count, max(last_visible, first_visible + 1) + buffer)
    return RenderWindow(
        start=start,
        end=end,
        top_spacer=start * stride,
        bottom_spacer=(count - end) * stride,
    )
