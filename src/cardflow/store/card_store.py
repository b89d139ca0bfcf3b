"""Authoritative ordered card store."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable

from pydantic import ValidationError

from ..exceptions import CardNotFoundError
from ..models import DEFAULT_CARD_COUNT, Card, CardDraft, CardStatus, CardUpdate
from . import ordering
from .generator import generate_cards

logger = logging.getLogger(__name__)


def new_card_id() -> str:
    """Fresh card id that never collides with generated ``card-{i}`` ids."""
    return f"card-{uuid.uuid4().hex}"


class CardStore:
    """
    Holds the one ordered sequence of cards for all columns.

    Column membership is a field on each card, so every edit is a splice on
    this single list. Operations on unknown ids leave the sequence as it
    was. Each operation returns the resulting sequence (a new list).
    """

    def __init__(
        self,
        cards: list[Card] | None = None,
        default_count: int = DEFAULT_CARD_COUNT,
        id_factory: Callable[[], str] = new_card_id,
    ) -> None:
        self._cards: list[Card] = list(cards or [])
        self.default_count = default_count
        self._id_factory = id_factory

    @property
    def cards(self) -> list[Card]:
        """A copy of the current sequence."""
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def add(self, draft: CardDraft, card_id: str | None = None) -> list[Card]:
        """Insert a new card at the front of the sequence.

        ``card_id`` is used when the caller already chose one, so both sides
        refer to the card by the same id; otherwise a fresh id is made.
        """
        card = Card.from_draft(card_id or self._id_factory(), draft)
        self._cards = ordering.insert_front(self._cards, card)
        logger.debug("Card added: %s (%s)", card.id, card.status.value)
        return self.cards

    def update(self, card_id: str, changes: CardUpdate) -> list[Card]:
        """Merge set fields into a card."""
        try:
            self._cards = ordering.update_card(self._cards, card_id, changes)
        except CardNotFoundError:
            logger.debug("update: card not found: %s", card_id)
        except ValidationError as e:
            logger.warning("update: rejected changes for %s: %s", card_id, e)
        return self.cards

    def delete(self, card_id: str) -> list[Card]:
        """Remove a card."""
        try:
            self._cards = ordering.delete_card(self._cards, card_id)
        except CardNotFoundError:
            logger.debug("delete: card not found: %s", card_id)
        return self.cards

    def move(self, card_id: str, status: CardStatus, anchor_id: str | None = None) -> list[Card]:
        """Move a card to another column, optionally next to an anchor card."""
        try:
            self._cards = ordering.move_card(self._cards, card_id, status, anchor_id)
        except CardNotFoundError:
            logger.debug("move: card not found: %s", card_id)
        return self.cards

    def reorder(self, active_id: str, over_id: str) -> list[Card]:
        """Move ``active_id`` into the position of ``over_id``."""
        try:
            self._cards = ordering.reorder_cards(self._cards, active_id, over_id)
        except CardNotFoundError as e:
            logger.debug("reorder: card not found: %s", e.card_id)
        return self.cards

    def regenerate(self, count: int) -> list[Card]:
        """Replace every card with ``count`` generated ones."""
        self._cards = generate_cards(count)
        logger.info("Generated %d cards", count)
        return self.cards

    def reset(self) -> list[Card]:
        """Regenerate the default board."""
        return self.regenerate(self.default_count)
