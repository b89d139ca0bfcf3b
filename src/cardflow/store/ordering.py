"""Splice operations on an ordered card sequence.

The worker's store and the board's mirror both run these exact functions,
so an optimistic edit on the mirror lands where the authoritative edit
will. Every function returns a new list and leaves its input untouched.
A card id that is not in the sequence raises ``CardNotFoundError``.
"""

from collections.abc import Sequence

from ..exceptions import CardNotFoundError
from ..models import Card, CardStatus, CardUpdate


def index_of(cards: Sequence[Card], card_id: str) -> int:
    """Position of ``card_id`` in ``cards``."""
    for i, card in enumerate(cards):
        if card.id == card_id:
            return i
    raise CardNotFoundError(card_id)


def contains(cards: Sequence[Card], card_id: str) -> bool:
    return any(card.id == card_id for card in cards)


def first_index_with_status(cards: Sequence[Card], status: CardStatus) -> int | None:
    """Position of the first card in column ``status``, if any."""
    for i, card in enumerate(cards):
        if card.status == status:
            return i
    return None


def insert_front(cards: Sequence[Card], card: Card) -> list[Card]:
    """Add a card at the very start of the sequence."""
    return [card, *cards]


def update_card(cards: Sequence[Card], card_id: str, changes: CardUpdate) -> list[Card]:
    """Merge ``changes`` into the matching card, keeping its position."""
    index = index_of(cards, card_id)
    result = list(cards)
    result[index] = cards[index].merged(changes)
    return result


def delete_card(cards: Sequence[Card], card_id: str) -> list[Card]:
    index = index_of(cards, card_id)
    return [*cards[:index], *cards[index + 1 :]]


def move_card(
    cards: Sequence[Card],
    card_id: str,
    status: CardStatus,
    anchor_id: str | None = None,
) -> list[Card]:
    """Move a card into another column.

    The card is spliced out and reinserted directly before ``anchor_id``
    when that card exists, otherwise before the first card already in the
    target column, otherwise at the end. Moving a card into the column it
    is already in changes nothing.
    """
    index = index_of(cards, card_id)
    card = cards[index]
    if card.status == status:
        return list(cards)

    result = [*cards[:index], *cards[index + 1 :]]
    moved = card.with_status(status)

    target: int | None = None
    if anchor_id is not None and anchor_id != card_id:
        try:
            target = index_of(result, anchor_id)
        except CardNotFoundError:
            target = None
    if target is None:
        target = first_index_with_status(result, status)

    if target is None:
        result.append(moved)
    else:
        result.insert(target, moved)
    return result


def reorder_cards(cards: Sequence[Card], active_id: str, over_id: str) -> list[Card]:
    """Move ``active_id`` to the position currently held by ``over_id``.

    Only position changes. The operation ignores status, so callers keep it
    to cards of one column.
    """
    old_index = index_of(cards, active_id)
    new_index = index_of(cards, over_id)
    result = list(cards)
    moved = result.pop(old_index)
    result.insert(new_index, moved)
    return result


def id_order(cards: Sequence[Card]) -> list[str]:
    """Ordered ids, used to compare two sequences cheaply."""
    return [card.id for card in cards]
