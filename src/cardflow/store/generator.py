"""Deterministic synthetic card data."""

import math
from datetime import UTC, datetime

from ..models import LABEL_OPTIONS, STATUSES, Card, CardStatus, Label, Member

FIXED_DUE_DATE = datetime(2024, 1, 1, tzinfo=UTC)


def _labels(n: int) -> tuple[Label, ...]:
    labels: list[Label] = []
    if n % 7 == 0:
        labels.append(LABEL_OPTIONS[n % len(LABEL_OPTIONS)])
    if n % 13 == 0:
        labels.append(LABEL_OPTIONS[(n + 2) % len(LABEL_OPTIONS)])
    return tuple(labels)


def _checklist(n: int) -> tuple[int, int]:
    """(done, total) checklist counts."""
    if n % 5 == 0:
        total = 3
    elif n % 7 == 0:
        total = 5
    else:
        return 0, 0
    return min(total, n % (total + 1)), total


def _members(i: int, n: int) -> tuple[Member, ...]:
    if n % 8 != 0:
        return ()
    return (
        Member(id=f"m-a-{i}", initials="AR", color="#f97316"),
        Member(id=f"m-b-{i}", initials="MS", color="#22c55e"),
    )


def generate_card(i: int, n: int, status: CardStatus) -> Card:
    """Build one card.

    Args:
        i: Position in the whole sequence (drives the id)
        n: 1-based number within its column (drives every other field)
        status: Column for the card
    """
    done, total = _checklist(n)
    return Card(
        id=f"card-{i}",
        title=f"Task {n}",
        description=f"This is the description for task {n}",
        status=status,
        labels=_labels(n),
        checklist_done=done,
        checklist_total=total,
        comments=(n % 4) + 1 if n % 9 == 0 else 0,
        attachments=(n % 3) + 1 if n % 11 == 0 else 0,
        due_date=FIXED_DUE_DATE if n % 6 == 0 else None,
        members=_members(i, n),
    )


def generate_cards(count: int) -> list[Card]:
    """Generate ``count`` cards split into column blocks.

    Each column gets ``ceil(count / 3)`` cards in order todo, inprogress,
    done, with the last column taking whatever remains. The same count
    always yields the same cards.
    """
    per_column = math.ceil(count / len(STATUSES))
    cards: list[Card] = []
    for column, status in enumerate(STATUSES):
        start = column * per_column
        end = min(start + per_column, count)
        for i in range(start, end):
            cards.append(generate_card(i, i - start + 1, status))
    return cards
