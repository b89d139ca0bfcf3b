"""Messages exchanged between the board and the card worker.

Every command carries a ``request_id`` assigned by the sender; every reply
echoes it in ``in_reply_to`` so the sender can tell which command a reply
answers.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .card import STATUSES, Card, CardDraft, CardStatus, CardUpdate
from .limits import UNBOUNDED, SliceLimit


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True)


class _Command(_Message):
    request_id: int = 0


# --- Commands (board -> worker) ---


class Generate(_Command):
    type: Literal["generate"] = "generate"
    count: int = Field(..., ge=1)


class Filter(_Command):
    type: Literal["filter"] = "filter"
    query: str = ""
    limits: dict[CardStatus, SliceLimit] = Field(default_factory=dict)
    search_cap: SliceLimit = UNBOUNDED


class AddCard(_Command):
    type: Literal["add_card"] = "add_card"
    card: CardDraft
    card_id: str | None = None  # Assigned by the worker when None


class UpdateCard(_Command):
    type: Literal["update_card"] = "update_card"
    id: str
    changes: CardUpdate


class DeleteCard(_Command):
    type: Literal["delete_card"] = "delete_card"
    id: str


class MoveCard(_Command):
    type: Literal["move_card"] = "move_card"
    id: str
    status: CardStatus
    anchor_id: str | None = None


class ReorderCards(_Command):
    type: Literal["reorder_cards"] = "reorder_cards"
    active_id: str
    over_id: str


class Reset(_Command):
    type: Literal["reset"] = "reset"


Command = Annotated[
    Generate | Filter | AddCard | UpdateCard | DeleteCard | MoveCard | ReorderCards | Reset,
    Field(discriminator="type"),
]


# --- Replies (worker -> board) ---


class _Reply(_Message):
    in_reply_to: int = 0


class Generated(_Reply):
    type: Literal["generated"] = "generated"
    cards: list[Card]


class Updated(_Reply):
    type: Literal["updated"] = "updated"
    cards: list[Card]


def _empty_columns() -> dict[CardStatus, list[Card]]:
    return {status: [] for status in STATUSES}


def _zero_totals() -> dict[CardStatus, int]:
    return dict.fromkeys(STATUSES, 0)


class Filtered(_Reply):
    type: Literal["filtered"] = "filtered"
    columns: dict[CardStatus, list[Card]] = Field(default_factory=_empty_columns)
    totals: dict[CardStatus, int] = Field(default_factory=_zero_totals)
    is_search: bool = False
    capped: bool = False


class Failed(_Reply):
    """The worker raised while handling a command; its store is unchanged."""

    type: Literal["failed"] = "failed"
    command: str = ""
    error: str = ""


Reply = Annotated[Generated | Updated | Filtered | Failed, Field(discriminator="type")]
