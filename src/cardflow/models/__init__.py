"""Data models."""

from .board_config import DEFAULT_CARD_COUNT, MAX_CARD_COUNT, BoardConfig, CardflowConfig
from .card import (
    LABEL_OPTIONS,
    STATUSES,
    Card,
    CardDraft,
    CardStatus,
    CardUpdate,
    Label,
    LabelColor,
    Member,
    get_label,
)
from .limits import UNBOUNDED, Bounded, SliceLimit, Unbounded

__all__ = [
    "DEFAULT_CARD_COUNT",
    "LABEL_OPTIONS",
    "MAX_CARD_COUNT",
    "STATUSES",
    "UNBOUNDED",
    "BoardConfig",
    "Bounded",
    "Card",
    "CardDraft",
    "CardStatus",
    "CardUpdate",
    "CardflowConfig",
    "Label",
    "LabelColor",
    "Member",
    "SliceLimit",
    "Unbounded",
    "get_label",
]
