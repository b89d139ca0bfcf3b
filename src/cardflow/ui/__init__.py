"""UI components."""

from .screens.board import BoardScreen
from .widgets.card import CardWidget
from .widgets.column import CardColumn

__all__ = [
    "BoardScreen",
    "CardColumn",
    "CardWidget",
]
