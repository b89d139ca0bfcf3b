"""Foreground board state kept in step with the card worker."""

from .reconciler import BoardSync
from .view import BoardView
from .windowing import RenderWindow, VisibilityState, compute_render_window, should_load_more

__all__ = [
    "BoardSync",
    "BoardView",
    "RenderWindow",
    "VisibilityState",
    "compute_render_window",
    "should_load_more",
]
