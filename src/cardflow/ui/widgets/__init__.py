"""Widget components."""

from .card import CardWidget
from .card_modal import CardModal
from .column import CardColumn, EmptyColumnMessage
from .confirm_modal import ConfirmDeleteModal
from .search_bar import SearchBar
from .settings_modal import SettingsModal, SettingsResult

__all__ = [
    "CardColumn",
    "CardModal",
    "CardWidget",
    "ConfirmDeleteModal",
    "EmptyColumnMessage",
    "SearchBar",
    "SettingsModal",
    "SettingsResult",
]
