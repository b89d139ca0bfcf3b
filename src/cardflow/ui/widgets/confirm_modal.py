"""Delete confirmation dialog."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from ...models import Card


class ConfirmDeleteModal(ModalScreen[bool]):
    """Asks before a card is deleted. Dismisses with True to delete."""

    DEFAULT_CSS = """
    ConfirmDeleteModal {
        align: center middle;
    }

    ConfirmDeleteModal > Vertical {
        width: 50;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $error;
    }

    ConfirmDeleteModal Label {
        width: 100%;
        text-align: center;
        margin-bottom: 1;
    }

    ConfirmDeleteModal Center {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("y", "answer(True)", "Delete"),
        Binding("n,escape", "answer(False)", "Keep"),
    ]

    def __init__(self, card: Card) -> None:
        super().__init__()
        self.card = card

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(f'Delete "{self.card.title}"?')
            with Center():
                yield Button("Delete", id="delete", variant="error")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete")

    def action_answer(self, delete: bool) -> None:
        self.dismiss(delete)
