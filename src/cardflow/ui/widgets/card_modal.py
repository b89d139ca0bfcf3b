"""Modal dialog for adding or editing a card."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, SelectionList
from textual.widgets.selection_list import Selection

from ...models import LABEL_OPTIONS, BoardConfig, Card, CardDraft, CardStatus, get_label


class CardModal(ModalScreen[CardDraft | None]):
    """Collects title, description, status and labels for a card.

    Dismisses with a ``CardDraft`` on save, or None on cancel.
    """

    DEFAULT_CSS = """
    CardModal {
        align: center middle;
    }

    CardModal > Vertical {
        width: 64;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $primary;
    }

    CardModal .modal-title {
        text-style: bold;
        margin-bottom: 1;
    }

    CardModal SelectionList {
        height: 7;
    }

    CardModal .buttons {
        height: auto;
        align: right middle;
        margin-top: 1;
    }

    CardModal Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(
        self,
        config: BoardConfig,
        card: Card | None = None,
        status: CardStatus = CardStatus.TODO,
    ) -> None:
        super().__init__()
        self.config = config
        self.card = card
        self.initial_status = card.status if card else status

    def compose(self) -> ComposeResult:
        selected = {label.id for label in self.card.labels} if self.card else set()
        with Vertical():
            yield Label("Edit card" if self.card else "New card", classes="modal-title")
            yield Input(
                value=self.card.title if self.card else "",
                placeholder="Title",
                id="title",
            )
            yield Input(
                value=self.card.description if self.card else "",
                placeholder="Description",
                id="description",
            )
            yield Select(
                [(title, status) for status, title in self.config.columns],
                value=self.initial_status,
                allow_blank=False,
                id="status",
            )
            yield SelectionList[str](
                *(
                    Selection(label.name, label.id, label.id in selected)
                    for label in LABEL_OPTIONS
                ),
                id="labels",
            )
            with Horizontal(classes="buttons"):
                yield Button("Cancel", id="cancel")
                yield Button("Save", id="save", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self.action_save()
        else:
            self.action_cancel()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_save()

    def action_save(self) -> None:
        title = self.query_one("#title", Input).value.strip()
        if not title:
            self.notify("Title is required", severity="warning")
            return
        label_ids = self.query_one("#labels", SelectionList).selected
        labels = tuple(
            label for label in (get_label(label_id) for label_id in label_ids) if label
        )
        self.dismiss(
            CardDraft(
                title=title,
                description=self.query_one("#description", Input).value.strip(),
                status=self.query_one("#status", Select).value,
                labels=labels,
            )
        )

    def action_cancel(self) -> None:
        self.dismiss(None)
