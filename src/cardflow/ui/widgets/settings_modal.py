"""Board settings dialog: card count and reset."""

from __future__ import annotations

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


@dataclass
class SettingsResult:
    """What the user chose in the settings dialog."""

    card_count: int | None = None
    reset: bool = False


class SettingsModal(ModalScreen[SettingsResult | None]):
    """Lets the user regenerate the board with a new size or reset it."""

    DEFAULT_CSS = """
    SettingsModal {
        align: center middle;
    }

    SettingsModal > Vertical {
        width: 50;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $primary;
    }

    SettingsModal .hint {
        color: $text-muted;
    }

    SettingsModal .buttons {
        height: auto;
        margin-top: 1;
    }

    SettingsModal Button {
        margin-right: 1;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, card_count: int, max_card_count: int) -> None:
        super().__init__()
        self.card_count = card_count
        self.max_card_count = max_card_count

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("Number of cards")
            yield Input(value=str(self.card_count), type="integer", id="card-count")
            yield Label(f"Between 1 and {self.max_card_count}", classes="hint")
            with Horizontal(classes="buttons"):
                yield Button("Apply", id="apply", variant="primary")
                yield Button("Reset board", id="reset", variant="error")
                yield Button("Cancel", id="cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "apply":
            self._apply()
        elif event.button.id == "reset":
            self.dismiss(SettingsResult(reset=True))
        else:
            self.action_cancel()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._apply()

    def _apply(self) -> None:
        raw = self.query_one("#card-count", Input).value
        try:
            count = int(raw)
        except ValueError:
            self.notify(f"Not a number: {raw!r}", severity="warning")
            return
        if not 1 <= count <= self.max_card_count:
            self.notify(f"Enter a number between 1 and {self.max_card_count}", severity="warning")
            return
        self.dismiss(SettingsResult(card_count=count))

    def action_cancel(self) -> None:
        self.dismiss(None)
