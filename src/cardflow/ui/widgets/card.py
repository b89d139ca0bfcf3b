"""Card widget."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Static

from ...models import Card, LabelColor

# Rich color names for label chips
LABEL_STYLES: dict[LabelColor, str] = {
    LabelColor.RED: "red",
    LabelColor.ORANGE: "dark_orange",
    LabelColor.YELLOW: "yellow",
    LabelColor.GREEN: "green",
    LabelColor.BLUE: "dodger_blue1",
    LabelColor.PURPLE: "medium_purple",
}


class CardWidget(Widget, can_focus=True):
    """A card displayed in a column."""

    DEFAULT_CSS = """
    CardWidget {
        height: 5;
        padding: 0 1;
        background: $panel;
        border-left: wide $primary-darken-2;
    }

    CardWidget:focus {
        border-left: wide $accent;
        background: $boost;
    }

    CardWidget .card-title {
        text-style: bold;
    }

    CardWidget .card-description, CardWidget .card-meta {
        color: $text-muted;
    }
    """

    def __init__(self, card: Card, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._card = card

    @property
    def card(self) -> Card:
        return self._card

    def compose(self) -> ComposeResult:
        yield Static(self._truncate(self._card.title, 40), classes="card-title")
        yield Static(self._format_labels(), classes="card-labels")
        yield Static(self._truncate(self._card.description, 50), classes="card-description")
        yield Static(self._format_meta(), classes="card-meta")

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"

    def _format_labels(self) -> str:
        return " ".join(
            f"[{LABEL_STYLES[label.color]}]■ {label.name}[/]" for label in self._card.labels
        )

    def _format_meta(self) -> str:
        """Checklist, comments, attachments, due date and members on one line."""
        parts: list[str] = []
        if self._card.checklist_total:
            parts.append(f"☑ {self._card.checklist_text}")
        if self._card.comments:
            parts.append(f"✉ {self._card.comments}")
        if self._card.attachments:
            parts.append(f"⎘ {self._card.attachments}")
        if self._card.due_date:
            parts.append(f"⏲ {self._card.due_date:%b %d}")
        parts.extend(f"[{member.color}]{member.initials}[/]" for member in self._card.members)
        return "  ".join(parts)
