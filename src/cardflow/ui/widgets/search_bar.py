"""Search bar widget."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.timer import Timer
from textual.widget import Widget
from textual.widgets import Input, Static

# Seconds of typing pause before a query is sent
SEARCH_DEBOUNCE = 0.15


class SearchBar(Widget):
    """Search input docked at the bottom of the board.

    Posts ``SearchBar.QueryChanged`` once typing pauses, so a burst of
    keystrokes turns into one search.
    """

    DEFAULT_CSS = """
    SearchBar {
        height: 1;
        dock: bottom;
        background: $surface;
        display: none;
        layer: command;
    }

    SearchBar.-visible {
        display: block;
    }

    SearchBar .mode-indicator {
        width: auto;
        padding: 0 1;
        background: $primary;
        color: $text;
    }

    SearchBar .search-input {
        width: 1fr;
        border: none;
        background: $surface;
    }

    SearchBar .search-input:focus {
        border: none;
    }
    """

    class QueryChanged(Message):
        """The settled search text changed."""

        def __init__(self, query: str) -> None:
            super().__init__()
            self.query = query

    def __init__(self) -> None:
        super().__init__()
        self._pending: Timer | None = None

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Static("Search:", classes="mode-indicator")
            yield Input(
                placeholder="Search cards by title or description...",
                id="search-input",
                classes="search-input",
            )

    def open(self) -> None:
        """Show the bar and focus the input."""
        self.add_class("-visible")
        self.query_one("#search-input", Input).focus()

    def close(self) -> None:
        """Hide the bar, keeping the current query applied."""
        self.remove_class("-visible")

    def clear(self) -> None:
        """Empty the input and publish the cleared query at once."""
        self.query_one("#search-input", Input).value = ""
        self._publish()

    def reset(self) -> None:
        """Empty the input without publishing a query."""
        if self._pending is not None:
            self._pending.stop()
            self._pending = None
        with self.prevent(Input.Changed):
            self.query_one("#search-input", Input).value = ""

    @property
    def is_visible(self) -> bool:
        return self.has_class("-visible")

    @property
    def value(self) -> str:
        return self.query_one("#search-input", Input).value

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        if self._pending is not None:
            self._pending.stop()
        self._pending = self.set_timer(SEARCH_DEBOUNCE, self._publish)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._publish()
        self.close()

    def _publish(self) -> None:
        if self._pending is not None:
            self._pending.stop()
            self._pending = None
        self.post_message(self.QueryChanged(self.value))
