"""Main kanban board screen."""

from collections.abc import Callable

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Static

from ...models import BoardConfig, Card, CardStatus
from ...sync import BoardSync
from ..widgets.column import CardColumn
from ..widgets.search_bar import SearchBar


def column_css_id(status: CardStatus) -> str:
    return f"column-{status.value}"


class BoardScreen(Screen):
    """Board screen: three columns, a status line and the search bar."""

    # Layers for z-ordering (later = higher)
    LAYERS = ["base", "command"]

    DEFAULT_CSS = """
    BoardScreen #columns {
        height: 1fr;
    }

    BoardScreen .board-status {
        height: 1;
        padding: 0 1;
        color: $text-muted;
        display: none;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_column = 0
        self._current_card = 0
        self._pending_focus_id: str | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def board(self) -> BoardSync:
        return self.app.board  # pyrefly: ignore[missing-attribute]

    @property
    def board_config(self) -> BoardConfig:
        return self.app.config  # pyrefly: ignore[missing-attribute]

    @property
    def statuses(self) -> list[CardStatus]:
        return [status for status, _title in self.board_config.columns]

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="board-container"), Horizontal(id="columns"):
            for status, title in self.board_config.columns:
                yield CardColumn(
                    title=title,
                    status=status,
                    config=self.board_config,
                    id=column_css_id(status),
                )

        yield Static("", id="board-status", classes="board-status")
        yield SearchBar()
        yield Footer()

    def on_mount(self) -> None:
        self._unsubscribe = self.board.subscribe(self._on_board_changed)
        self.load_cards()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_board_changed(self, _board: BoardSync) -> None:
        self.refresh_board()

    def load_cards(self) -> None:
        """Push the board's current view into the columns."""
        columns = self.board.filtered_cards
        totals = self.board.totals
        for status in self.statuses:
            column = self._get_column_for(status)
            if column is not None:
                column.set_cards(columns[status], totals[status])
        self._update_status()

    def refresh_board(self, focus_card_id: str | None = None) -> None:
        """
        Reload the columns from the board.

        Args:
            focus_card_id: If provided, focus this card after refresh.
                           If None, keeps the current position.
        """
        if focus_card_id is not None:
            self._pending_focus_id = focus_card_id
        self.load_cards()
        # Columns mount their cards after a refresh, so wait for them
        self.call_after_refresh(self._schedule_pending_focus)

    def _schedule_pending_focus(self) -> None:
        self.call_after_refresh(self._apply_pending_focus)

    def _find_card_position(self, card_id: str) -> tuple[int, int] | None:
        for col_idx in range(len(self.statuses)):
            column = self._get_column(col_idx)
            if column is None:
                continue
            card_idx = column.index_of(card_id)
            if card_idx >= 0:
                return (col_idx, card_idx)
        return None

    def _apply_pending_focus(self) -> None:
        if self._pending_focus_id:
            position = self._find_card_position(self._pending_focus_id)
            self._pending_focus_id = None
            if position:
                self._current_column, self._current_card = position
                self._update_focus()
                return

        column = self._get_column(self._current_column)
        if column and column.card_count > 0:
            self._current_card = min(self._current_card, column.card_count - 1)
        else:
            self._current_card = 0
        # Leave focus in the search input while the user types
        if not isinstance(self.app.focused, Input):
            self._update_focus()

    def navigate_column(self, delta: int) -> None:
        """Navigate between columns."""
        new_column = max(0, min(self._current_column + delta, len(self.statuses) - 1))
        if new_column == self._current_column:
            return
        self._current_column = new_column
        column = self._get_column(new_column)
        if column and column.card_count > 0:
            self._current_card = min(self._current_card, column.card_count - 1)
        else:
            self._current_card = 0
        self._update_focus()

    def navigate_card(self, delta: int) -> None:
        """Navigate between cards in the current column."""
        column = self._get_column(self._current_column)
        if column is None or column.card_count == 0:
            return
        new_card = max(0, min(self._current_card + delta, column.card_count - 1))
        if new_card != self._current_card:
            self._current_card = new_card
            self._update_focus()
        if delta > 0 and new_card == column.card_count - 1:
            self.board.load_more_cards(column.status)

    def navigate_to_card(self, index: int) -> None:
        """Navigate to a card index (-1 for last)."""
        column = self._get_column(self._current_column)
        if column is None or column.card_count == 0:
            return
        last = column.card_count - 1
        self._current_card = last if index < 0 else min(index, last)
        self._update_focus()

    def _get_column(self, index: int) -> CardColumn | None:
        if not 0 <= index < len(self.statuses):
            return None
        return self._get_column_for(self.statuses[index])

    def _get_column_for(self, status: CardStatus) -> CardColumn | None:
        results = self.query(f"#{column_css_id(status)}")
        return results.first(CardColumn) if results else None

    def _update_focus(self) -> None:
        column = self._get_column(self._current_column)
        if column:
            column.focus_card(self._current_card)

    def get_current_card(self) -> Card | None:
        column = self._get_column(self._current_column)
        if column:
            return column.get_card(self._current_card)
        return None

    def get_neighbor(self, delta: int) -> Card | None:
        """The card ``delta`` positions from the current one, same column."""
        column = self._get_column(self._current_column)
        if column:
            return column.get_card(self._current_card + delta)
        return None

    @property
    def current_status(self) -> CardStatus:
        if 0 <= self._current_column < len(self.statuses):
            return self.statuses[self._current_column]
        return self.statuses[0]

    def _update_status(self) -> None:
        """Show loading, searching and capped notices."""
        board = self.board
        parts: list[str] = []
        if board.is_loading:
            parts.append(f"Generating {board.total_cards_count} cards...")
        if board.is_search_active:
            parts.append(f"[dim]Search:[/] {board.search_query}")
            if board.is_searching:
                parts.append("[dim]searching...[/]")
            elif board.results_capped:
                parts.append(
                    f"[dim]top {board.config.search_cap} per column, refine to see more[/]"
                )
            parts.append("[dim](Esc to clear)[/]")

        status = self.query_one("#board-status", Static)
        status.update(" ".join(parts))
        status.display = bool(parts)
