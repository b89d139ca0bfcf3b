"""cardflow TUI application."""

import logging

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen

from .config import Settings
from .models import CardDraft, CardUpdate
from .models.messages import Reply
from .services import ConfigService
from .store import CardStore, FilterEngine
from .sync import BoardSync
from .ui.screens.board import BoardScreen
from .ui.widgets import (
    CardModal,
    ConfirmDeleteModal,
    SearchBar,
    SettingsModal,
    SettingsResult,
)
from .worker import CardWorker, ThreadedChannel

logger = logging.getLogger(__name__)


class CardflowApp(App):
    """cardflow - Terminal Kanban board."""

    TITLE = "cardflow"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("s", "settings", "Settings", show=True),
        Binding("r", "reset", "Reset", show=True),
        # Navigation - vim style
        Binding("h", "nav_left", "← Column", show=False),
        Binding("j", "nav_down", "↓ Card", show=False),
        Binding("k", "nav_up", "↑ Card", show=False),
        Binding("l", "nav_right", "→ Column", show=False),
        # Navigation - arrow keys
        Binding("left", "nav_left", "← Column", show=False),
        Binding("down", "nav_down", "↓ Card", show=False),
        Binding("up", "nav_up", "↑ Card", show=False),
        Binding("right", "nav_right", "→ Column", show=False),
        # Jump navigation
        Binding("g", "nav_first", "First", show=False),
        Binding("G", "nav_last", "Last", show=False),
        Binding("home", "nav_first", "First", show=False),
        Binding("end", "nav_last", "Last", show=False),
        # Card actions
        Binding("n", "new_card", "New", show=True),
        Binding("e", "edit_card", "Edit", show=True),
        Binding("d", "delete_card", "Delete", show=True),
        Binding("H", "move_card_left", "Move ←", show=False),
        Binding("L", "move_card_right", "Move →", show=False),
        Binding("shift+left", "move_card_left", "Move ←", show=False),
        Binding("shift+right", "move_card_right", "Move →", show=False),
        Binding("K", "move_card_up", "Move ↑", show=False),
        Binding("J", "move_card_down", "Move ↓", show=False),
        Binding("shift+up", "move_card_up", "Move ↑", show=False),
        Binding("shift+down", "move_card_down", "Move ↓", show=False),
        # Search
        Binding("/", "search", "Search", show=True),
        Binding("escape", "escape", "Back", show=False, priority=True),
    ]

    SCREENS = {
        "board": BoardScreen,
    }

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services()

    def _init_services(self) -> None:
        """Build the worker, its channel and the foreground board."""
        self.config_service = ConfigService(self.settings.project_root)
        self.config = self.config_service.get_board_config()

        store = CardStore(default_count=self.config.default_card_count)
        worker = CardWorker(store, FilterEngine())
        self.board = BoardSync(ThreadedChannel(worker), self.config)

    def on_mount(self) -> None:
        if self.config_service.has_config_error:
            self.notify(
                f"Config error, using defaults: {self.config_service.config_error}",
                severity="warning",
            )
        if not self.board.start(self._deliver, self.settings.card_count):
            self.notify(
                f"Invalid card count: {self.settings.card_count} "
                f"(1-{self.config.max_card_count})",
                severity="error",
            )
        self.push_screen("board")

    def on_unmount(self) -> None:
        self.board.stop()

    def _deliver(self, reply: Reply) -> None:
        """Hand a worker reply over to the app thread."""
        try:
            self.call_from_thread(self.board.handle_reply, reply)
        except RuntimeError:
            # App already shut down
            logger.debug("Dropping reply #%d after shutdown", reply.in_reply_to)

    def _board_screen(self) -> BoardScreen | None:
        screen = self.screen
        return screen if isinstance(screen, BoardScreen) else None

    # Navigation actions
    def action_nav_left(self) -> None:
        if screen := self._board_screen():
            screen.navigate_column(-1)

    def action_nav_right(self) -> None:
        if screen := self._board_screen():
            screen.navigate_column(1)

    def action_nav_up(self) -> None:
        if screen := self._board_screen():
            screen.navigate_card(-1)

    def action_nav_down(self) -> None:
        if screen := self._board_screen():
            screen.navigate_card(1)

    def action_nav_first(self) -> None:
        if screen := self._board_screen():
            screen.navigate_to_card(0)

    def action_nav_last(self) -> None:
        if screen := self._board_screen():
            screen.navigate_to_card(-1)

    # Card actions
    def action_new_card(self) -> None:
        """Open the card dialog for a new card in the current column."""
        screen = self._board_screen()
        if screen is None:
            return
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            CardModal(self.config, status=screen.current_status),
            callback=self._handle_new_card,
        )

    def _handle_new_card(self, draft: CardDraft | None) -> None:
        if draft is None:
            return
        card = self.board.add_card(draft)
        if card is None:
            self.notify("Board is not running", severity="error")
            return
        if screen := self._board_screen():
            screen.refresh_board(focus_card_id=card.id)
        self.notify("Card created", timeout=2)

    def action_edit_card(self) -> None:
        """Open the card dialog for the focused card."""
        screen = self._board_screen()
        if screen is None:
            return
        card = screen.get_current_card()
        if card is None:
            return

        def apply(draft: CardDraft | None) -> None:
            if draft is None:
                return
            changes = CardUpdate(
                title=draft.title,
                description=draft.description,
                status=draft.status,
                labels=draft.labels,
            )
            if self.board.update_card(card.id, changes):
                screen.refresh_board(focus_card_id=card.id)

        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            CardModal(self.config, card=card), callback=apply
        )

    def action_delete_card(self) -> None:
        """Delete the focused card after confirmation."""
        screen = self._board_screen()
        if screen is None:
            return
        card = screen.get_current_card()
        if card is None:
            return

        def confirm(delete: bool | None) -> None:
            if delete and self.board.delete_card(card.id):
                self.notify("Card deleted", timeout=2)

        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            ConfirmDeleteModal(card), callback=confirm
        )

    def _move_to_column(self, delta: int) -> None:
        screen = self._board_screen()
        if screen is None:
            return
        card = screen.get_current_card()
        if card is None:
            return
        statuses = screen.statuses
        index = statuses.index(card.status) + delta
        if not 0 <= index < len(statuses):
            return
        target = statuses[index]
        if self.board.drop(card.id, target.value):
            screen.refresh_board(focus_card_id=card.id)
            self.notify(f"Moved to {self.config.title_for(target)}", timeout=2)

    def action_move_card_left(self) -> None:
        self._move_to_column(-1)

    def action_move_card_right(self) -> None:
        self._move_to_column(1)

    def _move_within_column(self, delta: int) -> None:
        screen = self._board_screen()
        if screen is None:
            return
        card = screen.get_current_card()
        neighbor = screen.get_neighbor(delta)
        if card is None or neighbor is None:
            return
        if self.board.drop(card.id, neighbor.id):
            screen.refresh_board(focus_card_id=card.id)

    def action_move_card_up(self) -> None:
        self._move_within_column(-1)

    def action_move_card_down(self) -> None:
        self._move_within_column(1)

    # Board actions
    def action_settings(self) -> None:
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            SettingsModal(self.board.total_cards_count, self.config.max_card_count),
            callback=self._handle_settings,
        )

    def _handle_settings(self, result: SettingsResult | None) -> None:
        if result is None:
            return
        if result.reset:
            self.action_reset()
        elif result.card_count is not None:
            if self.board.set_total_cards_count(result.card_count):
                self.notify(f"Generating {result.card_count} cards", timeout=2)
            else:
                self.notify(f"Invalid card count: {result.card_count}", severity="error")

    def action_reset(self) -> None:
        """Regenerate the default board and clear the search."""
        screen = self._board_screen()
        if screen is not None:
            bar = screen.query_one(SearchBar)
            bar.close()
            bar.reset()
        if self.board.reset():
            self.notify("Board reset", timeout=2)

    # Search actions
    def action_search(self) -> None:
        if screen := self._board_screen():
            screen.query_one(SearchBar).open()

    def action_escape(self) -> None:
        """Dismiss a modal, close the search bar, or clear the search."""
        screen = self.screen
        if isinstance(screen, ModalScreen):
            screen.dismiss(None)
            return
        if not isinstance(screen, BoardScreen):
            return

        bar = screen.query_one(SearchBar)
        if bar.is_visible:
            bar.close()
            screen.refresh_board()
        elif self.board.is_search_active:
            bar.clear()

    def on_search_bar_query_changed(self, event: SearchBar.QueryChanged) -> None:
        self.board.set_search_query(event.query)


def run(settings: Settings | None = None) -> None:
    """Run the cardflow application."""
    app = CardflowApp(settings)
    app.run()
