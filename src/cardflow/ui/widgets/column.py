"""Kanban column widget with windowed rendering."""

from __future__ import annotations

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import BoardConfig, Card, CardStatus
from ...sync import RenderWindow, compute_render_window, should_load_more
from .card import CardWidget


def card_css_id(card_id: str) -> str:
    """CSS-safe widget id for a card."""
    return f"card-{card_id}".replace(".", "-")


class CardListScroll(VerticalScroll):
    """Scroll container for a column's cards.

    Navigation keys bubble up to the app, which moves card focus instead.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()


class Spacer(Static):
    """Stands in for cards outside the render window."""

    DEFAULT_CSS = """
    Spacer {
        width: 100%;
    }
    """


class EmptyColumnMessage(Static):
    """Displayed when a column has no cards."""

    pass


class CardColumn(Widget):
    """
    A single board column.

    Holds the cards the board disclosed for this column but mounts widgets
    only for the render window around the scroll position. Scrolling near
    the bottom asks the board to disclose more.
    """

    DEFAULT_CSS = """
    CardColumn {
        width: 1fr;
        height: 100%;
        border: round $primary-darken-1;
    }

    CardColumn .column-header {
        height: 1;
        padding: 0 1;
        text-style: bold;
    }

    CardColumn .column-content {
        height: 1fr;
    }
    """

    def __init__(
        self,
        title: str,
        status: CardStatus,
        config: BoardConfig,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.title = title
        self.status = status
        self.config = config
        self._cards: list[Card] = []
        self._total = 0
        self._window = RenderWindow(0, 0, 0, 0)
        self._rendered: tuple | None = None

    @property
    def stride(self) -> int:
        return self.config.card_height + self.config.card_gap

    def compose(self) -> ComposeResult:
        yield Static(self._header_text, classes="column-header", id=f"header-{self.status.value}")
        yield CardListScroll(classes="column-content", id=f"content-{self.status.value}")

    def on_mount(self) -> None:
        content = self.query_one(CardListScroll)
        self.watch(content, "scroll_y", self._on_scroll, init=False)

    @property
    def _header_text(self) -> str:
        return f"{self.title} [dim]({len(self._cards)}/{self._total})[/]"

    @property
    def cards(self) -> list[Card]:
        return self._cards

    @property
    def card_count(self) -> int:
        return len(self._cards)

    def set_cards(self, cards: list[Card], total: int) -> None:
        """Replace the disclosed cards and the column total."""
        self._cards = cards
        self._total = total
        self.call_after_refresh(self._refresh_cards)

    def _compute_window(self) -> RenderWindow:
        content = self.query_one(CardListScroll)
        return compute_render_window(
            len(self._cards),
            round(content.scroll_y),
            content.scrollable_content_region.height,
            self.config.card_height,
            self.config.card_gap,
            self.config.render_buffer,
        )

    def _on_scroll(self, _old: float, _new: float) -> None:
        content = self.query_one(CardListScroll)
        if should_load_more(
            round(content.scroll_y),
            content.scrollable_content_region.height,
            content.virtual_size.height,
            self.config.load_more_threshold,
        ):
            self.app.board.load_more_cards(self.status)  # pyrefly: ignore[missing-attribute]
        self.call_after_refresh(self._refresh_cards)

    async def _refresh_cards(self) -> None:
        """Mount widgets for the current render window."""
        content = self.query_one(CardListScroll)
        self._window = self._compute_window()
        visible = self._cards[self._window.start : self._window.end]

        key = (self._window, tuple(card for card in visible))
        if key == self._rendered:
            return
        self._rendered = key

        with self.app.batch_update():
            await content.remove_children()
            if not self._cards:
                await content.mount(EmptyColumnMessage(f"No {self.title.lower()} cards"))
            else:
                widgets: list[Widget] = []
                top = Spacer()
                top.styles.height = self._window.top_spacer
                widgets.append(top)
                for card in visible:
                    widget = CardWidget(card, id=card_css_id(card.id))
                    widget.styles.height = self.config.card_height
                    widget.styles.margin = (0, 0, self.config.card_gap, 0)
                    widgets.append(widget)
                bottom = Spacer()
                bottom.styles.height = self._window.bottom_spacer
                widgets.append(bottom)
                await content.mount_all(widgets)

        header = self.query_one(f"#header-{self.status.value}", Static)
        header.update(self._header_text)

    def focus_card(self, index: int) -> bool:
        """
        Focus the card at ``index``, scrolling it into the render window.

        Returns:
            True if the card exists
        """
        if not 0 <= index < len(self._cards):
            return False
        card = self._cards[index]
        if index not in self._window:
            content = self.query_one(CardListScroll)
            content.scroll_to(y=index * self.stride, animate=False)
            self.call_after_refresh(self._refresh_cards)
        self.call_after_refresh(self._focus_widget, card.id)
        return True

    def _focus_widget(self, card_id: str) -> None:
        for widget in self.query(CardWidget):
            if widget.card.id == card_id:
                widget.focus()
                widget.scroll_visible()
                return

    def get_card(self, index: int) -> Card | None:
        if 0 <= index < len(self._cards):
            return self._cards[index]
        return None

    def index_of(self, card_id: str) -> int:
        """Position of a card in this column, or -1."""
        for i, card in enumerate(self._cards):
            if card.id == card_id:
                return i
        return -1
