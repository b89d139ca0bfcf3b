"""Board service: the foreground mirror kept in step with the card worker."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import ValidationError

from ..exceptions import (
    CardNotFoundError,
    ChannelUnavailableError,
    InvalidCardCountError,
    validate_card_count,
)
from ..models import (
    UNBOUNDED,
    BoardConfig,
    Bounded,
    Card,
    CardDraft,
    CardStatus,
    CardUpdate,
    SliceLimit,
)
from ..models.messages import (
    AddCard,
    DeleteCard,
    Failed,
    Filter,
    Filtered,
    Generate,
    Generated,
    MoveCard,
    ReorderCards,
    Reset,
    UpdateCard,
    Updated,
)
from ..store import is_search_query, new_card_id, ordering
from ..worker import ChannelProtocol
from .view import BoardView
from .windowing import VisibilityState

logger = logging.getLogger(__name__)

Listener = Callable[["BoardSync"], None]


class BoardSync:
    """
    Foreground side of the board.

    Keeps a mirror of the card sequence and the filtered view the board
    renders. Every edit is applied to the mirror and the view at once, then
    forwarded to the worker over ``channel``. Replies from the worker are
    fed back through ``handle_reply``, which decides whether they replace
    the mirror:

    - a sequence reply whose ids are in the same order as the mirror is
      discarded, since the mirror already holds that edit or a newer one;
    - a sequence reply is also discarded while a newer edit is still in
      flight, because that edit's own reply will follow it;
    - a filter reply is discarded when a newer filter request was sent.

    Construct one per application and pass it to whatever needs the board.
    """

    def __init__(self, channel: ChannelProtocol, config: BoardConfig | None = None) -> None:
        self.channel = channel
        self.config = config or BoardConfig()
        self.visibility = VisibilityState(self.config.initial_load, self.config.load_more_chunk)

        self._cards: list[Card] = []
        self._view = BoardView()
        self._search_query = ""
        self._total_cards_count = self.config.default_card_count

        self._request_id = 0
        self._latest_mutation_id = 0
        self._latest_filter_id = 0
        self._wholesale_pending: set[int] = set()
        self._filter_pending = False
        self._listeners: list[Listener] = []

    # --- Lifecycle ---

    def start(
        self,
        deliver: Callable[[object], None] | None = None,
        count: int | None = None,
    ) -> bool:
        """
        Start the worker channel and generate the initial board.

        Args:
            deliver: Receives replies from the worker; defaults to
                ``handle_reply``. Apps that must handle replies on their own
                thread pass a function that hands them over.
            count: Initial board size (default: configured default)

        Returns:
            False if ``count`` was rejected and no board was generated
        """
        self.channel.start(deliver or self.handle_reply)
        return self.set_total_cards_count(count or self.config.default_card_count)

    def stop(self) -> None:
        self.channel.stop()

    # --- Listeners ---

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Call ``callback`` after every state change.

        Returns:
            A function that removes the subscription.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception:
                logger.exception("Board listener failed: %r", callback)

    # --- Read API ---

    @property
    def cards(self) -> list[Card]:
        """The mirrored sequence."""
        return list(self._cards)

    @property
    def filtered_cards(self) -> dict[CardStatus, list[Card]]:
        return {status: list(cards) for status, cards in self._view.columns.items()}

    @property
    def totals(self) -> dict[CardStatus, int]:
        return dict(self._view.totals)

    @property
    def visible_count(self) -> dict[CardStatus, int]:
        return self.visibility.as_dict()

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def is_search_active(self) -> bool:
        """Whether a non-blank search query is applied."""
        return is_search_query(self._search_query)

    @property
    def is_searching(self) -> bool:
        """Whether a search is active and its results are still on the way."""
        return self.is_search_active and self._filter_pending

    @property
    def is_loading(self) -> bool:
        """Whether a regenerate or reset has not been answered yet."""
        return bool(self._wholesale_pending)

    @property
    def results_capped(self) -> bool:
        """Whether a search result column was cut at the search cap."""
        return self._view.capped

    @property
    def total_cards_count(self) -> int:
        return self._total_cards_count

    @property
    def view(self) -> BoardView:
        return self._view

    def get_card(self, card_id: str) -> Card | None:
        try:
            return self._cards[ordering.index_of(self._cards, card_id)]
        except CardNotFoundError:
            return None

    def limit_for(self, status: CardStatus) -> SliceLimit:
        """Per-column slice limit under the current search state."""
        if self.is_search_active:
            return Bounded(n=self.config.search_cap)
        return Bounded(n=self.visibility[status])

    # --- Edits ---

    def add_card(self, draft: CardDraft) -> Card | None:
        """Add a card to the front of the board.

        The card id is chosen here and sent along, so later edits made
        before the worker replies refer to the same card on both sides.
        """
        if not self._ready():
            return None
        card = Card.from_draft(new_card_id(), draft)
        self._cards = ordering.insert_front(self._cards, card)

        if self._counts(card):
            self._reslice(lambda flat: ordering.insert_front(flat, card), None, card)
        self._send_mutation(
            AddCard(request_id=self._next_request_id(), card=draft, card_id=card.id)
        )
        return card

    def update_card(self, card_id: str, changes: CardUpdate | None = None, **fields) -> bool:
        """Merge fields into a card. Unknown ids are ignored.

        Changes that would leave the card invalid (such as more checklist
        items done than exist) are rejected and nothing is sent.

        Returns:
            True if the card was updated
        """
        if not self._ready():
            return False
        before = self.get_card(card_id)
        if before is None:
            logger.debug("update_card: card not found: %s", card_id)
            return False

        try:
            changes = changes or CardUpdate(**fields)
            after = before.merged(changes)
        except ValidationError as e:
            logger.warning("update_card: rejected changes for %s: %s", card_id, e)
            return False
        self._cards = ordering.update_card(self._cards, card_id, changes)
        self._reslice(
            lambda flat: ordering.update_card(flat, card_id, changes),
            before if self._counts(before) else None,
            after if self._counts(after) else None,
        )
        self._send_mutation(
            UpdateCard(request_id=self._next_request_id(), id=card_id, changes=changes)
        )
        return True

    def delete_card(self, card_id: str) -> bool:
        """Remove a card. Unknown ids are ignored."""
        if not self._ready():
            return False
        before = self.get_card(card_id)
        if before is None:
            logger.debug("delete_card: card not found: %s", card_id)
            return False

        self._cards = ordering.delete_card(self._cards, card_id)
        self._reslice(
            lambda flat: ordering.delete_card(flat, card_id),
            before if self._counts(before) else None,
            None,
        )
        self._send_mutation(DeleteCard(request_id=self._next_request_id(), id=card_id))
        return True

    def move_card(self, card_id: str, status: CardStatus, anchor_id: str | None = None) -> bool:
        """Move a card to another column, before ``anchor_id`` if given.

        Returns:
            True if the card changed column
        """
        if not self._ready():
            return False
        before = self.get_card(card_id)
        if before is None:
            logger.debug("move_card: card not found: %s", card_id)
            return False
        if before.status == status:
            return False

        after = before.with_status(status)
        self._cards = ordering.move_card(self._cards, card_id, status, anchor_id)

        if self._counts(before):

            def mutate(flat: list[Card]) -> list[Card]:
                if not ordering.contains(flat, card_id):
                    # Not loaded yet, but it lands in a loaded position
                    flat = [before, *flat]
                return ordering.move_card(flat, card_id, status, anchor_id)

            self._reslice(mutate, before, after)
        self._send_mutation(
            MoveCard(
                request_id=self._next_request_id(),
                id=card_id,
                status=status,
                anchor_id=anchor_id,
            )
        )
        logger.info("Card moved: %s (%s -> %s)", card_id, before.status.value, status.value)
        return True

    def reorder_cards(self, active_id: str, over_id: str) -> bool:
        """Put ``active_id`` where ``over_id`` is.

        Both cards should share a column; the operation does not check.
        """
        if not self._ready():
            return False
        try:
            self._cards = ordering.reorder_cards(self._cards, active_id, over_id)
        except CardNotFoundError as e:
            logger.debug("reorder_cards: card not found: %s", e.card_id)
            return False

        self._reslice(lambda flat: ordering.reorder_cards(flat, active_id, over_id), None, None)
        self._send_mutation(
            ReorderCards(request_id=self._next_request_id(), active_id=active_id, over_id=over_id)
        )
        return True

    def drop(self, active_id: str, target: str) -> bool:
        """
        Apply a drag-and-drop result.

        Args:
            active_id: The dragged card
            target: A column id (``todo``, ``inprogress``, ``done``) or the
                id of the card it was dropped on

        Returns:
            True if anything changed
        """
        card = self.get_card(active_id)
        if card is None:
            return False

        over: Card | None = None
        if target in {status.value for status in CardStatus}:
            target_status = CardStatus(target)
        else:
            over = self.get_card(target)
            if over is None:
                return False
            target_status = over.status

        if card.status == target_status:
            if over is None or over.id == active_id:
                return False
            return self.reorder_cards(active_id, over.id)
        return self.move_card(active_id, target_status, over.id if over else None)

    # --- Search and windowing ---

    def set_search_query(self, query: str) -> None:
        """Search titles and descriptions (blank clears the search)."""
        if query == self._search_query:
            return
        self._search_query = query
        self.visibility.reset()
        self._request_filter()
        self._notify()

    def load_more_cards(self, status: CardStatus) -> bool:
        """Disclose another chunk of a column.

        Returns:
            True if more cards were requested
        """
        if not self.visibility.load_more(status, self._view.totals[status]):
            return False
        self._request_filter()
        self._notify()
        return True

    def set_total_cards_count(self, count: int) -> bool:
        """Replace the board with ``count`` generated cards.

        Counts outside ``1..max_card_count`` are rejected and nothing changes.
        """
        if not self._ready():
            return False
        try:
            validate_card_count(count, self.config.max_card_count)
        except InvalidCardCountError as e:
            logger.warning("%s", e)
            return False

        self._total_cards_count = count
        self.visibility.reset()
        self._send_mutation(
            Generate(request_id=self._next_request_id(), count=count), wholesale=True
        )
        return True

    def reset(self) -> bool:
        """Back to the default board with no search."""
        if not self._ready():
            return False
        self._search_query = ""
        self._total_cards_count = self.config.default_card_count
        self.visibility.reset()
        self._send_mutation(Reset(request_id=self._next_request_id()), wholesale=True)
        return True

    # --- Worker replies ---

    def handle_reply(self, reply: object) -> None:
        """Process one reply from the worker."""
        if isinstance(reply, Filtered):
            self._on_filtered(reply)
        elif isinstance(reply, Generated | Updated):
            self._on_sequence(reply)
        elif isinstance(reply, Failed):
            self._on_failed(reply)
        else:
            logger.warning("Ignoring unknown reply: %r", type(reply).__name__)

    def _on_sequence(self, reply: Generated | Updated) -> None:
        wholesale = reply.in_reply_to in self._wholesale_pending
        self._wholesale_pending.discard(reply.in_reply_to)

        if reply.in_reply_to < self._latest_mutation_id:
            logger.debug(
                "Discarding reply #%d: edit #%d still in flight",
                reply.in_reply_to,
                self._latest_mutation_id,
            )
            self._notify()
            return

        if not wholesale and ordering.id_order(reply.cards) == ordering.id_order(self._cards):
            logger.debug("Discarding reply #%d: mirror already up to date", reply.in_reply_to)
            self._notify()
            return

        logger.debug("Adopting reply #%d (%d cards)", reply.in_reply_to, len(reply.cards))
        self._cards = list(reply.cards)
        self._request_filter()
        self._notify()

    def _on_filtered(self, reply: Filtered) -> None:
        if reply.in_reply_to < self._latest_filter_id:
            logger.debug(
                "Discarding filter reply #%d: #%d is newer",
                reply.in_reply_to,
                self._latest_filter_id,
            )
            return
        self._filter_pending = False
        self._view = BoardView.from_reply(reply)
        self._notify()

    def _on_failed(self, reply: Failed) -> None:
        # Nothing else will answer this command, so stop waiting on it
        logger.warning("Worker failed %s #%d: %s", reply.command, reply.in_reply_to, reply.error)
        self._wholesale_pending.discard(reply.in_reply_to)
        if reply.in_reply_to == self._latest_filter_id:
            self._filter_pending = False
        self._notify()

    # --- Internals ---

    def _ready(self) -> bool:
        if not self.channel.is_running:
            logger.debug("Channel unavailable, ignoring edit")
            return False
        return True

    def _next_request_id(self) -> int:
        self._request_id += 1
        return self._request_id

    def _counts(self, card: Card) -> bool:
        """Whether ``card`` matches the active search (always, if none)."""
        return not self.is_search_active or card.matches(self._search_query.lower())

    def _reslice(
        self,
        mutate: Callable[[list[Card]], list[Card]],
        before: Card | None,
        after: Card | None,
    ) -> None:
        self._view = self._view.reslice(mutate, before, after, self.limit_for)

    def _send(self, command) -> bool:
        try:
            self.channel.send(command)
        except ChannelUnavailableError:
            logger.debug("Channel unavailable, dropping %s #%d", command.type, command.request_id)
            return False
        return True

    def _send_mutation(self, command, wholesale: bool = False) -> None:
        if not self._send(command):
            self._notify()
            return
        self._latest_mutation_id = command.request_id
        if wholesale:
            self._wholesale_pending.add(command.request_id)
        self._request_filter()
        self._notify()

    def _request_filter(self) -> None:
        searching = self.is_search_active
        command = Filter(
            request_id=self._next_request_id(),
            query=self._search_query,
            limits={status: Bounded(n=n) for status, n in self.visibility.as_dict().items()},
            search_cap=Bounded(n=self.config.search_cap) if searching else UNBOUNDED,
        )
        if self._send(command):
            self._latest_filter_id = command.request_id
            self._filter_pending = True
