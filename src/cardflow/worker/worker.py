"""Card worker: applies commands to the authoritative store."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..models.messages import (
    AddCard,
    DeleteCard,
    Filter,
    Filtered,
    Generate,
    Failed,
    Generated,
    MoveCard,
    ReorderCards,
    Reset,
    UpdateCard,
    Updated,
)
from ..store import CardStore, FilterEngine

logger = logging.getLogger(__name__)


class CardWorker:
    """
    Owns the authoritative card store and answers commands.

    ``handle`` runs one command to completion and returns its reply. The
    worker has no locking of its own: a channel feeds it one command at a
    time.
    """

    def __init__(self, store: CardStore | None = None, engine: FilterEngine | None = None) -> None:
        self.store = store or CardStore()
        self.engine = engine or FilterEngine()
        self._handlers: dict[type, Callable] = {
            Generate: self._generate,
            Filter: self._filter,
            AddCard: self._add,
            UpdateCard: self._update,
            DeleteCard: self._delete,
            MoveCard: self._move,
            ReorderCards: self._reorder,
            Reset: self._reset,
        }

    def handle(self, command) -> Generated | Updated | Filtered:
        """Apply ``command`` and build its reply."""
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {type(command).__name__}")
        logger.debug("Handling %s #%d", command.type, command.request_id)
        return handler(command)

    def answer(self, command) -> Generated | Updated | Filtered | Failed:
        """Like ``handle``, but a failing command yields a ``Failed`` reply.

        Channels use this so every command gets exactly one reply.
        """
        try:
            return self.handle(command)
        except Exception as e:
            logger.exception("Worker failed handling %r", command)
            return Failed(
                in_reply_to=getattr(command, "request_id", 0),
                command=getattr(command, "type", type(command).__name__),
                error=str(e),
            )

    def _generate(self, command: Generate) -> Generated:
        cards = self.store.regenerate(command.count)
        return Generated(in_reply_to=command.request_id, cards=cards)

    def _filter(self, command: Filter) -> Filtered:
        result = self.engine.run(
            self.store.cards,
            command.query,
            command.limits,
            command.search_cap,
        )
        logger.debug("Filter #%d matched %d cards", command.request_id, result.total)
        return Filtered(
            in_reply_to=command.request_id,
            columns=result.columns,
            totals=result.totals,
            is_search=result.is_search,
            capped=result.capped,
        )

    def _add(self, command: AddCard) -> Updated:
        cards = self.store.add(command.card, card_id=command.card_id)
        return Updated(in_reply_to=command.request_id, cards=cards)

    def _update(self, command: UpdateCard) -> Updated:
        cards = self.store.update(command.id, command.changes)
        return Updated(in_reply_to=command.request_id, cards=cards)

    def _delete(self, command: DeleteCard) -> Updated:
        return Updated(in_reply_to=command.request_id, cards=self.store.delete(command.id))

    def _move(self, command: MoveCard) -> Updated:
        cards = self.store.move(command.id, command.status, command.anchor_id)
        return Updated(in_reply_to=command.request_id, cards=cards)

    def _reorder(self, command: ReorderCards) -> Updated:
        cards = self.store.reorder(command.active_id, command.over_id)
        return Updated(in_reply_to=command.request_id, cards=cards)

    def _reset(self, command: Reset) -> Updated:
        return Updated(in_reply_to=command.request_id, cards=self.store.reset())
