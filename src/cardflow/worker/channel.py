"""Transports that carry commands to a card worker and replies back."""

from __future__ import annotations

import logging
import queue
import threading
from collections import deque
from collections.abc import Callable
from typing import Protocol

from ..exceptions import ChannelUnavailableError
from .worker import CardWorker

logger = logging.getLogger(__name__)

ReplyCallback = Callable[[object], None]


class ChannelProtocol(Protocol):
    """Interface for a command channel to the card worker.

    Commands are handled strictly in the order they are sent, one at a
    time. Replies are passed to the callback given to ``start`` in the
    same order.
    """

    @property
    def is_running(self) -> bool:
        """Whether ``send`` will accept commands."""
        ...

    def start(self, deliver: ReplyCallback) -> None:
        """Begin processing; replies go to ``deliver``."""
        ...

    def send(self, command: object) -> None:
        """Queue a command for the worker.

        Raises:
            ChannelUnavailableError: If the channel is not running.
        """
        ...

    def stop(self) -> None:
        """Stop processing. Queued commands may be dropped."""
        ...


class ThreadedChannel:
    """
    Runs a card worker on a background daemon thread.

    Replies are delivered on the worker thread; callers that need them on
    another thread (such as a Textual app) pass a ``deliver`` that hands
    them over, e.g. ``app.call_from_thread``.
    """

    _STOP = object()

    def __init__(self, worker: CardWorker | None = None, name: str = "cardflow-worker") -> None:
        self.worker = worker or CardWorker()
        self._name = name
        self._inbox: queue.Queue = queue.Queue()
        self._thread: threading.Thread | None = None
        self._deliver: ReplyCallback | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, deliver: ReplyCallback) -> None:
        if self.is_running:
            return
        self._deliver = deliver
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.debug("Worker thread started: %s", self._name)

    def send(self, command: object) -> None:
        if not self.is_running:
            raise ChannelUnavailableError("Worker thread is not running")
        self._inbox.put(command)

    def stop(self, timeout: float | None = 1.0) -> None:
        if self._thread is None:
            return
        self._inbox.put(self._STOP)
        self._thread.join(timeout)
        self._thread = None
        logger.debug("Worker thread stopped: %s", self._name)

    def _run(self) -> None:
        while True:
            command = self._inbox.get()
            if command is self._STOP:
                return
            reply = self.worker.answer(command)
            if self._deliver is not None:
                self._deliver(reply)


class InlineChannel:
    """
    Runs a card worker on the calling thread, on demand.

    Sent commands wait in a queue until ``pump`` processes them, which makes
    delivery order fully controllable. Used by the headless CLI and tests.
    """

    def __init__(self, worker: CardWorker | None = None) -> None:
        self.worker = worker or CardWorker()
        self._pending: deque = deque()
        self._deliver: ReplyCallback | None = None

    @property
    def is_running(self) -> bool:
        return self._deliver is not None

    @property
    def pending(self) -> int:
        """Number of commands waiting to be processed."""
        return len(self._pending)

    def start(self, deliver: ReplyCallback) -> None:
        self._deliver = deliver

    def send(self, command: object) -> None:
        if not self.is_running:
            raise ChannelUnavailableError("Inline channel is not started")
        self._pending.append(command)

    def stop(self) -> None:
        self._deliver = None
        self._pending.clear()

    def step(self):
        """Process the oldest queued command and return its reply undelivered."""
        command = self._pending.popleft()
        return self.worker.answer(command)

    def pump(self, limit: int | None = None) -> int:
        """Process queued commands and deliver their replies.

        Args:
            limit: Maximum number of commands to process (default: all,
                including any sent while pumping)

        Returns:
            Number of commands processed.
        """
        processed = 0
        while self._pending and (limit is None or processed < limit):
            reply = self.step()
            processed += 1
            if self._deliver is not None:
                self._deliver(reply)
        return processed
