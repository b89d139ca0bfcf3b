"""Tests for worker channels."""

import threading

import pytest

from cardflow.exceptions import ChannelUnavailableError
from cardflow.models import STATUSES, Bounded
from cardflow.models.messages import (
    DeleteCard,
    Failed,
    Filter,
    Filtered,
    Generate,
    Generated,
    Updated,
)
from cardflow.worker import CardWorker, InlineChannel, ThreadedChannel


class TestInlineChannel:
    """Tests for InlineChannel."""

    @pytest.fixture
    def replies(self) -> list:
        return []

    @pytest.fixture
    def channel(self, replies: list) -> InlineChannel:
        ch = InlineChannel(CardWorker())
        ch.start(replies.append)
        return ch

    def test_send_requires_start(self):
        with pytest.raises(ChannelUnavailableError):
            InlineChannel().send(Generate(count=3))

    def test_commands_wait_for_pump(self, channel: InlineChannel, replies: list):
        channel.send(Generate(request_id=1, count=3))
        assert channel.pending == 1
        assert replies == []

        assert channel.pump() == 1
        assert isinstance(replies[0], Generated)
        assert channel.pending == 0

    def test_replies_in_send_order(self, channel: InlineChannel, replies: list):
        channel.send(Generate(request_id=1, count=9))
        channel.send(DeleteCard(request_id=2, id="card-0"))
        channel.send(Filter(request_id=3, limits={s: Bounded(n=10) for s in STATUSES}))
        channel.pump()

        assert [reply.in_reply_to for reply in replies] == [1, 2, 3]
        assert isinstance(replies[1], Updated)
        assert isinstance(replies[2], Filtered)
        assert sum(replies[2].totals.values()) == 8

    def test_pump_limit(self, channel: InlineChannel, replies: list):
        channel.send(Generate(request_id=1, count=3))
        channel.send(Generate(request_id=2, count=3))
        assert channel.pump(limit=1) == 1
        assert channel.pending == 1

    def test_step_returns_reply_undelivered(self, channel: InlineChannel, replies: list):
        channel.send(Generate(request_id=5, count=3))
        reply = channel.step()
        assert reply.in_reply_to == 5
        assert replies == []

    def test_stop_drops_pending(self, channel: InlineChannel):
        channel.send(Generate(count=3))
        channel.stop()
        assert not channel.is_running
        assert channel.pending == 0

    def test_failing_command_replies_failed(
        self, channel: InlineChannel, replies: list, monkeypatch
    ):
        """The worker's exception comes back as a Failed reply."""

        def explode(count: int):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(channel.worker.store, "regenerate", explode)
        channel.send(Generate(request_id=7, count=3))
        channel.pump()

        assert replies == [Failed(in_reply_to=7, command="generate", error="disk on fire")]


class TestThreadedChannel:
    """Tests for ThreadedChannel."""

    def test_send_before_start_raises(self):
        with pytest.raises(ChannelUnavailableError):
            ThreadedChannel().send(Generate(count=3))

    def test_replies_delivered_in_order(self):
        replies: list = []
        done = threading.Event()

        def deliver(reply) -> None:
            replies.append(reply)
            if reply.in_reply_to == 3:
                done.set()

        channel = ThreadedChannel(CardWorker())
        channel.start(deliver)
        try:
            channel.send(Generate(request_id=1, count=30))
            channel.send(DeleteCard(request_id=2, id="card-0"))
            channel.send(Filter(request_id=3))
            assert done.wait(timeout=5)
        finally:
            channel.stop()

        assert [reply.in_reply_to for reply in replies] == [1, 2, 3]
        assert replies[2].totals[STATUSES[0]] == 9
        assert not channel.is_running

    def test_worker_error_does_not_stop_thread(self):
        """A failing command gets a Failed reply and later commands still run."""
        replies: list = []
        done = threading.Event()

        def deliver(reply) -> None:
            replies.append(reply)
            if reply.in_reply_to == 2:
                done.set()

        channel = ThreadedChannel(CardWorker())
        channel.start(deliver)
        try:
            channel.send(object())
            channel.send(Generate(request_id=2, count=3))
            assert done.wait(timeout=5)
        finally:
            channel.stop()

        assert [type(reply) for reply in replies] == [Failed, Generated]
        assert replies[1].in_reply_to == 2

