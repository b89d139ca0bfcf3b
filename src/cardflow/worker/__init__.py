"""Background card worker and the channels that reach it."""

from .channel import ChannelProtocol, InlineChannel, ThreadedChannel
from .worker import CardWorker

__all__ = [
    "CardWorker",
    "ChannelProtocol",
    "InlineChannel",
    "ThreadedChannel",
]
