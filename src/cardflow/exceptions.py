"""Exceptions raised inside cardflow.

None of these reach the presentation layer: the board service catches
them where they are detected and leaves its state unchanged.
"""


class CardflowError(Exception):
    """Base exception for cardflow errors."""

    pass


class CardNotFoundError(CardflowError):
    """A referenced card id is not in the sequence."""

    def __init__(self, card_id: str) -> None:
        super().__init__(f"Card not found: {card_id}")
        self.card_id = card_id


class InvalidCardCountError(CardflowError, ValueError):
    """Requested board size is outside the accepted range."""

    def __init__(self, count: int, maximum: int) -> None:
        super().__init__(f"Card count must be between 1 and {maximum}, got {count}")
        self.count = count
        self.maximum = maximum


class ChannelUnavailableError(CardflowError):
    """The worker channel is not running."""

    pass


def validate_card_count(count: int, maximum: int) -> int:
    """Return ``count`` if it is a valid board size, else raise."""
    if isinstance(count, bool) or not isinstance(count, int) or not 1 <= count <= maximum:
        raise InvalidCardCountError(count, maximum)
    return count
