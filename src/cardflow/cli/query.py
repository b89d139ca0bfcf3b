"""Headless search: run the board engine without the TUI."""

import logging

from ..exceptions import InvalidCardCountError, validate_card_count
from ..models import BoardConfig
from ..store import CardStore
from ..sync import BoardSync
from ..worker import CardWorker, InlineChannel
from .output import detail, error, header, info, success

logger = logging.getLogger(__name__)

# Results printed per column
PREVIEW_LIMIT = 5


def run_query(config: BoardConfig, query: str, count: int | None = None) -> int:
    """
    Generate a board, run ``query`` against it and print the results.

    Args:
        config: Board configuration (search cap, default size)
        query: Search text (blank shows the initial columns)
        count: Board size (default: config default)

    Returns:
        Exit code (0 = success, 1 = invalid card count)
    """
    count = count or config.default_card_count
    try:
        validate_card_count(count, config.max_card_count)
    except InvalidCardCountError as e:
        error(str(e))
        return 1

    channel = InlineChannel(CardWorker(CardStore(default_count=config.default_card_count)))
    board = BoardSync(channel, config)
    board.start(count=count)
    board.set_search_query(query)
    processed = channel.pump()
    logger.debug("Processed %d worker commands", processed)

    if board.is_search_active:
        header(f'Search "{query}" over {count} cards')
    else:
        header(f"Board of {count} cards")

    for status, title in config.columns:
        shown = board.filtered_cards[status]
        total = board.totals[status]
        info(f"{title}: {len(shown)} shown of {total}")
        for card in shown[:PREVIEW_LIMIT]:
            detail(f"{card.id}  {card.title}")

    if board.results_capped:
        info(f"Showing top {config.search_cap} results per column. Refine your search.")
    success(f"{sum(board.totals.values())} matching cards")
    return 0
