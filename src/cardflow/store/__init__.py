"""Authoritative card storage and querying."""

from .card_store import CardStore, new_card_id
from .generator import generate_cards
from .query import FilterEngine, QueryResult, is_search_query

__all__ = [
    "CardStore",
    "FilterEngine",
    "QueryResult",
    "generate_cards",
    "is_search_query",
    "new_card_id",
]
