"""Storage layer for the word graph and historical quotes."""

from .graph_repository import SqliteBabblerRepository
from .memory_repository import InMemoryBabblerRepository
from .quote_repository import NullQuoteSource, SqliteQuoteRepository

__all__ = [
    "InMemoryBabblerRepository",
    "NullQuoteSource",
    "SqliteBabblerRepository",
    "SqliteQuoteRepository",
]
