"""Application bootstrap assembly for storage and babbler services."""
from __future__ import annotations

import random
from dataclasses import dataclass

from ..config import BabblerConfig
from ..domain.tokens import BOOTSTRAP_WORD
from ..storage.graph_repository import SqliteBabblerRepository
from ..storage.memory_repository import InMemoryBabblerRepository
from ..storage.quote_repository import NullQuoteSource, SqliteQuoteRepository
from .commands import CommandInterpreter
from .generator import Generator
from .learner import Learner
from .merger import Merger
from .ports import GraphStore, QuoteSource, ReplySink
from .speakers import SpeakerRegistry


@dataclass(frozen=True)
class BabblerServices:
    store: GraphStore
    quote_source: QuoteSource
    learner: Learner
    generator: Generator
    merger: Merger
    registry: SpeakerRegistry
    interpreter: CommandInterpreter


def build_store(config: BabblerConfig, logger) -> GraphStore:
    if config.storage_backend == "memory":
        logger.info("Babbler storage: in-memory (nothing is persisted)")
        return InMemoryBabblerRepository()
    logger.info(
        "Babbler storage: sqlite path=%s prefix=%s",
        config.db_path,
        config.db_table_prefix,
    )
    return SqliteBabblerRepository(
        db_path=config.db_path,
        table_prefix=config.db_table_prefix,
        logger_instance=logger,
    )


def build_quote_source(config: BabblerConfig, logger) -> QuoteSource:
    if not config.quotes_enabled:
        logger.info("Quote backfill is disabled.")
        return NullQuoteSource()
    return SqliteQuoteRepository(
        config.quotes_db_path,
        config.quotes_table,
        logger_instance=logger,
    )


def initialize_services(
    *,
    config: BabblerConfig,
    logger,
    reply_sink: ReplySink,
    store: GraphStore | None = None,
    quote_source: QuoteSource | None = None,
    rng: random.Random | None = None,
) -> BabblerServices:
    """Construct the babbler services and return a typed service bundle."""
    if store is None:
        store = build_store(config, logger)
    if quote_source is None:
        quote_source = build_quote_source(config, logger)
    store.get_or_create_word(BOOTSTRAP_WORD)

    if rng is None:
        rng = random.Random(config.random_seed)
        if config.random_seed is not None:
            logger.info("Babbler random source seeded with %s", config.random_seed)

    learner = Learner(store, logger_instance=logger)
    generator = Generator(
        store,
        rng,
        max_words=config.max_words,
        logger_instance=logger,
    )
    merger = Merger(store, logger_instance=logger)
    registry = SpeakerRegistry(store, learner, quote_source, logger_instance=logger)
    interpreter = CommandInterpreter(
        registry=registry,
        learner=learner,
        generator=generator,
        merger=merger,
        reply_sink=reply_sink,
        logger_instance=logger,
    )
    return BabblerServices(
        store=store,
        quote_source=quote_source,
        learner=learner,
        generator=generator,
        merger=merger,
        registry=registry,
        interpreter=interpreter,
    )
