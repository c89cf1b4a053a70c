"""Speaker lookup with lazy creation and quote backfill."""

from __future__ import annotations

import logging

from ..domain.errors import SpeakerNotFound
from ..domain.models import Speaker
from .learner import Learner
from .ports import GraphStore, QuoteSource

logger = logging.getLogger(__name__)


class SpeakerRegistry:
    def __init__(
        self,
        store: GraphStore,
        learner: Learner,
        quote_source: QuoteSource,
        logger_instance=None,
    ) -> None:
        self.store = store
        self.learner = learner
        self.quote_source = quote_source
        self.logger = logger_instance or logger

    def get_speaker(self, name: str) -> Speaker:
        return self.store.get_speaker(name)

    def get_or_create_speaker(self, name: str) -> Speaker:
        try:
            return self.store.get_speaker(name)
        except SpeakerNotFound:
            pass
        speaker = self.store.create_speaker(name)
        self.logger.info("Created babbler for %s", name)
        self._backfill(speaker)
        return speaker

    def _backfill(self, speaker: Speaker) -> None:
        try:
            quotes = list(self.quote_source.quotes_for(speaker.name) or [])
        except Exception:
            self.logger.exception("Failed to load quotes for %s", speaker.name)
            return
        if not quotes:
            return
        learned = self.learner.learn_lines(speaker, quotes)
        self.logger.info(
            "Backfilled %s from quotes: learned=%s total=%s",
            speaker.name,
            learned,
            len(quotes),
        )
