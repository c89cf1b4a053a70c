"""Ingests utterances into a speaker's word graph."""

from __future__ import annotations

import logging
from typing import Iterable

from ..domain.errors import StorageError
from ..domain.models import Speaker
from ..domain.tokens import TERMINAL_WORD, tokenize
from .ports import GraphStore

logger = logging.getLogger(__name__)


class Learner:
    def __init__(self, store: GraphStore, logger_instance=None) -> None:
        self.store = store
        self.logger = logger_instance or logger

    def learn(self, speaker: Speaker, utterance: str) -> bool:
        """Record one utterance for ``speaker``.

        Returns ``False`` for utterances without words and for storage
        failures, which are logged rather than raised. Increments made before
        a failure are kept.
        """
        words = tokenize(utterance)
        if not words:
            return False
        try:
            self._add_to_chain(speaker, words)
        except StorageError:
            self.logger.exception("Failed to learn utterance for %s", speaker.name)
            return False
        return True

    def learn_lines(self, speaker: Speaker, lines: Iterable[str]) -> int:
        learned = 0
        for line in lines:
            if self.learn(speaker, line):
                learned += 1
        return learned

    def _add_to_chain(self, speaker: Speaker, words: list[str]) -> None:
        store = self.store
        first = store.get_or_create_node(speaker, store.get_or_create_word(words[0]))
        current = store.increment_root(first)
        for text in words[1:]:
            next_node = store.get_or_create_node(speaker, store.get_or_create_word(text))
            store.increment_arc(current, next_node)
            current = next_node
        terminal = store.get_or_create_node(speaker, store.get_or_create_word(TERMINAL_WORD))
        store.increment_arc(current, terminal)
