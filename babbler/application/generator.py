"""Weighted random walks over a speaker's word graph."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from ..domain.errors import MissingArcs, NoUtterances
from ..domain.models import Node, Speaker
from ..domain.sampling import weighted_pick
from ..domain.tokens import TERMINAL_WORD, tokenize
from .ports import GraphStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORDS = 200


class Generator:
    """Produces utterances for a speaker.

    Roots and arcs are drawn in ascending id order, so a seeded ``rng``
    yields the same walk for the same graph.
    """

    def __init__(
        self,
        store: GraphStore,
        rng: random.Random | None = None,
        *,
        max_words: int = DEFAULT_MAX_WORDS,
        logger_instance=None,
    ) -> None:
        self.store = store
        self.rng = rng or random.Random()
        self.max_words = max(1, int(max_words))
        self.logger = logger_instance or logger

    def generate(self, speaker_name: str, seed: Sequence[str] = ()) -> str:
        speaker = self.store.get_speaker(speaker_name)
        seed_words = tokenize(" ".join(seed))
        if seed_words:
            current = self._follow_seed(speaker, seed_words)
            words = list(seed_words)
        else:
            current = self._weighted_root(speaker)
            words = [self.store.get_word_by_id(current.word_id).text]

        while True:
            if len(words) >= self.max_words:
                self.logger.warning(
                    "Walk for %s stopped at %s words without reaching the end marker",
                    speaker.name,
                    len(words),
                )
                break
            current = self._weighted_next(current)
            text = self.store.get_word_by_id(current.word_id).text
            if text == TERMINAL_WORD:
                break
            words.append(text)

        return " ".join(words).strip()

    def _weighted_root(self, speaker: Speaker) -> Node:
        roots = self.store.list_root_nodes(speaker)
        picked = weighted_pick(roots, lambda node: node.root_frequency, self.rng)
        if picked is None:
            raise NoUtterances(speaker.name)
        return picked

    def _weighted_next(self, node: Node) -> Node:
        arcs = self.store.list_arcs_from(node)
        picked = weighted_pick(arcs, lambda arc: arc.frequency, self.rng)
        if picked is None:
            raise MissingArcs(node.id)
        return self.store.get_node_by_id(picked.to_node_id)

    def _follow_seed(self, speaker: Speaker, seed_words: list[str]) -> Node:
        """Resolve the node at the end of ``seed_words``.

        Raises :class:`NeverSaid` unless every word was said by the speaker
        and every consecutive pair was observed as a transition.
        """
        current = self._node_for(speaker, seed_words[0])
        for text in seed_words[1:]:
            next_node = self._node_for(speaker, text)
            self.store.get_arc(current, next_node)
            current = next_node
        return current

    def _node_for(self, speaker: Speaker, text: str) -> Node:
        word = self.store.get_word(text)
        return self.store.get_node(speaker, word)

