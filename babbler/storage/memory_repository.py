"""Process-local graph store holding records in integer-addressed arenas."""
from __future__ import annotations

import threading
from dataclasses import replace

from ..domain.errors import NeverSaid, SpeakerNotFound, StorageError
from ..domain.models import Arc, Node, Speaker, Word


class InMemoryBabblerRepository:
    """Same contract as :class:`SqliteBabblerRepository`, without persistence.

    Ids are assigned in insertion order starting at 1, so ordering by id is
    ordering by creation.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._speakers: dict[int, Speaker] = {}
        self._speaker_ids: dict[str, int] = {}
        self._words: dict[int, Word] = {}
        self._word_ids: dict[str, int] = {}
        self._nodes: dict[int, Node] = {}
        self._node_ids: dict[tuple[int, int], int] = {}
        self._arcs: dict[int, Arc] = {}
        self._arc_ids: dict[tuple[int, int], int] = {}
        self._arcs_by_source: dict[int, list[int]] = {}

    def get_or_create_word(self, text: str) -> Word:
        with self._lock:
            word_id = self._word_ids.get(text)
            if word_id is None:
                word_id = len(self._words) + 1
                self._words[word_id] = Word(id=word_id, text=text)
                self._word_ids[text] = word_id
            return self._words[word_id]

    def get_word(self, text: str) -> Word:
        with self._lock:
            word_id = self._word_ids.get(text)
            if word_id is None:
                raise NeverSaid(f"nobody ever said {text!r}")
            return self._words[word_id]

    def get_word_by_id(self, word_id: int) -> Word:
        with self._lock:
            try:
                return self._words[word_id]
            except KeyError as exc:
                raise StorageError(f"Word id {word_id} does not exist.") from exc

    def create_speaker(self, name: str) -> Speaker:
        with self._lock:
            if name in self._speaker_ids:
                raise StorageError(f"Speaker {name!r} already exists.")
            speaker = Speaker(id=len(self._speakers) + 1, name=name)
            self._speakers[speaker.id] = speaker
            self._speaker_ids[name] = speaker.id
            return speaker

    def get_speaker(self, name: str) -> Speaker:
        with self._lock:
            speaker_id = self._speaker_ids.get(name)
            if speaker_id is None:
                raise SpeakerNotFound(name)
            return self._speakers[speaker_id]

    def get_or_create_node(self, speaker: Speaker, word: Word) -> Node:
        with self._lock:
            key = (speaker.id, word.id)
            node_id = self._node_ids.get(key)
            if node_id is None:
                node_id = len(self._nodes) + 1
                self._nodes[node_id] = Node(
                    id=node_id,
                    speaker_id=speaker.id,
                    word_id=word.id,
                    is_root=False,
                    root_frequency=0,
                )
                self._node_ids[key] = node_id
            return self._nodes[node_id]

    def get_node(self, speaker: Speaker, word: Word) -> Node:
        with self._lock:
            node_id = self._node_ids.get((speaker.id, word.id))
            if node_id is None:
                raise NeverSaid(f"{speaker.name} never said {word.text!r}")
            return self._nodes[node_id]

    def get_node_by_id(self, node_id: int) -> Node:
        with self._lock:
            return self._require_node(node_id)

    def increment_root(self, node: Node, amount: int = 1) -> Node:
        _require_positive(amount)
        with self._lock:
            current = self._require_node(node.id)
            updated = replace(
                current,
                is_root=True,
                root_frequency=current.root_frequency + amount,
            )
            self._nodes[node.id] = updated
            return updated

    def list_root_nodes(self, speaker: Speaker) -> list[Node]:
        with self._lock:
            return [
                node
                for node in self._nodes.values()
                if node.speaker_id == speaker.id and node.is_root
            ]

    def list_nodes(self, speaker: Speaker) -> list[Node]:
        with self._lock:
            return [
                node
                for node in self._nodes.values()
                if node.speaker_id == speaker.id
            ]

    def get_arc(self, from_node: Node, to_node: Node) -> Arc:
        with self._lock:
            arc_id = self._arc_ids.get((from_node.id, to_node.id))
            if arc_id is None:
                raise NeverSaid(
                    f"no transition from node {from_node.id} to node {to_node.id}"
                )
            return self._arcs[arc_id]

    def increment_arc(self, from_node: Node, to_node: Node, amount: int = 1) -> Arc:
        _require_positive(amount)
        with self._lock:
            key = (from_node.id, to_node.id)
            arc_id = self._arc_ids.get(key)
            if arc_id is None:
                arc_id = len(self._arcs) + 1
                arc = Arc(
                    id=arc_id,
                    from_node_id=from_node.id,
                    to_node_id=to_node.id,
                    frequency=amount,
                )
                self._arc_ids[key] = arc_id
                self._arcs_by_source.setdefault(from_node.id, []).append(arc_id)
            else:
                current = self._arcs[arc_id]
                arc = replace(current, frequency=current.frequency + amount)
            self._arcs[arc_id] = arc
            return arc

    def list_arcs_from(self, node: Node) -> list[Arc]:
        with self._lock:
            return [self._arcs[arc_id] for arc_id in self._arcs_by_source.get(node.id, [])]

    def _require_node(self, node_id: int) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError as exc:
            raise StorageError(f"Node id {node_id} does not exist.") from exc


def _require_positive(amount: int) -> None:
    if int(amount) < 1:
        raise ValueError(f"Increment amount must be positive, got {amount}.")
