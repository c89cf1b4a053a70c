"""Application-level ports for graph storage, quote backfill and replies."""

from __future__ import annotations

from typing import Protocol, Sequence

from ..domain.models import Arc, Node, Speaker, Word


class GraphStore(Protocol):
    """Storage contract shared by the learner, generator and merger.

    Every ``list_*`` method returns rows ordered by ascending id.
    """

    def get_or_create_word(self, text: str) -> Word: ...

    def get_word(self, text: str) -> Word: ...

    def get_word_by_id(self, word_id: int) -> Word: ...

    def create_speaker(self, name: str) -> Speaker: ...

    def get_speaker(self, name: str) -> Speaker: ...

    def get_or_create_node(self, speaker: Speaker, word: Word) -> Node: ...

    def get_node(self, speaker: Speaker, word: Word) -> Node: ...

    def get_node_by_id(self, node_id: int) -> Node: ...

    def increment_root(self, node: Node, amount: int = 1) -> Node: ...

    def get_arc(self, from_node: Node, to_node: Node) -> Arc: ...

    def increment_arc(self, from_node: Node, to_node: Node, amount: int = 1) -> Arc: ...

    def list_root_nodes(self, speaker: Speaker) -> list[Node]: ...

    def list_nodes(self, speaker: Speaker) -> list[Node]: ...

    def list_arcs_from(self, node: Node) -> list[Arc]: ...


class QuoteSource(Protocol):
    """Historical lines attributed to a speaker, used for backfill."""

    def quotes_for(self, speaker_name: str) -> Sequence[str]: ...


class ReplySink(Protocol):
    """Delivers reply text to a chat channel."""

    def send_reply(self, channel: str, text: str) -> None: ...
