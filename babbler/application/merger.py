"""Folds one speaker's word graph into another's."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ..domain.errors import BabblerError
from ..domain.models import Node
from ..domain.tokens import boundary_word
from .ports import GraphStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeReport:
    into: str
    other: str
    nodes_merged: int
    arcs_replayed: int
    transitions_replayed: int


class Merger:
    def __init__(self, store: GraphStore, logger_instance=None) -> None:
        self.store = store
        self.logger = logger_instance or logger

    def merge(self, into_name: str, other_name: str) -> MergeReport:
        """Union ``other_name``'s graph into ``into_name``'s.

        Root frequencies are added node by node and every arc is replayed
        with its full frequency, so relative weights survive. The other
        speaker's own rows are left as they were.
        """
        if into_name == other_name:
            raise BabblerError(f"Cannot merge {into_name} into itself.")
        store = self.store
        into = store.get_speaker(into_name)
        other = store.get_speaker(other_name)

        into_boundary = store.get_or_create_node(
            into, store.get_or_create_word(boundary_word(into.name))
        )
        other_boundary = store.get_or_create_node(
            other, store.get_or_create_word(boundary_word(other.name))
        )

        mapping: dict[int, Node] = {}
        for node in store.list_nodes(other):
            source = node
            if node.id == other_boundary.id:
                source = replace(node, word_id=into_boundary.word_id)
            word = store.get_word_by_id(source.word_id)
            target = store.get_or_create_node(into, word)
            if source.root_frequency > 0:
                target = store.increment_root(target, source.root_frequency)
            mapping[node.id] = target

        arcs_replayed = 0
        transitions_replayed = 0
        for old_node_id, new_node in mapping.items():
            old_node = store.get_node_by_id(old_node_id)
            for arc in store.list_arcs_from(old_node):
                store.increment_arc(new_node, mapping[arc.to_node_id], arc.frequency)
                arcs_replayed += 1
                transitions_replayed += arc.frequency

        report = MergeReport(
            into=into.name,
            other=other.name,
            nodes_merged=len(mapping),
            arcs_replayed=arcs_replayed,
            transitions_replayed=transitions_replayed,
        )
        self.logger.info(
            "Merged babbler %s into %s: nodes=%s arcs=%s transitions=%s",
            report.other,
            report.into,
            report.nodes_merged,
            report.arcs_replayed,
            report.transitions_replayed,
        )
        return report
