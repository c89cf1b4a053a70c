"""Error kinds raised by the babbler engine."""

from __future__ import annotations


class BabblerError(Exception):
    """Base class for every failure the engine reports."""


class SpeakerNotFound(BabblerError):
    def __init__(self, name: str) -> None:
        super().__init__(f"babbler not found: {name}")
        self.name = name


class NoUtterances(BabblerError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name} hasn't said anything yet")
        self.name = name


class NeverSaid(BabblerError):
    """A requested word, node or transition was never observed."""


class MissingArcs(BabblerError):
    """A node reached during a walk has no outgoing transitions."""

    def __init__(self, node_id: int) -> None:
        super().__init__(f"missing arcs from node {node_id}")
        self.node_id = node_id


class StorageError(BabblerError):
    """The backing store failed to execute an operation."""
