"""Records stored by the babbler graph repositories."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Speaker:
    id: int
    name: str


@dataclass(frozen=True)
class Word:
    id: int
    text: str


@dataclass(frozen=True)
class Node:
    id: int
    speaker_id: int
    word_id: int
    is_root: bool
    root_frequency: int


@dataclass(frozen=True)
class Arc:
    id: int
    from_node_id: int
    to_node_id: int
    frequency: int
