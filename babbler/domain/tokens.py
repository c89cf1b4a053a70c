"""Tokenization and sentinel words for the word graph."""
from __future__ import annotations

import re

BOOTSTRAP_WORD = ""
TERMINAL_WORD = " "

_BATCH_BREAK_RE = re.compile(r"[.!?\n]")


def tokenize(text: str) -> list[str]:
    """Case-fold text and split it on whitespace."""
    return str(text or "").lower().split()


def boundary_word(speaker_name: str) -> str:
    """Synthetic word marking where a speaker's chain joins a merged one."""
    return f"<{speaker_name}>"


def split_batch_lines(text: str) -> list[str]:
    """Split batch training text into sentence-sized pieces.

    Pieces are cut on sentence punctuation and line breaks; pieces that hold
    no words are dropped.
    """
    pieces = _BATCH_BREAK_RE.split(str(text or ""))
    return [piece.strip() for piece in pieces if piece.strip()]
