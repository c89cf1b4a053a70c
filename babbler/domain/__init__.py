"""Domain records, tokenization and sampling for the babbler."""

from .errors import (
    BabblerError,
    MissingArcs,
    NeverSaid,
    NoUtterances,
    SpeakerNotFound,
    StorageError,
)
from .models import Arc, Node, Speaker, Word
from .sampling import weighted_pick
from .tokens import BOOTSTRAP_WORD, TERMINAL_WORD, boundary_word, split_batch_lines, tokenize

__all__ = [
    "Arc",
    "BOOTSTRAP_WORD",
    "BabblerError",
    "MissingArcs",
    "NeverSaid",
    "NoUtterances",
    "Node",
    "Speaker",
    "SpeakerNotFound",
    "StorageError",
    "TERMINAL_WORD",
    "Word",
    "boundary_word",
    "split_batch_lines",
    "tokenize",
    "weighted_pick",
]
