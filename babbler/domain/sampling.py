"""Frequency-weighted selection used by the generator."""
from __future__ import annotations

import random
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")


def weighted_pick(
    items: Sequence[T],
    weight: Callable[[T], int],
    rng: random.Random,
) -> T | None:
    """Pick one item with probability proportional to its weight.

    A threshold is drawn uniformly from ``[0, total)`` and the items are
    walked in the given order; the first item whose running sum exceeds the
    threshold wins, so an item of weight ``w`` owns exactly ``w`` thresholds.
    Returns ``None`` when there is nothing to pick from.
    """
    weights = [max(0, int(weight(item))) for item in items]
    total = sum(weights)
    if total <= 0:
        return None
    which = rng.randrange(total)
    running = 0
    for item, item_weight in zip(items, weights):
        running += item_weight
        if running > which:
            return item
    raise RuntimeError("weighted draw ran past the end of its items")
