"""Like/dislike driven adjustments to an already ranked list."""

from __future__ import annotations

from typing import Sequence

from fragshelf.recommender.types import RankedResult


def apply_preference_reorder(results: Sequence[RankedResult]) -> list[RankedResult]:
    """
    Nudge liked fragrances up and disliked ones down by one slot.

    A single forward scan: at index ``i`` a liked item swaps with the one above
    it (when ``i > 0``) and a disliked item swaps with the one below it (when it
    is not last). An item that has moved is not moved again in the same scan;
    the item it swapped with stays eligible if the scan reaches its new index.
    Returns a new list and leaves ``results`` untouched.
    """

    ordered = list(results)
    moved: set[str] = set()
    last = len(ordered) - 1

    for index in range(len(ordered)):
        item = ordered[index]
        if item.id in moved:
            continue
        if item.liked is True and index > 0:
            ordered[index - 1], ordered[index] = item, ordered[index - 1]
            moved.add(item.id)
        elif item.liked is False and index < last:
            ordered[index], ordered[index + 1] = ordered[index + 1], item
            moved.add(item.id)

    return ordered
