from __future__ import annotations

import heapq
from collections import Counter
from typing import Iterable, List, Mapping

from .base import RankedEntry, WordCountMap

TOP_K = 10


def merge(partials: Iterable[Mapping[str, int]]) -> WordCountMap:
    """Sum per-worker maps into one. Order of the partials does not matter."""
    total: Counter[str] = Counter()
    for part in partials:
        total.update(part)
    return dict(total)


def top_k(counts: Mapping[str, int], k: int = TOP_K) -> List[RankedEntry]:
    """
    Highest counts first; equal counts ordered by word so repeated runs
    on the same input give the same list.
    """
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}")
    best = heapq.nsmallest(k, counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [RankedEntry(word, count) for word, count in best]
