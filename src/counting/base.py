from __future__ import annotations

from typing import Dict, FrozenSet, NamedTuple

Vocabulary = FrozenSet[str]
WordCountMap = Dict[str, int]


class RankedEntry(NamedTuple):
    word: str
    count: int
