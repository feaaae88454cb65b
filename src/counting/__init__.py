from .aggregate import TOP_K, merge, top_k
from .base import RankedEntry, Vocabulary, WordCountMap
from .extract import WordCounter, count_worker, find_content_region

__all__ = [
    "TOP_K",
    "RankedEntry",
    "Vocabulary",
    "WordCountMap",
    "WordCounter",
    "count_worker",
    "find_content_region",
    "merge",
    "top_k",
]
