from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from counting import RankedEntry, Vocabulary, WordCountMap, count_worker, merge, top_k

from .channel import DocumentChannel
from .config import CHANNEL_FACTOR, Settings
from .fetcher import Fetcher, FetchOutcome, FetchReport, fetch_document
from .parallel import run_parallel
from .ratelimit import RateLimiter
from .sources import load_urls, load_vocabulary

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    ranking: List[RankedEntry]
    counts: WordCountMap
    fetch: FetchReport


def prepare(settings: Settings) -> Tuple[Vocabulary, List[str]]:
    """Load word bank and url bank side by side. Either failing raises SourceError."""
    vocab, urls = run_parallel(
        [
            lambda: load_vocabulary(settings.wordbank_url, settings.timeout),
            lambda: load_urls(settings.urlbank_url, settings.timeout),
        ]
    )
    return vocab, urls


def run_pipeline(
    urls: Sequence[str],
    vocabulary: Vocabulary,
    workers: int,
    rpm: int,
    k: int = 10,
    cancel: Optional[threading.Event] = None,
    fetch: Callable[[str], FetchOutcome] = fetch_document,
    limiter: Optional[RateLimiter] = None,
    capacity: Optional[int] = None,
) -> PipelineResult:
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    channel: DocumentChannel[Any] = DocumentChannel(capacity or workers * CHANNEL_FACTOR)
    fetcher = Fetcher(limiter or RateLimiter(rpm), fetch=fetch)

    def _make_worker(i: int) -> Callable[[], WordCountMap]:
        def thunk() -> WordCountMap:
            return count_worker(i, channel, vocabulary)

        return thunk

    funcs: List[Callable[[], Any]] = [lambda: fetcher.run(urls, channel, cancel)]
    for i in range(workers):
        funcs.append(_make_worker(i))

    report, *partials = run_parallel(funcs)

    counts = merge(partials)
    ranking = top_k(counts, k)
    logger.info(
        "fetched %d of %d urls (%d skipped%s), %d distinct words",
        report.delivered,
        len(urls),
        len(report.skipped),
        ", cancelled" if report.cancelled else "",
        len(counts),
    )
    return PipelineResult(ranking=ranking, counts=counts, fetch=report)


def run(settings: Settings, cancel: Optional[threading.Event] = None) -> PipelineResult:
    vocab, urls = prepare(settings)
    return run_pipeline(
        urls,
        vocab,
        workers=settings.workers,
        rpm=settings.rpm,
        k=settings.top,
        cancel=cancel,
        fetch=functools.partial(fetch_document, timeout=settings.timeout),
        capacity=settings.channel_capacity,
    )
