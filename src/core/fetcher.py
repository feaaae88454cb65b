from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional

import requests
from bs4 import BeautifulSoup

from .channel import DocumentChannel
from .ratelimit import RateLimiter

logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"


class SkipReason(str, enum.Enum):
    TRANSPORT = "transport"
    STATUS = "status"
    PARSE = "parse"


@dataclass
class FetchOutcome:
    url: str
    document: Optional[BeautifulSoup] = None
    reason: Optional[SkipReason] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.document is not None


@dataclass
class FetchReport:
    attempted: int = 0
    delivered: int = 0
    skipped: List[FetchOutcome] = field(default_factory=list)
    cancelled: bool = False


def fetch_document(url: str, timeout: float = 30.0) -> FetchOutcome:
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        return FetchOutcome(url, reason=SkipReason.TRANSPORT, detail=str(e))
    if resp.status_code != 200:
        return FetchOutcome(url, reason=SkipReason.STATUS, detail=f"HTTP {resp.status_code}")
    try:
        doc = BeautifulSoup(resp.text, HTML_PARSER)
    except Exception as e:
        return FetchOutcome(url, reason=SkipReason.PARSE, detail=f"{e.__class__.__name__}: {e}")
    return FetchOutcome(url, document=doc)


class Fetcher:
    """Single producer: rate-limited retrieval of every URL, in order."""

    def __init__(
        self,
        limiter: RateLimiter,
        fetch: Callable[[str], FetchOutcome] = fetch_document,
    ) -> None:
        self.limiter = limiter
        self.fetch = fetch

    def run(
        self,
        urls: Iterable[str],
        channel: DocumentChannel[Any],
        cancel: Optional[threading.Event] = None,
    ) -> FetchReport:
        report = FetchReport()
        try:
            for u in urls:
                if not self.limiter.acquire(cancel):
                    logger.info("fetch cancelled after %d urls", report.attempted)
                    report.cancelled = True
                    break
                report.attempted += 1
                logger.debug("requesting article %s", u)
                outcome = self.fetch(u)
                if not outcome.ok:
                    reason = outcome.reason.value if outcome.reason else "unknown"
                    logger.warning("skipping %s (%s): %s", u, reason, outcome.detail)
                    report.skipped.append(outcome)
                    continue
                channel.put(outcome.document)
                report.delivered += 1
        finally:
            channel.close()
        return report
