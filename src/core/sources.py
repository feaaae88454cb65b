from __future__ import annotations

import logging
from typing import Iterable, List

import requests

from counting.base import Vocabulary

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3


class SourceError(RuntimeError):
    pass


def _get_text(url: str, what: str, timeout: float) -> str:
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise SourceError(f"unable to retrieve {what} from {url}: {e}") from e
    if resp.status_code != 200:
        raise SourceError(f"unable to retrieve {what} from {url}: HTTP {resp.status_code}")
    return resp.text


def build_vocabulary(lines: Iterable[str]) -> Vocabulary:
    """Keep lines of at least three letters, lower-cased. Anything else is dropped."""
    return frozenset(
        w.lower() for w in lines if len(w) >= MIN_WORD_LENGTH and w.isalpha()
    )


def parse_url_list(text: str) -> List[str]:
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def load_vocabulary(url: str, timeout: float = 30.0) -> Vocabulary:
    vocab = build_vocabulary(_get_text(url, "word bank", timeout).splitlines())
    logger.info("word bank ready: %d words", len(vocab))
    return vocab


def load_urls(url: str, timeout: float = 30.0) -> List[str]:
    urls = parse_url_list(_get_text(url, "url bank", timeout))
    logger.info("url bank ready: %d urls", len(urls))
    return urls
