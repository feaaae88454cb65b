from __future__ import annotations

import logging
from typing import Iterator, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from core.channel import DocumentChannel

from .base import Vocabulary, WordCountMap

logger = logging.getLogger(__name__)

CONTENT_TAG = "div"
CONTENT_MARKER = "caas-body"
PARAGRAPH_TAG = "p"


def _class_value(tag: Tag) -> str:
    # bs4 splits class into a list; other parsers may leave it a string
    cls = tag.get("class")
    if cls is None:
        return ""
    if isinstance(cls, str):
        return cls
    return " ".join(cls)


def is_content_region(node: object) -> bool:
    return (
        isinstance(node, Tag)
        and node.name == CONTENT_TAG
        and CONTENT_MARKER in _class_value(node)
    )


def find_content_region(doc: Tag) -> Optional[Tag]:
    """First matching element in depth-first document order, or None."""
    if is_content_region(doc):
        return doc
    for node in doc.descendants:
        if is_content_region(node):
            return node  # type: ignore[return-value]
    return None


def iter_paragraphs(region: Tag) -> Iterator[Tag]:
    if region.name == PARAGRAPH_TAG:
        yield region
    for node in region.descendants:
        if isinstance(node, Tag) and node.name == PARAGRAPH_TAG:
            yield node


def paragraph_text(node: Tag) -> str:
    """All descendant text nodes joined in document order, markup dropped."""
    return "".join(
        str(s)
        for s in node.descendants
        if isinstance(s, NavigableString) and not isinstance(s, PreformattedString)
    )


class WordCounter:
    """Per-worker accumulator. Never shared between threads."""

    def __init__(self, vocabulary: Vocabulary) -> None:
        self.vocabulary = vocabulary
        self.counts: WordCountMap = {}
        self.documents = 0

    def count_text(self, text: str) -> None:
        for token in text.split():
            word = token.lower()
            if word in self.vocabulary:
                self.counts[word] = self.counts.get(word, 0) + 1

    def consume(self, doc: BeautifulSoup) -> None:
        self.documents += 1
        region = find_content_region(doc)
        if region is None:
            return
        # walk the whole region before counting so a broken tree adds nothing
        texts = [paragraph_text(p) for p in iter_paragraphs(region)]
        for text in texts:
            self.count_text(text)


def count_worker(worker_id: int, channel: DocumentChannel, vocabulary: Vocabulary) -> WordCountMap:
    counter = WordCounter(vocabulary)
    failed = 0
    for doc in channel:
        try:
            counter.consume(doc)
        except Exception:
            # keep draining; a malformed document contributes nothing
            failed += 1
            logger.exception("worker %d: skipping malformed document", worker_id)
    logger.debug(
        "worker %d done: %d documents (%d malformed), %d distinct words",
        worker_id,
        counter.documents,
        failed,
        len(counter.counts),
    )
    return counter.counts
