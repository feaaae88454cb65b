import threading
import time
from types import SimpleNamespace

import pytest
import requests
from bs4 import BeautifulSoup

import core.fetcher as F
from core.channel import DocumentChannel
from core.fetcher import Fetcher, FetchOutcome, SkipReason, fetch_document
from core.ratelimit import RateLimiter


class OpenLimiter:
    def acquire(self, cancel=None):
        return not (cancel is not None and cancel.is_set())


class CountingChannel(DocumentChannel):
    def __init__(self, capacity):
        super().__init__(capacity)
        self.close_calls = 0

    def close(self):
        self.close_calls += 1
        super().close()


def _ok(url):
    return FetchOutcome(url, document=BeautifulSoup(f"<p>{url}</p>", "html.parser"))


def _wait_for(pred, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if pred():
            return True
        time.sleep(0.01)
    return False


def test_fetch_document_success(monkeypatch):
    monkeypatch.setattr(
        F.requests, "get", lambda url, timeout=None: SimpleNamespace(status_code=200, text="<p>hi</p>")
    )
    out = fetch_document("https://e.x/a")
    assert out.ok
    assert out.document.p.get_text() == "hi"


def test_fetch_document_non_200_is_status_skip(monkeypatch):
    monkeypatch.setattr(F.requests, "get", lambda url, timeout=None: SimpleNamespace(status_code=404, text=""))
    out = fetch_document("https://e.x/a")
    assert not out.ok
    assert out.reason is SkipReason.STATUS
    assert "404" in out.detail


def test_fetch_document_transport_error(monkeypatch):
    def boom(url, timeout=None):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(F.requests, "get", boom)
    out = fetch_document("https://e.x/a")
    assert out.reason is SkipReason.TRANSPORT
    assert "refused" in out.detail


def test_fetch_document_parse_error(monkeypatch):
    monkeypatch.setattr(F.requests, "get", lambda url, timeout=None: SimpleNamespace(status_code=200, text="x"))

    def bad_parser(*a, **k):
        raise ValueError("broken markup")

    monkeypatch.setattr(F, "BeautifulSoup", bad_parser)
    out = fetch_document("https://e.x/a")
    assert out.reason is SkipReason.PARSE


def test_run_delivers_in_order_and_records_skips():
    def fetch(url):
        if url == "b":
            return FetchOutcome(url, reason=SkipReason.STATUS, detail="HTTP 500")
        return _ok(url)

    ch = CountingChannel(5)
    report = Fetcher(OpenLimiter(), fetch=fetch).run(["a", "b", "c"], ch)
    assert [d.p.get_text() for d in ch] == ["a", "c"]
    assert report.attempted == 3
    assert report.delivered == 2
    assert [s.url for s in report.skipped] == ["b"]
    assert not report.cancelled
    assert ch.close_calls == 1


def test_run_closes_channel_when_fetch_raises():
    def fetch(url):
        raise RuntimeError("bug")

    ch = CountingChannel(2)
    with pytest.raises(RuntimeError):
        Fetcher(OpenLimiter(), fetch=fetch).run(["a"], ch)
    assert ch.closed and ch.close_calls == 1


def test_push_blocks_when_channel_full():
    fetched = []

    def fetch(url):
        fetched.append(url)
        return _ok(url)

    ch = DocumentChannel(2)
    t = threading.Thread(target=Fetcher(OpenLimiter(), fetch=fetch).run, args=(["a", "b", "c", "d", "e"], ch))
    t.start()
    assert _wait_for(lambda: ch.qsize() == 2 and len(fetched) == 3)
    time.sleep(0.1)
    # third document is waiting on put; nothing beyond capacity is buffered
    assert t.is_alive()
    assert ch.qsize() == 2
    assert len(fetched) == 3

    assert len(list(ch)) == 5
    t.join(timeout=5)
    assert not t.is_alive()


def test_cancel_during_limiter_wait_stops_and_closes_once():
    cancel = threading.Event()
    ch = CountingChannel(4)
    result = {}

    def run():
        result["report"] = Fetcher(RateLimiter(1, window=60.0), fetch=_ok).run(["a", "b", "c"], ch, cancel)

    t = threading.Thread(target=run)
    t.start()
    # first permit is immediate, the second waits a full minute
    assert _wait_for(lambda: ch.qsize() == 1)
    cancel.set()
    t.join(timeout=5)
    assert not t.is_alive()

    report = result["report"]
    assert report.cancelled
    assert report.attempted == 1 and report.delivered == 1
    assert ch.close_calls == 1
    assert len(list(ch)) == 1
