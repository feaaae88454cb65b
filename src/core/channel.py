from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, Iterator, TypeVar

T = TypeVar("T")


class ChannelClosed(RuntimeError):
    pass


class DocumentChannel(Generic[T]):
    """
    Bounded single-producer / multi-consumer queue.

    put() blocks while the channel is full. close() never blocks: it flags
    the channel and wakes every waiter. Iterating yields items until the
    channel is closed and drained.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._items: Deque[T] = deque()
        self._cond = threading.Condition()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        with self._cond:
            return len(self._items)

    def put(self, item: T) -> None:
        with self._cond:
            while len(self._items) >= self.capacity and not self._closed:
                self._cond.wait()
            if self._closed:
                raise ChannelClosed("put on closed channel")
            self._items.append(item)
            self._cond.notify_all()

    def close(self) -> None:
        with self._cond:
            if self._closed:
                raise ChannelClosed("channel already closed")
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            with self._cond:
                while not self._items and not self._closed:
                    self._cond.wait()
                if not self._items:
                    return
                item = self._items.popleft()
                self._cond.notify_all()
            yield item
