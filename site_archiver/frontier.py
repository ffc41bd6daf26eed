"""Breadth-first URL frontier with at-most-once visiting."""

from __future__ import annotations

from collections import deque
from typing import Deque, FrozenSet, Optional, Set, Tuple

from .classify import SiteScope


class Frontier:
    """FIFO queue of pending URLs plus the set of URLs already visited.

    Only the crawl loop touches an instance, so no locking is done.
    """

    def __init__(self, scope: SiteScope) -> None:
        self.scope = scope
        self._queue: Deque[str] = deque()
        self._pending: Set[str] = set()
        self._visited: Set[str] = set()

    def enqueue(self, url: str) -> bool:
        if not self.scope.is_valid(url):
            return False
        if url in self._visited or url in self._pending:
            return False
        self._queue.append(url)
        self._pending.add(url)
        return True

    def dequeue_next(self) -> Optional[str]:
        if not self._queue:
            return None
        url = self._queue.popleft()
        self._pending.discard(url)
        return url

    def mark_visited(self, url: str) -> None:
        self._visited.add(url)

    def is_visited(self, url: str) -> bool:
        return url in self._visited

    @property
    def pending(self) -> Tuple[str, ...]:
        return tuple(self._queue)

    @property
    def visited(self) -> FrozenSet[str]:
        return frozenset(self._visited)

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)
