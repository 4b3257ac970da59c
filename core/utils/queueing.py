# core/utils/queueing.py
from __future__ import annotations
from collections import deque
from typing import Deque

from core.bus.operations import Operation

DEFAULT_MAX_QUEUED = 1000

class BoundedOperationQueue:
    """
    FIFO of pending bus operations with a hard capacity.
    When full, the incoming operation is rejected (drop newest); nothing
    already queued is evicted, so every accepted operation is applied.
    """
    def __init__(self, maxsize: int = DEFAULT_MAX_QUEUED):
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")
        self.maxsize = maxsize
        self._items: Deque[Operation] = deque()

    def offer(self, op: Operation) -> bool:
        """Append without blocking; False means the queue was full and op was dropped."""
        if len(self._items) >= self.maxsize:
            return False
        self._items.append(op)
        return True

    def take(self) -> Operation:
        # IndexError on empty; the dispatch loop checks length first
        return self._items.popleft()

    def full(self) -> bool:
        return len(self._items) >= self.maxsize

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
