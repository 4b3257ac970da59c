# app/analytics/metrics.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass, asdict
from typing import Any, Deque, Dict
import numpy as np

@dataclass(frozen=True)
class MetricsSnapshot:
    enqueued: int
    processed: int
    dropped: int
    peak_queue_depth: int
    avg_drain_size: float
    max_drain_size: int

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)

class BusMetrics:
    """
    Counters updated synchronously by the bus at enqueue/dequeue time:
    - enqueued / processed / dropped
    - peak queue depth since the last reset
    plus a sliding window of operations applied per drain.
    """
    def __init__(self, drain_window: int = 256):
        self.enqueued = 0
        self.processed = 0
        self.dropped = 0
        self.peak_queue_depth = 0

        # ops applied per completed drain, newest last
        self._drains: Deque[int] = deque(maxlen=max(1, drain_window))

    def on_enqueue(self, depth: int) -> None:
        self.enqueued += 1
        if depth > self.peak_queue_depth:
            self.peak_queue_depth = depth

    def on_drop(self) -> None:
        self.dropped += 1

    def on_process(self, count: int = 1) -> None:
        self.processed += count

    def on_drain(self, count: int) -> None:
        if count > 0:
            self._drains.append(count)

    def reset(self, current_depth: int = 0) -> None:
        # peak restarts from whatever is still queued right now
        self.enqueued = 0
        self.processed = 0
        self.dropped = 0
        self.peak_queue_depth = current_depth
        self._drains.clear()

    def snapshot(self) -> MetricsSnapshot:
        if self._drains:
            sizes = np.array(self._drains, dtype=float)
            avg_drain = float(sizes.mean())
            max_drain = int(sizes.max())
        else:
            avg_drain = 0.0
            max_drain = 0
        return MetricsSnapshot(
            enqueued=self.enqueued,
            processed=self.processed,
            dropped=self.dropped,
            peak_queue_depth=self.peak_queue_depth,
            avg_drain_size=avg_drain,
            max_drain_size=max_drain,
        )
