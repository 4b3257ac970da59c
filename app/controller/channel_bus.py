from __future__ import annotations
import threading
from contextlib import nullcontext
from typing import Optional
import structlog

from app.analytics.config import BusConfig
from app.analytics.metrics import BusMetrics
from app.controller.admin_handler import AdminControlHandler, RuntimeFlags
from core.bus.operations import (
    Operation, OperationType, Subscribe, Unsubscribe, Broadcast,
    Listener, listener_name,
)
from core.bus.registry import ListenerRegistry
from core.utils.queueing import BoundedOperationQueue

log = structlog.get_logger()

class ChannelBus:
    """
    Process-local pub/sub over integer channels.

    Every subscribe/unsubscribe/broadcast is queued first and applied by a
    single drain loop in submission order. Calls made from inside a listener
    only enqueue; the drain already running picks them up, so a listener that
    broadcasts never recurses into the loop.

    Not thread-safe unless BusConfig.thread_safe is set.
    """
    def __init__(self, config: Optional[BusConfig] = None):
        self.cfg = config or BusConfig()
        self.registry = ListenerRegistry()
        self.queue = BoundedOperationQueue(self.cfg.max_queued_operations)
        self.metrics = BusMetrics(drain_window=self.cfg.drain_window)
        self.flags = RuntimeFlags(logging_enabled=self.cfg.logging_enabled)

        # wired straight into the registry so metrics start at zero
        self.admin = AdminControlHandler(self.flags, self.metrics, queue_depth=lambda: len(self.queue))
        self.registry.subscribe(self.cfg.admin_channel, self.admin)

        self._dispatching = False
        self._disposed = False
        self._lock = threading.RLock() if self.cfg.thread_safe else nullcontext()

    # ---- public API ----

    def subscribe(self, channel: int, listener: Optional[Listener]) -> None:
        if listener is None or not callable(listener):
            return
        self._submit(Subscribe(channel=channel, listener=listener))

    def unsubscribe(self, channel: int, listener: Optional[Listener]) -> None:
        if listener is None or not callable(listener):
            return
        self._submit(Unsubscribe(channel=channel, listener=listener))

    def broadcast(self, channel: int, message: Optional[str] = None) -> None:
        if not message:
            return
        self._submit(Broadcast(channel=channel, message=message))

    def dispose(self) -> None:
        """Drop pending operations and all listeners; later calls are ignored."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            pending = len(self.queue)
            # discarded unapplied, same as paused broadcasts
            self.metrics.on_process(pending)
            self.queue.clear()
            self.registry.clear()
            log.info("bus.dispose", pending=pending)

    def __enter__(self) -> "ChannelBus":
        return self

    def __exit__(self, *exc) -> None:
        self.dispose()

    # ---- state ----

    @property
    def queue_depth(self) -> int:
        return len(self.queue)

    @property
    def is_dispatching(self) -> bool:
        return self._dispatching

    @property
    def is_paused(self) -> bool:
        return self.flags.globally_paused

    @property
    def logging_enabled(self) -> bool:
        return self.flags.logging_enabled

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    # ---- internal ----

    def _submit(self, op: Operation) -> None:
        with self._lock:
            if self._disposed:
                log.debug("bus.disposed.ignored", **op.to_record())
                return
            if not self.queue.offer(op):
                self.metrics.on_drop()
                log.warning("bus.queue.full", limit=self.queue.maxsize, dropped=self.metrics.dropped, **op.to_record())
                return
            self.metrics.on_enqueue(len(self.queue))
            self._drain_if_idle()

    def _drain_if_idle(self) -> None:
        # the op that got us here is already queued; a running drain will reach it
        if self._dispatching:
            return
        self._dispatching = True
        count = 0
        try:
            while self.queue and not self._disposed:
                op = self.queue.take()
                self.metrics.on_process()
                count += 1
                self._apply(op)
        finally:
            self._dispatching = False
            self.metrics.on_drain(count)

    def _apply(self, op: Operation) -> None:
        if self._discarded(op):
            if self.flags.logging_enabled:
                log.info("bus.op.discarded", depth=len(self.queue), **op.to_record())
            return

        if self.flags.logging_enabled:
            log.info("bus.op", depth=len(self.queue), **op.to_record())

        if isinstance(op, Subscribe):
            self.registry.subscribe(op.channel, op.listener)
        elif isinstance(op, Unsubscribe):
            self.registry.unsubscribe(op.channel, op.listener)
        elif isinstance(op, Broadcast):
            self._deliver(op)

    def _discarded(self, op: Operation) -> bool:
        # paused: only admin traffic is delivered; registry changes still apply
        return (
            self.flags.globally_paused
            and op.op_type == OperationType.BROADCAST
            and op.channel != self.cfg.admin_channel
        )

    def _deliver(self, op: Broadcast) -> None:
        # iterate a copy so listeners may (un)subscribe while being notified
        for listener in self.registry.snapshot(op.channel):
            if self._disposed:
                break
            try:
                listener(op.message)
            except Exception as e:
                log.warning(
                    "bus.listener.error",
                    channel=op.channel,
                    listener=listener_name(listener),
                    err=str(e),
                    exc_info=True,
                )
