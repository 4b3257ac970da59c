from __future__ import annotations
from dataclasses import dataclass

from core.bus.channels import Channels
from core.utils.queueing import DEFAULT_MAX_QUEUED

@dataclass(frozen=True)
class BusConfig:
    # backpressure: pending operations beyond this are dropped
    max_queued_operations: int = DEFAULT_MAX_QUEUED

    # control plane
    admin_channel: int = Channels.ADMIN_CHANNEL
    logging_enabled: bool = False   # initial SHOW_REQUESTS state

    # drain statistics: how many recent drains to keep
    drain_window: int = 256

    # wrap the public API in an RLock for multi-threaded callers
    thread_safe: bool = False
