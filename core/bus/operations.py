from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict
import time

Listener = Callable[[str], None]

# --- timing helpers ---
def mono_ts() -> float:
    # Monotonic high-res timestamp (immune to system clock changes)
    return time.perf_counter()

def listener_name(listener: Listener) -> str:
    """Readable label for logs; never the listener object itself."""
    return getattr(listener, "__qualname__", None) or type(listener).__qualname__

# --- core enum ---
class OperationType(Enum):
    """What a queued operation does when the dispatch loop applies it."""
    SUBSCRIBE = auto()
    UNSUBSCRIBE = auto()
    BROADCAST = auto()

# --- base operation ---
@dataclass(frozen=True)
class Operation:
    """Common shape for all queued operations."""
    op_type: OperationType = field(init=False)   # auto-set by subclasses
    channel: int = 0
    t_mono: float = field(default_factory=mono_ts)

    def to_record(self) -> Dict[str, Any]:
        return {
            "op": self.op_type.name,
            "channel": self.channel,
            "t_mono": self.t_mono,
        }

@dataclass(frozen=True)
class Subscribe(Operation):
    listener: Listener = None  # type: ignore[assignment]

    def __post_init__(self):
        object.__setattr__(self, "op_type", OperationType.SUBSCRIBE)

    def to_record(self) -> Dict[str, Any]:
        base = super().to_record()
        base["listener"] = listener_name(self.listener)
        return base

@dataclass(frozen=True)
class Unsubscribe(Operation):
    listener: Listener = None  # type: ignore[assignment]

    def __post_init__(self):
        object.__setattr__(self, "op_type", OperationType.UNSUBSCRIBE)

    def to_record(self) -> Dict[str, Any]:
        base = super().to_record()
        base["listener"] = listener_name(self.listener)
        return base

@dataclass(frozen=True)
class Broadcast(Operation):
    """A string payload for every listener on the channel."""
    message: str = ""

    def __post_init__(self):
        object.__setattr__(self, "op_type", OperationType.BROADCAST)

    def to_record(self) -> Dict[str, Any]:
        base = super().to_record()
        base["message"] = self.message
        return base
