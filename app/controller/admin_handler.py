# app/controller/admin_handler.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict
import structlog

from app.analytics.metrics import BusMetrics
from core.bus.channels import AdminCommand

log = structlog.get_logger()

@dataclass
class RuntimeFlags:
    logging_enabled: bool = False
    globally_paused: bool = False

def normalize_command(text: str) -> str:
    """' show  requests ' -> 'SHOW_REQUESTS'"""
    return "_".join(text.split()).upper()

class AdminControlHandler:
    """
    Listener wired to the reserved admin channel. Every broadcast there is a
    command that flips runtime flags or reads/resets metrics.
    Running -> Paused on STOP_ALL; nothing moves back to Running.
    """
    def __init__(self, flags: RuntimeFlags, metrics: BusMetrics, queue_depth: Callable[[], int]):
        self.flags = flags
        self.metrics = metrics
        self.queue_depth = queue_depth
        self._handlers: Dict[AdminCommand, Callable[[], None]] = {
            AdminCommand.SHOW_REQUESTS: self._show_requests,
            AdminCommand.HIDE_REQUESTS: self._hide_requests,
            AdminCommand.STOP_ALL: self._stop_all,
            AdminCommand.SHOW_METRICS: self._show_metrics,
            AdminCommand.RESET_METRICS: self._reset_metrics,
        }

    def __call__(self, message: str) -> None:
        name = normalize_command(message)
        try:
            command = AdminCommand(name)
        except ValueError:
            log.warning("bus.admin.unknown", command=name, raw=message)
            return
        self._handlers[command]()
        log.info("bus.admin.command", command=command.value)

    # ---- commands ----

    def _show_requests(self) -> None:
        self.flags.logging_enabled = True

    def _hide_requests(self) -> None:
        self.flags.logging_enabled = False

    def _stop_all(self) -> None:
        self.flags.globally_paused = True

    def _show_metrics(self) -> None:
        snap = self.metrics.snapshot()
        log.info(
            "bus.metrics",
            queue_depth=self.queue_depth(),
            paused=self.flags.globally_paused,
            **snap.to_record(),
        )

    def _reset_metrics(self) -> None:
        self.metrics.reset(current_depth=self.queue_depth())
