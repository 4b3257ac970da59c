from __future__ import annotations
from enum import Enum

class Channels:
    """Well-known channel numbers; add new ones here instead of scattering literals."""
    SWITCH_CHANNEL = 345
    COMMUNICATION_CHANNEL = 1001
    # reserved for runtime control; application code never broadcasts here
    ADMIN_CHANNEL = -23646

class Commands:
    """Payloads understood by the demo devices."""
    TURN_ON = "TURN_ON"
    TURN_OFF = "TURN_OFF"
    TOGGLE = "TOGGLE"

class AdminCommand(str, Enum):
    SHOW_REQUESTS = "SHOW_REQUESTS"
    HIDE_REQUESTS = "HIDE_REQUESTS"
    STOP_ALL = "STOP_ALL"
    SHOW_METRICS = "SHOW_METRICS"
    RESET_METRICS = "RESET_METRICS"
