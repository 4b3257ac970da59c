from __future__ import annotations

from app.controller.channel_bus import ChannelBus
from core.bus.channels import Channels, Commands

class SwitchController:
    """Producer: each press broadcasts one command; it never knows who listens."""
    def __init__(self, bus: ChannelBus, channel: int = Channels.SWITCH_CHANNEL, command: str = Commands.TOGGLE):
        self.bus = bus
        self.channel = channel
        self.command = command

    def press(self) -> None:
        self.bus.broadcast(self.channel, self.command)
