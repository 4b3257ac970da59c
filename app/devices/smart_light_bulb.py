from __future__ import annotations
import structlog

from app.controller.channel_bus import ChannelBus
from core.bus.channels import Channels, Commands

log = structlog.get_logger()

TURN_ON_COMMANDS = {"Turn on", Commands.TURN_ON}
TURN_OFF_COMMANDS = {"Turn off", Commands.TURN_OFF}

class SmartLightBulb:
    """Consumer: listens on a channel while enabled and reacts to on/off/toggle."""
    def __init__(self, bus: ChannelBus, channel: int = Channels.SWITCH_CHANNEL):
        self.bus = bus
        self.channel = channel
        self.is_on = False
        self.toggles = 0

    def enable(self) -> None:
        self.bus.subscribe(self.channel, self.on_command)

    def disable(self) -> None:
        # must run before teardown so no message reaches a dead bulb
        self.bus.unsubscribe(self.channel, self.on_command)

    def on_command(self, command: str) -> None:
        if command in TURN_ON_COMMANDS:
            self.is_on = True
        elif command in TURN_OFF_COMMANDS:
            self.is_on = False
        elif command == Commands.TOGGLE:
            self.is_on = not self.is_on
            self.toggles += 1
            log.info("bulb.toggle", channel=self.channel, is_on=self.is_on)
        # anything else: ignored
