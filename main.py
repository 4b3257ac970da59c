# main.py
from __future__ import annotations
import structlog
from app.logging_config import configure_logging
from app.controller.channel_bus import ChannelBus
from app.devices.smart_light_bulb import SmartLightBulb
from app.devices.switch_controller import SwitchController
from core.bus.channels import Channels

def main() -> None:
    configure_logging(debug=True)
    log = structlog.get_logger()

    log.info("app.start", msg="Launching Channel Bus demo")
    with ChannelBus() as bus:
        bulb = SmartLightBulb(bus)
        switch = SwitchController(bus)
        bulb.enable()
        switch.press()
        bus.broadcast(Channels.ADMIN_CHANNEL, "show metrics")
        bulb.disable()
    log.info("app.stop", msg="Exited cleanly", bulb_on=bulb.is_on)

if __name__ == "__main__":
    main()
