from __future__ import annotations
import argparse, sys
from dataclasses import replace
from typing import List, Optional

from app.analytics.config import BusConfig
from app.analytics.metrics import MetricsSnapshot
from app.controller.channel_bus import ChannelBus
from app.devices.smart_light_bulb import SmartLightBulb
from app.devices.switch_controller import SwitchController
from app.logging_config import configure_logging
from core.bus.channels import Channels

STORM_CHANNEL = Channels.COMMUNICATION_CHANNEL

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="channel-bus", description="Channel Bus CLI")
    ap.add_argument("--capacity", type=int, default=BusConfig.max_queued_operations,
                    help="max queued operations before new ones are dropped")
    ap.add_argument("--debug", action="store_true")
    ap.add_argument("--console", action="store_true", help="human-readable logs instead of JSON")
    # same flag after the subcommand; SUPPRESS keeps the global value when omitted
    bus_opts = argparse.ArgumentParser(add_help=False)
    bus_opts.add_argument("--capacity", type=int, default=argparse.SUPPRESS,
                          help="max queued operations before new ones are dropped")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_demo = sub.add_parser("demo", help="Switch -> light bulb demo", parents=[bus_opts])
    p_demo.add_argument("--presses", type=int, default=3)
    p_demo.add_argument("-v", "--verbose", action="store_true", help="log every operation (SHOW_REQUESTS)")

    p_storm = sub.add_parser("storm", help="Listener that rebroadcasts to itself", parents=[bus_opts])
    p_storm.add_argument("--depth", type=int, default=10_000)
    p_storm.add_argument("--fanout", type=int, default=1, help="broadcasts issued per delivery")

    p_admin = sub.add_parser("admin", help="Send admin commands to a demo bus", parents=[bus_opts])
    p_admin.add_argument("commands", nargs="+", help='e.g. "show requests" STOP_ALL')

    return ap

def config_from_args(args: argparse.Namespace) -> BusConfig:
    return replace(BusConfig(), max_queued_operations=args.capacity)

def print_metrics(snap: MetricsSnapshot, depth: int) -> None:
    print("\n=== Bus Metrics ===")
    print(f"Enqueued            : {snap.enqueued}")
    print(f"Processed           : {snap.processed}")
    print(f"Dropped             : {snap.dropped}")
    print(f"Peak queue depth    : {snap.peak_queue_depth}")
    print(f"Queue depth (now)   : {depth}")
    print(f"Avg / max drain     : {snap.avg_drain_size:.1f} / {snap.max_drain_size}")

def cmd_demo(args: argparse.Namespace) -> int:
    with ChannelBus(config_from_args(args)) as bus:
        if args.verbose:
            bus.broadcast(bus.cfg.admin_channel, "show requests")
        bulb = SmartLightBulb(bus)
        switch = SwitchController(bus)
        bulb.enable()
        for _ in range(args.presses):
            switch.press()
        bulb.disable()
        switch.press()  # nobody listening any more
        print(f"Bulb is {'ON' if bulb.is_on else 'OFF'} after {bulb.toggles} toggle(s)")
        print_metrics(bus.metrics.snapshot(), bus.queue_depth)
    return 0

def cmd_storm(args: argparse.Namespace) -> int:
    with ChannelBus(config_from_args(args)) as bus:
        delivered = {"count": 0}

        def echo(message: str) -> None:
            delivered["count"] += 1
            if delivered["count"] < args.depth:
                for _ in range(args.fanout):
                    bus.broadcast(STORM_CHANNEL, message)

        bus.subscribe(STORM_CHANNEL, echo)
        bus.broadcast(STORM_CHANNEL, "PING")
        print(f"Deliveries          : {delivered['count']}")
        print_metrics(bus.metrics.snapshot(), bus.queue_depth)
    return 0

def cmd_admin(args: argparse.Namespace) -> int:
    with ChannelBus(config_from_args(args)) as bus:
        bulb = SmartLightBulb(bus)
        bulb.enable()
        for command in args.commands:
            bus.broadcast(bus.cfg.admin_channel, command)
        SwitchController(bus).press()
        print(f"Paused              : {bus.is_paused}")
        print(f"Verbose logging     : {bus.logging_enabled}")
        print(f"Bulb is {'ON' if bulb.is_on else 'OFF'}")
        print_metrics(bus.metrics.snapshot(), bus.queue_depth)
    return 0

COMMANDS = {"demo": cmd_demo, "storm": cmd_storm, "admin": cmd_admin}

def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug, json_logs=not args.console)
    sys.exit(COMMANDS[args.cmd](args))

if __name__ == "__main__":
    main()
