# tests/test_bus_cli.py
# How to run:
#   From repo root: pytest -q
#
# What this covers:
#   - demo / storm / admin subcommands (called directly, logging left unconfigured)

from tools.bus_cli import build_parser, COMMANDS

def run(argv):
    args = build_parser().parse_args(argv)
    return COMMANDS[args.cmd](args)

def test_demo_reports_bulb_and_metrics(capsys):
    assert run(["demo", "--presses", "3"]) == 0
    out = capsys.readouterr().out
    assert "Bulb is ON after 3 toggle(s)" in out
    assert "Dropped             : 0" in out

def test_storm_is_flat_and_sheds_load(capsys):
    assert run(["--capacity", "10", "storm", "--depth", "200", "--fanout", "2"]) == 0
    out = capsys.readouterr().out
    deliveries = next(line for line in out.splitlines() if line.startswith("Deliveries"))
    # queued echoes still drain after the listener stops rebroadcasting
    assert int(deliveries.split(":")[1]) >= 200
    dropped = next(line for line in out.splitlines() if line.startswith("Dropped"))
    assert int(dropped.split(":")[1]) > 0

def test_admin_stop_all_pauses_demo(capsys):
    assert run(["admin", "stop all", "show metrics"]) == 0
    out = capsys.readouterr().out
    assert "Paused              : True" in out
    assert "Bulb is OFF" in out

def test_capacity_accepted_after_subcommand(capsys):
    args = build_parser().parse_args(["storm", "--capacity", "5", "--fanout", "2"])
    assert args.capacity == 5
    assert COMMANDS[args.cmd](args) == 0
    out = capsys.readouterr().out
    peak = next(line for line in out.splitlines() if line.startswith("Peak queue depth"))
    assert int(peak.split(":")[1]) == 5
    dropped = next(line for line in out.splitlines() if line.startswith("Dropped"))
    assert int(dropped.split(":")[1]) > 0

def test_capacity_defaults_when_omitted():
    assert build_parser().parse_args(["storm"]).capacity == 1000
    assert build_parser().parse_args(["--capacity", "7", "admin", "stop all"]).capacity == 7
