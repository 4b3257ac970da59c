# tests/test_registry.py
# How to run:
#   From repo root: pytest -q
#
# What this covers:
#   - Duplicate subscribe is a no-op (bound methods compare equal)
#   - Unsubscribe removes the entry and drops empty channels
#   - Snapshots are copies, in insertion order

from core.bus.registry import ListenerRegistry

class Lamp:
    def __init__(self):
        self.seen = []

    def on_command(self, msg):
        self.seen.append(msg)

def test_duplicate_subscribe_keeps_one_entry():
    reg = ListenerRegistry()
    lamp = Lamp()
    assert reg.subscribe(345, lamp.on_command) is True
    assert reg.subscribe(345, lamp.on_command) is False
    assert reg.listener_count(345) == 1

def test_same_listener_on_two_channels():
    reg = ListenerRegistry()
    f = lambda m: None
    reg.subscribe(1, f)
    reg.subscribe(2, f)
    assert sorted(reg.channels()) == [1, 2]

def test_unsubscribe_last_listener_removes_channel():
    reg = ListenerRegistry()
    f = lambda m: None
    g = lambda m: None
    reg.subscribe(345, f)
    reg.subscribe(345, g)
    assert reg.unsubscribe(345, f) is True
    assert 345 in reg
    assert reg.unsubscribe(345, g) is True
    assert 345 not in reg
    assert len(reg) == 0

def test_unsubscribe_unknown_is_noop():
    reg = ListenerRegistry()
    f = lambda m: None
    assert reg.unsubscribe(7, f) is False
    reg.subscribe(7, f)
    assert reg.unsubscribe(7, lambda m: None) is False
    assert reg.listener_count(7) == 1

def test_snapshot_is_ordered_copy():
    reg = ListenerRegistry()
    calls = [lambda m: None for _ in range(3)]
    for c in calls:
        reg.subscribe(9, c)
    snap = reg.snapshot(9)
    assert snap == calls
    snap.clear()
    assert reg.listener_count(9) == 3
    assert reg.snapshot(404) == []
