from __future__ import annotations
from typing import Dict, Iterator, List

from core.bus.operations import Listener

class ListenerRegistry:
    """
    channel -> ordered listeners (first subscribed, first notified).
    - a listener appears at most once per channel (equality check, so bound
      methods of the same object count as the same listener)
    - a channel key only exists while it has at least one listener
    """
    def __init__(self):
        self._channels: Dict[int, List[Listener]] = {}

    def subscribe(self, channel: int, listener: Listener) -> bool:
        listeners = self._channels.setdefault(channel, [])
        if listener in listeners:
            return False
        listeners.append(listener)
        return True

    def unsubscribe(self, channel: int, listener: Listener) -> bool:
        listeners = self._channels.get(channel)
        if not listeners:
            return False
        try:
            listeners.remove(listener)
        except ValueError:
            return False
        finally:
            if not listeners:
                del self._channels[channel]
        return True

    def snapshot(self, channel: int) -> List[Listener]:
        return list(self._channels.get(channel, ()))

    def listener_count(self, channel: int) -> int:
        return len(self._channels.get(channel, ()))

    def channels(self) -> List[int]:
        return list(self._channels)

    def clear(self) -> None:
        self._channels.clear()

    def __contains__(self, channel: object) -> bool:
        return channel in self._channels

    def __len__(self) -> int:
        return len(self._channels)

    def __iter__(self) -> Iterator[int]:
        return iter(self.channels())
