from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator, Dict

EVENT_SUBSCRIBED = "subscribed"
EVENT_TICKS = "ticks"


class TickSource(ABC):
    """
    Tick source contract (interface).

    Any source must implement stream_events(), an async iterator of dicts:
    - {"event": "subscribed"}                      subscription confirmed
    - {"event": "ticks", "ticks": [raw, ...]}      raw wire ticks, in arrival order

    Connection handling (reconnects, handshakes) stays inside the source.
    """

    @abstractmethod
    def stream_events(self, symbol: str) -> AsyncIterator[Dict]:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources. Optional."""
