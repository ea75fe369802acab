from __future__ import annotations

import asyncio
import random
from typing import AsyncIterator, Dict, Optional

from candlechart.config import get_settings
from candlechart.providers.base import EVENT_SUBSCRIBED, EVENT_TICKS, TickSource


class MockTickSource(TickSource):
    """
    Offline tick source (random walk), same interface as the live feed.

    - reports the subscription straight away
    - then yields one tick box every `interval` seconds
    - ask walks by up to +/-100 per tick and never goes negative
    - bid sits a small random spread below ask

    max_batches stops the stream after that many boxes (None = forever).
    """

    def __init__(
        self,
        interval: Optional[float] = None,
        ticks_per_batch: int = 1,
        seed: Optional[int] = None,
        start_price: Optional[float] = None,
        max_batches: Optional[int] = None,
    ) -> None:
        if interval is None:
            interval = get_settings().mock_tick_interval_seconds
        self.interval = interval
        self.ticks_per_batch = ticks_per_batch
        self.max_batches = max_batches
        self._rng = random.Random(seed)
        self.price = float(start_price) if start_price is not None else float(self._rng.randint(1000, 5000))

    def next_tick(self, symbol: str) -> Dict:
        """One raw wire tick, advancing the walk."""
        self.price = abs(self.price + self._rng.randint(0, 199) - 100)
        spread = round(self._rng.uniform(0.5, 5.0), 2)
        bid = max(self.price - spread, 0.0)
        return {
            "s": symbol,
            "b": f"{bid:.2f}",
            "a": f"{self.price:.2f}",
            "spr": f"{spread:.2f}",
            "bf": "",
            "af": "",
        }

    async def stream_events(self, symbol: str) -> AsyncIterator[Dict]:
        symbol = symbol.strip().upper()
        yield {"event": EVENT_SUBSCRIBED}

        sent = 0
        while self.max_batches is None or sent < self.max_batches:
            await asyncio.sleep(self.interval)
            ticks = [self.next_tick(symbol) for _ in range(self.ticks_per_batch)]
            yield {"event": EVENT_TICKS, "ticks": ticks}
            sent += 1
