from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Tick:
    """
    Tick = a single bid/ask observation for the instrument.

    symbol: which instrument (e.g., BTCUSD)
    bid / ask: prices (already coerced to 0.0 when the wire value was unusable)
    spread: spread as reported by the feed
    bf / af: legacy display fields passed through untouched

    There is no timestamp: arrival order is time order.
    """
    symbol: str
    bid: float
    ask: float
    spread: float = 0.0
    bf: str = ""
    af: str = ""

    @property
    def price(self) -> float:
        """Price used for open/close (the ask side, as the feed convention)."""
        return self.ask

    @property
    def high(self) -> float:
        return max(self.bid, self.ask)

    @property
    def low(self) -> float:
        return min(self.bid, self.ask)


@dataclass
class Candle:
    """
    Candle (OHLC) accumulated over one window of ticks.

    window_id: sequence number of the window this candle covers
    epoch: id of the aggregator that built it (window ids restart per aggregator)
    ticks: every tick appended during the window, in arrival order
    seeded: True when ticks[0] was carried over from the previous window
    closed: once True the candle is frozen and no longer accepts ticks

    OHLC values are derived from the ticks. An empty candle reports
    open=close=0, high=0 and low=+inf and must never be displayed.
    """
    window_id: int
    epoch: int = 0
    ticks: List[Tick] = field(default_factory=list)
    seeded: bool = False
    closed: bool = False

    @property
    def open(self) -> float:
        return self.ticks[0].price if self.ticks else 0.0

    @property
    def close(self) -> float:
        return self.ticks[-1].price if self.ticks else 0.0

    @property
    def high(self) -> float:
        return max((t.high for t in self.ticks), default=0.0)

    @property
    def low(self) -> float:
        return min((t.low for t in self.ticks), default=math.inf)

    @property
    def is_empty(self) -> bool:
        return not self.ticks

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def real_tick_count(self) -> int:
        """Ticks that arrived during the window (the carried-over seed excluded)."""
        return len(self.ticks) - (1 if self.seeded else 0)

    def append(self, tick: Tick) -> None:
        """Add a tick to this candle."""
        if self.closed:
            raise RuntimeError(f"candle for window {self.window_id} is closed")
        self.ticks.append(tick)

    def seed(self, tick: Tick) -> None:
        """Carry the previous window's last tick over as this candle's first tick."""
        self.append(tick)
        self.seeded = True

    def freeze(self) -> None:
        self.closed = True

    def snapshot(self) -> Candle:
        """Frozen copy that later appends to this candle cannot reach."""
        return Candle(
            window_id=self.window_id,
            epoch=self.epoch,
            ticks=list(self.ticks),
            seeded=self.seeded,
            closed=True,
        )
