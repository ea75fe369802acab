from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, List, Optional

from candlechart.models.market import Candle, Tick

log = logging.getLogger("candle_aggregator")

CandleListener = Callable[[List[Candle]], None]

_epochs = itertools.count(1)


class Aggregator:
    """
    Builds candles from a tick stream, one candle per fixed window.

    Windows are advanced only by on_window_tick(), which an external periodic
    timer calls once per window duration. Ticks never close a window on their
    own (unless ticks_per_window is set, see below).

    Lifecycle:
    - idle until arm() (the transport confirmed the subscription)
    - arm() opens the first window immediately
    - ingest(tick) always appends to the last candle in history (the open one)
    - on_window_tick() emits the non-empty history, then opens the next window
      seeded with the last tick of the window just closed

    ticks_per_window > 0 is the "raw tick" mode: the open window closes as soon
    as it holds that many real ticks (1 = one bar per tick).
    """

    def __init__(
        self,
        symbol: str,
        max_history: int = 500,
        ticks_per_window: int = 0,
        listener: Optional[CandleListener] = None,
    ):
        self.symbol = symbol
        self.max_history = max_history
        self.ticks_per_window = ticks_per_window
        self.listener = listener
        self.epoch = next(_epochs)

        self._candles: List[Candle] = []
        self._armed = False
        self._next_window_id = 0
        self._lock = threading.Lock()
        # Held from building an emission until the listener returns, so
        # histories reach the listener in the order they were built.
        self._deliver_lock = threading.RLock()

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> bool:
        """
        Start aggregating. Returns True only on the call that armed us.

        Opens the first window right away, the same as one timer fire.
        """
        with self._deliver_lock:
            with self._lock:
                if self._armed:
                    return False
                self._armed = True
                emitted = self._close_window()

            log.info("Aggregator armed symbol=%s", self.symbol)
            self._notify(emitted)
        return True

    def ingest(self, tick: Tick) -> None:
        """Append one tick to the open window. No-op until armed."""
        with self._deliver_lock:
            emitted: Optional[List[Candle]] = None

            with self._lock:
                if not self._armed or not self._candles:
                    return

                current = self._candles[-1]
                current.append(tick)

                if self.ticks_per_window and current.real_tick_count >= self.ticks_per_window:
                    emitted = self._close_window()

            if emitted is not None:
                self._notify(emitted)

    def on_window_tick(self) -> List[Candle]:
        """
        Close the open window and open the next one.

        Returns the non-empty candles accumulated so far (empty list = no
        update). Before arm() this is a no-op returning [].
        """
        with self._deliver_lock:
            with self._lock:
                if not self._armed:
                    return []
                emitted = self._close_window()

            self._notify(emitted)
        return emitted

    def candles(self) -> List[Candle]:
        """Non-empty candles in history, as frozen snapshots."""
        with self._lock:
            return [c.snapshot() for c in self._candles if not c.is_empty]

    def current(self) -> Optional[Candle]:
        """Snapshot of the open candle (None before arm)."""
        with self._lock:
            if not self._armed or not self._candles:
                return None
            return self._candles[-1].snapshot()

    # Must be called with self._lock held.
    def _close_window(self) -> List[Candle]:
        emitted = [c.snapshot() for c in self._candles if not c.is_empty]

        previous = self._candles[-1] if self._candles else None
        if previous is not None:
            previous.freeze()

        candle = Candle(window_id=self._next_window_id, epoch=self.epoch)
        self._next_window_id += 1
        self._candles.append(candle)

        if previous is not None and previous.ticks:
            candle.seed(previous.ticks[-1])

        if len(self._candles) > self.max_history:
            del self._candles[:-self.max_history]

        log.debug(
            "Window closed symbol=%s emitted=%d open_window=%d seeded=%s",
            self.symbol,
            len(emitted),
            candle.window_id,
            candle.seeded,
        )
        return emitted

    def _notify(self, emitted: List[Candle]) -> None:
        if emitted and self.listener is not None:
            self.listener(emitted)
