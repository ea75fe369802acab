from __future__ import annotations

import asyncio
import logging
import traceback
from typing import Optional

from candlechart.candles.aggregator import Aggregator

log = logging.getLogger("window_timer")


async def window_timer_loop(
    aggregator: Aggregator,
    window_seconds: float,
    max_windows: Optional[int] = None,
) -> None:
    """
    Background loop:
    closes the open window every `window_seconds`.

    The aggregator hands each emitted history to its listener (the projector).
    max_windows stops the loop after that many closes (None = forever).
    """
    fired = 0
    while max_windows is None or fired < max_windows:
        await asyncio.sleep(window_seconds)
        fired += 1
        try:
            emitted = aggregator.on_window_tick()
            log.info("Window closed symbol=%s candles=%d", aggregator.symbol, len(emitted))
        except Exception as e:
            # Keep timer alive even if one close fails, but log the error.
            log.error("Window close failed symbol=%s error=%s", aggregator.symbol, repr(e))
            log.error(traceback.format_exc())
