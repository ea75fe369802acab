from __future__ import annotations

import asyncio
import logging
from typing import Optional

from candlechart.candles.aggregator import Aggregator
from candlechart.jobs.window_timer import window_timer_loop
from candlechart.providers.base import EVENT_SUBSCRIBED, EVENT_TICKS, TickSource
from candlechart.providers.wire import decode_ticks

log = logging.getLogger("ws_ingest")


async def ws_ingest_loop(
    provider: TickSource,
    aggregator: Aggregator,
    symbol: str,
    window_seconds: float,
) -> None:
    """
    Background loop:
    - reads events from provider.stream_events()
    - first subscription confirmation arms the aggregator and starts the window timer
    - tick boxes are decoded and fed to the aggregator in arrival order
    """
    timer_task: Optional[asyncio.Task] = None

    try:
        async for msg in provider.stream_events(symbol):
            event = msg.get("event")

            if event == EVENT_SUBSCRIBED:
                if aggregator.arm():
                    timer_task = asyncio.create_task(window_timer_loop(aggregator, window_seconds))
                continue

            if event == EVENT_TICKS:
                for tick in decode_ticks(msg.get("ticks"), default_symbol=symbol):
                    if tick.symbol != symbol:
                        log.debug("Dropping tick for other symbol=%s", tick.symbol)
                        continue
                    aggregator.ingest(tick)
    finally:
        if timer_task is not None:
            timer_task.cancel()
