from __future__ import annotations

import os
import sys

# Add repo root to Python import path so `import candlechart...` works
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from candlechart.candles.aggregator import Aggregator
from candlechart.chart.projector import Projector
from candlechart.providers.mock import MockTickSource
from candlechart.providers.wire import decode_tick


def run(symbol: str = "BTCUSD", windows: int = 12, ticks_per_window: int = 10) -> None:
    """
    Generates fake ticks and feeds them through Aggregator + Projector.

    - Each window gets `ticks_per_window` random-walk ticks.
    - After each window close we print the closed candle.
    - At the end we project the history into an 800x400 viewport.
    """
    source = MockTickSource(interval=0)
    projector = Projector()
    aggregator = Aggregator(symbol=symbol, listener=projector.receive)
    aggregator.arm()

    print(f"Simulating {windows} windows for {symbol}...\n")

    for _ in range(windows):
        for _ in range(ticks_per_window):
            aggregator.ingest(decode_tick(source.next_tick(symbol)))

        emitted = aggregator.on_window_tick()
        if emitted:
            closed = emitted[-1]
            print(
                f"[CLOSED window {closed.window_id}] {symbol} "
                f"O={closed.open} H={closed.high} L={closed.low} C={closed.close} "
                f"ticks={len(closed.ticks)} seeded={closed.seeded}"
            )

    geometry = projector.project(None, viewport_width=800, scroll_offset_x=0, viewport_height=400)

    print("\nDone.")
    print(f"Range: min={geometry.min_label} max={geometry.max_label}")
    print(f"Content width: {geometry.content_width}  visible candles: {len(geometry.shapes)}")
    for shape in geometry.shapes:
        print(
            f"  #{shape.index} {'UP  ' if shape.bullish else 'DOWN'} "
            f"body=({shape.body.x:.0f},{shape.body.y:.1f},{shape.body.height:.1f}) "
            f"wick=({shape.wick.y:.1f},{shape.wick.height:.1f})"
        )


if __name__ == "__main__":
    run()
