from __future__ import annotations

import math
from typing import Optional

from fastapi import APIRouter, Query

from candlechart.models.chart import ChartGeometry
from candlechart.models.market import Candle, Tick
from candlechart.providers.wire import parse_price
from candlechart.state import aggregator, projector

router = APIRouter()


def candle_dict(candle: Optional[Candle]) -> Optional[dict]:
    if candle is None:
        return None
    return {
        "window_id": candle.window_id,
        "open": candle.open,
        "high": candle.high,
        "low": None if math.isinf(candle.low) else candle.low,
        "close": candle.close,
        "ticks": len(candle.ticks),
        "seeded": candle.seeded,
    }


@router.get("/candles")
async def candles():
    """
    Candle history as last emitted on a window close, plus the forming candle.
    """
    history = projector.state.candles
    return {
        "symbol": aggregator.symbol,
        "armed": aggregator.armed,
        "candles": [candle_dict(c) for c in history],
        "current": candle_dict(aggregator.current()),
        "max_value": projector.max_value,
        "min_value": None if math.isinf(projector.min_value) else projector.min_value,
    }


@router.get("/chart", response_model=ChartGeometry)
async def chart(
    width: float = Query(..., gt=0, description="Viewport width in pixels"),
    height: float = Query(..., ge=0, description="Viewport height in pixels"),
    offset_x: float = Query(0, ge=0, description="Horizontal scroll offset in pixels"),
):
    """
    One projection pass over the current history for the given viewport.
    """
    return projector.project(None, width, offset_x, height)


@router.post("/dev/simulate_tick")
async def dev_simulate_tick(
    bid: str = Query(..., description="Bid price (unparseable values count as 0)"),
    ask: str = Query(..., description="Ask price (unparseable values count as 0)"),
):
    """
    Dev-only helper:
    Feeds ONE tick into the aggregator inside the running API process.
    """
    tick = Tick(symbol=aggregator.symbol, bid=parse_price(bid), ask=parse_price(ask))
    aggregator.ingest(tick)
    return {"ok": True, "armed": aggregator.armed}


@router.post("/dev/close_window")
async def dev_close_window():
    """
    Dev-only helper:
    Fires one window close, as the periodic timer would.
    """
    emitted = aggregator.on_window_tick()
    return {"ok": True, "armed": aggregator.armed, "emitted_count": len(emitted)}
