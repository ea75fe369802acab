from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class Rect(BaseModel):
    """Pixel rectangle in top-down content coordinates (y grows downward)."""

    x: float
    y: float
    width: float
    height: float


class CandleShape(BaseModel):
    """
    Geometry for one visible candle.

    wick: thin rectangle spanning [low, high], centered on the body
    body: rectangle spanning [min(open, close), max(open, close)]
    bullish: close > open (body_color follows it)
    """

    index: int
    window_id: int
    wick: Rect
    wick_color: str
    body: Rect
    body_color: str
    body_corner_radius: float
    bullish: bool


class ChartGeometry(BaseModel):
    """
    Output of one projection pass.

    rendered is False when the value range is degenerate; shapes, labels and
    scrolling are then left empty for this pass.
    """

    rendered: bool
    content_width: float
    shapes: List[CandleShape] = []
    max_label: str = ""
    min_label: str = ""
    top_line_y: Optional[float] = None
    bottom_line_y: Optional[float] = None
    auto_scroll: bool = False
    scroll_rect: Optional[Rect] = None
