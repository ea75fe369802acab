from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from candlechart.models.chart import CandleShape, ChartGeometry, Rect
from candlechart.models.market import Candle

log = logging.getLogger("chart_projector")


# -------------------------
# Layout
# -------------------------
CANDLE_BODY_WIDTH = 16.0
CANDLE_WICK_WIDTH = 1.0
CANDLE_SPACING = 8.0
CANDLE_PITCH = CANDLE_SPACING + CANDLE_BODY_WIDTH
CANDLE_CORNER_RADIUS = 3.0
AVAILABLE_HEIGHT_FRACTION = 0.8
AUTO_SCROLL_TOLERANCE = 10.0

BULLISH_COLOR = "#00ff00"
BEARISH_COLOR = "#ff0000"
WICK_COLOR = "#d3d3d3"


def required_content_width(candle_count: int) -> float:
    return candle_count * CANDLE_PITCH + CANDLE_SPACING


def format_label(value: float) -> str:
    return str(value)


@dataclass
class ChartState:
    """
    Running chart bookkeeping.

    max_value / min_value: widest range seen over every candle received
    candles: history as last delivered by the aggregator
    content_width: content width of the previous projection pass
    """
    max_value: float = 0.0
    min_value: float = math.inf
    candles: List[Candle] = field(default_factory=list)
    content_width: float = 0.0


class Projector:
    """
    Maps candle history onto a fixed-height, horizontally scrollable viewport.

    Not thread-safe: call it from the thread that owns rendering (the event
    loop in the API process).
    """

    def __init__(self, state: Optional[ChartState] = None):
        self.state = state or ChartState()

    @property
    def max_value(self) -> float:
        return self.state.max_value

    @property
    def min_value(self) -> float:
        return self.state.min_value

    def update_range(self, candles: Sequence[Candle]) -> None:
        """Widen the running range with these candles. Never narrows it."""
        for candle in candles:
            if candle.is_empty:
                continue
            if candle.high > self.state.max_value:
                self.state.max_value = candle.high
            if candle.low < self.state.min_value:
                self.state.min_value = candle.low

    def reset_range(self) -> None:
        self.state.max_value = 0.0
        self.state.min_value = math.inf

    def receive(self, candles: Sequence[Candle]) -> None:
        """
        Take a freshly emitted history, replacing the known one.

        A continuation of the previous history only widens the range. A
        truncated or unrelated history resets it and rescans everything.
        """
        previous = self.state.candles
        candles = list(candles)

        continuation = not previous or (
            bool(candles)
            and candles[0].epoch == previous[0].epoch
            and candles[0].window_id == previous[0].window_id
            and len(candles) >= len(previous)
        )
        if not continuation:
            log.info(
                "Candle history replaced (was %d, now %d); recomputing range",
                len(previous),
                len(candles),
            )
            self.reset_range()

        self.state.candles = candles
        self.update_range(candles)

    def project(
        self,
        candles: Optional[Sequence[Candle]],
        viewport_width: float,
        scroll_offset_x: float,
        viewport_height: float,
    ) -> ChartGeometry:
        """
        Compute geometry for the candles visible in the viewport.

        candles=None projects the history last passed to receive().
        """
        if candles is None:
            candles = self.state.candles

        content_width = required_content_width(len(candles))

        # Auto-scroll is judged against what the viewport currently shows.
        previous_width = self.state.content_width
        need_to_scroll = (
            abs(scroll_offset_x + viewport_width - previous_width) <= AUTO_SCROLL_TOLERANCE
            or viewport_width > previous_width
        )
        self.state.content_width = content_width

        max_value = self.state.max_value
        min_value = self.state.min_value
        available_height = viewport_height * AVAILABLE_HEIGHT_FRACTION
        value_span = max_value - min_value

        if available_height == 0 or value_span == 0 or not math.isfinite(value_span):
            return ChartGeometry(rendered=False, content_width=content_width)

        ratio = available_height / value_span
        top_margin = (viewport_height - available_height) / 2.0

        def to_y(value: float) -> float:
            return (max_value - value) * ratio + top_margin

        shapes: List[CandleShape] = []
        for index, candle in enumerate(candles):
            if candle.is_empty:
                continue

            body_x = index * CANDLE_PITCH + CANDLE_SPACING
            if scroll_offset_x > body_x + CANDLE_BODY_WIDTH or scroll_offset_x + viewport_width < body_x:
                continue

            body_top = max(candle.open, candle.close)
            body_bottom = min(candle.open, candle.close)
            bullish = candle.is_bullish

            shapes.append(
                CandleShape(
                    index=index,
                    window_id=candle.window_id,
                    wick=Rect(
                        x=body_x + CANDLE_BODY_WIDTH / 2.0,
                        y=to_y(candle.high),
                        width=CANDLE_WICK_WIDTH,
                        height=(candle.high - candle.low) * ratio,
                    ),
                    wick_color=WICK_COLOR,
                    body=Rect(
                        x=body_x,
                        y=to_y(body_top),
                        width=CANDLE_BODY_WIDTH,
                        height=(body_top - body_bottom) * ratio,
                    ),
                    body_color=BULLISH_COLOR if bullish else BEARISH_COLOR,
                    body_corner_radius=CANDLE_CORNER_RADIUS,
                    bullish=bullish,
                )
            )

        scroll_rect = None
        if need_to_scroll:
            scroll_rect = Rect(
                x=content_width - viewport_width,
                y=0.0,
                width=viewport_width,
                height=viewport_height,
            )

        return ChartGeometry(
            rendered=True,
            content_width=content_width,
            shapes=shapes,
            max_label="" if max_value == 0 else format_label(max_value),
            min_label="" if min_value == math.inf else format_label(min_value),
            top_line_y=top_margin,
            bottom_line_y=(viewport_height + available_height) / 2.0,
            auto_scroll=need_to_scroll,
            scroll_rect=scroll_rect,
        )
