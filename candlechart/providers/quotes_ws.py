from __future__ import annotations

import asyncio
import json
import logging
import ssl
from typing import Any, AsyncIterator, Dict, List, Optional

import websockets

from candlechart.config import get_settings
from candlechart.providers.base import EVENT_SUBSCRIBED, EVENT_TICKS, TickSource

log = logging.getLogger("quotes_ws_provider")


def parse_frame(raw: Any) -> List[Dict]:
    """
    Turn one text frame into zero or more stream events.

    A frame can confirm the subscription ({"subscribed_count": N > 0}),
    carry a tick box ({"ticks": [...]}), both, or neither.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return []

    if not isinstance(data, dict):
        return []

    events: List[Dict] = []

    count = data.get("subscribed_count")
    if isinstance(count, int) and not isinstance(count, bool) and count > 0:
        events.append({"event": EVENT_SUBSCRIBED})

    ticks = data.get("ticks")
    if isinstance(ticks, list):
        events.append({"event": EVENT_TICKS, "ticks": ticks})

    return events


class QuotesWsProvider(TickSource):
    """
    Quotes feed over WebSocket.

    - on connect: sends "SUBSCRIBE: <symbol>" and reports the subscription
    - yields tick boxes as they arrive
    - on disconnect/error: reconnects with exponential backoff
    - on close of the stream: best-effort "UNSUBSCRIBE: <symbol>"
    """

    def __init__(self, url: Optional[str] = None, verify_tls: Optional[bool] = None) -> None:
        settings = get_settings()
        self.url = url or settings.quotes_ws_url
        self.verify_tls = settings.quotes_ws_verify_tls if verify_tls is None else verify_tls

    def _ssl_context(self) -> Optional[ssl.SSLContext]:
        if not self.url.startswith("wss://"):
            return None
        ctx = ssl.create_default_context()
        if not self.verify_tls:
            # The quotes host serves a certificate that does not validate.
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
        return ctx

    async def stream_events(self, symbol: str) -> AsyncIterator[Dict]:
        symbol = symbol.strip().upper()
        backoff = 1.0

        while True:
            try:
                async with websockets.connect(
                    self.url,
                    ssl=self._ssl_context(),
                    ping_interval=20,
                    ping_timeout=20,
                ) as ws:
                    log.warning("Quotes WS connected url=%s", self.url)
                    try:
                        await ws.send(f"SUBSCRIBE: {symbol}")
                        log.warning("Quotes WS subscribe sent symbol=%s", symbol)
                        backoff = 1.0
                        yield {"event": EVENT_SUBSCRIBED}

                        first_tick_logged = False
                        async for raw in ws:
                            for event in parse_frame(raw):
                                if event["event"] == EVENT_TICKS and event["ticks"] and not first_tick_logged:
                                    log.warning("Quotes WS first tick=%s", event["ticks"][0])
                                    first_tick_logged = True
                                yield event
                    finally:
                        try:
                            await ws.send(f"UNSUBSCRIBE: {symbol}")
                        except Exception as e:
                            log.debug("Quotes WS unsubscribe skipped: %s", e)

                log.warning("Quotes WS closed by server; reconnecting")

            except Exception as e:
                log.warning("Quotes WS error: %s", e)

            await asyncio.sleep(backoff)
            backoff = min(backoff * 2, 30.0)
