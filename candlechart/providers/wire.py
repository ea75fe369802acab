from __future__ import annotations

import math
from typing import Any, List, Optional

from candlechart.models.market import Tick


def parse_price(raw: Any) -> float:
    """
    Feed numbers arrive as strings and may be blank or garbage.

    Anything that is not a finite, non-negative number becomes 0.0.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(str(raw).strip())
    except ValueError:
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def decode_tick(raw: Any, default_symbol: str = "") -> Optional[Tick]:
    """
    Convert one wire tick into a Tick.

    Wire shape: {"s": symbol, "b": bid, "a": ask, "spr": spread, "bf": ..., "af": ...}
    Returns None only when the entry is not an object at all.
    """
    if not isinstance(raw, dict):
        return None

    symbol = str(raw.get("s") or default_symbol).upper()
    return Tick(
        symbol=symbol,
        bid=parse_price(raw.get("b")),
        ask=parse_price(raw.get("a")),
        spread=parse_price(raw.get("spr")),
        bf=str(raw.get("bf") or ""),
        af=str(raw.get("af") or ""),
    )


def decode_ticks(raws: Any, default_symbol: str = "") -> List[Tick]:
    if not isinstance(raws, list):
        return []
    out: List[Tick] = []
    for raw in raws:
        tick = decode_tick(raw, default_symbol)
        if tick is not None:
            out.append(tick)
    return out
