# candlechart/config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Loads variables from a local .env file into environment variables (dev only).
load_dotenv()


@dataclass(frozen=True)
class Settings:
    # App config
    app_env: str
    log_level: str
    provider: str
    symbol: str

    # Transport config (quotes websocket)
    quotes_ws_url: str
    quotes_ws_verify_tls: bool

    # Aggregation config
    window_seconds: float
    ticks_per_window: int
    max_history: int

    # Mock source config
    mock_tick_interval_seconds: float


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    """
    Reads env vars and returns a Settings object.
    """
    window_seconds = float(os.getenv("WINDOW_SECONDS", "60"))
    if window_seconds <= 0:
        raise ValueError(f"WINDOW_SECONDS must be > 0, got {window_seconds}")

    ticks_per_window = int(os.getenv("TICKS_PER_WINDOW", "0"))
    if ticks_per_window < 0:
        raise ValueError(f"TICKS_PER_WINDOW must be >= 0, got {ticks_per_window}")

    max_history = int(os.getenv("MAX_HISTORY", "500"))
    if max_history <= 0:
        raise ValueError(f"MAX_HISTORY must be > 0, got {max_history}")

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        provider=os.getenv("PROVIDER", "QUOTES"),
        symbol=os.getenv("SYMBOL", "BTCUSD").strip().upper(),
        quotes_ws_url=os.getenv("QUOTES_WS_URL", "wss://quotes.eccalls.mobi:18400"),
        quotes_ws_verify_tls=_env_bool("QUOTES_WS_VERIFY_TLS", False),
        window_seconds=window_seconds,
        ticks_per_window=ticks_per_window,
        max_history=max_history,
        mock_tick_interval_seconds=float(os.getenv("MOCK_TICK_INTERVAL_SECONDS", "0.5")),
    )
