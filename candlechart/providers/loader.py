from candlechart.config import get_settings
from candlechart.providers.base import TickSource
from candlechart.providers.mock import MockTickSource
from candlechart.providers.quotes_ws import QuotesWsProvider


def get_provider() -> TickSource:
    """
    Provider loader / factory.

    Reads PROVIDER from config and returns an instance of the selected tick source.
    This is the single place that knows about concrete sources.
    """
    settings = get_settings()
    provider_name = settings.provider.strip().upper()

    if provider_name == "QUOTES":
        return QuotesWsProvider()

    if provider_name == "MOCK":
        return MockTickSource()

    raise ValueError(f"Unknown PROVIDER='{settings.provider}'. Expected: QUOTES or MOCK")
