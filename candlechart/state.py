from candlechart.candles.aggregator import Aggregator
from candlechart.chart.projector import Projector
from candlechart.config import get_settings

settings = get_settings()

# Global chart state for the running API process
projector = Projector()

# Aggregator hands every emitted history to the projector
aggregator = Aggregator(
    symbol=settings.symbol,
    max_history=settings.max_history,
    ticks_per_window=settings.ticks_per_window,
    listener=projector.receive,
)
