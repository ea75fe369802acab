import asyncio
import logging

from fastapi import FastAPI

from candlechart.api.routes import router as api_router
from candlechart.config import get_settings
from candlechart.jobs.ws_ingest import ws_ingest_loop
from candlechart.providers.loader import get_provider
from candlechart.state import aggregator

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

provider = get_provider()

app = FastAPI(title="Candles Chart API", version="0.1.0")
app.include_router(api_router)

_tasks: list = []


@app.on_event("startup")
async def _startup():
    # Tick ingest (arms the aggregator and starts the window timer on subscribe)
    _tasks.append(
        asyncio.create_task(
            ws_ingest_loop(
                provider=provider,
                aggregator=aggregator,
                symbol=settings.symbol,
                window_seconds=settings.window_seconds,
            )
        )
    )


@app.on_event("shutdown")
async def _shutdown():
    for task in _tasks:
        task.cancel()
    _tasks.clear()
    provider.close()


@app.get("/health")
def health():
    return {
        "status": "ok",
        "app_env": settings.app_env,
        "symbol": settings.symbol,
        "provider_config": settings.provider,
        "provider_loaded": provider.__class__.__name__,
        "armed": aggregator.armed,
    }
