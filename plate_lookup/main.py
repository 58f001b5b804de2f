import asyncio
import contextlib
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from plate_lookup.api.deps import RateLimitExceeded
from plate_lookup.api.plates import RATE_LIMITED_MESSAGE
from plate_lookup.api.plates import router as plates_router
from plate_lookup.config import SETTINGS, Settings
from plate_lookup.rate_limit import RateLimitStore
from plate_lookup.resolver import PlateResolver, build_resolver
from plate_lookup.schemas import ResultOut


logger = logging.getLogger(__name__)


async def _sweep_loop(store: RateLimitStore, interval_seconds: float) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        removed = store.sweep()
        if removed:
            logger.debug("Rate limit sweep removed %s entries.", removed)


def create_app(
    settings: Settings = SETTINGS,
    *,
    resolver: PlateResolver | None = None,
    rate_limiter: RateLimitStore | None = None,
) -> FastAPI:
    app = FastAPI(title="Plate Lookup API")
    app.state.settings = settings
    app.state.resolver = resolver if resolver is not None else build_resolver(settings)
    app.state.rate_limiter = (
        rate_limiter
        if rate_limiter is not None
        else RateLimitStore(settings.rate_limit, settings.rate_window_seconds)
    )
    app.state.started_at = time.monotonic()
    app.state.sweep_task = None

    allow_all = "*" in settings.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else list(settings.allowed_origins),
        allow_methods=["GET"],
    )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limited(_: Request, exc: RateLimitExceeded) -> JSONResponse:
        logger.info("Rate limit hit for %s", exc.client_key)
        return JSONResponse(status_code=429, content=ResultOut(erros=[RATE_LIMITED_MESSAGE]).model_dump())

    @app.on_event("startup")
    async def on_startup() -> None:
        app.state.sweep_task = asyncio.create_task(
            _sweep_loop(app.state.rate_limiter, settings.rate_sweep_seconds)
        )
        logger.info(
            "Plate lookup API started. cors=%s rate_limit=%s/%ss sources=%s",
            ", ".join(settings.allowed_origins),
            settings.rate_limit,
            settings.rate_window_seconds,
            app.state.resolver.strategy_names,
        )

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        task = app.state.sweep_task
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        logger.info("Plate lookup API stopped.")

    app.include_router(plates_router)
    return app


app = create_app()


def run() -> None:
    logging.basicConfig(
        level=getattr(logging, SETTINGS.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=SETTINGS.port)


if __name__ == "__main__":
    run()
