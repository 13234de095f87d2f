import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from osintkit.config import Settings, settings as default_settings
from osintkit.models import ErrorResponse
from osintkit.routes import health_router, scan_router
from osintkit.services import ResultCache, SourceRateLimiter

logger = logging.getLogger("osintkit")


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = app.state.settings
    logger.info(
        "%s v%s starting (environment=%s, live sources=%s, caching=%s)",
        config.APP_NAME,
        config.VERSION,
        config.ENVIRONMENT,
        "on" if config.ENABLE_REAL_APIS else "off",
        f"{config.CACHE_DURATION_HOURS:g}h" if config.ENABLE_CACHING else "off",
    )
    yield
    app.state.cache.clear()
    logger.info("Shutdown. Cache cleared.")


def create_app(config: Optional[Settings] = None) -> FastAPI:
    config = config or default_settings
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="osintkit API",
        version=config.VERSION,
        docs_url="/docs" if config.DEBUG else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    # Shared by every scan served by this process.
    app.state.settings = config
    app.state.cache = ResultCache(ttl_hours=config.CACHE_DURATION_HOURS)
    app.state.rate_limiter = SourceRateLimiter(
        max_requests=config.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def error_handler(request: Request, exc: Exception):
        logger.error("Unhandled %s: %s", type(exc).__name__, exc)
        return JSONResponse(status_code=500, content=ErrorResponse(error="Internal error").model_dump())

    app.include_router(health_router, prefix="/api")
    app.include_router(scan_router, prefix="/api")

    @app.get("/")
    async def root():
        return {"name": "osintkit API", "version": config.VERSION, "status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("osintkit.main:app", host=default_settings.HOST, port=default_settings.PORT, reload=True)
