"""chore_tracker - recurring chore scheduling for a small office."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from chore_tracker.core.errors import classify_error_with_response
from chore_tracker.core.logging import configure_logfire, instrument_fastapi
from chore_tracker.interface.api_router import get_store, router
from chore_tracker.services.storage_service import ChoreStore


logger = logging.getLogger(__name__)


async def check_storage_connectivity() -> None:
    """Verify the storage backend responds. Logs a warning if it does not."""
    backend = get_store().backend
    if await backend.ping():
        logger.info("startup_validation", extra={"service": "storage", "status": "ok"})
    else:
        logger.warning("startup_validation", extra={"service": "storage", "status": "unavailable"})


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()
    await check_storage_connectivity()
    yield
    # Shutdown
    await get_store().backend.close()


app = FastAPI(
    title="chore_tracker",
    description="Recurring chore scheduling for a small office",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(router)


def _error_response(exc: Exception, status_code: int) -> JSONResponse:
    response = classify_error_with_response(exc)
    return JSONResponse(content=response.model_dump(mode="json"), status_code=status_code)


@app.exception_handler(KeyError)
async def not_found_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Unknown chore or member ids."""
    logger.info("not_found", extra={"path": request.url.path, "error": str(exc)})
    return _error_response(exc, 404)


@app.exception_handler(ValueError)
async def invalid_value_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Values that passed request parsing but failed domain validation (e.g. malformed dates)."""
    logger.info("invalid_value", extra={"path": request.url.path, "error": str(exc)})
    return _error_response(exc, 422)


@app.exception_handler(RedisError)
async def storage_error_handler(request: Request, exc: RedisError) -> JSONResponse:
    """Storage writes that failed after retries."""
    logger.error("storage_error", extra={"path": request.url.path, "error": str(exc)})
    return _error_response(exc, 503)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)


@app.get("/health/storage")
async def storage_health_check(store: ChoreStore = Depends(get_store)) -> JSONResponse:
    """Storage backend health with operation counters."""
    backend = store.backend
    connected = await backend.ping()
    return JSONResponse(
        content={"status": "healthy" if connected else "unavailable", **backend.get_health_status()},
        status_code=200 if connected else 503,
    )
