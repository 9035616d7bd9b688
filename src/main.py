from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.favorites import router as favorites_router
from src.adapters.api.controllers.routes import router as routes_router
from src.adapters.api.controllers.stops import router as stops_router
from src.adapters.api.dependencies import build_context
from src.adapters.config import RuntimeConfig
from src.domain.exceptions import (
    DataFetchError,
    InvalidCoordinateError,
    StopNotFoundError,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.context = build_context(RuntimeConfig.from_env())
    try:
        yield
    finally:
        app.state.context = None


app = FastAPI(title="TorinoGo", lifespan=lifespan)
app.include_router(stops_router)
app.include_router(favorites_router)
app.include_router(routes_router)


@app.exception_handler(DataFetchError)
async def data_fetch_error_handler(
    request: Request, exc: DataFetchError
) -> JSONResponse:
    # Transient: the client keeps what it shows and offers a retry.
    logging.getLogger("uvicorn.error").warning(
        "Backend fetch failed", extra={"path": str(request.url.path)}
    )
    return JSONResponse(
        status_code=503, content={"detail": str(exc), "retryable": True}
    )


@app.exception_handler(StopNotFoundError)
async def stop_not_found_handler(
    request: Request, exc: StopNotFoundError
) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidCoordinateError)
async def invalid_coordinate_handler(
    request: Request, exc: InvalidCoordinateError
) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Ensure API errors are JSON so the map client can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = (os.getenv("TORINOGO_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    if reveal or isinstance(exc, (RuntimeError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
