"""FastAPI application for the facade simulation service."""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from amm_facade import __version__
from amm_facade.api.endpoints import router
from amm_facade.errors import FacadeError
from amm_facade.models.requests import ErrorResponse

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("AMM_FACADE_HOST", "127.0.0.1")
PORT = int(os.environ.get("AMM_FACADE_PORT", "8000"))
DEBUG = os.environ.get("AMM_FACADE_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (64 KB)
MAX_REQUEST_SIZE = 64 * 1024

app = FastAPI(
    title="AMM Facade",
    description="Swap and liquidity facade over native-paired constant product pools",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(FacadeError)
async def facade_error_handler(request: Request, exc: FacadeError) -> JSONResponse:
    """Every facade failure is a client-visible 400 with its kind and reason."""
    logger.warning(
        "facade_call_failed",
        path=request.url.path,
        error=exc.kind,
        reason=exc.reason,
    )
    body = ErrorResponse(error=exc.kind, reason=exc.reason)
    return JSONResponse(status_code=400, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the facade API server.

    Configuration via environment variables:
    - AMM_FACADE_HOST: Host to bind to (default: 127.0.0.1)
    - AMM_FACADE_PORT: Port to bind to (default: 8000)
    - AMM_FACADE_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "amm_facade.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
