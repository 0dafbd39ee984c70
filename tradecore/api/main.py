"""FastAPI application for the trade service.

Note: Rate limiting is intentionally not implemented at the application level.
It should be handled at the infrastructure layer (reverse proxy / load balancer).
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradecore import __version__
from tradecore.api.endpoints import router
from tradecore.errors import TradeError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("TRADE_HOST", "0.0.0.0")
PORT = int(os.environ.get("TRADE_PORT", "8000"))
DEBUG = os.environ.get("TRADE_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (64 KB)
MAX_REQUEST_SIZE = 64 * 1024

app = FastAPI(
    title="Trade Service",
    description="Token-swap quotes and ledger settlement",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            size = int(content_length)
        except ValueError:
            return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
        if size > MAX_REQUEST_SIZE:
            return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(TradeError)
async def trade_error_handler(request: Request, exc: TradeError) -> JSONResponse:
    """Return trade errors as ``{"code", "message"}`` with their status."""
    logger.info(
        "trade_error",
        path=request.url.path,
        code=exc.code,
        message=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the trade API server.

    Configuration via environment variables:
    - TRADE_HOST: Host to bind to (default: 0.0.0.0)
    - TRADE_PORT: Port to bind to (default: 8000)
    - TRADE_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "tradecore.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
