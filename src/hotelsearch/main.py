from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from hotelsearch.config import settings
from hotelsearch.db.session import shutdown
from hotelsearch.dependencies import DB
from hotelsearch.exceptions import DomainError, ForbiddenError, NotFoundError, SearchExpiredError
from hotelsearch.logging import get_logger
from hotelsearch.middleware import RequestIDMiddleware
from hotelsearch.routers import booking, location, search
from hotelsearch.schemas.error import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close pooled database connections on shutdown."""
    yield
    await shutdown()


app = FastAPI(title="hotelsearch", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.include_router(search.router)
app.include_router(booking.router)
app.include_router(location.router)


def _error_json(code: str, message: str) -> dict[str, object]:
    """Build the standard error envelope, tagged with the current request id."""
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    return ErrorResponse(error=ErrorDetail(code=code, message=message), request_id=request_id).model_dump()


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_error_json("not_found", exc.message))


@app.exception_handler(ForbiddenError)
async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
    logger.warning("forbidden", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=403, content=_error_json("forbidden", exc.message))


@app.exception_handler(SearchExpiredError)
async def search_expired_handler(request: Request, exc: SearchExpiredError) -> JSONResponse:
    """410: the search finished but its results left the cache; start a new search."""
    return JSONResponse(status_code=410, content=_error_json("search_expired", exc.message))


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """400 for any other domain-level violation."""
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json("domain_error", exc.message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and return a generic 500 (no stack traces leaked)."""
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
    )


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Return 200 only if the database answers a ping query."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}


def serve() -> None:
    """Entry point of the ``hotelsearch`` console script."""
    uvicorn.run("hotelsearch.main:app", host=settings.api_host, port=settings.api_port, log_config=None)
