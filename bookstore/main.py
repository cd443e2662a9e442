"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookstore import __version__
from bookstore.api import router as api_router
from bookstore.core.config import settings
from bookstore.core.database import SessionLocal, init_db
from bookstore.core.errors import AuthenticationError, BookstoreError
from bookstore.core.logging import configure_logging, log_failure
from bookstore.core.security import signing_key
from bookstore.services.credentials import ensure_roles

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Fail fast on a missing signing key, then create tables and the fixed roles."""
    signing_key(settings)
    init_db()
    db = SessionLocal()
    try:
        ensure_roles(db)
    finally:
        db.close()
    logger.info("Bookstore API started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Bookstore API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.exception_handler(BookstoreError)
async def bookstore_error_handler(request: Request, exc: BookstoreError) -> JSONResponse:
    """Map domain errors onto their status codes; 5xx ones are logged with their cause chain."""
    if exc.status_code >= 500:
        log_failure(logger, f"{request.method} {request.url.path}: {exc.message}", exc)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or missing request data is a 400, rejected before any mutation."""
    logger.warning("%s %s: Data was incomplete or invalid.", request.method, request.url.path)
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": errors})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the full cause chain and return the failure message as a 500."""
    log_failure(logger, f"{request.method} {request.url.path}: Unhandled error", exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Bookstore API"}
