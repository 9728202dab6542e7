"""eMunicipality Backend - Main FastAPI Application

Municipal e-government API for citizens, document types and document requests.

This module creates and configures the FastAPI application, including:
- API routers (users, document types, documents)
- Middleware (request ID correlation, CORS)
- Exception handlers mapping every failure to the response envelope
- Health and observability endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import get_settings
from .database import init_db
from .errors import AppError
from .responses import app_error_response, error_response

# Observability
from .observability.logging_config import configure_logging
from .observability.middleware import RequestIDMiddleware
from .observability.request_id import REQUEST_ID_HEADER, get_request_id
from .observability.router import router as observability_router

# Domain Routers
from .users.router import router as users_router
from .doctypes.router import router as doctypes_router
from .documents.router import router as documents_router

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)

# Listed in the 404 envelope so clients can find their way back
AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /health",
    "GET /api/users",
    "GET /api/doctypes",
    "GET /api/documents",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Startup: create missing tables when AUTO_CREATE_SCHEMA is set
    - Shutdown: log only; sessions are closed per request
    """
    logger.info("eMunicipality API starting up...")
    logger.info(f"Environment: {settings.ENV}")
    if settings.AUTO_CREATE_SCHEMA:
        init_db()

    yield

    logger.info("eMunicipality API shutting down...")


app = FastAPI(
    title="eMunicipality API",
    description="Municipal e-government API: users, document types and document requests",
    version=__version__,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_url=None if settings.is_production else "/openapi.json",
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE CONFIGURATION
# =============================================================================

app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Expected failures: validation, not found, conflict, referential block, datastore."""
    if exc.status_code >= 500:
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.warning(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
            extra={"status_code": exc.status_code},
        )
    return app_error_response(exc, verbose=get_settings().verbose_errors)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Malformed body or path parameters are reported like any other validation failure."""
    errors = exc.errors()
    logger.warning(
        f"Validation error on {request.method} {request.url.path}",
        extra={"status_code": status.HTTP_400_BAD_REQUEST},
    )
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
        message = f"{location}: {first.get('msg')}" if location else first.get("msg", message)
    return error_response(message, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes and unsupported methods."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(
            "Endpoint not found",
            exc.status_code,
            extra={"availableEndpoints": AVAILABLE_ENDPOINTS},
        )
    return error_response(str(exc.detail), exc.status_code)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Database errors raised outside the datastore layer.

    Logs the full error but returns a generic message to prevent
    information leakage.
    """
    logger.error(
        f"Database error on {request.method} {request.url.path}",
        exc_info=exc
    )
    error = str(exc) if get_settings().verbose_errors else None
    return error_response(
        "A database error occurred. Please try again later.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=error,
    )


@app.exception_handler(Exception)
async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Catch-all: full details are logged, not exposed unless verbose errors are on.

    This response is built outside RequestIDMiddleware, so the id is attached here.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}",
        exc_info=exc
    )
    error = str(exc) if get_settings().verbose_errors else "Something went wrong"
    return error_response(
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=error,
        headers={REQUEST_ID_HEADER: get_request_id()},
    )


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

# Observability (health, ready, metrics)
app.include_router(observability_router)

app.include_router(users_router, prefix="/api")
app.include_router(doctypes_router, prefix="/api")
app.include_router(documents_router, prefix="/api")


@app.get("/", include_in_schema=False)
async def root() -> dict[str, Any]:
    """Root endpoint - API information."""
    return {
        "success": True,
        "message": "Welcome to eMunicipality API",
        "version": __version__,
        "endpoints": {
            "users": "/api/users",
            "doctypes": "/api/doctypes",
            "documents": "/api/documents",
            "health": "/health",
        },
        "documentation": None if settings.is_production else "/docs",
    }


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "emunicipality.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENV == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
