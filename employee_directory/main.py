"""
Employee Directory API - FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires configuration, the document repository, middleware,
       exception handlers and routers, and returns the app.
Who:   uvicorn (employee_directory.main:app) and the test suite
       (create_app(repository=InMemoryDocumentRepository())).

Application Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │                         FastAPI App                          │
    │                                                              │
    │  Middleware: RateLimitHeaders → RequestID → AccessLog        │
    │              → SecurityHeaders → CORS                        │
    │                                                              │
    │  Routes:  {API_PREFIX}/branches   {API_PREFIX}/employee      │
    │           /health   /   /api-docs   /openapi.json            │
    │                                                              │
    │  Exception Handlers:                                         │
    │    ValidationError → 400 {error}                             │
    │    NotFoundError → 404   StoreError → 503                    │
    │    StoreTimeoutError → 504   anything else → 500             │
    └──────────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   logging, configuration check, repository build + initialize
    Shutdown:  repository close (Firestore client, SQL engine)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_directory.config import Settings, settings
from employee_directory.exceptions import (
    EmployeeDirectoryError,
    NotFoundError,
    StoreError,
    StoreTimeoutError,
    ValidationError,
)
from employee_directory.middleware.logging import RequestLoggingMiddleware
from employee_directory.middleware.rate_limit import RateLimitHeadersMiddleware
from employee_directory.middleware.request_id import RequestIDMiddleware, request_id_var
from employee_directory.middleware.security_headers import SecurityHeadersMiddleware
from employee_directory.middleware.validate import describe_framework_errors
from employee_directory.repositories import DocumentRepository, build_repository
from employee_directory.routes import branches, employees, health
from employee_directory.schemas.envelope import error_body, validation_error_body

logger = logging.getLogger(__name__)

API_TITLE = "Employee Directory & Branch Management API Documentation"
API_DESCRIPTION = (
    "REST API for managing company branches and their employees. "
    "Every entity route is validated against its request schema; "
    "responses use a {status, message, data} envelope."
)
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2026-01-15T12:00:00 [INFO] employee_directory.access: GET /api/v1/branches 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level or settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, check configuration, open the document store.
    Shutdown: close the document store.

    A repository injected through create_app() is used as-is; otherwise one
    is built from DOCUMENT_STORE.
    """
    config: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("Employee Directory API starting up (env=%s)...", config.app_env)

    try:
        config.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health stays reachable and store calls fail with 503.
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    if getattr(app.state, "repository", None) is None:
        app.state.repository = build_repository(config)
    repository: DocumentRepository = app.state.repository
    await repository.initialize()
    logger.info("Document store: %s", type(repository).__name__)

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("API docs: http://%s:%d/api-docs", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Employee Directory API shutting down...")
    await repository.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and response bodies.

        ValidationError          → 400 {"error": "Validation error: ..."}
        RequestValidationError   → 400 same shape
        NotFoundError            → 404 {"status": "error", "message": ...}
        StoreTimeoutError        → 504 masked message
        StoreError               → 503 masked message
        EmployeeDirectoryError   → 500 masked message
        Starlette HTTPException  → its own status, error envelope
        Exception (fallback)     → 500 masked message

    Store and unexpected errors never expose backend details to the client;
    those go to the server log with the request id.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] %s", rid, exc.message)
        return JSONResponse(status_code=400, content=validation_error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        error = ValidationError(describe_framework_errors(exc.errors()))
        rid = request_id_var.get("")
        logger.warning("[%s] %s", rid, error.message)
        return JSONResponse(status_code=400, content=validation_error_body(error.message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s", rid, exc.message)
        return JSONResponse(status_code=404, content=error_body(exc.message))

    @app.exception_handler(StoreTimeoutError)
    async def handle_store_timeout(request: Request, exc: StoreTimeoutError):
        rid = request_id_var.get("")
        logger.error("[%s] Document store timeout | Context: %s", rid, exc.context)
        return JSONResponse(status_code=504, content=error_body(exc.message))

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Document store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=503, content=error_body(exc.message))

    @app.exception_handler(EmployeeDirectoryError)
    async def handle_application_error(request: Request, exc: EmployeeDirectoryError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=error_body(UNEXPECTED_ERROR_MESSAGE))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return JSONResponse(status_code=500, content=error_body(UNEXPECTED_ERROR_MESSAGE))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def add_cors(app: FastAPI, config: Settings) -> None:
    """Development: any origin with credentials. Otherwise: ALLOWED_ORIGINS only."""
    if config.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=".*",
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Request-ID"],
        max_age=36000,
    )


def create_app(
    repository: Optional[DocumentRepository] = None,
    config: Settings = settings,
) -> FastAPI:
    """
    Assemble the application.

    Args:
        repository: document store to use; None builds one from DOCUMENT_STORE
                    on startup.
        config:     settings instance (tests pass their own).
    """
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=config.app_version,
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        servers=[{"url": config.swagger_server_url}],
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.repository = repository

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RateLimitHeaders → RequestID → AccessLog
    # → SecurityHeaders → CORS
    add_cors(app, config)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        RateLimitHeadersMiddleware,
        limit=config.rate_limit_requests,
        window=config.rate_limit_window,
    )

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(branches.router, prefix=config.api_prefix)
    app.include_router(employees.router, prefix=config.api_prefix)
    app.include_router(health.router)

    return app


# uvicorn expects `employee_directory.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: `employee-directory`."""
    import uvicorn

    uvicorn.run(
        "employee_directory.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
