"""
Product API — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (uvicorn product_api.main:app, or python -m product_api).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Request ID  │→│   Logging    │→│    CORS     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────────┐ ┌─────────────┐  │
    │  │ /products, /products/{id}     │ │ GET /health │  │
    │  └───────────────────────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ InvalidPayload→400 │ NotFound→404 │ DB→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to the store and create the products table if absent
       (any failure aborts startup)

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from product_api import __version__
from product_api.config import settings
from product_api.database import dispose_engine, init_store
from product_api.exceptions import DatabaseError, InvalidPayloadError, NotFoundError
from product_api.middleware.logging import RequestLoggingMiddleware
from product_api.middleware.request_id import RequestIDMiddleware, request_id_var
from product_api.routes import health, products

logger = logging.getLogger(__name__)

# Fixed error bodies of the public API
PRODUCT_NOT_FOUND = {"error": "Product not found"}
INVALID_PAYLOAD = {"error": "Invalid request payload"}
INTERNAL_ERROR = {"error": "Internal server error"}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before store initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Access lines come from RequestLoggingMiddleware instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then store connection + table creation.
    Shutdown: dispose the engine.

    A store failure at startup is fatal: it is logged and re-raised, and
    uvicorn exits without serving.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Product API %s starting up...", __version__)

    try:
        await init_store()
    except Exception as e:
        logger.critical("Failed to initialize the product store: %s", str(e))
        raise

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Product API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for the fixed error bodies.

    Handler map:
        InvalidPayloadError     → 400 {"error": "Invalid request payload"}
        NotFoundError           → 404 {"error": "Product not found"}
        RequestValidationError  → 404 for a bad path id, 400 otherwise
        DatabaseError           → 500 {"error": "Internal server error"}
        Exception (fallback)    → 500 {"error": "Internal server error"}

    Route misses and wrong methods keep FastAPI's default responses.
    """

    @app.exception_handler(InvalidPayloadError)
    async def handle_invalid_payload(request: Request, exc: InvalidPayloadError):
        rid = request_id_var.get("")
        logger.debug("[%s] Invalid payload: %s", rid, exc.context)
        return JSONResponse(status_code=400, content=INVALID_PAYLOAD)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=PRODUCT_NOT_FOUND)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """A non-integer or out-of-range id cannot name a stored product."""
        locations = [err.get("loc") or ("",) for err in exc.errors()]
        if any(loc[0] == "path" for loc in locations):
            return JSONResponse(status_code=404, content=PRODUCT_NOT_FOUND)
        return JSONResponse(status_code=400, content=INVALID_PAYLOAD)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=INTERNAL_ERROR)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs in ServerErrorMiddleware, outside RequestIDMiddleware, so no
        # request id is available here
        logger.error(
            "Unexpected error on %s %s: %s",
            request.method,
            request.url.path,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(status_code=500, content=INTERNAL_ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: FastAPI instance with middleware, exception handlers and routes.
    """
    app = FastAPI(
        title="Product API",
        description="CRUD HTTP API for products backed by a relational table.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(products.router)
    app.include_router(health.router)

    return app


# uvicorn expects `product_api.main:app` to be importable
app = create_app()
