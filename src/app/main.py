# src/app/main.py
"""
FastAPI Main Application
RumPlay Engagement API
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.app.config import get_config, validate_config, setup_logging
from src.app.database import db_manager
from src.api.routers import video_router, channel_router
from src.services import ServiceError, error_to_http_status

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


# ============================================================================
# Application Lifecycle Management
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown events
    """
    # ========== STARTUP ==========
    config = get_config()
    setup_logging(config)
    logger.info("🚀 Starting RumPlay Engagement API...")

    validation_result = validate_config(config)
    if not validation_result["valid"]:
        logger.error("❌ Configuration validation failed!")
        for error in validation_result["errors"]:
            logger.error(f"  - {error}")
        raise RuntimeError("Invalid configuration")

    for warning in validation_result["warnings"]:
        logger.warning(f"  ⚠️  {warning}")

    logger.info("🗄️  Initializing database...")
    try:
        await db_manager.create_tables()
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise

    logger.info(
        f"✅ Application startup complete (api={config.api.host}:{config.api.port}, "
        f"database={config.database.url.split('/')[-1]})"
    )

    yield

    # ========== SHUTDOWN ==========
    logger.info("🛑 Shutting down application...")
    await db_manager.close()
    logger.info("✅ Application shutdown complete")


# ============================================================================
# FastAPI Application Instance
# ============================================================================


def create_app() -> FastAPI:
    """
    FastAPI application factory
    Creates and configures the FastAPI application
    """
    config = get_config()

    app = FastAPI(
        title="RumPlay Engagement API",
        description="Likes, dislikes, subscriptions, views and comments for the RumPlay video platform",
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=config.api.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _register_exception_handlers(app)
    _register_routers(app, config)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Every failure leaves as {"success": false, "error": ...}"""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        status_code = error_to_http_status(exc)
        if status_code >= 500:
            logger.error(f"Service error: {exc.code} - {exc.message} ({exc.details})")
        else:
            logger.info(f"Request rejected: {status_code} {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={"success": False, "error": exc.message},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.error(f"HTTP error: {exc.status_code} - {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        logger.error(f"Validation error: {exc.errors()}")
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": f"{location}: {message}" if location else message,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal Server Error"},
        )


def _register_routers(app: FastAPI, config) -> None:
    """Register API routers"""

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint"""
        try:
            database_ok = await db_manager.ping()
        except Exception as e:
            logger.error(f"Health check database ping failed: {e}")
            database_ok = False
        return {
            "status": "healthy" if database_ok else "degraded",
            "version": APP_VERSION,
            "database": "connected" if database_ok else "unavailable",
        }

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API information"""
        return {
            "message": "RumPlay Engagement API",
            "version": APP_VERSION,
            "docs": "/docs",
            "health": "/health",
        }

    app.include_router(video_router, prefix=config.api.prefix)
    app.include_router(channel_router, prefix=config.api.prefix)

    logger.info("✅ API routers registered")


# ============================================================================
# Application Instance
# ============================================================================

app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_config()

    uvicorn.run(
        "src.app.main:app",
        host=config.api.host,
        port=config.api.port,
        reload=config.api.debug,
        log_level=config.logging.level.lower(),
    )
