"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from jewelrydam.api.deps import get_db, get_storage
from jewelrydam.api.v1 import api_router
from jewelrydam.config import settings
from jewelrydam.database import create_db_engine, create_session_factory, wait_for_database
from jewelrydam.storage.base import BaseStorageDriver
from jewelrydam.storage.factory import get_storage_driver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database and object storage clients, close them at shutdown.

    The database is probed with retries and migrated before the app
    accepts traffic. If the probe gives up, startup fails and the server
    process exits non-zero.
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    engine = create_db_engine(settings.database_url)
    wait_for_database(
        engine,
        retries=settings.db_connect_retries,
        delay=settings.db_connect_retry_delay,
    )

    if settings.run_migrations_on_startup:
        from jewelrydam.db.migrate import run_migrations

        run_migrations(settings.database_url)

    storage = get_storage_driver(settings)
    try:
        await storage.ensure_bucket()
    except Exception as e:
        logger.error(f"Object storage not ready at startup: {e}")

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.storage = storage
    logger.info(f"Jewelry DAM API started ({settings.environment}, storage={storage.provider})")

    try:
        yield
    finally:
        engine.dispose()
        logger.info("Jewelry DAM API stopped")


app = FastAPI(
    title="Jewelry DAM API",
    description="Digital asset management for jewelry photography",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"error": ..., "details": ...}."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed fields are client errors (400)."""
    errors = exc.errors()
    messages = []
    for err in errors:
        field = ".".join(str(part) for part in err.get("loc", ())[1:])
        message = err.get("msg", "Invalid value").removeprefix("Value error, ")
        messages.append(f"{field}: {message}" if field else message)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "; ".join(messages) or "Invalid request", "details": jsonable_encoder(errors)},
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Database failures not handled by an endpoint are server errors (500)."""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Database operation failed", "details": str(exc)},
    )


# Include API router
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check(
    db: Session = Depends(get_db),
    storage: BaseStorageDriver = Depends(get_storage),
):
    """Health check endpoint."""
    import redis

    # Check database
    db_status = "disconnected"
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {str(e)}"

    # Check object storage
    storage_status = "disconnected"
    try:
        if await storage.test_connection():
            storage_status = "connected"
    except Exception as e:
        storage_status = f"error: {str(e)}"

    # Check Redis (reconciliation task broker)
    redis_status = "disconnected"
    try:
        r = redis.from_url(settings.redis_url, socket_connect_timeout=1, socket_timeout=1)
        r.ping()
        redis_status = "connected"
    except Exception as e:
        redis_status = f"error: {str(e)}"

    overall_status = (
        "ok"
        if db_status == "connected" and storage_status == "connected"
        else "degraded"
    )

    return {
        "status": overall_status,
        "db": db_status,
        "storage": storage_status,
        "redis": redis_status,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "jewelrydam.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
