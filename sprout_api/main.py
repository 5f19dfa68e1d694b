"""Sprout Track FastAPI application."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from sprout_api import __version__
from sprout_api.config import settings, validate_secret_key
from sprout_api.database import close_database
from sprout_api.logging_config import get_logger, setup_logging
from sprout_api.middleware import CorrelationIdMiddleware
from sprout_api.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from sprout_api.routers import (
    babies,
    contacts,
    diaper_logs,
    feed_logs,
    health,
    medicine_logs,
    medicines,
    monitor,
    notify,
)
from sprout_api.routers import settings as settings_router
from sprout_api.services.scheduler import start_scheduler, stop_scheduler

setup_logging(
    log_format=settings.log_format,
    log_level=settings.log_level,
    service_name=settings.service_name,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Migrations run via `alembic upgrade head` before uvicorn starts
    validate_secret_key()
    logger.info("Sprout Track API started")

    start_scheduler()

    yield

    logger.info("Shutting down Sprout Track API...")
    stop_scheduler()
    await close_database()
    logger.info("Sprout Track API shutdown complete")


app = FastAPI(
    title="Sprout Track API",
    description="Baby activity tracking: dose safety and feed/diaper warnings",
    version=__version__,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Middleware (first added = last executed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(health.router)
app.include_router(babies.router)
app.include_router(contacts.router)
app.include_router(medicines.router)
app.include_router(medicine_logs.router)
app.include_router(feed_logs.router)
app.include_router(diaper_logs.router)
app.include_router(settings_router.router)
app.include_router(monitor.router)
app.include_router(notify.router)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "name": "Sprout Track API",
        "version": __version__,
        "docs": "/docs",
    }
