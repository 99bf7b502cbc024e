# shiftpay/main.py
"""
FastAPI application entry point.
"""

import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from shiftpay.core.config import IS_PRODUCTION
from shiftpay.core.logging_config import get_logger, setup_logging
from shiftpay.core.request_logging import RequestLoggingMiddleware
from shiftpay.core.sentry_config import init_sentry
from shiftpay.core.storage import clear_configuration_cache, get_wage_configuration, wage_config_path
from shiftpay.database.database import create_tables, get_db
from shiftpay.routes.salary import router as salary_router
from shiftpay.routes.shifts import router as shifts_router

VERSION = "0.1.0"

# Setup logging before anything else logs
setup_logging()
logger = get_logger(__name__)

sentry_enabled = init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Application starting up",
        extra={"extra_fields": {"production": IS_PRODUCTION, "python_version": sys.version}},
    )

    # Fail fast on a broken wage configuration
    clear_configuration_cache()
    try:
        config = get_wage_configuration()
        logger.info(f"Wage configuration validated: {wage_config_path()} (base rate {config.base_rate_per_hour})")
    except Exception as e:
        logger.error(f"Wage configuration validation failed: {e}", exc_info=True)
        raise

    try:
        create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}", exc_info=True)
        raise

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="shiftpay",
    description="Shift registration and salary calculation with time-of-day and weekday bonuses",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(shifts_router)
app.include_router(salary_router)


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns 200 OK when the database answers, 503 otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
        return JSONResponse(
            status_code=200,
            content={"status": "healthy", "service": "shiftpay", "version": VERSION, "database": "connected"},
        )
    except Exception as e:
        logger.error(f"Health check failed - database connection error: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail={"status": "unhealthy", "service": "shiftpay", "database": "disconnected"},
        ) from e
