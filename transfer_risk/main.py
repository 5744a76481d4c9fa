"""FastAPI application entry point for the transfer risk service."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from transfer_risk.api.middleware.error_handler import register_exception_handlers
from transfer_risk.api.middleware.logging import StructuredLoggingMiddleware
from transfer_risk.api.routes.accounts import router as accounts_router
from transfer_risk.api.routes.compliance import router as compliance_router
from transfer_risk.api.routes.fraud import router as fraud_router
from transfer_risk.api.routes.health import router as health_router
from transfer_risk.api.routes.transfers import router as transfers_router
from transfer_risk.config import settings
from transfer_risk.shared.logging import setup_logging

logger = structlog.get_logger()

# Track app start time for uptime calculation
APP_START_TIME: float = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown logic."""
    global APP_START_TIME
    APP_START_TIME = time.time()
    setup_logging(settings.log_level, json_logs=not settings.debug)

    logger.info(
        "transfer_risk_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
    )

    from transfer_risk.db.database import init_db

    await init_db()

    yield

    logger.info("transfer_risk_shutting_down")


app = FastAPI(
    title="Transfer Risk",
    description="Compliance, fraud and account-risk evaluation for outbound transfers",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(StructuredLoggingMiddleware)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(compliance_router)
app.include_router(fraud_router)
app.include_router(accounts_router)
app.include_router(transfers_router)


def get_uptime() -> int:
    """Get application uptime in seconds."""
    if APP_START_TIME == 0.0:
        return 0
    return int(time.time() - APP_START_TIME)
