"""
Outbound Shipments Service
Stores and serves outbound shipment records
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import os
from alembic.util import CommandError
from sqlalchemy.exc import SQLAlchemyError

from shared.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from outbound_shipments.core_settings import get_settings
from outbound_shipments.api.routes import router as shipments_router
from outbound_shipments.api.exceptions import register_exception_handlers
from outbound_shipments.infrastructure.db import engine, init_models
from outbound_shipments.infrastructure.migrations import upgrade_database

settings = get_settings()

SERVICE_NAME = "outbound-shipments-service"
SERVICE_VERSION = settings.SERVICE_VERSION
SERVICE_DESCRIPTION = "Outbound shipment records"

setup_logging(service_name=SERVICE_NAME, level=settings.LOG_LEVEL)

logger = get_logger(__name__)

def run_migrations() -> bool:
    """Bring the schema to head; a failure is logged and startup continues."""
    logger.info("Running database migrations")
    try:
        upgrade_database(engine)
    except (CommandError, SQLAlchemyError) as e:
        logger.warning(f"Migration error: {e}")
        return False
    logger.info("Database migrations completed")
    return True

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {SERVICE_NAME} version {SERVICE_VERSION}")

    run_migrations()

    try:
        init_models()
        logger.info("Database models initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database models: {e}")
        raise

    logger.info(f"{SERVICE_NAME} started successfully")

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")

app = FastAPI(
    title=SERVICE_NAME,
    description=SERVICE_DESCRIPTION,
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

health_service = ServiceHealth(SERVICE_NAME, engine, SERVICE_VERSION)
app.include_router(health_service.create_health_router())

app.include_router(shipments_router)

@app.get("/")
async def root():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": "/api/docs"
    }

@app.get("/info")
async def info():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": {
            "shipments": "/outbound-shipments/",
            "health": "/health",
            "ready": "/health/ready",
            "live": "/health/live",
            "metrics": "/metrics",
            "docs": "/api/docs"
        }
    }
