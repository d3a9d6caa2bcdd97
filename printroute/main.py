"""PrintRoute — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from printroute.adapters.persistence.database import engine
from printroute.config import settings
from printroute.infrastructure.api.routes_assignments import router as assignments_router
from printroute.infrastructure.api.routes_health import router as health_router
from printroute.infrastructure.api.routes_orders import router as orders_router
from printroute.infrastructure.api.routes_tracking import router as tracking_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="PrintRoute",
        description="Print order assignment, fulfillment lifecycle and public tracking",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(tracking_router, prefix="/api")
    app.include_router(assignments_router, prefix="/api")
    app.include_router(orders_router, prefix="/api")

    return app


app = create_app()
