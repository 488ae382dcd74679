# backend/app/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.routing import APIRoute

from . import models  # noqa: F401
from .core.config import settings
from .core.constants import API_DESCRIPTION
from .database import Base, dispose_engine, init_engine
from .errors import register_error_handlers
from .routes import health, prometheus
from .routes.v1 import (
    analytics as analytics_v1,
    availability as availability_v1,
    bookings as bookings_v1,
    time_slots as time_slots_v1,
)

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the database engine on startup and dispose it on shutdown."""
    logger.info(f"{settings.api_title} starting up...")
    logger.info(f"Environment: {settings.environment}")

    engine = init_engine()
    if settings.is_sqlite:
        Base.metadata.create_all(bind=engine)

    yield

    logger.info(f"{settings.api_title} shutting down...")
    dispose_engine()


def _unique_operation_id(route: APIRoute) -> str:
    methods = "_".join(sorted(m.lower() for m in route.methods or []))
    path = route.path_format.replace("/", "_").replace("{", "").replace("}", "").strip("_")
    name = (route.name or "operation").lower().replace(" ", "_")
    return f"{methods}__{path}__{name}".strip("_")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.api_title,
        description=API_DESCRIPTION,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
        generate_unique_id_function=_unique_operation_id,
    )
    # Register unified error envelope handlers
    register_error_handlers(app)

    api_v1 = APIRouter(prefix="/api/v1")
    # /availability/leave/eligibility must be matched before the bare /availability
    api_v1.include_router(availability_v1.router, prefix="/availability")
    api_v1.include_router(time_slots_v1.router)
    api_v1.include_router(bookings_v1.router)
    api_v1.include_router(analytics_v1.router)

    app.include_router(api_v1)
    app.include_router(health.router)
    app.include_router(prometheus.router)
    return app


app = create_app()
