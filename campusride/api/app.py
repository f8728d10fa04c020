"""
FastAPI application factory.

* Registers routes for auth, rides, join requests, ratings and admin.
* Maps domain errors to HTTP status codes.
* Applies rate-limiting.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from campusride.api.errors import register_exception_handlers
from campusride.api.middleware import limiter
from campusride.api.routes import admin, auth, ratings, requests, rides
from campusride.config import settings
from campusride.infrastructure.database import dispose_engine
from campusride.infrastructure.redis_client import close_redis

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled DB / Redis connections on shutdown."""
    logger.info(
        "Campus ride API starting (initial ride status=%s)",
        settings.initial_ride_status.value,
    )
    yield
    await close_redis()
    await dispose_engine()
    logger.info("Campus ride API stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Campus Ride Sharing API",
        description=(
            "Students offer rides, others ask to join, creators accept or "
            "reject, rides move pending -> active -> completed and "
            "passengers rate completed rides."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Routers
    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(rides.router, prefix="/api/v1")
    app.include_router(requests.router, prefix="/api/v1")
    app.include_router(ratings.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
