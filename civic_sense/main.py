import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from civic_sense.api import comment, like, news, post, reel, report, share, user
from civic_sense.config import Settings, get_settings
from civic_sense.schemas.responses import HealthCheckResponseSchema
from civic_sense.store import StoreError
from civic_sense.utils.lock import LockTimeoutError

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings)
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Serving data from %s", settings.data_dir.resolve())
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use; read from the environment when omitted

    Returns:
        The configured FastAPI application
    """
    settings = settings or get_settings()
    app = FastAPI(title="Civic Sense API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        enabled=settings.rate_limit_enabled,
    )
    app.add_middleware(SlowAPIMiddleware)

    @app.exception_handler(RateLimitExceeded)
    def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            {"detail": "Too Many Requests"},
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Storage failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            {"detail": "Could not access stored data. Try again."},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(LockTimeoutError)
    async def lock_timeout_handler(request: Request, exc: LockTimeoutError):
        logger.error("Lock timeout on %s: %s", request.url.path, exc)
        return JSONResponse(
            {"detail": "The server is busy. Try again."},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.get("/api/health", response_model=HealthCheckResponseSchema)
    async def health_check() -> HealthCheckResponseSchema:
        return HealthCheckResponseSchema(success=True)

    app.include_router(user.router)
    app.include_router(post.router)
    app.include_router(reel.router)
    app.include_router(report.router)
    # /comments/{comment_id}/like-status has the same shape as
    # /comments/{content_type}/{content_id} and must be matched first.
    app.include_router(like.router)
    app.include_router(comment.router)
    app.include_router(share.router)
    app.include_router(news.router)
    return app


app = create_app()
