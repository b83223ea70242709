import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from centscape.core.config import Settings, settings as default_settings
from centscape.exceptions.handlers import register_exception_handlers
from centscape.routers.router import router

logger = logging.getLogger(__name__)


def create_app(settings: Settings = default_settings) -> FastAPI:
    """Build the FastAPI application"""
    app = FastAPI(
        title="Centscape Server",
        description="Product link metadata extraction and URL normalization API",
        version=settings.api_version
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def log_and_tag_requests(request: Request, call_next):
        start = time.perf_counter()
        logger.info(f"{request.method} {request.url.path} - {request.client.host if request.client else '-'}")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-API-Version"] = settings.api_version
        response.headers["X-Environment"] = settings.environment
        logger.info(f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.0f}ms)")
        return response

    register_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()
