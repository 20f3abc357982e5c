"""FastAPI application entry point.

Creates the FastAPI application instance with exception handlers,
logging and middleware configuration.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.v1.router import api_router
from storefront.core.config import get_settings
from storefront.core.exceptions import AppException

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Game Storefront",
        description="Balance ledger, purchases and cart checkout for a game catalog",
        version="1.0.0",
        debug=settings.DEBUG,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    register_exception_handlers(app)

    # Register API routers
    app.include_router(api_router, prefix="/api/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers for the application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        """Handle all custom application exceptions.

        Returns a consistent JSON error response format.
        """
        logger.info(
            "%s %s failed with %s: %s",
            request.method, request.url.path, exc.__class__.__name__, exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "type": exc.__class__.__name__,
                    "message": exc.message,
                    "status_code": exc.status_code,
                }
            },
        )


# Create the application instance
app = create_app()
