"""FastAPI application entrypoint and configuration.

This module provides the main FastAPI application factory that sets up
logging, CORS middleware, includes the map and page API routers, and
exposes a health check endpoint for monitoring.

Example:
    The application can be run with uvicorn:
        $ uvicorn mapblock.main:app --reload

    Or imported and used programmatically:
        >>> from mapblock.main import app
        >>> # Use app in ASGI server
"""

import fastapi
from fastapi.middleware import cors

from mapblock.api import maps, pages
from mapblock.core import config
from mapblock.core import logging as core_logging


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application.

    Configures the package logger from settings, sets up CORS middleware,
    includes the map and page routers, and adds a health check endpoint.

    Returns:
        Configured FastAPI application instance ready for ASGI server.
    """
    settings = config.get_settings()
    core_logging.setup_logging(settings.log_level)

    app = fastapi.FastAPI(title="Map Block", version="0.1.0")

    app.include_router(maps.router)
    app.include_router(pages.router)

    app.add_middleware(
        cors.CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:  # type: ignore[misc]
        """Health check endpoint for monitoring and load balancers.

        Returns:
            Dictionary with status "ok" if the service is running.
        """
        return {"status": "ok"}

    return app


app = create_app()
