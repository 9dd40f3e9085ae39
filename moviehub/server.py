"""
Primary FastAPI application entry point
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from moviehub.api.api import api_router
from moviehub.api.deps import close_connections, initialize_connections
from moviehub.core.config import Settings, get_settings
from moviehub.core.errors import register_exception_handlers

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout,
    )


# Define application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: a failed connection is logged and the listener starts anyway
    logger.info("Application startup: Initializing connections...")
    await initialize_connections(app, app.state.settings)
    yield
    # Shutdown
    logger.info("Application shutdown: Closing connections...")
    await close_connections(app)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the application around a settings object.

    The database handle is attached to app.state by the lifespan; until then
    (or if connecting fails) app.state.db is None and database-backed routes
    answer 503.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.mongo_client = None
    app.state.db = None

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    # Root endpoint
    @app.get("/", status_code=status.HTTP_200_OK, response_class=PlainTextResponse, tags=["Health"])
    async def root():
        """Liveness probe: answers whether or not the database is connected."""
        return "server is running"

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    import uvicorn

    settings = get_settings()
    app = create_app(settings)
    logger.info(f"MovieHub server is running on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


# For local development
if __name__ == "__main__":
    run()
