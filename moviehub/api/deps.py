# FastAPI dependencies (database handle, services, validated identifiers)
# moviehub/api/deps.py

import logging
from typing import AsyncGenerator, Optional

from bson import ObjectId
from fastapi import Depends, FastAPI, HTTPException, Path, Query, Request, status
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError
from pymongo.server_api import ServerApi

from moviehub.core.config import Settings
from moviehub.core.errors import DB_UNAVAILABLE_MESSAGE, EMAIL_REQUIRED_MESSAGE, INVALID_ID_MESSAGE
from moviehub.services.favorite_service import FavoriteService
from moviehub.services.movie_service import MovieService
from moviehub.utils.helpers import parse_object_id

logger = logging.getLogger(__name__)

# --- Connection lifecycle ---
# The client lives on app.state, never in a module global, so each app
# instance (and each test) owns its handle.

async def initialize_connections(app: FastAPI, settings: Settings) -> None:
    """
    Connects to MongoDB and pings it once.

    Call this during FastAPI startup using lifespan events. A failure is
    logged and leaves app.state.db unset: the server keeps running and the
    database-backed routes answer 503 until the process is restarted.
    """
    app.state.mongo_client = None
    app.state.db = None
    logger.info("Initializing MongoDB connection...")

    try:
        mongo_client = AsyncIOMotorClient(
            settings.mongodb_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
        )
    except (ValueError, PyMongoError) as e:
        logger.error(f"Invalid MongoDB configuration: {e}")
        return

    try:
        # Ping the server to verify connection early
        await mongo_client.admin.command("ping")
    except ConnectionFailure as e:
        logger.error(f"MongoDB connection failed during initialization: {e}", exc_info=True)
        mongo_client.close()
        return
    except Exception as e:
        logger.error(f"Unexpected error initializing MongoDB client: {e}", exc_info=True)
        mongo_client.close()
        return

    app.state.mongo_client = mongo_client
    app.state.db = mongo_client[settings.MONGODB_DB_NAME]
    logger.info(f"Pinged your deployment. Connected to MongoDB, using database '{settings.MONGODB_DB_NAME}'")


async def close_connections(app: FastAPI) -> None:
    """Closes the MongoDB client. Call this during FastAPI shutdown."""
    mongo_client = getattr(app.state, "mongo_client", None)
    if mongo_client is not None:
        mongo_client.close()
        logger.info("MongoDB client closed.")
    app.state.mongo_client = None
    app.state.db = None


# --- Request dependencies ---

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(request: Request) -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    FastAPI dependency that yields the application's MongoDB database instance.

    Raises:
        HTTPException 503: If the database was never connected.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        logger.critical("MongoDB database instance is not available. Check initialization.")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=DB_UNAVAILABLE_MESSAGE,
        )
    # Motor manages connection pooling internally. Yielding the db instance is sufficient.
    yield db


def get_movie_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> MovieService:
    return MovieService(db=db, collection_name=settings.MOVIE_COLLECTION)


def get_favorite_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> FavoriteService:
    return FavoriteService(db=db, collection_name=settings.FAVORITES_COLLECTION)


# --- Input validation ---
# Declared before the service dependencies on each route, so bad input
# is rejected with 400 before any database handle is requested.

def require_object_id(raw_id: str) -> ObjectId:
    """
    Parses a path identifier or fails the request.

    Raises:
        HTTPException 400: If the identifier is not 24 hex characters.
    """
    object_id = parse_object_id(raw_id)
    if object_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ID_MESSAGE)
    return object_id


async def valid_movie_id(
    movie_id: str = Path(..., description="24 hex character ObjectId of the movie."),
) -> ObjectId:
    return require_object_id(movie_id)


async def valid_favorite_id(
    favorite_id: str = Path(..., description="24 hex character ObjectId of the favorite."),
) -> ObjectId:
    return require_object_id(favorite_id)


async def required_email(
    email: Optional[str] = Query(None, description="Owner email, matched exactly."),
) -> str:
    """
    Raises:
        HTTPException 400: If the email query parameter is missing or empty.
    """
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_REQUIRED_MESSAGE)
    return email
