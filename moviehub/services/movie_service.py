# moviehub/services/movie_service.py

import logging
from typing import Any, Dict, List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from moviehub.models.common import Document
from moviehub.models.movie import MovieInsertResult
from moviehub.utils.helpers import serialize_document

logger = logging.getLogger(__name__)


class MovieNotFoundError(Exception):
    """Custom exception when a movie is not found."""
    pass


class MovieService:
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "movie"):
        """
        Initializes the Movie Service.

        Args:
            db: An instance of AsyncIOMotorDatabase (Motor client).
            collection_name: Name of the movie collection.
        """
        self.db = db
        self.collection = db[collection_name]

    async def list_movies(self) -> List[Document]:
        """
        Retrieves every movie document. No filter, no limit.

        Raises:
            PyMongoError: If a database error occurs.
        """
        try:
            cursor = self.collection.find()
            docs = await cursor.to_list(length=None)
            logger.info(f"Fetched {len(docs)} movies")
            return [serialize_document(doc) for doc in docs]
        except PyMongoError as e:
            logger.error(f"Database error while fetching movies: {e}", exc_info=True)
            raise

    async def get_movie(self, movie_id: ObjectId) -> Document:
        """
        Retrieves a single movie by its ObjectId.

        Raises:
            MovieNotFoundError: If no movie has this id.
            PyMongoError: If a database error occurs.
        """
        try:
            movie_doc = await self.collection.find_one({"_id": movie_id})
        except PyMongoError as e:
            logger.error(f"Database error while fetching movie {movie_id}: {e}", exc_info=True)
            raise

        if movie_doc is None:
            logger.warning(f"Movie with ID {movie_id} not found in database.")
            raise MovieNotFoundError(f"Movie with ID '{movie_id}' not found.")
        return serialize_document(movie_doc)

    async def create_movie(self, payload: Dict[str, Any]) -> MovieInsertResult:
        """
        Inserts a new movie document. The database assigns the id.

        Raises:
            PyMongoError: If a database error occurs during insertion.
        """
        logger.info(f"Creating movie: {payload}")
        try:
            # insert_one sets _id on the dict it is given; keep the caller's copy clean
            result = await self.collection.insert_one(dict(payload))
        except PyMongoError as e:
            logger.error(f"Database error creating movie: {e}", exc_info=True)
            raise

        logger.info(f"Movie created with ID {result.inserted_id}")
        return MovieInsertResult(acknowledged=result.acknowledged, insertedId=str(result.inserted_id))

    async def update_movie(self, movie_id: ObjectId, payload: Dict[str, Any]) -> None:
        """
        Partially updates a movie: fields in the payload are set, others untouched.

        The identifier is immutable, so any "_id" in the payload is dropped.
        An empty payload performs no write but still reports a missing movie.

        Raises:
            MovieNotFoundError: If no movie has this id.
            PyMongoError: If a database error occurs.
        """
        fields = {key: value for key, value in payload.items() if key != "_id"}
        try:
            if fields:
                result = await self.collection.update_one({"_id": movie_id}, {"$set": fields})
                matched = result.matched_count
            else:
                matched = await self.collection.count_documents({"_id": movie_id}, limit=1)
        except PyMongoError as e:
            logger.error(f"Database error updating movie {movie_id}: {e}", exc_info=True)
            raise

        if not matched:
            logger.warning(f"Update failed: movie with ID {movie_id} not found.")
            raise MovieNotFoundError(f"Movie with ID '{movie_id}' not found.")
        logger.info(f"Movie {movie_id} updated (fields: {sorted(fields)})")

    async def delete_movie(self, movie_id: ObjectId) -> None:
        """
        Deletes a movie by id.

        Raises:
            MovieNotFoundError: If nothing was deleted.
            PyMongoError: If a database error occurs.
        """
        try:
            result = await self.collection.delete_one({"_id": movie_id})
        except PyMongoError as e:
            logger.error(f"Database error deleting movie {movie_id}: {e}", exc_info=True)
            raise

        if result.deleted_count == 0:
            logger.warning(f"Delete failed: movie with ID {movie_id} not found.")
            raise MovieNotFoundError(f"Movie with ID '{movie_id}' not found.")
        logger.info(f"Movie {movie_id} deleted")
