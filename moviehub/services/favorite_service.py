# moviehub/services/favorite_service.py

import logging
from typing import Any, Dict, List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from moviehub.models.common import Document
from moviehub.models.favorite import FavoriteInsertResult
from moviehub.utils.helpers import serialize_document

logger = logging.getLogger(__name__)


class FavoriteNotFoundError(Exception):
    """Raised when a favorite document does not exist."""
    pass


class FavoriteService:
    """
    Per-user favorites, keyed by email.

    Favorites are independent of the movie collection: the movie data is
    whatever the client submits, and the same movie may be added twice.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "favorites"):
        self.db = db
        self.collection = db[collection_name]

    async def add_favorite(self, payload: Dict[str, Any]) -> FavoriteInsertResult:
        try:
            result = await self.collection.insert_one(dict(payload))
        except PyMongoError as e:
            logger.error(f"Database error adding favorite for {payload.get('email')}: {e}", exc_info=True)
            raise

        logger.info(f"Favorite {result.inserted_id} added for {payload.get('email')}")
        return FavoriteInsertResult(acknowledged=result.acknowledged, insertedId=str(result.inserted_id))

    async def get_favorites_by_email(self, email: str) -> List[Document]:
        """Returns every favorite whose email field equals `email` exactly."""
        try:
            cursor = self.collection.find({"email": email})
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Database error fetching favorites for {email}: {e}", exc_info=True)
            raise

        logger.info(f"Fetched {len(docs)} favorites for {email}")
        return [serialize_document(doc) for doc in docs]

    async def delete_favorite(self, favorite_id: ObjectId) -> None:
        try:
            result = await self.collection.delete_one({"_id": favorite_id})
        except PyMongoError as e:
            logger.error(f"Database error deleting favorite {favorite_id}: {e}", exc_info=True)
            raise

        if result.deleted_count == 0:
            logger.warning(f"Delete failed: favorite with ID {favorite_id} not found.")
            raise FavoriteNotFoundError(f"Favorite with ID '{favorite_id}' not found.")
        logger.info(f"Favorite {favorite_id} deleted")
