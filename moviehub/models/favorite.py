# moviehub/models/favorite.py

from pydantic import Field

from moviehub.models.common import InsertResult, MessageResponse

FAVORITE_ADDED_MESSAGE = "Added to favorites!"


class FavoriteInsertResult(InsertResult):
    """Response for POST /favorites: the insert result plus a confirmation."""
    message: str = Field(FAVORITE_ADDED_MESSAGE, description="Confirmation message.")


FAVORITE_REMOVED = MessageResponse(message="Favorite removed successfully!")
