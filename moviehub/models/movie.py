# moviehub/models/movie.py

from moviehub.models.common import InsertResult, MessageResponse


class MovieInsertResult(InsertResult):
    """Response for POST /movie."""


MOVIE_UPDATED = MessageResponse(message="Movie updated successfully!")
MOVIE_DELETED = MessageResponse(message="Movie deleted successfully!")
