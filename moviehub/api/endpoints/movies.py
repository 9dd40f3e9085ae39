# moviehub/api/endpoints/movies.py

import logging
from typing import Any, Dict, List

from bson import ObjectId
from fastapi import APIRouter, Body, Depends, HTTPException, status

from moviehub.api.deps import get_movie_service, valid_movie_id
from moviehub.core.errors import INTERNAL_ERROR_MESSAGE
from moviehub.models.common import ID_ROUTE_RESPONSES, Document, ErrorResponse, MessageResponse
from moviehub.models.movie import MOVIE_DELETED, MOVIE_UPDATED, MovieInsertResult
from moviehub.services.movie_service import MovieNotFoundError, MovieService

logger = logging.getLogger(__name__)
router = APIRouter()

MOVIE_NOT_FOUND = "Movie not found"


@router.get(
    "", # GET /movie
    response_model=List[Document],
    summary="List Movies",
    description="Retrieve every movie document. No filtering, no pagination.",
    responses={500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def list_movies(movie_service: MovieService = Depends(get_movie_service)):
    try:
        return await movie_service.list_movies()
    except Exception as e:
        logger.error(f"Error listing movies: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )


@router.get(
    "/{movie_id}", # GET /movie/{movie_id}
    response_model=Document,
    summary="Get Movie",
    responses=ID_ROUTE_RESPONSES,
)
async def get_movie(
    oid: ObjectId = Depends(valid_movie_id),
    movie_service: MovieService = Depends(get_movie_service),
):
    """
    Fetches a single movie document by its ObjectId.
    """
    try:
        return await movie_service.get_movie(oid)
    except MovieNotFoundError:
        logger.warning(f"Movie not found attempt: ID {oid}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND)
    except Exception as e:
        logger.error(f"Error getting movie {oid}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )


@router.post(
    "", # POST /movie
    response_model=MovieInsertResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Movie",
    description="Stores the request body as a new movie document. The database assigns the id.",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def create_movie(
    payload: Dict[str, Any] = Body(...),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.create_movie(payload)
    except Exception as e:
        logger.error(f"Error creating movie: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )


@router.put(
    "/{movie_id}", # PUT /movie/{movie_id}
    response_model=MessageResponse,
    summary="Update Movie",
    description="Sets the fields present in the body. Omitted fields are left untouched; _id is never changed.",
    responses=ID_ROUTE_RESPONSES,
)
async def update_movie(
    oid: ObjectId = Depends(valid_movie_id),
    payload: Dict[str, Any] = Body(...),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        await movie_service.update_movie(oid, payload)
        return MOVIE_UPDATED
    except MovieNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND)
    except Exception as e:
        logger.error(f"Error updating movie {oid}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )


@router.delete(
    "/{movie_id}", # DELETE /movie/{movie_id}
    response_model=MessageResponse,
    summary="Delete Movie",
    responses=ID_ROUTE_RESPONSES,
)
async def delete_movie(
    oid: ObjectId = Depends(valid_movie_id),
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        await movie_service.delete_movie(oid)
        return MOVIE_DELETED
    except MovieNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND)
    except Exception as e:
        logger.error(f"Error deleting movie {oid}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )
