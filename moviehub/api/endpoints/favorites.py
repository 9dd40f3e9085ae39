# moviehub/api/endpoints/favorites.py

import logging
from typing import Any, Dict, List

from bson import ObjectId
from fastapi import APIRouter, Body, Depends, HTTPException, status

from moviehub.api.deps import get_favorite_service, required_email, valid_favorite_id
from moviehub.core.errors import INTERNAL_ERROR_MESSAGE
from moviehub.models.common import ID_ROUTE_RESPONSES, Document, ErrorResponse, MessageResponse
from moviehub.models.favorite import FAVORITE_REMOVED, FavoriteInsertResult
from moviehub.services.favorite_service import FavoriteNotFoundError, FavoriteService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "", # POST /favorites
    response_model=FavoriteInsertResult,
    status_code=status.HTTP_201_CREATED,
    summary="Add Favorite",
    description="Stores the request body (owner email plus movie data) as a favorite. Duplicates are allowed.",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def add_favorite(
    payload: Dict[str, Any] = Body(...),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    try:
        return await favorite_service.add_favorite(payload)
    except Exception as e:
        logger.error(f"Error adding favorite: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )


@router.get(
    "", # GET /favorites?email=...
    response_model=List[Document],
    summary="List Favorites For User",
    description="Returns the favorites whose email field equals the query value exactly.",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def list_favorites(
    email: str = Depends(required_email),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    try:
        return await favorite_service.get_favorites_by_email(email)
    except Exception as e:
        logger.error(f"Error retrieving favorites for {email}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )


@router.delete(
    "/{favorite_id}", # DELETE /favorites/{favorite_id}
    response_model=MessageResponse,
    summary="Remove Favorite",
    responses=ID_ROUTE_RESPONSES,
)
async def delete_favorite(
    oid: ObjectId = Depends(valid_favorite_id),
    favorite_service: FavoriteService = Depends(get_favorite_service),
):
    try:
        await favorite_service.delete_favorite(oid)
        return FAVORITE_REMOVED
    except FavoriteNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorite not found")
    except Exception as e:
        logger.error(f"Error deleting favorite {oid}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        )
