"""
API Router Module - Aggregates all endpoint routers
"""
from fastapi import APIRouter

from moviehub.api.endpoints import favorites, health, movies

# Create the main API router
api_router = APIRouter()

# Paths are unversioned to stay compatible with existing clients
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(movies.router, prefix="/movie", tags=["Movies"])
api_router.include_router(favorites.router, prefix="/favorites", tags=["Favorites"])
