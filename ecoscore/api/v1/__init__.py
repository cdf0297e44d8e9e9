"""
API v1 routes
"""

from fastapi import APIRouter
from ecoscore.api.v1 import (
    products,
    favorites,
    comparisons,
    batch_shares,
    preferences,
    notifications,
    recommendations,
    contributions,
)

api_router = APIRouter()

api_router.include_router(products.router)
api_router.include_router(favorites.router)
api_router.include_router(comparisons.router)
api_router.include_router(batch_shares.router)
api_router.include_router(preferences.router)
api_router.include_router(notifications.router)
api_router.include_router(recommendations.router)
api_router.include_router(contributions.router)

__all__ = ["api_router"]
