from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging

from ecoscore.core.database import get_db
from ecoscore.core.dependencies import get_current_user
from ecoscore.models.user import User
from ecoscore.schemas.recommendation import (
    AnalysisResponse,
    ComparisonTextResponse,
    RecommendationsResponse,
    TipsResponse,
)
from ecoscore.services.favorite_service import FavoriteService
from ecoscore.services.notification_service import NotificationService
from ecoscore.services.product_service import ProductService
from ecoscore.services.recommendation_service import (
    ANALYSIS_UNAVAILABLE,
    COMPARISON_UNAVAILABLE,
    NO_FAVORITES_MESSAGE,
    RECOMMENDATIONS_UNAVAILABLE,
    TIPS_UNAVAILABLE,
    RecommendationService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


@router.get("/personalized", response_model=RecommendationsResponse)
async def personalized_recommendations(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Conseils à partir des favoris ; enregistre une notification en cas de succès"""
    favorites = FavoriteService(db).list_products(current_user.id)
    if not favorites:
        return {"success": True, "recommendations": NO_FAVORITES_MESSAGE}

    text = await RecommendationService(db).personalized(favorites)
    if text is None:
        return {"success": False, "recommendations": RECOMMENDATIONS_UNAVAILABLE}

    NotificationService(db).create(current_user.id, "recommendation", text)
    return {"success": True, "recommendations": text}


@router.get("/tips", response_model=TipsResponse)
async def shopping_tips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    text = await RecommendationService(db).shopping_tips()
    if text is None:
        return {"success": False, "tips": TIPS_UNAVAILABLE}
    return {"success": True, "tips": text}


@router.get("/products/{product_id}/analysis", response_model=AnalysisResponse)
async def analyze_product(
    product_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    product = ProductService(db).get_by_id(product_id)
    if not product:
        return {"success": False, "analysis": "Product not found."}

    text = await RecommendationService(db).analyze_product(product)
    if text is None:
        return {"success": False, "analysis": ANALYSIS_UNAVAILABLE}
    return {"success": True, "analysis": text}


@router.get("/compare", response_model=ComparisonTextResponse)
async def compare_products(
    product_id_1: int = Query(..., gt=0),
    product_id_2: int = Query(..., gt=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    products = ProductService(db).get_by_ids([product_id_1, product_id_2])
    if len(products) != 2:
        return {"success": False, "comparison": "One or both products not found."}

    text = await RecommendationService(db).compare_products(products[0], products[1])
    if text is None:
        return {"success": False, "comparison": COMPARISON_UNAVAILABLE}
    return {"success": True, "comparison": text}
