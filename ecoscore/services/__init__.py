"""
Business logic services
"""

from ecoscore.services.open_food_facts import OpenFoodFactsClient
from ecoscore.services.product_service import ProductService
from ecoscore.services.alternative_service import AlternativeService
from ecoscore.services.favorite_service import FavoriteService
from ecoscore.services.comparison_service import ComparisonService
from ecoscore.services.batch_share_service import BatchShareService
from ecoscore.services.preference_service import PreferenceService
from ecoscore.services.notification_service import NotificationService
from ecoscore.services.recommendation_service import RecommendationService
from ecoscore.services.contribution_service import ContributionService

__all__ = [
    "OpenFoodFactsClient",
    "ProductService",
    "AlternativeService",
    "FavoriteService",
    "ComparisonService",
    "BatchShareService",
    "PreferenceService",
    "NotificationService",
    "RecommendationService",
    "ContributionService",
]
