from fastapi import APIRouter, Depends
from typing import Optional
import logging

from ecoscore.core.dependencies import get_current_user_optional, get_product_source
from ecoscore.models.user import User
from ecoscore.schemas.contribution import (
    ContributionRequest,
    ContributionResponse,
    ContributionUrlResponse,
)
from ecoscore.services.contribution_service import ContributionService, contribution_url
from ecoscore.services.open_food_facts import OpenFoodFactsClient
from ecoscore.utils.validators import clean_barcode

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contributions", tags=["Contributions"])


@router.post("", response_model=ContributionResponse)
async def submit_contribution(
    request: ContributionRequest,
    current_user: Optional[User] = Depends(get_current_user_optional),
    source: OpenFoodFactsClient = Depends(get_product_source),
):
    """Propose un produit inconnu à Open Food Facts (connexion facultative)"""
    contributor = current_user.open_id if current_user else "anonymous"
    logger.info(f"Contribution for {request.barcode} from {contributor}")
    return await ContributionService(source).submit(request)


@router.get("/url/{barcode}", response_model=ContributionUrlResponse)
def get_contribution_url(barcode: str):
    return {"barcode": clean_barcode(barcode), "url": contribution_url(barcode)}
