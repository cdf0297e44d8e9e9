from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from ecoscore.core.config import settings
from ecoscore.core.database import get_db
from ecoscore.core.dependencies import get_product_source
from ecoscore.schemas.product import ProductRecord, ProductResponse
from ecoscore.services.alternative_service import AlternativeService
from ecoscore.services.open_food_facts import OpenFoodFactsClient
from ecoscore.services.product_service import ProductService
from ecoscore.utils.exceptions import ProductNotFoundException

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("/search", response_model=List[ProductResponse])
async def search_products(
    query: str = Query(..., min_length=1, max_length=200),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    source: OpenFoodFactsClient = Depends(get_product_source),
):
    """Recherche locale par nom, puis Open Food Facts si rien en cache"""
    service = ProductService(db, source)
    return await service.search_products(query, limit)


@router.get("/barcode/{barcode}", response_model=ProductResponse)
async def get_product_by_barcode(
    barcode: str,
    db: Session = Depends(get_db),
    source: OpenFoodFactsClient = Depends(get_product_source),
):
    service = ProductService(db, source)
    return await service.get_product(barcode)


@router.get("/barcode/{barcode}/alternatives", response_model=List[ProductRecord])
async def get_alternatives(
    barcode: str,
    min_similarity: float = Query(settings.DEFAULT_MIN_SIMILARITY),
    db: Session = Depends(get_db),
    source: OpenFoodFactsClient = Depends(get_product_source),
):
    """Substituts classés ; chaque résultat est mis en cache localement"""
    service = AlternativeService(db, source)
    return await service.get_alternatives(barcode, min_similarity)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = ProductService(db).get_by_id(product_id)
    if not product:
        raise ProductNotFoundException()
    return product
