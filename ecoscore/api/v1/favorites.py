from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ecoscore.core.database import get_db
from ecoscore.core.dependencies import get_current_user
from ecoscore.models.user import User
from ecoscore.schemas.favorite import FavoriteCreate, FavoriteResult, FavoriteStatus
from ecoscore.schemas.product import ProductResponse
from ecoscore.services.favorite_service import FavoriteService
from ecoscore.services.product_service import ProductService
from ecoscore.utils.exceptions import ProductNotFoundException

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get("", response_model=List[ProductResponse])
def list_favorites(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FavoriteService(db).list_products(current_user.id)


@router.post("", response_model=FavoriteResult, status_code=201)
def add_favorite(
    request: FavoriteCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not ProductService(db).get_by_id(request.product_id):
        raise ProductNotFoundException()

    favorite = FavoriteService(db).add(current_user.id, request.product_id, request.notes)
    return {"success": True, "id": favorite.id}


@router.delete("/{product_id}", response_model=FavoriteResult)
def remove_favorite(
    product_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    FavoriteService(db).remove(current_user.id, product_id)
    return {"success": True}


@router.get("/{product_id}/status", response_model=FavoriteStatus)
def favorite_status(
    product_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {
        "product_id": product_id,
        "is_favorite": FavoriteService(db).is_favorite(current_user.id, product_id),
    }
