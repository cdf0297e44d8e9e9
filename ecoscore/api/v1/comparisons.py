from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ecoscore.core.database import get_db
from ecoscore.core.dependencies import get_current_user
from ecoscore.models.user import User
from ecoscore.schemas.comparison import (
    ComparisonCreate,
    ComparisonResponse,
    ComparisonResult,
    ComparisonSummary,
)
from ecoscore.services.comparison_service import ComparisonService
from ecoscore.services.product_service import ProductService
from ecoscore.utils.exceptions import InvalidComparisonException

router = APIRouter(prefix="/comparisons", tags=["Comparisons"])


@router.get("", response_model=List[ComparisonResponse])
def list_comparisons(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ComparisonService(db).list_enriched(current_user.id)


@router.post("", response_model=ComparisonResult, status_code=201)
def create_comparison(
    request: ComparisonCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    known = ProductService(db).get_by_ids(request.product_ids)
    if len(known) != len(request.product_ids):
        missing = set(request.product_ids) - {p.id for p in known}
        raise InvalidComparisonException(f"unknown products {sorted(missing)}")

    comparison = ComparisonService(db).create(
        current_user.id, request.name, request.product_ids
    )
    return {"success": True, "id": comparison.id}


@router.delete("/{comparison_id}", response_model=ComparisonResult)
def delete_comparison(
    comparison_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ComparisonService(db).delete(comparison_id, current_user.id)
    return {"success": True}


@router.get("/{comparison_id}/summary", response_model=ComparisonSummary)
def comparison_summary(
    comparison_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ComparisonService(db).summarize(comparison_id, current_user.id)
