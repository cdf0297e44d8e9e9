from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ecoscore.core.database import get_db
from ecoscore.core.dependencies import get_current_user
from ecoscore.models.user import User
from ecoscore.schemas.batch_share import (
    BatchShareCreate,
    BatchShareResponse,
    BatchShareUpdate,
    SharedBatchResponse,
)
from ecoscore.services.batch_share_service import BatchShareService

router = APIRouter(prefix="/batch-shares", tags=["Batch Shares"])


@router.post("", response_model=BatchShareResponse, status_code=201)
def create_batch_share(
    request: BatchShareCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return BatchShareService(db).create(
        user_id=current_user.id,
        product_barcodes=request.product_barcodes,
        title=request.title,
        description=request.description,
        expires_in_days=request.expires_in_days,
    )


@router.get("", response_model=List[BatchShareResponse])
def list_batch_shares(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return BatchShareService(db).list_for_user(current_user.id)


@router.get("/{share_token}", response_model=SharedBatchResponse)
def open_batch_share(share_token: str, db: Session = Depends(get_db)):
    """Lien public : pas d'authentification, chaque ouverture compte une vue"""
    return BatchShareService(db).open_by_token(share_token)


@router.patch("/{share_id}", response_model=BatchShareResponse)
def update_batch_share(
    share_id: int,
    request: BatchShareUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return BatchShareService(db).update(
        share_id, current_user.id, request.dict(exclude_unset=True)
    )


@router.delete("/{share_id}", status_code=204)
def delete_batch_share(
    share_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    BatchShareService(db).delete(share_id, current_user.id)
    return None
