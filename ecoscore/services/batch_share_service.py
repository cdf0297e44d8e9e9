from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
import secrets
import logging

from ecoscore.core.config import settings
from ecoscore.middleware.transaction_handler import transactional
from ecoscore.models.batch_share import BatchShare
from ecoscore.models.product import Product
from ecoscore.utils.exceptions import BatchShareNotFoundError

logger = logging.getLogger(__name__)


class BatchShareService:
    """Partage public d'une comparaison par lot via un jeton non devinable"""

    def __init__(self, db: Session):
        self.db = db

    def _new_token(self) -> str:
        while True:
            token = secrets.token_urlsafe(settings.BATCH_SHARE_TOKEN_BYTES)
            exists = (
                self.db.query(BatchShare.id)
                .filter(BatchShare.share_token == token)
                .first()
            )
            if not exists:
                return token

    @transactional
    def create(
        self,
        user_id: int,
        product_barcodes: List[str],
        title: Optional[str] = None,
        description: Optional[str] = None,
        expires_in_days: Optional[int] = None,
    ) -> BatchShare:
        expires_at = None
        if expires_in_days:
            expires_at = datetime.utcnow() + timedelta(days=expires_in_days)

        share = BatchShare(
            user_id=user_id,
            share_token=self._new_token(),
            title=title,
            description=description,
            product_barcodes=product_barcodes,
            expires_at=expires_at,
            view_count=0,
        )
        self.db.add(share)
        self.db.flush()

        logger.info(f"Batch share created: {share.id} ({len(product_barcodes)} products)")
        return share

    def open_by_token(self, token: str) -> Dict[str, Any]:
        """
        Ouvre un partage public et comptabilise la vue

        Raises:
            BatchShareNotFoundError: jeton inconnu ou partage expiré
        """
        share = self.db.query(BatchShare).filter(BatchShare.share_token == token).first()

        if not share or share.is_expired():
            raise BatchShareNotFoundError(token)

        share.view_count = (share.view_count or 0) + 1
        self.db.commit()
        self.db.refresh(share)

        barcodes = share.product_barcodes or []
        rows = self.db.query(Product).filter(Product.barcode.in_(barcodes)).all()
        by_barcode = {p.barcode: p for p in rows}

        return {
            "share": share,
            "products": [by_barcode[b] for b in barcodes if b in by_barcode],
            "missing_barcodes": [b for b in barcodes if b not in by_barcode],
        }

    def list_for_user(self, user_id: int) -> List[BatchShare]:
        return (
            self.db.query(BatchShare)
            .filter(BatchShare.user_id == user_id)
            .order_by(BatchShare.created_at.desc(), BatchShare.id.desc())
            .all()
        )

    def _get_owned(self, share_id: int, user_id: int) -> BatchShare:
        share = (
            self.db.query(BatchShare)
            .filter(BatchShare.id == share_id, BatchShare.user_id == user_id)
            .first()
        )
        if not share:
            raise BatchShareNotFoundError(str(share_id))
        return share

    def update(self, share_id: int, user_id: int, update_data: Dict[str, Any]) -> BatchShare:
        share = self._get_owned(share_id, user_id)
        for key, value in update_data.items():
            setattr(share, key, value)

        self.db.commit()
        self.db.refresh(share)
        return share

    def delete(self, share_id: int, user_id: int):
        share = self._get_owned(share_id, user_id)
        self.db.delete(share)
        self.db.commit()
        logger.info(f"Batch share deleted: {share_id}")
