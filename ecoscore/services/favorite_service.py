from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ecoscore.middleware.transaction_handler import transactional
from ecoscore.models.favorite import Favorite
from ecoscore.models.product import Product

logger = logging.getLogger(__name__)


class FavoriteService:
    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: int, product_id: int) -> Optional[Favorite]:
        return (
            self.db.query(Favorite)
            .filter(Favorite.user_id == user_id, Favorite.product_id == product_id)
            .first()
        )

    def list_products(self, user_id: int) -> List[Product]:
        return (
            self.db.query(Product)
            .join(Favorite, Favorite.product_id == Product.id)
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.saved_at.desc())
            .all()
        )

    @transactional
    def add(self, user_id: int, product_id: int, notes: Optional[str] = None) -> Favorite:
        """Ajoute un favori ; renvoie l'existant s'il est déjà sauvegardé"""
        existing = self._find(user_id, product_id)
        if existing:
            return existing

        favorite = Favorite(user_id=user_id, product_id=product_id, notes=notes)
        self.db.add(favorite)
        self.db.flush()

        logger.info(f"Favorite added: user {user_id} - product {product_id}")
        return favorite

    @transactional
    def remove(self, user_id: int, product_id: int) -> bool:
        deleted = (
            self.db.query(Favorite)
            .filter(Favorite.user_id == user_id, Favorite.product_id == product_id)
            .delete()
        )
        return deleted > 0

    def is_favorite(self, user_id: int, product_id: int) -> bool:
        return self._find(user_id, product_id) is not None
