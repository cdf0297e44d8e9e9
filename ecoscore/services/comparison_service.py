from sqlalchemy.orm import Session
from typing import Any, Dict, List
import logging

from ecoscore.middleware.transaction_handler import transactional
from ecoscore.models.comparison import Comparison
from ecoscore.services.product_service import ProductService
from ecoscore.utils.exceptions import ComparisonNotFoundError

logger = logging.getLogger(__name__)


class ComparisonService:
    def __init__(self, db: Session):
        self.db = db
        self.products = ProductService(db)

    def get_for_user(self, comparison_id: int, user_id: int) -> Comparison:
        comparison = (
            self.db.query(Comparison)
            .filter(Comparison.id == comparison_id, Comparison.user_id == user_id)
            .first()
        )
        if not comparison:
            raise ComparisonNotFoundError(comparison_id)
        return comparison

    def list_enriched(self, user_id: int) -> List[Dict[str, Any]]:
        """Comparaisons de l'utilisateur avec leurs produits (ids disparus ignorés)"""
        comparisons = (
            self.db.query(Comparison)
            .filter(Comparison.user_id == user_id)
            .order_by(Comparison.created_at.desc())
            .all()
        )

        return [
            {
                "id": c.id,
                "name": c.name,
                "product_ids": c.product_ids,
                "created_at": c.created_at,
                "updated_at": c.updated_at,
                "products": self.products.get_by_ids(c.product_ids or []),
            }
            for c in comparisons
        ]

    @transactional
    def create(self, user_id: int, name: str, product_ids: List[int]) -> Comparison:
        comparison = Comparison(user_id=user_id, name=name, product_ids=product_ids)
        self.db.add(comparison)
        self.db.flush()

        logger.info(f"Comparison created: {comparison.id} ({len(product_ids)} products)")
        return comparison

    def delete(self, comparison_id: int, user_id: int):
        comparison = self.get_for_user(comparison_id, user_id)
        self.db.delete(comparison)
        self.db.commit()
        logger.info(f"Comparison deleted: {comparison_id}")

    def summarize(self, comparison_id: int, user_id: int) -> Dict[str, Any]:
        """
        Tableau récapitulatif d'une comparaison

        Le meilleur produit est celui au plus fort eco-score ; les produits
        sans eco-score ne comptent ni pour le meilleur ni pour la moyenne.
        """
        comparison = self.get_for_user(comparison_id, user_id)
        products = self.products.get_by_ids(comparison.product_ids or [])

        scored = [p for p in products if p.eco_score is not None]
        best = max(scored, key=lambda p: p.eco_score) if scored else None
        average = (
            round(sum(p.eco_score for p in scored) / len(scored), 1) if scored else None
        )

        return {
            "comparison_id": comparison.id,
            "name": comparison.name,
            "product_count": len(products),
            "average_eco_score": average,
            "best_product_id": best.id if best else None,
            "rows": [
                {
                    "product_id": p.id,
                    "name": p.name,
                    "brand": p.brand,
                    "eco_score": p.eco_score,
                    "eco_score_grade": p.eco_score_grade,
                    "environmental_footprint": p.environmental_footprint,
                    "packaging_sustainability": p.packaging_sustainability,
                    "carbon_impact": p.carbon_impact,
                    "price": p.price,
                }
                for p in products
            ],
        }
