from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ecoscore.core.config import settings
from ecoscore.schemas.product import ProductRecord, SimilarityCandidate
from ecoscore.services.open_food_facts import OpenFoodFactsClient
from ecoscore.services.product_service import ProductService
from ecoscore.services.similarity import calculate_similarity, eco_score_or_default

logger = logging.getLogger(__name__)

FALLBACK_SEARCH_KEY = "products"


class AlternativeService:
    """Recherche et classement de produits de substitution"""

    def __init__(self, db: Session, source: OpenFoodFactsClient):
        self.db = db
        self.source = source
        self.products = ProductService(db, source)

    @staticmethod
    def search_key_for(reference: ProductRecord) -> str:
        return reference.category or reference.brand or FALLBACK_SEARCH_KEY

    @staticmethod
    def rank_candidates(
        reference: ProductRecord,
        candidates: List[ProductRecord],
        min_similarity: float,
    ) -> List[SimilarityCandidate]:
        """
        Score, filtre et trie les candidats

        Tri : gain d'eco-score décroissant, puis similarité décroissante.
        Le produit de référence n'est jamais son propre substitut.
        """
        reference_eco = eco_score_or_default(reference)

        scored = [
            SimilarityCandidate(
                product=candidate,
                similarity=calculate_similarity(reference, candidate),
            )
            for candidate in candidates
            if candidate.barcode != reference.barcode
        ]

        survivors = [c for c in scored if c.similarity >= min_similarity]
        survivors.sort(
            key=lambda c: (
                eco_score_or_default(c.product) - reference_eco,
                c.similarity,
            ),
            reverse=True,
        )
        return survivors

    async def find_alternatives(
        self, reference: ProductRecord, min_similarity: float
    ) -> List[ProductRecord]:
        """
        Jusqu'à ALTERNATIVES_MAX_RESULTS substituts pour `reference`

        min_similarity n'est pas borné : au-delà de 1 le résultat est vide.
        Chaque substitut retourné est écrit dans la table products.
        """
        search_key = self.search_key_for(reference)
        candidates = await self.source.search_by_text(
            search_key, settings.ALTERNATIVES_FAN_OUT
        )

        ranked = self.rank_candidates(reference, candidates, min_similarity)
        alternatives = [
            c.product for c in ranked[: settings.ALTERNATIVES_MAX_RESULTS]
        ]

        self.products.upsert_many(alternatives)

        logger.info(
            f"Alternatives for {reference.barcode}: {len(candidates)} candidates, "
            f"{len(ranked)} above {min_similarity}, {len(alternatives)} returned"
        )
        return alternatives

    async def get_alternatives(
        self, barcode: str, min_similarity: Optional[float] = None
    ) -> List[ProductRecord]:
        if min_similarity is None:
            min_similarity = settings.DEFAULT_MIN_SIMILARITY

        product = await self.products.get_product(barcode)
        reference = ProductRecord.model_validate(product)
        return await self.find_alternatives(reference, min_similarity)
