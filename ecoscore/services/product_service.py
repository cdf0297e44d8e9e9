from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Iterable, List, Optional
import logging

from ecoscore.models.product import Product
from ecoscore.schemas.product import ProductRecord
from ecoscore.services.open_food_facts import OpenFoodFactsClient
from ecoscore.utils.exceptions import ProductNotFoundError
from ecoscore.utils.validators import LIKE_ESCAPE, escape_like

logger = logging.getLogger(__name__)


class ProductService:
    """Cache local des produits, alimenté depuis Open Food Facts"""

    def __init__(self, db: Session, source: Optional[OpenFoodFactsClient] = None):
        self.db = db
        self.source = source

    def get_by_barcode(self, barcode: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.barcode == barcode).first()

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_by_ids(self, product_ids: Iterable[int]) -> List[Product]:
        """Produits dans l'ordre des ids demandés, ids inconnus ignorés"""
        ids = list(product_ids)
        if not ids:
            return []

        rows = self.db.query(Product).filter(Product.id.in_(ids)).all()
        by_id = {p.id: p for p in rows}
        return [by_id[i] for i in ids if i in by_id]

    def search_local(self, query: str, limit: int = 20) -> List[Product]:
        """Produits dont le nom contient `query` tel quel (jokers LIKE échappés)"""
        pattern = f"%{escape_like(query)}%"
        return (
            self.db.query(Product)
            .filter(Product.name.ilike(pattern, escape=LIKE_ESCAPE))
            .limit(limit)
            .all()
        )

    def _apply_record(self, product: Product, record: ProductRecord):
        for key, value in record.dict(exclude={"barcode"}).items():
            setattr(product, key, value)

    def upsert_product(self, record: ProductRecord) -> Product:
        """
        Insère ou écrase intégralement le produit portant ce code-barres

        Idempotent : deux requêtes concurrentes sur le même code peuvent
        toutes deux écrire, la dernière l'emporte.
        """
        product = self.get_by_barcode(record.barcode)
        if product is None:
            product = Product(barcode=record.barcode)
            self.db.add(product)

        self._apply_record(product, record)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Concurrent insert for {record.barcode}, overwriting")
            product = self.get_by_barcode(record.barcode)
            self._apply_record(product, record)
            self.db.commit()

        self.db.refresh(product)
        return product

    def upsert_many(self, records: Iterable[ProductRecord]) -> List[Product]:
        return [self.upsert_product(record) for record in records]

    async def get_product(self, barcode: str) -> Product:
        """
        Produit par code-barres : cache local d'abord, puis Open Food Facts

        Raises:
            ProductNotFoundError: inconnu en local comme en amont
            SourceUnavailableError: Open Food Facts injoignable
        """
        product = self.get_by_barcode(barcode)
        if product:
            return product

        record = await self.source.fetch_by_barcode(barcode)
        if record is None:
            raise ProductNotFoundError(barcode)

        product = self.upsert_product(record)
        logger.info(f"Product cached from Open Food Facts: {barcode} - {product.name}")
        return product

    async def search_products(self, query: str, limit: int = 20) -> List[Product]:
        local_results = self.search_local(query, limit)
        if local_results:
            return local_results

        records = await self.source.search_by_text(query, limit)
        return self.upsert_many(records)
