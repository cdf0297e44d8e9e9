from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional
from datetime import datetime


def _coerce_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        parts = [str(v) for v in value if isinstance(v, (str, int, float))]
        return ",".join(parts) if parts else None
    return None


class OpenFoodFactsProduct(BaseModel):
    """
    Fiche produit telle que renvoyée par Open Food Facts

    Tous les champs sont optionnels : l'API omet ou met à null ce qu'elle ne
    connaît pas, et les types varient d'une fiche à l'autre.
    """

    model_config = ConfigDict(extra="ignore")

    code: Optional[str] = None
    product_name: Optional[str] = None
    brands: Optional[str] = None
    categories: Optional[str] = None
    image_url: Optional[str] = None
    price: Optional[str] = None
    countries: Optional[str] = None
    ecoscore_score: Optional[float] = None
    ecoscore_grade: Optional[str] = None

    @field_validator(
        "code",
        "product_name",
        "brands",
        "categories",
        "image_url",
        "price",
        "countries",
        "ecoscore_grade",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v):
        return _coerce_text(v)

    @field_validator("ecoscore_score", mode="before")
    @classmethod
    def coerce_score(cls, v):
        if v is None or isinstance(v, bool):
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None


class OpenFoodFactsProductEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[int] = None
    product: Optional[OpenFoodFactsProduct] = None


class OpenFoodFactsSearchEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    count: Optional[int] = None
    products: List[Any] = Field(default_factory=list)


class ProductRecord(BaseModel):
    """Produit normalisé, prêt à être stocké dans la table products"""

    barcode: str
    name: str
    brand: Optional[str] = None
    category: Optional[str] = None
    eco_score: Optional[int] = None
    eco_score_grade: Optional[str] = None
    environmental_footprint: Optional[int] = None
    packaging_sustainability: Optional[int] = None
    carbon_impact: Optional[int] = None
    image_url: Optional[str] = None
    price: Optional[str] = None
    country: Optional[str] = None

    class Config:
        from_attributes = True


class ProductResponse(ProductRecord):
    id: int
    last_updated: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SimilarityCandidate(BaseModel):
    """Produit candidat et sa similarité avec le produit de référence"""

    product: ProductRecord
    similarity: float
