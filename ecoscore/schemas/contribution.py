from pydantic import BaseModel, Field
from typing import Optional


class ContributionRequest(BaseModel):
    """Fiche produit proposée à Open Food Facts (validée par le service)"""

    barcode: str = Field(..., min_length=1, max_length=64)
    product_name: str = Field("", max_length=255)
    brand: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=255)
    ingredients: Optional[str] = None
    nutrition_facts: Optional[str] = None
    comment: Optional[str] = Field(None, max_length=1000)


class ContributionResponse(BaseModel):
    success: bool
    message: str
    off_url: Optional[str] = None
    error: Optional[str] = None


class ContributionUrlResponse(BaseModel):
    barcode: str
    url: str
