from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from ecoscore.schemas.product import ProductResponse


class ComparisonCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    product_ids: List[int] = Field(..., min_length=2, max_length=10)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Comparison name cannot be blank")
        return v.strip()

    @field_validator("product_ids")
    @classmethod
    def validate_product_ids(cls, v):
        if len(set(v)) != len(v):
            raise ValueError("Comparison contains duplicate products")
        return v


class ComparisonResult(BaseModel):
    success: bool
    id: Optional[int] = None


class ComparisonResponse(BaseModel):
    id: int
    name: str
    product_ids: List[int]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    products: List[ProductResponse] = []

    class Config:
        from_attributes = True


class ComparisonRow(BaseModel):
    product_id: int
    name: str
    brand: Optional[str] = None
    eco_score: Optional[int] = None
    eco_score_grade: Optional[str] = None
    environmental_footprint: Optional[int] = None
    packaging_sustainability: Optional[int] = None
    carbon_impact: Optional[int] = None
    price: Optional[str] = None


class ComparisonSummary(BaseModel):
    comparison_id: int
    name: str
    product_count: int
    average_eco_score: Optional[float] = None
    best_product_id: Optional[int] = None
    rows: List[ComparisonRow]
