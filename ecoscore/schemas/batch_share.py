from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from ecoscore.core.config import settings
from ecoscore.schemas.product import ProductResponse


class BatchShareCreate(BaseModel):
    product_barcodes: List[str] = Field(..., min_length=1)
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    expires_in_days: Optional[int] = Field(None, ge=1, le=365)

    @field_validator("product_barcodes")
    @classmethod
    def validate_barcodes(cls, v):
        if len(v) > settings.BATCH_SHARE_MAX_PRODUCTS:
            raise ValueError(
                f"A batch share holds at most {settings.BATCH_SHARE_MAX_PRODUCTS} products"
            )

        cleaned = []
        for barcode in v:
            barcode = barcode.strip()
            if not barcode.isdigit():
                raise ValueError("Barcodes must contain digits only")
            if barcode not in cleaned:
                cleaned.append(barcode)
        return cleaned


class BatchShareUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)


class BatchShareResponse(BaseModel):
    id: int
    share_token: str
    title: Optional[str] = None
    description: Optional[str] = None
    product_barcodes: List[str]
    view_count: int
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SharedBatchResponse(BaseModel):
    share: BatchShareResponse
    products: List[ProductResponse]
    missing_barcodes: List[str] = []
