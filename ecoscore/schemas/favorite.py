from pydantic import BaseModel, Field
from typing import Optional


class FavoriteCreate(BaseModel):
    product_id: int = Field(..., gt=0)
    notes: Optional[str] = Field(None, max_length=1000)


class FavoriteResult(BaseModel):
    success: bool
    id: Optional[int] = None


class FavoriteStatus(BaseModel):
    product_id: int
    is_favorite: bool
