from pydantic import BaseModel, Field
from typing import List, Optional


class PreferenceUpdate(BaseModel):
    enable_price_drop_notifications: Optional[bool] = None
    enable_new_alternative_notifications: Optional[bool] = None
    price_drop_threshold: Optional[float] = Field(None, ge=0, le=100)
    preferred_categories: Optional[List[str]] = None
    min_eco_score: Optional[int] = Field(None, ge=0, le=100)


class PreferenceResponse(BaseModel):
    enable_price_drop_notifications: bool
    enable_new_alternative_notifications: bool
    price_drop_threshold: Optional[float] = None
    preferred_categories: Optional[List[str]] = None
    min_eco_score: Optional[int] = None

    class Config:
        from_attributes = True
