from pydantic import BaseModel


class RecommendationsResponse(BaseModel):
    success: bool
    recommendations: str


class TipsResponse(BaseModel):
    success: bool
    tips: str


class AnalysisResponse(BaseModel):
    success: bool
    analysis: str


class ComparisonTextResponse(BaseModel):
    success: bool
    comparison: str
