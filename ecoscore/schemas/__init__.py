from ecoscore.schemas.product import (
    OpenFoodFactsProduct,
    ProductRecord,
    ProductResponse,
    SimilarityCandidate,
)
from ecoscore.schemas.favorite import FavoriteCreate, FavoriteResult, FavoriteStatus
from ecoscore.schemas.comparison import (
    ComparisonCreate,
    ComparisonResponse,
    ComparisonResult,
    ComparisonSummary,
)
from ecoscore.schemas.batch_share import (
    BatchShareCreate,
    BatchShareUpdate,
    BatchShareResponse,
    SharedBatchResponse,
)
from ecoscore.schemas.preference import PreferenceUpdate, PreferenceResponse
from ecoscore.schemas.notification import NotificationResponse
from ecoscore.schemas.recommendation import (
    RecommendationsResponse,
    TipsResponse,
    AnalysisResponse,
    ComparisonTextResponse,
)
from ecoscore.schemas.contribution import (
    ContributionRequest,
    ContributionResponse,
    ContributionUrlResponse,
)

__all__ = [
    "OpenFoodFactsProduct",
    "ProductRecord",
    "ProductResponse",
    "SimilarityCandidate",
    "FavoriteCreate",
    "FavoriteResult",
    "FavoriteStatus",
    "ComparisonCreate",
    "ComparisonResponse",
    "ComparisonResult",
    "ComparisonSummary",
    "BatchShareCreate",
    "BatchShareUpdate",
    "BatchShareResponse",
    "SharedBatchResponse",
    "PreferenceUpdate",
    "PreferenceResponse",
    "NotificationResponse",
    "RecommendationsResponse",
    "TipsResponse",
    "AnalysisResponse",
    "ComparisonTextResponse",
    "ContributionRequest",
    "ContributionResponse",
    "ContributionUrlResponse",
]
