from pydantic_settings import BaseSettings
from typing import Optional, List


class Settings(BaseSettings):
    APP_NAME: str = "EcoScore Finder API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite:///./ecoscore.db"

    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"

    OFF_BASE_URL: str = "https://world.openfoodfacts.org"
    OFF_USER_AGENT: str = "EcoScoreFinder/1.0"
    OFF_TIMEOUT_SECONDS: float = 10.0

    ALTERNATIVES_FAN_OUT: int = 30
    ALTERNATIVES_MAX_RESULTS: int = 10
    DEFAULT_MIN_SIMILARITY: float = 0.6

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"

    OFF_CONTRIBUTOR_USER_ID: Optional[str] = None
    OFF_CONTRIBUTOR_PASSWORD: Optional[str] = None

    BATCH_SHARE_TOKEN_BYTES: int = 16
    BATCH_SHARE_MAX_PRODUCTS: int = 50

    LOG_LEVEL: str = "INFO"

    ALLOWED_ORIGINS: List[str] = ["http://localhost", "http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
