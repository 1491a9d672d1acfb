"""Application configuration."""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "postgresql+asyncpg://leadcrm:leadcrm@db:5432/leadcrm"
    
    # Search API (serper.dev)
    SERPER_API_KEY: Optional[str] = None
    SERPER_URL: str = "https://google.serper.dev/search"
    SEARCH_COUNTRY: str = "de"
    SEARCH_LANGUAGE: str = "de"
    SEARCH_RESULT_COUNT: int = 3
    SEARCH_QUOTA_PER_WINDOW: int = 90
    SEARCH_WINDOW_SECONDS: float = 60.0
    
    # Company registry site we never want back as a "website"
    REGISTRY_DOMAIN: str = "northdata.de"
    
    # Page fetching
    FETCH_TIMEOUT_SECONDS: float = 10.0
    FETCH_USER_AGENT: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
    )
    
    # Batch enrichment
    ENRICHMENT_DEFAULT_LIMIT: int = 50
    ENRICHMENT_MAX_LIMIT: int = 100
    ENRICHMENT_LEAD_DELAY_SECONDS: float = 1.5
    
    # Scheduled enrichment
    ENABLE_SCHEDULED_ENRICHMENT: bool = False
    ENRICHMENT_SCHEDULE: str = "*/30 * * * *"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
