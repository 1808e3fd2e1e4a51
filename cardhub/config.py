"""
Application Configuration
Loads settings from environment variables
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file"""
    
    # Application
    APP_ENV: str = "development"
    APP_NAME: str = "CardHub"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    
    # Public API base, used when rewriting stored photo/logo paths
    APP_URL: str = "http://localhost:8080"
    FILES_API_PATH: str = "/api/v1/files"
    
    # Frontend base, printed into QR payload URLs
    FRONTEND_URL: str = "http://localhost:3000"
    
    # Database
    DATABASE_URL: str = "postgresql://localhost:5432/cardhub"
    
    # ID cards
    DEFAULT_CARD_VALIDITY_DAYS: int = 365
    BULK_MAX_SUBJECTS: int = 500
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
