"""
Application Configuration
Centralized settings for the NeuroRelief backend
"""

import os
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Database
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")

    # Bearer tokens issued by the identity provider bridge
    SESSION_SECRET: Optional[str] = os.getenv("SESSION_SECRET")
    TOKEN_ALGORITHM: str = os.getenv("TOKEN_ALGORITHM", "HS256")

    # CORS
    CORS_ORIGINS: list = ["http://localhost:5000", "http://127.0.0.1:5000"]

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ENVIRONMENT: str = os.getenv("NODE_ENV", "development")

    # Listing
    DEFAULT_LIST_LIMIT: int = 50
    MAX_LIST_LIMIT: int = 500

    # Report header
    REPORT_COMPANY: str = "TechNeurology"
    REPORT_PRODUCT: str = "NeuroRelief"

    def validate_database_url(self):
        if not self.DATABASE_URL:
            raise ValueError(
                "DATABASE_URL environment variable is required for database operations. "
                "Please set it to your PostgreSQL connection string."
            )

    def get_token_secret(self) -> str:
        # Same fallback the frontend bridge uses in development
        return self.SESSION_SECRET or "dev-secret-key-for-testing"

    class Config:
        env_file = ".env"


settings = Settings()
