"""
Core configuration for Streakboard Gateway
Leaderboard gateway in front of the tracks API
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application Settings
    APP_NAME: str = "Streakboard"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Combined streak leaderboards for organizations and tracks"
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Streakboard Gateway"

    # Upstream tracks API
    UPSTREAM_API_URL: str = Field(default="http://localhost:5000")
    UPSTREAM_TIMEOUT: float = Field(default=10.0)
    LEADERBOARD_FETCH_CONCURRENCY: int = Field(default=4)

    # CORS
    BACKEND_CORS_ORIGINS: str = Field(default="http://localhost:3000")

    # Sentry
    SENTRY_DSN: Optional[str] = Field(default=None)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    LOG_FILE: str = Field(default="logs/app.log")
    LOG_MAX_BYTES: int = Field(default=10 * 1024 * 1024)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_TO_FILE: bool = Field(default=True)

    class Config:
        env_file = ".env"
        case_sensitive = True

    @field_validator("LEADERBOARD_FETCH_CONCURRENCY")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("LEADERBOARD_FETCH_CONCURRENCY must be at least 1")
        return v

    @field_validator("UPSTREAM_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be positive")
        return v

    def get_upstream_url(self) -> str:
        """Get upstream base URL without trailing slash"""
        return self.UPSTREAM_API_URL.rstrip("/")

    def get_cors_origins(self) -> list[str]:
        """Get CORS origins as list"""
        if self.BACKEND_CORS_ORIGINS:
            return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]
        return ["http://localhost:3000"]

    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
