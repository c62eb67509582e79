"""
Configuration management using Pydantic settings.
Handles database connection components, pool sizing, JWT secrets and query limits.
"""

from pydantic import validator
from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings read from the environment or a .env file."""

    # Application configuration
    app_name: str = "LightBnB"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    testing: bool = False

    # Full URL override; built from the components below when unset
    database_url: Optional[str] = None

    postgres_db: str = "lightbnb"
    postgres_user: str = "labber"
    postgres_password: str = "labber"
    postgres_host: str = "localhost"
    postgres_port: int = 5432

    # Connection pool
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600

    # JWT configuration
    jwt_secret_key: str = "your-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Result caps for list queries
    default_result_limit: int = 10
    max_result_limit: int = 100

    # API configuration
    api_prefix: str = "/api"
    cors_origins: List[str] = ["http://localhost:3000"]

    host: str = "0.0.0.0"
    port: int = 3000

    @validator("database_url", pre=True)
    def validate_database_url(cls, v):
        """Ensure the async driver is used for PostgreSQL URLs."""
        if v and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @validator("environment")
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @validator("default_result_limit", "max_result_limit")
    def validate_result_limit(cls, v):
        if v < 1:
            raise ValueError("Result limits must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing" or self.testing

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def sqlalchemy_url(self) -> str:
        """Database URL handed to the engine."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
