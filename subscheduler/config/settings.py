"""
Application settings using Pydantic BaseSettings.
"""

from typing import List, Optional, Union

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Subcontractor Scheduler Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"
    # None picks JSON for production and staging, console output otherwise
    LOG_JSON: Optional[bool] = None

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: Union[str, List[str]] = "*"

    # Database
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_ECHO: bool = False
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600

    # Realtime change feed
    REDIS_URL: str = "redis://localhost:6379/0"
    REALTIME_BACKEND: str = "memory"
    REALTIME_CHANNEL: str = "jobs-changes"

    # Scheduling
    ORG_TIMEZONE: str = "America/New_York"
    ACTIVE_PHASE_LABELS: List[str] = ["Job Request", "Work Order", "Pending Work Order"]
    SUBCONTRACTOR_PHASE_LABEL: str = "Job Request"
    SCHEDULER_BATCH_SIZE: int = 10
    SCHEDULER_ENFORCE_AVAILABILITY: bool = False
    DECISION_MIN_FEEDBACK_SECONDS: float = 0.5

    # Notifications
    EMAIL_FUNCTION_URL: Optional[str] = None
    EMAIL_FUNCTION_API_KEY: Optional[str] = None
    HTTP_TIMEOUT: int = 30

    # Monitoring
    ENABLE_METRICS: bool = True
    PROMETHEUS_MULTIPROC_DIR: Optional[str] = None

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        return ["*"]

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("REALTIME_BACKEND")
    @classmethod
    def validate_realtime_backend(cls, v: str) -> str:
        if v not in ["memory", "redis"]:
            raise ValueError("Realtime backend must be one of: memory, redis")
        return v

    @field_validator("SCHEDULER_BATCH_SIZE")
    @classmethod
    def validate_batch_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Scheduler batch size must be at least 1")
        return v

    @model_validator(mode="after")
    def assemble_db_connection(self) -> "Settings":
        if self.DATABASE_URL:
            return self
        # Build from individual components if DATABASE_URL is not provided
        user = self.POSTGRES_USER or "scheduler_user"
        password = self.POSTGRES_PASSWORD or "scheduler_pass"
        host = self.POSTGRES_SERVER or "localhost"
        db = self.POSTGRES_DB or "scheduler"
        self.DATABASE_URL = f"postgresql+asyncpg://{user}:{password}@{host}:5432/{db}"
        return self

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


# Global settings instance
settings = Settings()
