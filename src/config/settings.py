"""
Application settings using Pydantic BaseSettings.
"""

from typing import List, Optional, Union

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CHOICES = {
    "ENVIRONMENT": ("development", "staging", "production", "test"),
    "NOTIFICATION_CHANNEL": ("log", "push_gateway"),
    "REALTIME_BACKEND": ("memory", "redis"),
}


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Field Service Dispatch"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: Union[str, List[str]] = "*"

    # Database
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    DATABASE_URL: Optional[str] = None
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_ECHO: bool = False
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600

    # Redis / Queue
    REDIS_URL: str = "redis://localhost:6379/0"
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"
    CELERY_TASK_REJECT_ON_WORKER_LOST: bool = True
    CELERY_AUDIT_ASSIGNMENTS_INTERVAL_SECONDS: int = 300  # 5 minutes
    AUDIT_BATCH_SIZE: int = 500

    # Distance / routing provider
    GOOGLE_MAPS_API_KEY: Optional[str] = None
    DISTANCE_MATRIX_URL: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    DISTANCE_PROVIDER_TIMEOUT_SECONDS: float = 5.0
    CANDIDATE_LIMIT: int = 50

    # Notifications
    NOTIFICATION_CHANNEL: str = "log"
    PUSH_GATEWAY_URL: Optional[str] = None
    PUSH_GATEWAY_TOKEN: Optional[str] = None
    NOTIFICATION_TIMEOUT_SECONDS: float = 3.0

    # Realtime
    REALTIME_BACKEND: str = "memory"
    REALTIME_SUBSCRIBER_QUEUE_SIZE: int = 100

    # Monitoring
    HEALTH_CHECK_TIMEOUT_SECONDS: float = 5.0

    # Development
    ENABLE_DEBUG_ROUTES: bool = False

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

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        if isinstance(v, str):
            return v
        # Build from individual components if DATABASE_URL is not provided
        values = info.data
        user = values.get("POSTGRES_USER") or "dispatch_user"
        password = values.get("POSTGRES_PASSWORD") or "dispatch_pass"
        host = values.get("POSTGRES_SERVER") or "localhost"
        db = values.get("POSTGRES_DB") or "dispatch"
        return f"postgresql+asyncpg://{user}:{password}@{host}:5432/{db}"

    @field_validator("ENVIRONMENT", "NOTIFICATION_CHANNEL", "REALTIME_BACKEND")
    @classmethod
    def validate_choice(cls, v: str, info: ValidationInfo) -> str:
        allowed = CHOICES[info.field_name]
        if v not in allowed:
            raise ValueError(f"{info.field_name} must be one of: {', '.join(allowed)}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}")
        return v.upper()

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",
        "validate_default": True,
    }


# Global settings instance
settings = Settings()
