"""Service settings, read from the environment or a local ``.env`` file.

Only ``DATABASE_URL`` and ``JWT_SECRET`` are mandatory; everything else has
a development-friendly default.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "staging", "production")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Typed view of the service's environment variables.

    Attributes:
        database_url: SQLAlchemy URL of the feedback store
        database_pool_size: Pooled connections kept open (ignored for SQLite)
        database_max_overflow: Extra connections allowed above the pool size
        database_auto_create: Run ``create_all`` at startup instead of Alembic
        environment: development, staging or production
        log_level: Root log level
        git_commit_sha: Build identifier reported at startup
        api_prefix: Path every API router is mounted under
        jwt_secret: HMAC key for admin access tokens
        jwt_algorithm: Token signing algorithm
        access_token_expire_minutes: Token lifetime
        allowed_origins: Comma-separated CORS origins
        public_base_url: Where respondents open the feedback form
        qr_code_service_url: Image service that renders share QR codes
        qr_code_size: QR image size as WIDTHxHEIGHT
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Feedback store
    database_url: str = Field(description="SQLAlchemy database URL")
    database_pool_size: int = Field(default=5, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)
    database_auto_create: bool = Field(
        default=True,
        description="Create missing tables on startup (use Alembic otherwise)",
    )

    # Runtime
    environment: str = "development"
    log_level: str = "INFO"
    git_commit_sha: str = "local"
    api_prefix: str = "/api"

    # Admin auth
    jwt_secret: str = Field(description="Secret used to sign admin access tokens")
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=600, ge=1)
    allowed_origins: str = "http://localhost:5173,http://localhost:3000"

    # Share links
    public_base_url: str = "http://localhost:5173"
    qr_code_service_url: str = "https://api.qrserver.com/v1/create-qr-code/"
    qr_code_size: str = "200x200"

    @field_validator("environment")
    @classmethod
    def check_environment(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ENVIRONMENTS:
            raise ValueError(f"environment must be one of {', '.join(ENVIRONMENTS)}")
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, value: str) -> str:
        """'' or '/segment', never with a trailing slash."""
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def get_allowed_origins_list(self) -> List[str]:
        """CORS origins as a list, blanks dropped."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process and reuse them."""
    return Settings()
