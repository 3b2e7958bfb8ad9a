from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator
from pathlib import Path
from functools import lru_cache
from typing import List, Optional

# package root (app/)
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    Application settings model
    - loads app/config/settings.env automatically when present
    """
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / "config" / "settings.env"),
        env_file_encoding="utf-8",
        extra='ignore',
    )

    # Runtime
    ENVIRONMENT: str = Field(
        "development",
        description="'production' enables the Secure flag on the session cookie",
    )
    LOG_LEVEL: str = Field("INFO", description="Root logging level")
    CORS_ORIGINS: str = Field(
        "http://localhost:3000",
        description="Comma separated list of allowed origins",
    )

    # Security & JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    SESSION_TTL_SECONDS: int = Field(
        60 * 60 * 24,
        gt=0,
        description="Session token lifetime and cookie max-age (seconds)",
    )
    SESSION_COOKIE_NAME: str = "sessionId"
    PASSWORD_HASH_ROUNDS: int = Field(
        10,
        ge=4,
        le=31,
        description="bcrypt cost factor",
    )

    # Social graph
    FOLLOW_PREVIEW_LIMIT: int = Field(
        15,
        ge=1,
        description="Page size of follower/following listings for anonymous callers",
    )

    # Database
    DB_USER:     str = "tweeter"
    DB_PASSWORD: str = "tweeter_pw"
    DB_HOST:     str = "localhost"
    DB_PORT:     int = 3306
    DB_NAME:     str = "tweeter"
    DATABASE_URL: Optional[str] = Field(
        None,
        description="Full async DB URL (env wins over the assembled DB_* value)",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid LOG_LEVEL '{v}'")
        return upper

    @model_validator(mode="after")
    def _assemble_database_url(self) -> "Settings":
        """
        Use DATABASE_URL as is when set, otherwise build it from the DB_* values
        """
        if not self.DATABASE_URL:
            self.DATABASE_URL = (
                f"mysql+asyncmy://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
            )
        return self

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        return self.DATABASE_URL  # always set after validation

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Return the Settings singleton
    - built on first call, cached afterwards
    """
    return Settings()

# module-wide settings instance
settings = get_settings()
