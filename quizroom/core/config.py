"""
Application configuration management with environment-based settings.
"""
from typing import List
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ============= Application Settings =============
    APP_NAME: str = "Quizroom"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Multiple-choice quiz API for owners, teachers and pupils"
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")

    # ============= Server Settings =============
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)
    RELOAD: bool = Field(default=False)

    # ============= Security Settings =============
    SECRET_KEY: SecretStr = SecretStr("change-me-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)

    # The owner account is seeded once at startup; its username is reserved.
    OWNER_USERNAME: str = "xasan"
    OWNER_PASSWORD: SecretStr = SecretStr("change-me-owner")

    # CORS Settings, comma-separated
    CORS_ORIGINS: str = "*"
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]

    # ============= Database Settings =============
    DATABASE_URL: str = Field(default="sqlite:///./quizroom.sqlite")
    DATABASE_ECHO: bool = False

    # ============= Logging Settings =============
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    def cors_origins(self) -> List[str]:
        """Allowed CORS origins as a list."""
        return [i.strip() for i in self.CORS_ORIGINS.split(",") if i.strip()]

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT.lower() == "production"

@lru_cache()
def get_settings() -> Settings:
    """Settings read from the environment, used when the app factory is given none."""
    return Settings()
