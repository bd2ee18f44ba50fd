from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings
import os
from dotenv import load_dotenv


# Env names of the commerce settings, in the order they are reported when missing
COMMERCETOOLS_SETTING_NAMES = (
    "COMMERCETOOLS_AUTH_URL",
    "COMMERCETOOLS_API_URL",
    "COMMERCETOOLS_PROJECT_KEY",
    "COMMERCETOOLS_CLIENT_ID",
    "COMMERCETOOLS_CLIENT_SECRET",
)


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Commerce Adaptor"
    DEBUG: bool = False

    # CORS settings
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # Commercetools settings. Optional at load time, checked on first token request.
    COMMERCETOOLS_AUTH_URL: Optional[str] = None
    COMMERCETOOLS_API_URL: Optional[str] = None
    COMMERCETOOLS_PROJECT_KEY: Optional[str] = None
    COMMERCETOOLS_CLIENT_ID: Optional[str] = None
    COMMERCETOOLS_CLIENT_SECRET: Optional[str] = None

    # Token settings
    TOKEN_EXPIRY_MARGIN_SECONDS: int = 60

    # Localization settings
    DEFAULT_LOCALE: str = "en-US"
    FALLBACK_LOCALES: List[str] = ["en-US", "en-GB"]

    # Pricing settings
    PREFERRED_CURRENCY: str = "USD"

    # Response caching (seconds)
    PRODUCT_CACHE_MAX_AGE: int = 300
    PRODUCT_STALE_WHILE_REVALIDATE: int = 600

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    # External API timeout settings
    DEFAULT_TIMEOUT: int = 10  # seconds

    def missing_commercetools_settings(self) -> List[str]:
        """
        List the commercetools settings that are unset or blank.

        Returns:
            List[str]: Env names of every missing setting, empty when complete
        """
        return [
            name for name in COMMERCETOOLS_SETTING_NAMES
            if not (getattr(self, name) or "").strip()
        ]

    @property
    def commercetools_configured(self) -> bool:
        return not self.missing_commercetools_settings()

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching for efficiency.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
