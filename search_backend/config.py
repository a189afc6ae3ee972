"""
Configuration module for the grounded product search function.

Loads environment variables and holds the fixed Gemini request settings.
"""
import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

# Load .env file
load_dotenv()


DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-preview-09-2025"
DEFAULT_GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class Settings:
    """Application settings loaded from environment variables."""

    # Gemini API
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)
    GEMINI_API_BASE_URL: str = os.getenv("GEMINI_API_BASE_URL", DEFAULT_GEMINI_API_BASE_URL)

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (local development server only)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @staticmethod
    def get_gemini_api_key() -> Optional[str]:
        """
        Read the Gemini API key from the process environment.

        Read on every invocation (not cached at import) so a key provisioned
        by the hosting platform after the module loads is still picked up.

        Returns:
            The key, or None if it is missing or empty.
        """
        return os.getenv("GEMINI_API_KEY") or None

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


@dataclass(frozen=True)
class GeminiSearchConfig:
    """
    Fixed settings for the Gemini generateContent call.

    Built once per process and passed explicitly into the handler.
    Only the user's query varies between requests.
    """
    model: str = DEFAULT_GEMINI_MODEL
    base_url: str = DEFAULT_GEMINI_API_BASE_URL
    max_output_tokens: int = 2048
    temperature: float = 0.2
    max_products: int = 4

    @property
    def endpoint_url(self) -> str:
        """Full generateContent URL (without the API key)."""
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"

    @classmethod
    def from_settings(cls, app_settings: "Settings") -> "GeminiSearchConfig":
        """Build the config from environment-backed settings."""
        return cls(
            model=app_settings.GEMINI_MODEL,
            base_url=app_settings.GEMINI_API_BASE_URL,
        )


# Create a singleton instance
settings = Settings()

# Immutable upstream config shared by every invocation of this process
search_config = GeminiSearchConfig.from_settings(settings)
