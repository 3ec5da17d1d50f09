"""
Configuration settings for the AI Design Engine
"""
import os
import logging
from typing import Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

# Configure basic logger for config module
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # API Keys
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")
    OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "")

    # Completion provider: "anthropic", "openrouter" or "auto" (first configured key wins)
    COMPLETION_PROVIDER: str = os.getenv("COMPLETION_PROVIDER", "auto")

    # Monitoring
    SENTRY_DSN: Optional[str] = os.getenv("SENTRY_DSN")
    SENTRY_ENVIRONMENT: str = os.getenv("SENTRY_ENVIRONMENT", "development")
    SENTRY_TRACES_SAMPLE_RATE: float = float(
        os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1")
    )

    # Claude model used by the Anthropic completion client
    DEFAULT_CLAUDE_MODEL: str = os.getenv("DEFAULT_CLAUDE_MODEL", "claude-sonnet-4-20250514")

    # OpenRouter
    OPENROUTER_API_URL: str = "https://openrouter.ai/api/v1/chat/completions"
    OPENROUTER_TIMEOUT: float = 60.0

    # Rate limits (slowapi syntax)
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    AI_RATE_LIMIT: str = os.getenv("AI_RATE_LIMIT", "20/minute")
    BATCH_RATE_LIMIT: str = os.getenv("BATCH_RATE_LIMIT", "5/minute")

    # Batch processing
    MAX_BATCH_OPERATIONS: int = 50

    # CORS - comma-separated list of allowed origins
    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000"
    )

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()


def validate_required_config():
    """Validate required configuration on startup"""
    errors = []

    # Check for at least one completion API key
    if not settings.ANTHROPIC_API_KEY and not settings.OPENROUTER_API_KEY:
        errors.append("Either ANTHROPIC_API_KEY or OPENROUTER_API_KEY must be configured")

    if settings.COMPLETION_PROVIDER not in ("auto", "anthropic", "openrouter"):
        errors.append(f"Unknown COMPLETION_PROVIDER: {settings.COMPLETION_PROVIDER}")

    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        if settings.ENVIRONMENT == "production":
            raise ValueError(f"Missing required configuration: {', '.join(errors)}")

    return len(errors) == 0
