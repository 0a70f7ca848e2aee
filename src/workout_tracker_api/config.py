"""Configuration settings for the workout tracker API."""
import logging
import os
from typing import Literal


logger = logging.getLogger(__name__)

EnvironmentType = Literal["development", "staging", "production"]
ProviderType = Literal["openai", "anthropic"]

DEFAULT_MODELS: dict[str, str] = {
    "openai": "gpt-3.5-turbo",
    "anthropic": "claude-3-5-haiku-20241022",
}

DEFAULT_DETECTION_TIMEOUT = 15.0
DEFAULT_DETECTION_MAX_ATTEMPTS = 2


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not a number, using default {default}")
        return default
    if value <= 0:
        logger.warning(f"{name} must be positive, using default {default}")
        return default
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using default {default}")
        return default
    if value < 1:
        logger.warning(f"{name} must be at least 1, using default {default}")
        return default
    return value


class Settings:
    """Application settings."""

    # Feature flags
    HELICONE_ENABLED: bool = False

    # Environment
    ENVIRONMENT: EnvironmentType = "development"

    # API Keys
    OPENAI_API_KEY: str | None = None
    ANTHROPIC_API_KEY: str | None = None
    HELICONE_API_KEY: str | None = None

    # Exercise detection
    EXERCISE_DETECTION_PROVIDER: ProviderType = "openai"
    EXERCISE_DETECTION_MODEL: str = DEFAULT_MODELS["openai"]
    EXERCISE_DETECTION_TIMEOUT: float = DEFAULT_DETECTION_TIMEOUT
    EXERCISE_DETECTION_MAX_ATTEMPTS: int = DEFAULT_DETECTION_MAX_ATTEMPTS

    # HTTP
    CORS_ORIGINS: list[str] = []

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        # Feature flags
        self.HELICONE_ENABLED = os.getenv("HELICONE_ENABLED", "false").lower() == "true"

        # API Keys
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
        self.HELICONE_API_KEY = os.getenv("HELICONE_API_KEY")

        # Exercise detection
        provider = os.getenv("EXERCISE_DETECTION_PROVIDER", "openai").lower()
        if provider in DEFAULT_MODELS:
            self.EXERCISE_DETECTION_PROVIDER = provider  # type: ignore
        else:
            logger.warning(f"Unknown EXERCISE_DETECTION_PROVIDER={provider!r}, using openai")
            self.EXERCISE_DETECTION_PROVIDER = "openai"
        self.EXERCISE_DETECTION_MODEL = (
            os.getenv("EXERCISE_DETECTION_MODEL")
            or DEFAULT_MODELS[self.EXERCISE_DETECTION_PROVIDER]
        )
        self.EXERCISE_DETECTION_TIMEOUT = _env_float(
            "EXERCISE_DETECTION_TIMEOUT", DEFAULT_DETECTION_TIMEOUT
        )
        self.EXERCISE_DETECTION_MAX_ATTEMPTS = _env_int(
            "EXERCISE_DETECTION_MAX_ATTEMPTS", DEFAULT_DETECTION_MAX_ATTEMPTS
        )

        # HTTP
        origins = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000")
        self.CORS_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]

    @property
    def detection_api_key(self) -> str | None:
        """API key for the configured exercise detection provider."""
        if self.EXERCISE_DETECTION_PROVIDER == "anthropic":
            return self.ANTHROPIC_API_KEY
        return self.OPENAI_API_KEY


settings = Settings()
