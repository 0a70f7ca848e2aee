"""AI client factory with Helicone integration support."""
import logging
from dataclasses import dataclass, field
from typing import Any

from workout_tracker_api.config import settings


logger = logging.getLogger(__name__)

# Helicone proxy URLs (private - implementation detail)
_HELICONE_OPENAI_BASE_URL = "https://oai.helicone.ai/v1"
_HELICONE_ANTHROPIC_BASE_URL = "https://anthropic.helicone.ai"

# Default client timeout
DEFAULT_TIMEOUT = 30.0


@dataclass
class AIRequestContext:
    """Context for AI requests, used for tracking and observability."""

    user_id: str | None = None
    feature_name: str | None = None
    request_id: str | None = None
    custom_properties: dict[str, str] = field(default_factory=dict)

    def to_tracking_headers(self) -> dict[str, str]:
        """Convert context to Helicone tracking headers."""
        headers: dict[str, str] = {}

        if self.user_id:
            headers["Helicone-User-Id"] = self.user_id

        if self.feature_name:
            headers["Helicone-Property-Feature"] = self.feature_name

        if self.request_id:
            headers["Helicone-Request-Id"] = self.request_id

        # Add environment for filtering in Helicone dashboard
        headers["Helicone-Property-Environment"] = settings.ENVIRONMENT

        for key, value in self.custom_properties.items():
            header_key = f"Helicone-Property-{key.replace('_', '-').title()}"
            headers[header_key] = str(value)

        return headers


def _helicone_kwargs(base_url: str, context: AIRequestContext | None) -> dict[str, Any]:
    """Proxy settings for Helicone, or {} when it is disabled or misconfigured."""
    if not settings.HELICONE_ENABLED:
        return {}
    if not settings.HELICONE_API_KEY:
        logger.warning(
            "HELICONE_ENABLED=true but HELICONE_API_KEY not set. "
            "Falling back to direct API calls."
        )
        return {}

    default_headers = {"Helicone-Auth": f"Bearer {settings.HELICONE_API_KEY}"}
    if context:
        default_headers.update(context.to_tracking_headers())
    return {"base_url": base_url, "default_headers": default_headers}


class AIClientFactory:
    """Factory for creating async AI clients with optional Helicone integration."""

    @staticmethod
    def create_openai_client(
        context: AIRequestContext | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """
        Create an AsyncOpenAI client, optionally proxied through Helicone.

        Raises:
            ValueError: If OPENAI_API_KEY is not configured
        """
        from openai import AsyncOpenAI

        api_key = settings.OPENAI_API_KEY
        if not api_key:
            raise ValueError("OpenAI API key not configured. Set OPENAI_API_KEY environment variable.")

        client_kwargs: dict[str, Any] = {
            "api_key": api_key,
            "timeout": timeout,
            # Retries are handled by retry_async_call
            "max_retries": 0,
        }
        client_kwargs.update(_helicone_kwargs(_HELICONE_OPENAI_BASE_URL, context))

        logger.debug(
            "Creating OpenAI client%s",
            " with Helicone proxy" if "base_url" in client_kwargs else " (direct)",
        )
        return AsyncOpenAI(**client_kwargs)

    @staticmethod
    def create_anthropic_client(
        context: AIRequestContext | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """
        Create an AsyncAnthropic client, optionally proxied through Helicone.

        Raises:
            ValueError: If ANTHROPIC_API_KEY is not configured
        """
        from anthropic import AsyncAnthropic

        api_key = settings.ANTHROPIC_API_KEY
        if not api_key:
            raise ValueError("Anthropic API key not configured. Set ANTHROPIC_API_KEY environment variable.")

        client_kwargs: dict[str, Any] = {
            "api_key": api_key,
            "timeout": timeout,
            "max_retries": 0,
        }
        client_kwargs.update(_helicone_kwargs(_HELICONE_ANTHROPIC_BASE_URL, context))

        logger.debug(
            "Creating Anthropic client%s",
            " with Helicone proxy" if "base_url" in client_kwargs else " (direct)",
        )
        return AsyncAnthropic(**client_kwargs)
