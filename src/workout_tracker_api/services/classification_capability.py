"""Language-model providers that answer exercise classification prompts.

A capability takes a rendered prompt and returns the provider's raw text
reply. It does not interpret the reply; validation happens in the classifier.
"""
import logging
from typing import Any, Dict, Optional, Protocol

from workout_tracker_api.ai import AIClientFactory, AIRequestContext, retry_async_call
from workout_tracker_api.config import settings
from workout_tracker_api.errors import ExternalCapabilityError


logger = logging.getLogger(__name__)

FEATURE_NAME = "exercise_detection"
DEFAULT_MAX_TOKENS = 200
DEFAULT_TEMPERATURE = 0.1  # Low temperature for consistent results


class ClassificationCapability(Protocol):
    """Prompt in, raw JSON text out, or an exception."""

    async def classify(self, prompt: str) -> str:
        ...


# One client (and connection pool) per provider for the whole process
_shared_clients: Dict[str, Any] = {}


def _shared_client(provider: str) -> Any:
    """Return the process-wide client for ``provider``, creating it on first use.

    Raises:
        ValueError: the provider's API key is not configured
    """
    client = _shared_clients.get(provider)
    if client is None:
        context = AIRequestContext(feature_name=FEATURE_NAME)
        if provider == "anthropic":
            client = AIClientFactory.create_anthropic_client(context=context)
        else:
            client = AIClientFactory.create_openai_client(context=context)
        _shared_clients[provider] = client
    return client


async def close_shared_clients() -> None:
    """Close every cached provider client. Called on application shutdown."""
    clients = list(_shared_clients.values())
    _shared_clients.clear()
    for client in clients:
        await client.close()


def _tracking_headers(user_id: Optional[str], model: str) -> Optional[Dict[str, str]]:
    """Per-request Helicone headers; None when the proxy is off."""
    if not settings.HELICONE_ENABLED:
        return None
    context = AIRequestContext(
        user_id=user_id,
        feature_name=FEATURE_NAME,
        custom_properties={"model": model},
    )
    return context.to_tracking_headers()


class OpenAIClassificationCapability:
    """Classifies exercises with the OpenAI chat completions API."""

    def __init__(
        self,
        model: str = "gpt-3.5-turbo",
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        max_attempts: int = 2,
        user_id: Optional[str] = None,
        client=None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_attempts = max_attempts
        self._extra_headers = _tracking_headers(user_id, model)
        self._client = client or _shared_client("openai")

    async def _complete(self, prompt: str) -> str:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            response_format={"type": "json_object"},
            extra_headers=self._extra_headers,
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ExternalCapabilityError("No response from AI service")
        return content

    async def classify(self, prompt: str) -> str:
        return await retry_async_call(self._complete, prompt, max_attempts=self.max_attempts)


class AnthropicClassificationCapability:
    """Classifies exercises with the Anthropic messages API."""

    def __init__(
        self,
        model: str = "claude-3-5-haiku-20241022",
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        max_attempts: int = 2,
        user_id: Optional[str] = None,
        client=None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_attempts = max_attempts
        self._extra_headers = _tracking_headers(user_id, model)
        self._client = client or _shared_client("anthropic")

    async def _complete(self, prompt: str) -> str:
        message = await self._client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            extra_headers=self._extra_headers,
        )
        texts = [block.text for block in message.content if getattr(block, "type", "text") == "text"]
        if not texts or not texts[0]:
            raise ExternalCapabilityError("No response from AI service")
        return texts[0]

    async def classify(self, prompt: str) -> str:
        return await retry_async_call(self._complete, prompt, max_attempts=self.max_attempts)


def create_capability(
    provider: str = "openai",
    **kwargs,
) -> ClassificationCapability:
    """
    Build the capability for a provider name.

    Args:
        provider: "openai" or "anthropic"
        **kwargs: Passed to the capability constructor

    Raises:
        ValueError: Unknown provider, or the provider's API key is missing
    """
    if provider.lower() == "openai":
        return OpenAIClassificationCapability(**kwargs)
    elif provider.lower() == "anthropic":
        return AnthropicClassificationCapability(**kwargs)
    raise ValueError(f"Unknown LLM provider: {provider}. Use 'openai' or 'anthropic'.")
