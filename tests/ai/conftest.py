"""Fixtures for the AI client, retry and capability tests."""
from unittest.mock import patch

import pytest

from factories import (
    create_anthropic_status_error,
    create_openai_connection_error,
    create_openai_status_error,
)
from workout_tracker_api.services import classification_capability


@pytest.fixture
def ai_settings():
    """Settings seen by the client factory: both provider keys, Helicone off."""
    with patch("workout_tracker_api.ai.client_factory.settings") as mock:
        mock.OPENAI_API_KEY = "sk-test-openai"
        mock.ANTHROPIC_API_KEY = "sk-test-anthropic"
        mock.HELICONE_ENABLED = False
        mock.HELICONE_API_KEY = None
        mock.ENVIRONMENT = "development"
        yield mock


@pytest.fixture
def helicone_settings(ai_settings):
    """ai_settings with the Helicone proxy switched on."""
    ai_settings.HELICONE_ENABLED = True
    ai_settings.HELICONE_API_KEY = "sk-test-helicone"
    ai_settings.ENVIRONMENT = "staging"
    return ai_settings


@pytest.fixture(autouse=True)
def fresh_client_cache(monkeypatch):
    """Each test starts without cached provider clients."""
    monkeypatch.setattr(classification_capability, "_shared_clients", {})


# Provider errors, built from the SDK exception classes


@pytest.fixture
def rate_limit_error():
    return create_openai_status_error(429, "Rate limit reached for requests")


@pytest.fixture
def server_error_503():
    return create_openai_status_error(503, "Service temporarily unavailable")


@pytest.fixture
def overloaded_error():
    return create_anthropic_status_error(529, "Overloaded")


@pytest.fixture
def connection_error():
    return create_openai_connection_error()


@pytest.fixture
def auth_error():
    return create_openai_status_error(401, "Invalid API key provided")
