"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests:
settings, provider configs, a sample conversation, a recording backoff sleep
and a factory for scripted upstream transports.
"""

from typing import Any, Callable, Iterable

import pytest

from culturesense_llm.config import Settings
from culturesense_llm.llm.providers import build_provider_configs
from culturesense_llm.models.enums import MessageRole, ProviderName
from culturesense_llm.models.llm_models import Message, ProviderConfig

from tests.helpers import RecordingSleep, ScriptedUpstream

OPENROUTER_HOST = "openrouter.test"
TOGETHER_HOST = "together.test"


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_RETRIES_PER_MODEL = 1
    """
    return Settings(
        # === Application ===
        APP_NAME="CultureSense LLM Orchestrator (Test)",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Providers ===
        OPENROUTER_API_KEY="or-test-key",
        OPENROUTER_BASE_URL=f"https://{OPENROUTER_HOST}/api/v1",
        OPENROUTER_PRIMARY_MODEL="or-primary",
        OPENROUTER_DEFAULT_MODEL="or-fallback",
        TOGETHER_API_KEY="tg-test-key",
        TOGETHER_BASE_URL=f"https://{TOGETHER_HOST}/v1",
        TOGETHER_PRIMARY_MODEL="tg-primary",
        TOGETHER_DEFAULT_MODEL="tg-fallback",
        DEFAULT_PROVIDER="openrouter",

        # === Retry ===
        LLM_TIMEOUT=5.0,
        MAX_RETRIES_PER_MODEL=2,
        RETRY_BACKOFF_UNIT=2.0,

        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def provider_configs(test_settings: Settings):
    """Immutable provider configs built from test settings."""
    return build_provider_configs(test_settings)


@pytest.fixture
def openrouter_config(provider_configs) -> ProviderConfig:
    return provider_configs[ProviderName.OPENROUTER]


@pytest.fixture
def together_config(provider_configs) -> ProviderConfig:
    return provider_configs[ProviderName.TOGETHER]


@pytest.fixture
def messages() -> list[Message]:
    """Short ordered conversation."""
    return [
        Message(role=MessageRole.SYSTEM, content="You are CultureSense AI."),
        Message(role=MessageRole.USER, content="Recommend a jazz album."),
        Message(role=MessageRole.ASSISTANT, content="Try Kind of Blue."),
        Message(role=MessageRole.USER, content="Something more recent?"),
    ]


@pytest.fixture
def fake_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def scripted_upstream() -> Callable[..., ScriptedUpstream]:
    """Factory fixture: scripted_upstream(openrouter=[...], together=[...])."""
    def _create(openrouter: Iterable[Any] = (), together: Iterable[Any] = ()) -> ScriptedUpstream:
        return ScriptedUpstream({OPENROUTER_HOST: openrouter, TOGETHER_HOST: together})

    return _create
