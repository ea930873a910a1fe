"""Integration test fixtures.

Builds the real component graph (dispatcher, validator, prompt builder,
services) over a scripted httpx transport and wires it into the FastAPI
app through dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from culturesense_llm.api.dependencies import (
    get_chat_assistant,
    get_dispatcher,
    get_insight_service,
)
from culturesense_llm.chat.assistant import ChatAssistant
from culturesense_llm.dispatch.hybrid import HybridDispatcher
from culturesense_llm.insights.prompt_builder import PromptBuilder
from culturesense_llm.insights.service import InsightService
from culturesense_llm.main import app
from culturesense_llm.validation.response_validator import ResponseValidator


@pytest.fixture
def api_client(test_settings, fake_sleep):
    """
    Factory fixture returning a TestClient bound to a scripted upstream.

    Usage:
        client = api_client(upstream)
    """
    def _create(upstream) -> TestClient:
        dispatcher = HybridDispatcher.from_settings(
            test_settings, transport=upstream.transport, sleep=fake_sleep
        )
        insight_service = InsightService(dispatcher, ResponseValidator(), PromptBuilder())
        assistant = ChatAssistant(dispatcher, history_window=test_settings.CHAT_HISTORY_WINDOW)

        app.dependency_overrides[get_dispatcher] = lambda: dispatcher
        app.dependency_overrides[get_insight_service] = lambda: insight_service
        app.dependency_overrides[get_chat_assistant] = lambda: assistant
        return TestClient(app)

    yield _create
    app.dependency_overrides.clear()
