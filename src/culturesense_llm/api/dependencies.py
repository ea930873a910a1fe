"""
FastAPI dependency injection for the orchestrator.

Provides singleton instances of the shared, immutable components. Tests
replace them through ``app.dependency_overrides``.
"""

from functools import lru_cache
from pathlib import Path

from culturesense_llm.chat.assistant import ChatAssistant
from culturesense_llm.config import Settings, settings
from culturesense_llm.dispatch.hybrid import HybridDispatcher
from culturesense_llm.insights.prompt_builder import PromptBuilder
from culturesense_llm.insights.service import InsightService
from culturesense_llm.validation.response_validator import ResponseValidator


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.
    
    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_dispatcher() -> HybridDispatcher:
    """
    Get singleton hybrid dispatcher.
    
    Provider configs are built once here and never mutated; the dispatcher
    holds no per-request state, so sharing it is safe.
    """
    return HybridDispatcher.from_settings(get_settings())


@lru_cache()
def get_validator() -> ResponseValidator:
    return ResponseValidator(excerpt_limit=get_settings().RAW_EXCERPT_LIMIT)


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """
    Get singleton prompt builder.
    
    Loads Jinja2 templates once and reuses them across requests.
    """
    templates_dir = get_settings().PROMPT_TEMPLATES_DIR
    return PromptBuilder(Path(templates_dir) if templates_dir else None)


@lru_cache()
def get_insight_service() -> InsightService:
    return InsightService(
        dispatcher=get_dispatcher(),
        validator=get_validator(),
        prompt_builder=get_prompt_builder(),
    )


@lru_cache()
def get_chat_assistant() -> ChatAssistant:
    return ChatAssistant(
        dispatcher=get_dispatcher(),
        history_window=get_settings().CHAT_HISTORY_WINDOW,
    )
