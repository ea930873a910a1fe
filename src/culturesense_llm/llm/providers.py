"""
Provider registry.

Builds the immutable ProviderConfig set once from settings. The result is
shared read-only by every concurrent request.
"""

from types import MappingProxyType
from typing import Mapping

from culturesense_llm.config import Settings
from culturesense_llm.models.enums import ProviderName
from culturesense_llm.models.llm_models import ProviderConfig


def build_provider_configs(settings: Settings) -> Mapping[ProviderName, ProviderConfig]:
    """
    Build one ProviderConfig per vendor.
    
    Args:
        settings: Application settings
    
    Returns:
        Read-only mapping of provider name to config
    """
    shared = dict(
        max_retries_per_model=settings.MAX_RETRIES_PER_MODEL,
        per_attempt_timeout=settings.LLM_TIMEOUT,
        backoff_unit=settings.RETRY_BACKOFF_UNIT,
        max_tokens=settings.LLM_MAX_TOKENS,
        temperature=settings.LLM_TEMPERATURE,
    )
    configs = {
        ProviderName.OPENROUTER: ProviderConfig(
            name=ProviderName.OPENROUTER,
            base_url=settings.OPENROUTER_BASE_URL,
            api_key=settings.OPENROUTER_API_KEY,
            primary_model=settings.OPENROUTER_PRIMARY_MODEL,
            fallback_model=settings.OPENROUTER_DEFAULT_MODEL,
            **shared,
        ),
        ProviderName.TOGETHER: ProviderConfig(
            name=ProviderName.TOGETHER,
            base_url=settings.TOGETHER_BASE_URL,
            api_key=settings.TOGETHER_API_KEY,
            primary_model=settings.TOGETHER_PRIMARY_MODEL,
            fallback_model=settings.TOGETHER_DEFAULT_MODEL,
            **shared,
        ),
    }
    return MappingProxyType(configs)
