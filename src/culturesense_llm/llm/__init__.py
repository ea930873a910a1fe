"""
Provider layer: one HTTP attempt against one vendor and one model.

Components:
- ProviderAdapter: Single-attempt client for OpenAI-compatible endpoints
- build_provider_configs: Immutable per-vendor configuration
- VendorProfile: Per-vendor request quirks (OpenRouter X-Title)
- exceptions: AuthError / TransientProviderError taxonomy
"""

from culturesense_llm.llm.provider_adapter import ProviderAdapter
from culturesense_llm.llm.providers import build_provider_configs
from culturesense_llm.llm.vendors import OpenRouterProfile, VendorProfile, build_vendor_profiles
from culturesense_llm.llm.exceptions import (
    AuthError,
    EmptyCompletionError,
    LLMProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    TransientProviderError,
)

__all__ = [
    "ProviderAdapter",
    "build_provider_configs",
    "VendorProfile",
    "OpenRouterProfile",
    "build_vendor_profiles",
    "LLMProviderError",
    "AuthError",
    "TransientProviderError",
    "ProviderTimeoutError",
    "ProviderRateLimitError",
    "EmptyCompletionError",
]
