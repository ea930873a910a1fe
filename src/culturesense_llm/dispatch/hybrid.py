"""
Hybrid dispatch across providers.

Runs the retry policy of the preferred provider and, only if that provider
is fully exhausted, the retry policy of the alternate provider. At most two
providers are tried per request and never concurrently.
"""

import asyncio
import time
from typing import Any, Mapping, Optional, Sequence, Union

import httpx
import structlog

from culturesense_llm.config import Settings
from culturesense_llm.llm.provider_adapter import ProviderAdapter
from culturesense_llm.llm.providers import build_provider_configs
from culturesense_llm.llm.vendors import VendorProfile, build_vendor_profiles
from culturesense_llm.models.enums import ProviderName
from culturesense_llm.models.llm_models import Message, ProviderConfig
from culturesense_llm.monitoring.metrics import dispatch_total
from culturesense_llm.retry.exceptions import (
    ProviderExhaustedError,
    ServiceUnavailableError,
)
from culturesense_llm.retry.metadata import CompletionOutcome
from culturesense_llm.retry.policy import Clock, RetryPolicy, Sleep

logger = structlog.get_logger(__name__)

MAX_PROVIDERS_PER_REQUEST = 2

MessageLike = Union[Message, Mapping[str, Any]]


class HybridDispatcher:
    """
    Cross-provider failover on top of per-provider retry policies.
    
    Holds only immutable configuration and stateless policies, so one
    instance is shared by all concurrent requests.
    
    Attributes:
        policies: Retry policy per configured provider
        default_provider: Provider preferred when the caller names none
    """
    
    def __init__(
        self,
        configs: Mapping[ProviderName, ProviderConfig],
        default_provider: Union[ProviderName, str] = ProviderName.OPENROUTER,
        profiles: Optional[Mapping[ProviderName, VendorProfile]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.perf_counter,
    ):
        """
        Initialize dispatcher.
        
        Args:
            configs: Provider configurations, one per vendor
            default_provider: Preferred provider when none is given per call
            profiles: Vendor quirks per provider (default: none)
            transport: Optional httpx transport shared by all adapters
            sleep: Backoff sleep passed to every retry policy
            clock: Monotonic clock passed to every retry policy
        """
        if not configs:
            raise ValueError("At least one provider must be configured")
        
        profiles = profiles or {}
        self.policies: dict[ProviderName, RetryPolicy] = {
            name: RetryPolicy(
                ProviderAdapter(config, profile=profiles.get(name), transport=transport),
                sleep=sleep,
                clock=clock,
            )
            for name, config in configs.items()
        }
        self.default_provider = self.resolve_provider(default_provider)
        
        logger.info(
            "HybridDispatcher initialized",
            providers=[name.value for name in self.policies],
            default_provider=self.default_provider.value,
        )
    
    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> "HybridDispatcher":
        return cls(
            build_provider_configs(settings),
            default_provider=settings.DEFAULT_PROVIDER,
            profiles=build_vendor_profiles(settings),
            transport=transport,
            sleep=sleep,
        )
    
    def resolve_provider(self, provider: Union[ProviderName, str, None]) -> ProviderName:
        """
        Normalize a provider name.
        
        Raises:
            ValueError: Unknown or unconfigured provider
        """
        if provider is None:
            return self.default_provider
        try:
            name = ProviderName(provider)
        except ValueError:
            raise ValueError(f"Unknown provider: {provider!r}") from None
        if name not in self.policies:
            raise ValueError(f"Provider not configured: {name.value}")
        return name
    
    def provider_order(self, preferred: Union[ProviderName, str, None] = None) -> list[ProviderName]:
        """Preferred provider first, then the alternate (at most two)."""
        first = self.resolve_provider(preferred)
        others = [name for name in self.policies if name is not first]
        return ([first] + others)[:MAX_PROVIDERS_PER_REQUEST]
    
    async def dispatch(
        self,
        messages: Sequence[MessageLike],
        preferred_provider: Union[ProviderName, str, None] = None,
    ) -> CompletionOutcome:
        """
        Obtain a completion, failing over to the alternate provider once.
        
        Args:
            messages: Ordered conversation (Message objects or role/content dicts)
            preferred_provider: Provider to try first (default: configured default)
        
        Returns:
            CompletionOutcome whose ``attempts`` span every provider tried
        
        Raises:
            ValueError: Empty conversation or unknown provider
            ServiceUnavailableError: Every provider exhausted
        """
        conversation = normalize_messages(messages)
        order = self.provider_order(preferred_provider)
        preferred = order[0]
        failures: list[ProviderExhaustedError] = []
        
        # TODO: enforce an overall deadline spanning both providers; today only
        # the per-attempt timeout bounds a request.
        for name in order:
            if failures:
                logger.warning(
                    "Failing over to alternate provider",
                    preferred=preferred.value,
                    alternate=name.value,
                )
            try:
                outcome = await self.policies[name].run(conversation)
            except ProviderExhaustedError as e:
                failures.append(e)
                continue
            
            dispatch_total.labels(preferred=preferred.value, served_by=name.value).inc()
            if not failures:
                return outcome
            return CompletionOutcome(
                raw_text=outcome.raw_text,
                provider=outcome.provider,
                model=outcome.model,
                attempts=tuple(r for f in failures for r in f.attempts) + outcome.attempts,
            )
        
        dispatch_total.labels(preferred=preferred.value, served_by="none").inc()
        error = ServiceUnavailableError(failures)
        logger.error(
            "All providers exhausted",
            preferred=preferred.value,
            total_attempts=error.total_attempts,
            failures=error.summary(),
        )
        raise error
    
    async def complete(
        self,
        messages: Sequence[MessageLike],
        preferred_provider: Union[ProviderName, str, None] = None,
    ) -> str:
        """
        Obtain completion text.
        
        Same decision logic as ``dispatch``; returns only the raw text.
        
        Raises:
            ServiceUnavailableError: Every provider exhausted
        """
        outcome = await self.dispatch(messages, preferred_provider)
        return outcome.raw_text
    
    def available_models(self) -> dict[str, dict[str, Any]]:
        """Models and credential presence per provider."""
        return {
            name.value: {
                "available": policy.config.is_configured,
                "models": {
                    "primary": policy.config.primary_model,
                    "fallback": policy.config.fallback_model,
                },
            }
            for name, policy in self.policies.items()
        }


def normalize_messages(messages: Sequence[MessageLike]) -> list[Message]:
    """
    Coerce messages into Message models, preserving order.
    
    Raises:
        ValueError: Empty conversation or malformed message
    """
    if not messages:
        raise ValueError("At least one message is required")
    return [
        message if isinstance(message, Message) else Message.model_validate(message)
        for message in messages
    ]
