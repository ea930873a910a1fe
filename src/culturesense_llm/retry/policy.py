"""
Per-provider retry policy.

Drives one provider through a bounded, strictly sequential attempt plan:

    TryPrimary -> TryFallback -> Backoff(1..N) -> Exhausted | Done

1. **TryPrimary**: the provider's flagship model
2. **TryFallback**: the provider's cheaper sibling, exactly once
3. **Backoff(n)**: sleep ``n * backoff_unit`` then retry the fallback model
4. **Exhausted**: raise ProviderExhaustedError with every attempt record

An AuthError at any point jumps straight to Exhausted.

Usage:
    policy = RetryPolicy(ProviderAdapter(config))
    outcome = await policy.run(messages)
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

import structlog

from culturesense_llm.llm.exceptions import AuthError, LLMProviderError
from culturesense_llm.llm.provider_adapter import ProviderAdapter
from culturesense_llm.models.enums import AttemptOutcome
from culturesense_llm.models.llm_models import Message, ProviderConfig
from culturesense_llm.monitoring.metrics import (
    llm_attempt_latency_seconds,
    llm_attempts_total,
    provider_exhausted_total,
)
from culturesense_llm.retry.exceptions import ProviderExhaustedError
from culturesense_llm.retry.metadata import AttemptRecord, CompletionOutcome

logger = structlog.get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]


@dataclass(frozen=True)
class PlannedAttempt:
    """One step of the attempt plan."""
    
    state: str  # "primary", "fallback" or "backoff"
    model: str
    delay: float  # seconds to sleep before the attempt


def plan_attempts(config: ProviderConfig) -> list[PlannedAttempt]:
    """
    Build the ordered attempt plan for a provider.
    
    Backoff is linear: the n-th retry waits ``n * backoff_unit`` seconds and
    re-uses the fallback model (the model last attempted).
    """
    plan = [
        PlannedAttempt(state="primary", model=config.primary_model, delay=0.0),
        PlannedAttempt(state="fallback", model=config.fallback_model, delay=0.0),
    ]
    for n in range(1, config.max_retries_per_model + 1):
        plan.append(
            PlannedAttempt(
                state="backoff",
                model=config.fallback_model,
                delay=n * config.backoff_unit,
            )
        )
    return plan


class RetryPolicy:
    """
    Retry state machine for a single provider.
    
    Attributes:
        adapter: Provider adapter performing the HTTP attempts
        config: The adapter's immutable provider configuration
    """
    
    def __init__(
        self,
        adapter: ProviderAdapter,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.perf_counter,
    ):
        """
        Initialize retry policy.
        
        Args:
            adapter: Provider adapter
            sleep: Awaitable sleep used for backoff (inject a fake in tests)
            clock: Monotonic clock in seconds used for attempt latency
        """
        self.adapter = adapter
        self.config = adapter.config
        self._sleep = sleep
        self._clock = clock
    
    async def run(self, messages: Sequence[Message]) -> CompletionOutcome:
        """
        Execute the attempt plan until one attempt succeeds.
        
        Args:
            messages: Ordered conversation
        
        Returns:
            CompletionOutcome with this provider's attempt records
        
        Raises:
            ProviderExhaustedError: Plan exhausted or credential rejected
        """
        provider = self.config.name
        attempts: list[AttemptRecord] = []
        
        for attempt_index, step in enumerate(plan_attempts(self.config), start=1):
            if step.delay > 0:
                logger.info(
                    "Backing off before retry",
                    provider=provider.value,
                    model=step.model,
                    delay_seconds=step.delay,
                    next_attempt=attempt_index,
                )
                await self._sleep(step.delay)
            
            started = self._clock()
            try:
                text = await self.adapter.call(
                    step.model, messages, self.config.per_attempt_timeout
                )
            except AuthError as e:
                attempts.append(
                    self._record(step, attempt_index, started, AttemptOutcome.FATAL_ERROR, e)
                )
                logger.error(
                    "Provider rejected credentials, abandoning provider",
                    provider=provider.value,
                    model=step.model,
                    attempt=attempt_index,
                    status_code=e.status_code,
                )
                break
            except LLMProviderError as e:
                attempts.append(
                    self._record(step, attempt_index, started, AttemptOutcome.TRANSIENT_ERROR, e)
                )
                logger.warning(
                    "Provider attempt failed",
                    provider=provider.value,
                    model=step.model,
                    state=step.state,
                    attempt=attempt_index,
                    error_type=type(e).__name__,
                    error=e.message,
                    status_code=e.status_code,
                )
                continue
            
            attempts.append(
                self._record(step, attempt_index, started, AttemptOutcome.SUCCESS)
            )
            logger.info(
                "Provider attempt succeeded",
                provider=provider.value,
                model=step.model,
                state=step.state,
                attempt=attempt_index,
                latency_ms=attempts[-1].latency_ms,
            )
            return CompletionOutcome(
                raw_text=text,
                provider=provider,
                model=step.model,
                attempts=tuple(attempts),
            )
        
        provider_exhausted_total.labels(provider=provider.value).inc()
        logger.warning(
            "Provider exhausted",
            provider=provider.value,
            attempts=len(attempts),
            last_error=attempts[-1].error_detail if attempts else None,
        )
        raise ProviderExhaustedError(provider, attempts)
    
    def _record(
        self,
        step: PlannedAttempt,
        attempt_index: int,
        started: float,
        outcome: AttemptOutcome,
        error: LLMProviderError | None = None,
    ) -> AttemptRecord:
        elapsed = max(0.0, self._clock() - started)
        provider = self.config.name.value
        
        llm_attempts_total.labels(
            provider=provider, model=step.model, outcome=outcome.value
        ).inc()
        llm_attempt_latency_seconds.labels(
            provider=provider, outcome=outcome.value
        ).observe(elapsed)
        
        return AttemptRecord(
            provider=self.config.name,
            model=step.model,
            attempt_index=attempt_index,
            outcome=outcome,
            latency_ms=int(elapsed * 1000),
            error_detail=error.message if error else None,
            status_code=error.status_code if error else None,
        )
