"""
Per-provider retry policy.

Drives one provider through primary model, fallback model, then bounded
linear-backoff retries on the fallback model. Attempts are strictly
sequential and every attempt is recorded for diagnostics.

Main Components:
    - RetryPolicy: State machine for one provider
    - plan_attempts: The ordered (model, delay) plan for a provider
    - AttemptRecord: Immutable record of one attempt
    - CompletionOutcome: Successful completion with provenance
    - ProviderExhaustedError: One provider failed every planned attempt
    - ServiceUnavailableError: Every provider failed

Usage:
    >>> from culturesense_llm.retry import RetryPolicy
    >>> policy = RetryPolicy(adapter)
    >>> outcome = await policy.run(messages)
"""

from culturesense_llm.retry.exceptions import (
    ProviderExhaustedError,
    ServiceUnavailableError,
)
from culturesense_llm.retry.metadata import AttemptRecord, CompletionOutcome
from culturesense_llm.retry.policy import PlannedAttempt, RetryPolicy, plan_attempts

__all__ = [
    "RetryPolicy",
    "PlannedAttempt",
    "plan_attempts",
    "AttemptRecord",
    "CompletionOutcome",
    "ProviderExhaustedError",
    "ServiceUnavailableError",
]
