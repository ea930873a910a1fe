"""
Retry and dispatch exceptions.

ProviderExhaustedError stays inside the dispatcher; only
ServiceUnavailableError crosses the component boundary.
"""

from typing import Optional, Sequence

from culturesense_llm.models.enums import ProviderName
from culturesense_llm.retry.metadata import AttemptRecord


class ProviderExhaustedError(Exception):
    """
    Raised when one provider's retry policy ends without success.
    
    Attributes:
        provider: Provider whose policy was exhausted
        attempts: Every AttemptRecord collected for the provider
    """
    
    def __init__(self, provider: ProviderName, attempts: Sequence[AttemptRecord]) -> None:
        self.provider = provider
        self.attempts = tuple(attempts)
        super().__init__(
            f"{provider.value} exhausted after {self.attempt_count} attempts. "
            f"Last error: {self.last_error}"
        )
    
    @property
    def attempt_count(self) -> int:
        return len(self.attempts)
    
    @property
    def last_error(self) -> Optional[str]:
        if not self.attempts:
            return None
        return self.attempts[-1].error_detail


class ServiceUnavailableError(Exception):
    """
    Raised when every provider has been exhausted.
    
    Carries the per-provider failures (not just the last error) so operators
    can tell "vendor A is down" from "vendors A and B are both down".
    
    Attributes:
        failures: One ProviderExhaustedError per provider, in the order tried
    """
    
    def __init__(self, failures: Sequence[ProviderExhaustedError]) -> None:
        self.failures = tuple(failures)
        super().__init__(
            "All AI services are currently unavailable. "
            + "; ".join(
                f"{f.provider.value}: {f.attempt_count} attempts, last error: {f.last_error}"
                for f in self.failures
            )
        )
    
    @property
    def attempts(self) -> tuple[AttemptRecord, ...]:
        """All attempts across providers, chronological."""
        return tuple(record for failure in self.failures for record in failure.attempts)
    
    @property
    def total_attempts(self) -> int:
        return len(self.attempts)
    
    def summary(self) -> list[dict]:
        """Per-provider attempt count and last error, for logs and responses."""
        return [
            {
                "provider": failure.provider.value,
                "attempts": failure.attempt_count,
                "last_error": failure.last_error,
            }
            for failure in self.failures
        ]
