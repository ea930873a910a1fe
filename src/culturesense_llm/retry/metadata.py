"""
Attempt tracking.

This module defines the frozen records that capture every provider attempt
for diagnostics, and the outcome handed back on success.
"""

from dataclasses import dataclass, field
from typing import Optional

from culturesense_llm.models.enums import AttemptOutcome, ProviderName


@dataclass(frozen=True)
class AttemptRecord:
    """
    One provider attempt.
    
    Created once per attempt and never mutated. Used for logging,
    metrics and the aggregated ServiceUnavailableError payload.
    
    Attributes:
        provider: Vendor the attempt was sent to
        model: Model identifier sent upstream
        attempt_index: 1-based position within the provider's policy
        outcome: success, transient_error or fatal_error
        latency_ms: Wall time of the attempt (ms)
        error_detail: Error message for failed attempts
        status_code: HTTP status when one was received
    """
    
    provider: ProviderName
    model: str
    attempt_index: int
    outcome: AttemptOutcome
    latency_ms: int
    error_detail: Optional[str] = None
    status_code: Optional[int] = None
    
    def __post_init__(self) -> None:
        if self.attempt_index < 1:
            raise ValueError("attempt_index must be >= 1")
        if self.latency_ms < 0:
            raise ValueError("latency_ms must be >= 0")
    
    @property
    def succeeded(self) -> bool:
        return self.outcome is AttemptOutcome.SUCCESS
    
    def to_dict(self) -> dict:
        return {
            "provider": self.provider.value,
            "model": self.model,
            "attempt_index": self.attempt_index,
            "outcome": self.outcome.value,
            "latency_ms": self.latency_ms,
            "error_detail": self.error_detail,
            "status_code": self.status_code,
        }


@dataclass(frozen=True)
class CompletionOutcome:
    """
    Successful completion with provenance.
    
    Attributes:
        raw_text: Completion text from the winning attempt
        provider: Provider that served the completion
        model: Model that served the completion
        attempts: Every attempt made for this request, across providers,
            in chronological order (the last one is the success)
    """
    
    raw_text: str
    provider: ProviderName
    model: str
    attempts: tuple[AttemptRecord, ...] = field(default_factory=tuple)
    
    @property
    def attempt_count(self) -> int:
        return len(self.attempts)
