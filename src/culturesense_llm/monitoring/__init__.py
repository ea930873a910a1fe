"""
Monitoring and observability components.

- metrics.py: Prometheus metrics definitions
"""

from culturesense_llm.monitoring.metrics import (
    dispatch_total,
    llm_attempt_latency_seconds,
    llm_attempts_total,
    provider_exhausted_total,
    response_parse_total,
)

__all__ = [
    "llm_attempts_total",
    "llm_attempt_latency_seconds",
    "provider_exhausted_total",
    "dispatch_total",
    "response_parse_total",
]
