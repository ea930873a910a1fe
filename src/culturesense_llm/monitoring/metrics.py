"""Custom Prometheus metrics for the CultureSense LLM Orchestrator.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- provider_exhausted_total (a vendor is failing every model)
- dispatch_total with served_by="none" (both vendors down)
- response_parse_total with result="fallback" (model output drifting from JSON)
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

llm_attempts_total = Counter(
    "llm_attempts_total",
    "Total provider attempts by provider, model and outcome",
    ["provider", "model", "outcome"],
)
"""
Attempt counter.

Labels:
- provider: openrouter, together
- model: model identifier sent upstream
- outcome: success, transient_error, fatal_error
"""

llm_attempt_latency_seconds = Histogram(
    "llm_attempt_latency_seconds",
    "Latency of a single provider attempt in seconds",
    ["provider", "outcome"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 30.0, 60.0],
)
"""
Per-attempt latency histogram.

Buckets stop at 60s; attempts are bounded by the per-attempt timeout.
"""

# === Dispatch Metrics ===

provider_exhausted_total = Counter(
    "provider_exhausted_total",
    "Retry policies that ended without success, by provider",
    ["provider"],
)

dispatch_total = Counter(
    "dispatch_total",
    "Dispatches by preferred provider and provider that served the response",
    ["preferred", "served_by"],
)
"""
Dispatch counter.

Labels:
- preferred: provider requested by the caller
- served_by: provider that answered, or "none" when both were exhausted

Alert thresholds:
- WARN: served_by != preferred for > 10% of dispatches
- CRITICAL: any served_by="none"
"""

# === Parse Metrics ===

response_parse_total = Counter(
    "response_parse_total",
    "Structured output recovery by result",
    ["result"],
)
"""
Parse counter.

Labels:
- result: direct (whole text was JSON), fence (recovered from a markdown
  fence), fallback (nothing recovered, caller default substituted),
  schema_mismatch (JSON recovered but rejected by the typed default)

Each parse is counted exactly once. With parse_model, direct and fence are
only counted after the value validated.
"""
