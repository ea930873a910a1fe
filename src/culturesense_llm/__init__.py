"""
CultureSense LLM Orchestrator.

Turns an ordered list of chat messages into a usable completion despite
unreliable upstream LLM vendors:
- Per-provider retry policy (primary model, fallback model, linear backoff)
- Hybrid dispatch across two OpenAI-compatible providers
- Tolerant JSON recovery with typed fallback values

Architecture: FastAPI surface + httpx provider adapter + retry/dispatch core
"""

__version__ = "0.1.0"
