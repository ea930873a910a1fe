"""
Pydantic data models for the CultureSense LLM Orchestrator.

Includes:
- Enums (ProviderName, MessageRole, AttemptOutcome, InsightKind)
- LLM models (Message, ProviderConfig)
- Insight models (PersonalityAnalysis, TrendForecast, etc.) with typed defaults
"""

from culturesense_llm.models.enums import (
    AttemptOutcome,
    InsightKind,
    MessageRole,
    ProviderName,
)
from culturesense_llm.models.llm_models import Message, ProviderConfig
from culturesense_llm.models.insight_models import (
    CompatibilityReport,
    ContentAnalysis,
    CulturalJourney,
    InsightModel,
    PersonalityAnalysis,
    RecommendationSet,
    TrendForecast,
)

__all__ = [
    # Enums
    "AttemptOutcome",
    "InsightKind",
    "MessageRole",
    "ProviderName",
    # LLM models
    "Message",
    "ProviderConfig",
    # Insight models
    "InsightModel",
    "PersonalityAnalysis",
    "TrendForecast",
    "RecommendationSet",
    "CompatibilityReport",
    "CulturalJourney",
    "ContentAnalysis",
]
