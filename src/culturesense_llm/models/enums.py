"""
Enumerations for the orchestrator data models.

All enums are closed sets - no values outside these sets are permitted.
"""

from enum import Enum


class ProviderName(str, Enum):
    """
    Upstream LLM vendors exposing an OpenAI-compatible chat endpoint.
    
    Exactly two are configured; the dispatcher fails over from the
    preferred one to the other.
    """
    
    OPENROUTER = "openrouter"
    TOGETHER = "together"
    
    def other(self) -> "ProviderName":
        """Return the alternate provider."""
        if self is ProviderName.OPENROUTER:
            return ProviderName.TOGETHER
        return ProviderName.OPENROUTER


class MessageRole(str, Enum):
    """Chat message author role."""
    
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class AttemptOutcome(str, Enum):
    """
    Result of a single provider attempt.
    
    FATAL_ERROR ends the provider's retry policy immediately;
    TRANSIENT_ERROR advances it to the next state.
    """
    
    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    FATAL_ERROR = "fatal_error"


class InsightKind(str, Enum):
    """AI-generated cultural insight features."""
    
    PERSONALITY_ANALYSIS = "personality_analysis"
    TREND_PREDICTIONS = "trend_predictions"
    SMART_RECOMMENDATIONS = "smart_recommendations"
    COMPATIBILITY_ANALYSIS = "compatibility_analysis"
    CULTURAL_JOURNEY = "cultural_journey"
    CONTENT_ANALYSIS = "content_analysis"
