"""
API-specific request and response models for FastAPI endpoints.

These models wrap the core domain objects (Message, CompletionOutcome,
InsightResult, ChatReply) with API-specific shapes.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from culturesense_llm.models.enums import InsightKind, ProviderName
from culturesense_llm.models.llm_models import Message


class CompletionRequest(BaseModel):
    """Request for a raw completion."""
    
    messages: list[Message] = Field(
        description="Ordered conversation",
        min_length=1,
    )
    preferred_provider: Optional[ProviderName] = Field(
        default=None,
        description="Provider tried first (default: configured default)"
    )


class AttemptInfo(BaseModel):
    """One provider attempt, as reported to clients."""
    
    provider: str
    model: str
    attempt_index: int
    outcome: str
    latency_ms: int
    error_detail: Optional[str] = None
    status_code: Optional[int] = None


class CompletionResponse(BaseModel):
    """Response for the completion endpoint."""
    
    content: str = Field(description="Completion text")
    provider: ProviderName = Field(description="Provider that served the completion")
    model: str = Field(description="Model that served the completion")
    attempts: list[AttemptInfo] = Field(
        default_factory=list,
        description="Every attempt made, chronological"
    )


class ChatMessageRequest(BaseModel):
    """Request for the chat endpoint. The caller owns the history."""
    
    message: str = Field(description="New user message")
    history: list[Message] = Field(
        default_factory=list,
        description="Previous conversation, oldest first"
    )
    preferences: Optional[dict[str, Any]] = Field(
        default=None,
        description="categories, favoriteGenres, culturalTags, moodPreferences"
    )
    context: Optional[dict[str, Any]] = Field(default=None, description="Additional context")


class ChatMessageResponse(BaseModel):
    """Assistant reply."""
    
    content: str
    suggestions: list[str] = Field(default_factory=list)
    degraded: bool = Field(
        default=False,
        description="True when a static reply was used because every provider was down"
    )
    provider: Optional[ProviderName] = None
    model: Optional[str] = None


class InsightRequest(BaseModel):
    """Request for an insight feature."""
    
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Profile/context data embedded in the prompt"
    )
    preferred_provider: Optional[ProviderName] = Field(
        default=None,
        description="Override of the feature's preferred provider"
    )


class InsightResponse(BaseModel):
    """Generated insight."""
    
    kind: InsightKind
    insight: dict[str, Any] = Field(description="Insight payload (camelCase keys)")
    recovered_from_fence: bool
    used_fallback: bool
    provider: Optional[ProviderName] = None
    model: Optional[str] = None
    attempts: int = Field(ge=0)
    generated_at: datetime


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = Field(examples=["healthy", "degraded"])
    services: dict[str, Any] = Field(
        description="Per-provider credential presence and models"
    )
    timestamp: datetime
