"""
LLM-specific data models for the request/response cycle.

These models are internal to the provider layer: the ordered conversation
sent upstream and the immutable per-vendor configuration shared by all
concurrent requests.
"""

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from culturesense_llm.models.enums import MessageRole, ProviderName


class Message(BaseModel):
    """
    One chat message.
    
    Message sequences are ordered chronologically and the order is
    preserved end to end.
    """
    model_config = ConfigDict(frozen=True, use_enum_values=True)
    
    role: MessageRole = Field(..., description="Author role: system, user or assistant")
    content: str = Field(..., description="Message text")


class ProviderConfig(BaseModel):
    """
    Immutable configuration for one upstream vendor.
    
    Exactly one instance exists per vendor for the process lifetime.
    """
    model_config = ConfigDict(frozen=True)
    
    name: ProviderName = Field(..., description="Vendor identifier")
    base_url: str = Field(..., description="API base URL (without /chat/completions)")
    api_key: SecretStr = Field(default=SecretStr(""), description="Bearer credential")
    primary_model: str = Field(..., description="Flagship model tried first")
    fallback_model: str = Field(..., description="Model tried after the primary fails")
    max_retries_per_model: int = Field(default=2, ge=0, description="Backoff retries on the fallback model")
    per_attempt_timeout: float = Field(default=30.0, gt=0, description="Timeout per HTTP attempt (seconds)")
    backoff_unit: float = Field(default=2.0, ge=0, description="Linear backoff unit (seconds)")
    max_tokens: int = Field(default=2000, ge=1, description="Maximum output tokens")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    
    @property
    def is_configured(self) -> bool:
        """True when an API key is present."""
        return bool(self.api_key.get_secret_value())
    
    @property
    def auth_header(self) -> str:
        return f"Bearer {self.api_key.get_secret_value()}"
    
    @property
    def max_attempts(self) -> int:
        """Upper bound on attempts: primary + fallback + backoff retries."""
        return 2 + self.max_retries_per_model
