"""
Configuration settings for the CultureSense LLM Orchestrator.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development. Settings are read once at process start
and treated as immutable thereafter.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "CultureSense LLM Orchestrator"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    CORS_ALLOW_ORIGINS: list[str] = ["*"]  # JSON list in env, e.g. ["https://app.example"]
    
    # === OpenRouter ===
    OPENROUTER_API_KEY: str = ""
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_PRIMARY_MODEL: str = "anthropic/claude-3.5-sonnet"
    OPENROUTER_DEFAULT_MODEL: str = "moonshotai/kimi-k2:free"  # Fallback model
    OPENROUTER_APP_TITLE: str = "CultureSense AI"  # Sent as X-Title
    
    # === Together AI ===
    TOGETHER_API_KEY: str = ""
    TOGETHER_BASE_URL: str = "https://api.together.xyz/v1"
    TOGETHER_PRIMARY_MODEL: str = "meta-llama/Llama-3-70b-chat-hf"
    TOGETHER_DEFAULT_MODEL: str = "Qwen/Qwen3-Coder-480B-A35B-Instruct-FP8"  # Fallback model
    
    # === Dispatch ===
    DEFAULT_PROVIDER: str = "openrouter"
    
    # === LLM Generation Parameters ===
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 2000
    LLM_TIMEOUT: float = 30.0  # seconds, per attempt
    
    # === Retry & Fallback ===
    MAX_RETRIES_PER_MODEL: int = 2  # Backoff retries after the fallback model fails once
    RETRY_BACKOFF_UNIT: float = 2.0  # Linear backoff: n * unit seconds
    
    # === Validation ===
    RAW_EXCERPT_LIMIT: int = 500  # chars of unparseable output kept for diagnostics
    PROMPT_TEMPLATES_DIR: Optional[str] = None  # None = bundled templates
    
    # === Chat ===
    CHAT_HISTORY_WINDOW: int = 8  # Most recent history messages forwarded
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
