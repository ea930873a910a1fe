"""
Custom exceptions for the provider layer.

The retry policy distinguishes exactly two failure families:
- AuthError: the credential was rejected; never retried on that provider
- TransientProviderError: anything that may succeed on a later attempt
"""

from typing import Optional


class LLMProviderError(Exception):
    """
    Base exception for all provider errors.
    
    All provider-specific exceptions inherit from this to allow catching
    any upstream failure with a single except clause.
    """
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class AuthError(LLMProviderError):
    """
    Raised when the provider rejects the credential (HTTP 401/403) or no
    credential is configured.
    
    Fatal for the provider: the retry policy stops immediately.
    """
    pass


class TransientProviderError(LLMProviderError):
    """
    Raised for failures that may clear up on retry.
    
    Includes rate limiting, 5xx, timeouts, connection failures and
    2xx responses without a usable completion.
    """
    pass


class ProviderTimeoutError(TransientProviderError):
    """Raised when an attempt exceeds the per-attempt timeout."""
    pass


class ProviderRateLimitError(TransientProviderError):
    """Raised on HTTP 429."""
    pass


class EmptyCompletionError(TransientProviderError):
    """
    Raised when the provider answers 2xx without completion text.
    
    Treated as a transient anomaly, so the policy moves on to the next model.
    """
    pass
