"""
Provider adapter for OpenAI-compatible chat-completion endpoints.

One adapter instance per ProviderConfig. Each ``call`` performs exactly one
HTTP attempt against one model and classifies the failure so the retry
policy can decide what to do next. Retrying is NOT done here.
"""

from typing import Any, Optional, Sequence

import httpx
import structlog

from culturesense_llm.llm.exceptions import (
    AuthError,
    EmptyCompletionError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    TransientProviderError,
)
from culturesense_llm.llm.vendors import VendorProfile
from culturesense_llm.models.llm_models import Message, ProviderConfig


logger = structlog.get_logger(__name__)

AUTH_STATUS_CODES = frozenset({401, 403})


class ProviderAdapter:
    """
    Single-attempt client for one vendor's ``/chat/completions`` endpoint.
    
    Request:
        POST {base_url}/chat/completions
        Authorization: Bearer <key>
        {"model": ..., "messages": [...], "max_tokens": ..., "temperature": ...,
         "stream": false}
    
    Response:
        {"choices": [{"message": {"content": "..."}}], ...}
    
    The adapter holds no mutable state. Every call opens and closes its own
    ``httpx.AsyncClient``; nothing is pooled between requests.
    """
    
    def __init__(
        self,
        config: ProviderConfig,
        profile: Optional[VendorProfile] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize adapter.
        
        Args:
            config: Immutable provider configuration
            profile: Vendor quirks (default: none)
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.config = config
        self.profile = profile or VendorProfile()
        self._transport = transport
    
    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/chat/completions"
    
    def build_payload(self, model: str, messages: Sequence[Message]) -> dict[str, Any]:
        payload = {
            "model": model,
            "messages": [message.model_dump() for message in messages],
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "stream": False,
        }
        return self.profile.shape_payload(payload)
    
    def build_headers(self) -> dict[str, str]:
        headers = {
            "Authorization": self.config.auth_header,
            "Content-Type": "application/json",
        }
        headers.update(self.profile.headers())
        return headers
    
    async def call(
        self,
        model: str,
        messages: Sequence[Message],
        timeout: Optional[float] = None,
    ) -> str:
        """
        Perform one completion attempt.
        
        Args:
            model: Model identifier sent upstream
            messages: Ordered conversation
            timeout: Per-attempt timeout in seconds (defaults to the config's)
        
        Returns:
            Completion text (non-empty)
        
        Raises:
            AuthError: Credential missing or rejected (401/403)
            TransientProviderError: 429, 5xx, other non-2xx, timeout,
                connection failure, or a 2xx without completion text
        """
        provider = self.config.name.value
        timeout = timeout if timeout is not None else self.config.per_attempt_timeout
        
        if not self.config.is_configured:
            raise AuthError(
                f"{provider} API key is not configured",
                details={"provider": provider, "model": model},
            )
        
        logger.debug(
            "Sending completion request",
            provider=provider,
            model=model,
            message_count=len(messages),
            timeout=timeout,
        )
        
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(timeout),
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.endpoint,
                    json=self.build_payload(model, messages),
                    headers=self.build_headers(),
                )
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                f"Request timeout after {timeout}s",
                details={"provider": provider, "model": model, "timeout": timeout},
            ) from e
        except httpx.RequestError as e:
            # Connection failures and undecodable bodies alike
            raise TransientProviderError(
                f"Network error: {e}",
                details={"provider": provider, "model": model, "error_type": type(e).__name__},
            ) from e
        
        status_code = response.status_code
        
        if status_code in AUTH_STATUS_CODES:
            raise AuthError(
                f"{provider} rejected credentials: {status_code}",
                status_code=status_code,
                details={"provider": provider, "model": model, "error": response.text[:500]},
            )
        
        if status_code == 429:
            raise ProviderRateLimitError(
                f"{provider} rate limited the request",
                status_code=status_code,
                details={"provider": provider, "model": model},
            )
        
        if not response.is_success:
            # 5xx and unexpected 4xx (e.g. 404 for a retired model) both
            # move the policy forward to the next model.
            raise TransientProviderError(
                f"{provider} API error: {status_code}",
                status_code=status_code,
                details={"provider": provider, "model": model, "error": response.text[:500]},
            )
        
        try:
            data = response.json()
        except ValueError as e:
            raise TransientProviderError(
                f"Invalid JSON response from {provider}",
                status_code=status_code,
                details={"provider": provider, "model": model, "parse_error": str(e)},
            ) from e
        
        content = extract_completion_text(data)
        if not content:
            raise EmptyCompletionError(
                f"Empty response from {provider} API",
                status_code=status_code,
                details={"provider": provider, "model": model},
            )
        
        return content
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"provider={self.config.name.value}, "
            f"base_url={self.config.base_url})"
        )


def extract_completion_text(data: Any) -> Optional[str]:
    """Return ``choices[0].message.content`` or None when absent/malformed."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
