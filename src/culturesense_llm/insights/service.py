"""
Insight service: prompt → hybrid dispatch → typed, fallback-safe result.

Provider outages propagate as ServiceUnavailableError; malformed output
never does - it degrades to the insight's typed default.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

import structlog

from culturesense_llm.dispatch.hybrid import HybridDispatcher
from culturesense_llm.insights.prompt_builder import INSIGHT_SPECS, PromptBuilder
from culturesense_llm.models.enums import InsightKind, ProviderName
from culturesense_llm.models.insight_models import InsightModel
from culturesense_llm.validation.response_validator import ResponseValidator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class InsightResult:
    """
    Generated insight with provenance.
    
    Attributes:
        kind: Insight feature
        insight: Typed payload (model output or the typed default)
        recovered_from_fence: JSON came from a markdown fence
        used_fallback: Typed default substituted for unusable output
        provider: Provider that served the completion
        model: Model that served the completion
        attempts: Number of provider attempts made
        generated_at: UTC timestamp
    """
    
    kind: InsightKind
    insight: InsightModel
    recovered_from_fence: bool
    used_fallback: bool
    provider: Optional[ProviderName]
    model: Optional[str]
    attempts: int
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InsightService:
    """Generates AI cultural insights on top of the hybrid dispatcher."""
    
    def __init__(
        self,
        dispatcher: HybridDispatcher,
        validator: ResponseValidator,
        prompt_builder: PromptBuilder,
    ):
        self.dispatcher = dispatcher
        self.validator = validator
        self.prompt_builder = prompt_builder
    
    async def generate(
        self,
        kind: InsightKind | str,
        data: Mapping[str, Any],
        preferred_provider: ProviderName | str | None = None,
    ) -> InsightResult:
        """
        Generate one insight.
        
        Args:
            kind: Insight feature
            data: Caller-supplied profile/context data
            preferred_provider: Override of the feature's preferred provider
        
        Returns:
            InsightResult
        
        Raises:
            ValueError: Unknown insight kind or provider
            ServiceUnavailableError: Every provider exhausted
        """
        kind = InsightKind(kind)
        spec = INSIGHT_SPECS[kind]
        messages = self.prompt_builder.build_messages(kind, data)
        
        outcome = await self.dispatcher.dispatch(
            messages, preferred_provider or spec.preferred_provider
        )
        parsed = self.validator.parse_model(outcome.raw_text, spec.result_model.default())
        
        logger.info(
            "Insight generated",
            kind=kind.value,
            provider=outcome.provider.value,
            model=outcome.model,
            attempts=outcome.attempt_count,
            recovered_from_fence=parsed.recovered_from_fence,
            used_fallback=parsed.used_fallback,
        )
        
        return InsightResult(
            kind=kind,
            insight=parsed.value,
            recovered_from_fence=parsed.recovered_from_fence,
            used_fallback=parsed.used_fallback,
            provider=outcome.provider,
            model=outcome.model,
            attempts=outcome.attempt_count,
        )
