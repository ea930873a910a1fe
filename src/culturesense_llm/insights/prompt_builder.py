"""
Prompt builder for insight requests.

Renders a system message (persona + "respond with JSON") and a user message
(caller data embedded as pretty JSON, plus the JSON shape expected back)
from Jinja2 templates.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog
from jinja2 import Environment, FileSystemLoader

from culturesense_llm.models.enums import InsightKind, MessageRole, ProviderName
from culturesense_llm.models.insight_models import (
    CompatibilityReport,
    ContentAnalysis,
    CulturalJourney,
    InsightModel,
    PersonalityAnalysis,
    RecommendationSet,
    TrendForecast,
)
from culturesense_llm.models.llm_models import Message


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class InsightSpec:
    """Static description of one insight feature."""
    
    kind: InsightKind
    role_description: str
    preferred_provider: ProviderName
    result_model: type[InsightModel]
    
    @property
    def template_name(self) -> str:
        return f"{self.kind.value}.txt"


INSIGHT_SPECS: dict[InsightKind, InsightSpec] = {
    InsightKind.PERSONALITY_ANALYSIS: InsightSpec(
        kind=InsightKind.PERSONALITY_ANALYSIS,
        role_description=(
            "a cultural psychology expert analyzing user preferences. Provide insights "
            "into their personality, taste evolution, and cultural identity based on "
            "their data. Be insightful but respectful."
        ),
        preferred_provider=ProviderName.OPENROUTER,
        result_model=PersonalityAnalysis,
    ),
    InsightKind.TREND_PREDICTIONS: InsightSpec(
        kind=InsightKind.TREND_PREDICTIONS,
        role_description=(
            "a cultural trend analyst with expertise in predicting future cultural "
            "movements. Analyze current trends and user preferences to make accurate "
            "predictions."
        ),
        preferred_provider=ProviderName.TOGETHER,
        result_model=TrendForecast,
    ),
    InsightKind.SMART_RECOMMENDATIONS: InsightSpec(
        kind=InsightKind.SMART_RECOMMENDATIONS,
        role_description=(
            "an expert cultural curator with deep knowledge across all art forms. "
            "Generate highly personalized recommendations based on user data, current "
            "mood, and context."
        ),
        preferred_provider=ProviderName.OPENROUTER,
        result_model=RecommendationSet,
    ),
    InsightKind.COMPATIBILITY_ANALYSIS: InsightSpec(
        kind=InsightKind.COMPATIBILITY_ANALYSIS,
        role_description=(
            "a cultural compatibility analyst. Analyze compatibility between users or "
            "between a user and specific cultural items."
        ),
        preferred_provider=ProviderName.TOGETHER,
        result_model=CompatibilityReport,
    ),
    InsightKind.CULTURAL_JOURNEY: InsightSpec(
        kind=InsightKind.CULTURAL_JOURNEY,
        role_description=(
            "a cultural education specialist who creates personalized learning "
            "journeys. Design comprehensive cultural exploration paths."
        ),
        preferred_provider=ProviderName.OPENROUTER,
        result_model=CulturalJourney,
    ),
    InsightKind.CONTENT_ANALYSIS: InsightSpec(
        kind=InsightKind.CONTENT_ANALYSIS,
        role_description=(
            "a cultural critic and analyst with expertise across all art forms. "
            "Provide deep, insightful analysis of cultural content."
        ),
        preferred_provider=ProviderName.TOGETHER,
        result_model=ContentAnalysis,
    ),
}


def pretty_json(value: Any) -> str:
    """Jinja2 filter: indented JSON, non-ASCII kept, unknown types stringified."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


class PromptBuilder:
    """
    Build insight conversations from Jinja2 templates.
    
    Templates:
    - system_prompt.txt: shared persona wrapper
    - <insight_kind>.txt: user prompt per insight kind
    """
    
    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize prompt builder.
        
        Args:
            templates_dir: Directory containing prompt templates
                (default: templates bundled with the package)
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # Prompts, not HTML
            keep_trailing_newline=False,
        )
        self.jinja_env.filters["pretty_json"] = pretty_json
        
        self.system_template = self.jinja_env.get_template("system_prompt.txt")
        logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
    
    def build_messages(
        self,
        kind: InsightKind,
        data: Mapping[str, Any],
    ) -> list[Message]:
        """
        Build the [system, user] conversation for an insight.
        
        Args:
            kind: Insight feature
            data: Caller-supplied profile/context data embedded in the prompt
        
        Returns:
            Ordered messages
        """
        spec = INSIGHT_SPECS[kind]
        system_prompt = self.system_template.render(
            role_description=spec.role_description
        ).strip()
        user_prompt = self.jinja_env.get_template(spec.template_name).render(
            data=dict(data)
        ).strip()
        
        logger.debug(
            "Built insight prompt",
            kind=kind.value,
            system_length=len(system_prompt),
            user_length=len(user_prompt),
        )
        
        return [
            Message(role=MessageRole.SYSTEM, content=system_prompt),
            Message(role=MessageRole.USER, content=user_prompt),
        ]
