"""
AI-generated cultural insights.

- prompt_builder.py: Jinja2 prompts and per-feature specs (preferred provider,
  typed result model)
- service.py: InsightService tying dispatch and tolerant parsing together
"""

from culturesense_llm.insights.prompt_builder import INSIGHT_SPECS, InsightSpec, PromptBuilder
from culturesense_llm.insights.service import InsightResult, InsightService

__all__ = [
    "INSIGHT_SPECS",
    "InsightSpec",
    "PromptBuilder",
    "InsightResult",
    "InsightService",
]
