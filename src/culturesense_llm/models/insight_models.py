"""
Structured output models for AI-generated cultural insights.

Each model mirrors the JSON shape requested in its prompt template
(camelCase on the wire) and provides a ``default()`` instance. Call sites
pass that instance to ``ResponseValidator.parse_model`` so the feature
degrades to a reasonable, slightly generic result instead of failing.
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _as_score(value: Any) -> Any:
    """Round fractional scores and clamp numbers into 0-100."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    return min(100, max(0, round(value)))


# Model-reported percentage such as confidence or relevance
Score = Annotated[int, BeforeValidator(_as_score), Field(ge=0, le=100)]


class InsightModel(BaseModel):
    """Base for insight payloads: camelCase aliases, unknown keys ignored."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
    
    @classmethod
    def default(cls) -> "InsightModel":
        raise NotImplementedError


# === Personality analysis ===

class TasteEvolution(InsightModel):
    pattern: str = Field(default="exploring", description="expanding | focusing | stable | exploring")
    direction: str = ""
    confidence: Score = 75


class CulturalIdentity(InsightModel):
    primary: str = "eclectic"
    influences: list[str] = Field(default_factory=list)


class PersonalityAnalysis(InsightModel):
    core_traits: list[str]
    taste_evolution: TasteEvolution = Field(default_factory=TasteEvolution)
    hidden_interests: list[str] = Field(default_factory=list)
    cultural_identity: CulturalIdentity = Field(default_factory=CulturalIdentity)
    growth_recommendations: list[str] = Field(default_factory=list)
    confidence: Score = 75
    
    @classmethod
    def default(cls) -> "PersonalityAnalysis":
        return cls(
            core_traits=["Cultural Explorer", "Open-minded", "Curious"],
            taste_evolution=TasteEvolution(
                pattern="exploring", direction="diverse interests", confidence=75
            ),
            hidden_interests=["experimental art", "world music"],
            cultural_identity=CulturalIdentity(
                primary="eclectic", influences=["contemporary", "traditional"]
            ),
            growth_recommendations=["explore new genres", "attend cultural events"],
            confidence=75,
        )


# === Trend predictions ===

class TrendPrediction(InsightModel):
    trend: str
    category: str = "general"
    confidence: Score = 75
    timeline: str = ""
    reasoning: str = ""
    user_relevance: Score = 75


class TrendForecast(InsightModel):
    predictions: list[TrendPrediction]
    risk_factors: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)
    
    @classmethod
    def default(cls) -> "TrendForecast":
        return cls(
            predictions=[
                TrendPrediction(
                    trend="AI-Generated Art Mainstream Adoption",
                    category="art",
                    confidence=80,
                    timeline="3-6 months",
                    reasoning="Growing acceptance and integration",
                    user_relevance=75,
                )
            ],
            risk_factors=["market volatility", "cultural resistance"],
            opportunities=["early adoption advantage", "new creative tools"],
        )


# === Smart recommendations ===

class Recommendation(InsightModel):
    title: str
    creator: str = ""
    category: str = "general"
    reasoning: str = ""
    mood_match: Score = 75
    discovery_level: str = Field(default="mainstream", description="mainstream | niche | underground")
    tags: list[str] = Field(default_factory=list)


class RecommendationSet(InsightModel):
    recommendations: list[Recommendation]
    
    @classmethod
    def default(cls) -> "RecommendationSet":
        return cls(
            recommendations=[
                Recommendation(
                    title="Recommendation unavailable",
                    creator="System",
                    category="general",
                    reasoning="Service temporarily unavailable",
                    mood_match=50,
                    discovery_level="mainstream",
                    tags=["fallback"],
                )
            ]
        )


# === Compatibility analysis ===

class CompatibilityReport(InsightModel):
    compatibility_score: Score
    shared_interests: list[str] = Field(default_factory=list)
    complementary_differences: list[str] = Field(default_factory=list)
    conflict_areas: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    growth_opportunities: list[str] = Field(default_factory=list)
    
    @classmethod
    def default(cls) -> "CompatibilityReport":
        return cls(
            compatibility_score=75,
            shared_interests=["contemporary art", "indie music"],
            complementary_differences=["different genres", "varied perspectives"],
            conflict_areas=["pacing preferences"],
            recommendations=["explore together", "share favorites"],
            growth_opportunities=["learn from differences", "expand horizons"],
        )


# === Cultural journey ===

class JourneyWeek(InsightModel):
    week: int = Field(..., ge=1)
    theme: str = ""
    activities: list[str] = Field(default_factory=list)
    goals: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)


class JourneyPlan(InsightModel):
    title: str
    description: str = ""
    weeks: list[JourneyWeek]


class CulturalJourney(InsightModel):
    journey: JourneyPlan
    milestones: list[str] = Field(default_factory=list)
    measurements: list[str] = Field(default_factory=list)
    
    @classmethod
    def default(cls) -> "CulturalJourney":
        return cls(
            journey=JourneyPlan(
                title="Cultural Exploration Journey",
                description="A personalized path to expand your cultural horizons",
                weeks=[
                    JourneyWeek(
                        week=1,
                        theme="Foundation Building",
                        activities=["Explore your current favorites", "Identify preferences"],
                        goals=["Understand your taste", "Set learning objectives"],
                        resources=["Online galleries", "Music platforms"],
                    )
                ],
            ),
            milestones=["Complete week 1", "Discover new interest"],
            measurements=["Engagement level", "Diversity score"],
        )


# === Content analysis ===

class ContentAssessment(InsightModel):
    significance: str
    context: str = ""
    technical: Optional[str] = None
    emotional: Optional[str] = None
    relevance: Score = 75
    similar_works: list[str] = Field(default_factory=list)
    learning_opportunities: list[str] = Field(default_factory=list)


class ContentScores(InsightModel):
    artistic: Score = 75
    cultural: Score = 75
    personal: Score = 75


class ContentAnalysis(InsightModel):
    analysis: ContentAssessment
    scores: ContentScores = Field(default_factory=ContentScores)
    
    @classmethod
    def default(cls) -> "ContentAnalysis":
        return cls(
            analysis=ContentAssessment(
                significance="Culturally significant work",
                context="Contemporary context",
                technical="Well-executed",
                emotional="Emotionally engaging",
                relevance=75,
                similar_works=["Similar Work 1", "Similar Work 2"],
                learning_opportunities=["Explore genre", "Study technique"],
            ),
            scores=ContentScores(artistic=75, cultural=75, personal=75),
        )
