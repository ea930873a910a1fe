"""
CultureSense chat assistant.

Builds the conversation sent upstream (persona + user preferences, recent
history window, new message) and degrades to a keyword-matched static reply
when every provider is down. The caller owns conversation history.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

import structlog

from culturesense_llm.dispatch.hybrid import HybridDispatcher, MessageLike, normalize_messages
from culturesense_llm.models.enums import MessageRole, ProviderName
from culturesense_llm.models.llm_models import Message
from culturesense_llm.retry.exceptions import ServiceUnavailableError

logger = structlog.get_logger(__name__)

CULTURAL_CONTEXT = """\
You are CultureSense AI, an advanced cultural discovery assistant. Your expertise includes:
- Analyzing cultural preferences and taste patterns
- Recommending movies, music, books, art, and design
- Identifying cultural trends and influences
- Providing personalized cultural insights
- Understanding aesthetic preferences and artistic movements

Always respond in a helpful, knowledgeable, and culturally aware manner. When users ask about their preferences, provide thoughtful analysis and suggestions. Keep responses conversational but informative."""

PREFERENCE_KEYS = ("categories", "favoriteGenres", "culturalTags", "moodPreferences")


def _preference_values(value: Any) -> Any:
    """Wrap a lone string in a list; anything else that is not a list is kept as sent."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    return value


# Ordered: first matching keyword group wins
STATIC_RESPONSES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("music",),
        "I'd love to help you explore music! While I'm experiencing some technical issues, "
        "I can suggest checking out trending artists on platforms like Spotify, Apple Music, "
        "or discovering new genres through music blogs and reviews.",
    ),
    (
        ("movie", "film"),
        "Movies are a fantastic cultural medium! Consider exploring different film genres, "
        "international cinema, or checking out film festivals. Platforms like Letterboxd can "
        "also help you discover new films based on your taste.",
    ),
    (
        ("book",),
        "Books offer incredible cultural insights! Try exploring different literary genres, "
        "contemporary authors, or classic literature. Goodreads can be a great platform for "
        "discovering books similar to your preferences.",
    ),
    (
        ("art",),
        "Art is such a rich cultural expression! Consider visiting local galleries, exploring "
        "different art movements online, or discovering contemporary artists through "
        "platforms like Instagram or art magazines.",
    ),
)
GENERIC_STATIC_RESPONSE = (
    "I'm here to help you discover amazing cultural content! While I'm experiencing some "
    "technical difficulties, I'd love to assist you with exploring music, movies, books, "
    "art, and cultural trends. What interests you most?"
)

SUGGESTION_RULES: tuple[tuple[tuple[str, ...], tuple[str, ...], tuple[str, ...]], ...] = (
    # (message keywords, reply keywords, suggestions)
    (("music",), ("music",), ("Analyze my music taste", "Find similar artists")),
    (("movie", "film"), ("movie",), ("Recommend movies", "Analyze film preferences")),
    (("book",), ("book",), ("Discover new books", "Literary recommendations")),
    (("art",), ("art",), ("Explore art styles", "Find similar artists")),
    (("trend",), ("trend",), ("Cultural trend analysis", "What's trending now?")),
)
DEFAULT_SUGGESTIONS = ("Tell me more", "Show recommendations")
MAX_SUGGESTIONS = 4


@dataclass(frozen=True)
class ChatReply:
    """Assistant reply returned to the route layer."""
    
    content: str
    suggestions: list[str] = field(default_factory=list)
    degraded: bool = False
    provider: Optional[ProviderName] = None
    model: Optional[str] = None


def static_response(message: str) -> str:
    """Keyword-matched canned reply used when no provider is available."""
    lowered = message.lower()
    for keywords, response in STATIC_RESPONSES:
        if any(keyword in lowered for keyword in keywords):
            return response
    return GENERIC_STATIC_RESPONSE


def generate_suggestions(message: str, reply: str) -> list[str]:
    """
    Contextual follow-up suggestions.
    
    Deduplicated in order, always including the default suggestions,
    at most four.
    """
    lowered_message = message.lower()
    lowered_reply = reply.lower()
    suggestions: list[str] = []
    for message_keywords, reply_keywords, extra in SUGGESTION_RULES:
        if any(k in lowered_message for k in message_keywords) or any(
            k in lowered_reply for k in reply_keywords
        ):
            suggestions.extend(extra)
    suggestions.extend(DEFAULT_SUGGESTIONS)
    return list(dict.fromkeys(suggestions))[:MAX_SUGGESTIONS]


class ChatAssistant:
    """
    Conversational front end over the hybrid dispatcher.
    
    Attributes:
        dispatcher: Hybrid dispatcher
        history_window: Number of most recent history messages forwarded
        preferred_provider: Provider tried first for chat
    """
    
    def __init__(
        self,
        dispatcher: HybridDispatcher,
        history_window: int = 8,
        preferred_provider: ProviderName | str | None = None,
    ):
        self.dispatcher = dispatcher
        self.history_window = history_window
        self.preferred_provider = preferred_provider
    
    def build_system_prompt(
        self,
        preferences: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> str:
        prompt = CULTURAL_CONTEXT
        if preferences:
            selected = {key: _preference_values(preferences.get(key)) for key in PREFERENCE_KEYS}
            prompt += f"\n\nUser Preferences: {json.dumps(selected, ensure_ascii=False, default=str)}"
        if context:
            prompt += f"\n\nAdditional Context: {json.dumps(context, ensure_ascii=False, default=str)}"
        return prompt
    
    def build_messages(
        self,
        message: str,
        history: Sequence[MessageLike] = (),
        preferences: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> list[Message]:
        """System prompt, the last ``history_window`` history messages, then the new message."""
        recent: list[Message] = []
        if history and self.history_window > 0:
            recent = normalize_messages(history)[-self.history_window:]
        return [
            Message(role=MessageRole.SYSTEM, content=self.build_system_prompt(preferences, context)),
            *recent,
            Message(role=MessageRole.USER, content=message),
        ]
    
    async def reply(
        self,
        message: str,
        history: Sequence[MessageLike] = (),
        preferences: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> ChatReply:
        """
        Answer a chat message.
        
        Raises:
            ValueError: Empty message
        """
        if not message or not message.strip():
            raise ValueError("Message is required")
        
        messages = self.build_messages(message, history, preferences, context)
        try:
            outcome = await self.dispatcher.dispatch(messages, self.preferred_provider)
        except ServiceUnavailableError as e:
            logger.warning(
                "Using static fallback response",
                total_attempts=e.total_attempts,
                failures=e.summary(),
            )
            content = static_response(message)
            return ChatReply(
                content=content,
                suggestions=generate_suggestions(message, content),
                degraded=True,
            )
        
        return ChatReply(
            content=outcome.raw_text,
            suggestions=generate_suggestions(message, outcome.raw_text),
            provider=outcome.provider,
            model=outcome.model,
        )
