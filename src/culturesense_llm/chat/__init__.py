"""
CultureSense chat assistant with static fallback replies.
"""

from culturesense_llm.chat.assistant import (
    ChatAssistant,
    ChatReply,
    generate_suggestions,
    static_response,
)

__all__ = ["ChatAssistant", "ChatReply", "generate_suggestions", "static_response"]
