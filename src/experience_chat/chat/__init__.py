"""
Chat module - the conversation around the search core.

- synthesize_answer(): ranked hits -> reply text (with a "no match" reply)
- ChatSession: corpus loading, status messages, transcript
"""

from experience_chat.chat.answer import (
    no_match_message,
    synthesize_answer,
    topic_areas,
)
from experience_chat.chat.session import (
    KB_UNAVAILABLE_MESSAGE,
    MODEL_UNAVAILABLE_MESSAGE,
    ChatSession,
    Message,
)

__all__ = [
    # Answers
    "synthesize_answer",
    "no_match_message",
    "topic_areas",
    # Session
    "ChatSession",
    "Message",
    "KB_UNAVAILABLE_MESSAGE",
    "MODEL_UNAVAILABLE_MESSAGE",
]
