"""
Answer synthesis - turns ranked hits into the bot's reply text.

Plain text with "- " bullets; the presentation layer decides how to render
it (the CLI prints it as-is).
"""

from __future__ import annotations

from typing import Sequence

from experience_chat.core.protocols import ScoredResult
from experience_chat.knowledge.document import Document

DEFAULT_TOPICS = (
    "pricing",
    "experimentation",
    "LLMs",
    "causal inference",
    "recommendations",
)

FOLLOW_UP = (
    "If you'd like more detail, you can ask follow-ups like "
    "\"tell me more about that project\" or \"what were the business results?\"."
)


def topic_areas(corpus: Sequence[Document]) -> list[str]:
    """Distinct non-empty areas in corpus order."""
    seen: dict[str, None] = {}
    for doc in corpus:
        if doc.area:
            seen.setdefault(doc.area, None)
    return list(seen)


def _join_topics(topics: Sequence[str]) -> str:
    if len(topics) <= 1:
        return "".join(topics)
    return f"{', '.join(topics[:-1])}, or {topics[-1]}"


def no_match_message(topics: Sequence[str] = ()) -> str:
    topics = list(topics) or list(DEFAULT_TOPICS)
    return (
        "I couldn't quite match that to anything in my experience yet. "
        "You can try rephrasing, or ask about areas like "
        f"{_join_topics(topics)}."
    )


def format_hit(hit: ScoredResult) -> str:
    doc = hit.document
    heading = f"{doc.title} ({doc.company})" if doc.company else doc.title
    return f"- {heading}: {doc.summary}" if doc.summary else f"- {heading}"


def synthesize_answer(
    question: str,
    hits: Sequence[ScoredResult],
    topics: Sequence[str] = (),
) -> str:
    """
    Compose the bot reply for a question.

    Args:
        question: The user's question, quoted back in the intro
        hits: Ranked results; empty means no match
        topics: Areas suggested in the no-match reply

    Returns:
        Reply text
    """
    if not hits:
        return no_match_message(topics)

    lines = [f"Here's the experience most relevant to \"{question}\":"]
    lines.extend(format_hit(hit) for hit in hits)
    lines.append(FOLLOW_UP)
    return "\n".join(lines)
