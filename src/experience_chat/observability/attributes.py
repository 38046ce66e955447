"""
Span attribute keys for search and chat spans.
"""

from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# SEARCH NAMESPACE
# ---------------------------------------------------------------------------

SEARCH_PATH = "search.path"  # "model", "keyword", "none"
SEARCH_FALLBACK = "search.fallback"  # model failed, keyword served the query
SEARCH_TOP_K = "search.top_k"
SEARCH_MIN_SCORE = "search.min_score"
SEARCH_RESULT_COUNT = "search.result_count"
SEARCH_TOP_SCORE = "search.top_score"
SEARCH_MODEL_STATUS = "search.model_status"  # "absent", "loading", "ready", "unavailable"

# ---------------------------------------------------------------------------
# KNOWLEDGE BASE NAMESPACE
# ---------------------------------------------------------------------------

KB_DOCUMENT_COUNT = "kb.document_count"
KB_SOURCE = "kb.source"


def search_attributes(
    path: str,
    fallback: bool,
    result_count: int,
    top_score: float | None = None,
) -> dict[str, Any]:
    """Attributes recorded once a search has produced its results."""
    attrs: dict[str, Any] = {
        SEARCH_PATH: path,
        SEARCH_FALLBACK: fallback,
        SEARCH_RESULT_COUNT: result_count,
    }
    if top_score is not None:
        attrs[SEARCH_TOP_SCORE] = top_score
    return attrs
