"""
Search module - indexes and the dual-path orchestrator.

This module provides:
- VectorIndex / KeywordIndex / ModelIndex: ranked cosine search
- SearchState / ModelStatus: explicit, once-published search state
- SearchOrchestrator: model-first search with keyword fallback
"""

from experience_chat.search.index import KeywordIndex, ModelIndex, VectorIndex
from experience_chat.search.orchestrator import (
    ModelStatus,
    SearchOrchestrator,
    SearchState,
)

__all__ = [
    # Indexes
    "VectorIndex",
    "KeywordIndex",
    "ModelIndex",
    # Orchestration
    "ModelStatus",
    "SearchState",
    "SearchOrchestrator",
]
