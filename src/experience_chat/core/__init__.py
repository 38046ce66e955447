"""
Core module - shared protocols and types for the retrieval pipeline.

USAGE:
------
from experience_chat.core import Embedder, EmbeddingService, ScoredResult
"""

from experience_chat.core.protocols import (
    # Protocols
    EmbeddingService,
    Embedder,
    # Data classes
    ScoredResult,
)

__all__ = [
    # Protocols
    "EmbeddingService",
    "Embedder",
    # Data classes
    "ScoredResult",
]
