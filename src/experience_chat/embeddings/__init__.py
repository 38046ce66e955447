"""
Embeddings module - text vectors for the retrieval pipeline.

1. Protocols (EmbeddingService, Embedder) live in core.protocols
2. Services: OpenAIEmbeddingService (production), MockEmbeddingService (tests)
3. Embedders: KeywordEmbedder (fallback), ServiceEmbedder (model-backed)
4. Factory: get_embedding_service()
"""

from experience_chat.embeddings.embedders import KeywordEmbedder, ServiceEmbedder
from experience_chat.embeddings.services import (
    EmbeddingError,
    EmbeddingServiceUnavailable,
    MockEmbeddingService,
    OpenAIEmbeddingService,
    get_embedding_service,
)

__all__ = [
    "EmbeddingError",
    "EmbeddingServiceUnavailable",
    "OpenAIEmbeddingService",
    "MockEmbeddingService",
    "get_embedding_service",
    "KeywordEmbedder",
    "ServiceEmbedder",
]
