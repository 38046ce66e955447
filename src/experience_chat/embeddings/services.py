"""
Embedding services - Single Responsibility: turn texts into dense vectors.

The chatbot treats the embedding model as an opaque, fallible capability.
Nothing here knows about documents, vocabularies or ranking; ServiceEmbedder
(embedders.py) adapts these services to the retrieval pipeline.
"""

from __future__ import annotations

import hashlib
import os
from typing import Sequence

import numpy as np
from openai import AsyncOpenAI

from experience_chat.core.protocols import EmbeddingService


class EmbeddingError(Exception):
    """An embedding call failed or returned malformed vectors."""


class EmbeddingServiceUnavailable(EmbeddingError):
    """The embedding service could not be loaded at all."""


class OpenAIEmbeddingService:
    """
    OpenAI-based embedding service.

    Uses text-embedding-3-small by default. All texts of a call go out in a
    single batched request.
    """

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
    ):
        api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise EmbeddingServiceUnavailable("OPENAI_API_KEY is not set")
        self.model = model
        self._client = AsyncOpenAI(api_key=api_key)

    async def embed(self, texts: Sequence[str]) -> list[np.ndarray]:
        """Embed texts in one request, preserving input order."""
        if not texts:
            return []

        response = await self._client.embeddings.create(
            input=list(texts),
            model=self.model,
        )
        ordered = sorted(response.data, key=lambda item: item.index)
        return [np.array(item.embedding, dtype=np.float32) for item in ordered]


class MockEmbeddingService:
    """
    Mock embedding service for testing without API calls.

    Generates deterministic pseudo-embeddings seeded from a text hash.
    Identical texts embed identically; anything else is effectively random,
    so rankings carry no meaning. NOT for production use.
    """

    def __init__(self, dimensions: int = 64):
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def embed(self, texts: Sequence[str]) -> list[np.ndarray]:
        return [self._embed_one(text) for text in texts]

    def _embed_one(self, text: str) -> np.ndarray:
        seed = int.from_bytes(hashlib.sha256(text.encode()).digest()[:8], "big")
        rng = np.random.default_rng(seed)
        return rng.standard_normal(self._dimensions).astype(np.float32)


def get_embedding_service(
    backend: str = "openai",
    model: str = "text-embedding-3-small",
) -> EmbeddingService:
    """
    Factory function to get the configured embedding service.

    Args:
        backend: "openai" or "mock"
        model: Model name (openai backend only)

    Raises:
        EmbeddingServiceUnavailable: unknown backend or missing credentials
    """
    if backend == "mock":
        return MockEmbeddingService()
    if backend == "openai":
        return OpenAIEmbeddingService(model=model)
    raise EmbeddingServiceUnavailable(f"No embedding service for backend {backend!r}")
