"""
Vector indexes over the experience corpus.

Pattern: shared ranking core -> keyword (fallback) index -> model index

- VectorIndex: a matrix of normalized document vectors plus ranking
- KeywordIndex: TF-IDF vectors, built synchronously, no external dependency
- ModelIndex: vectors from an external embedding service, built async

Both indexes rank the same way: cosine similarity (a dot product of
normalized vectors), stable descending sort so ties keep corpus order,
truncated to top_k.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from experience_chat.core.protocols import EmbeddingService, Embedder, ScoredResult
from experience_chat.embeddings.embedders import KeywordEmbedder, ServiceEmbedder
from experience_chat.knowledge.document import Document

logger = logging.getLogger(__name__)


class VectorIndex:
    """Normalized document vectors aligned with the corpus they came from."""

    def __init__(
        self,
        documents: Sequence[Document],
        matrix: np.ndarray,
        embedder: Embedder,
    ):
        if len(documents) != matrix.shape[0]:
            raise ValueError(
                f"Index has {matrix.shape[0]} vectors for {len(documents)} documents"
            )
        self.documents = tuple(documents)
        self.matrix = matrix
        self.matrix.flags.writeable = False
        self.embedder = embedder

    @classmethod
    async def from_embedder(
        cls,
        documents: Sequence[Document],
        embedder: Embedder,
    ) -> "VectorIndex":
        """Embed every document with any Embedder and index the result."""
        matrix = await embedder.embed_documents(documents)
        return cls(documents, matrix, embedder)

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def dimensions(self) -> int:
        return self.matrix.shape[1] if self.matrix.ndim == 2 else 0

    def rank(self, query_vector: np.ndarray, top_k: int) -> list[ScoredResult]:
        """
        Score every document against a normalized query vector.

        Returns an empty list for an empty index, a non-positive top_k, or a
        zero query vector (nothing recognized, so nothing is relevant).
        """
        if top_k <= 0 or len(self) == 0 or not np.any(query_vector):
            return []

        scores = np.clip(self.matrix @ query_vector, -1.0, 1.0)
        order = np.argsort(-scores, kind="stable")[:top_k]
        return [
            ScoredResult(index=int(i), document=self.documents[i], score=float(scores[i]))
            for i in order
        ]


class KeywordIndex(VectorIndex):
    """
    Fallback index built purely from the corpus vocabulary.

    Always available once the corpus loads; never touches the network.
    """

    embedder: KeywordEmbedder

    @classmethod
    def build(cls, corpus: Sequence[Document]) -> "KeywordIndex":
        embedder = KeywordEmbedder.fit(corpus)
        matrix = embedder.vectorize_documents(corpus)
        logger.debug(f"Keyword index built: {len(corpus)} documents, {embedder.dimensions} terms")
        return cls(corpus, matrix, embedder)

    def search(self, query: str, top_k: int = 3) -> list[ScoredResult]:
        return self.rank(self.embedder.vectorize_query(query), top_k)


class ModelIndex(VectorIndex):
    """
    Index of external-model embeddings.

    Building is all-or-nothing: any failure raises and no index exists.
    Searching can also fail (the query needs its own embedding call), and
    callers are expected to fall back to the KeywordIndex when it does.
    """

    embedder: ServiceEmbedder

    @classmethod
    async def build(
        cls,
        corpus: Sequence[Document],
        service: EmbeddingService,
    ) -> "ModelIndex":
        embedder = ServiceEmbedder(service)
        matrix = await embedder.embed_documents(corpus)
        return cls(corpus, matrix, embedder)

    async def search(self, query: str, top_k: int = 3) -> list[ScoredResult]:
        query_vector = await self.embedder.embed_query(query)
        return self.rank(query_vector, top_k)
