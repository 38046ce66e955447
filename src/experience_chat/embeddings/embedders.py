"""
Embedders - the two interchangeable ways of turning documents and queries
into normalized vectors.

KeywordEmbedder needs nothing but the corpus and is always available.
ServiceEmbedder delegates to an external EmbeddingService and validates what
comes back, so a misbehaving model fails loudly instead of producing an
index with ragged or empty rows.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from experience_chat.core.protocols import EmbeddingService
from experience_chat.embeddings.services import EmbeddingError
from experience_chat.knowledge.document import Document
from experience_chat.retrieval.tokenizer import tokenize
from experience_chat.retrieval.vectorizer import normalize, vectorize
from experience_chat.retrieval.vocabulary import Vocabulary, build_vocabulary


class KeywordEmbedder:
    """TF-IDF embedder over a fixed corpus vocabulary."""

    name = "keyword"

    def __init__(self, vocabulary: Vocabulary):
        self.vocabulary = vocabulary

    @classmethod
    def fit(cls, corpus: Sequence[Document]) -> "KeywordEmbedder":
        """Build the vocabulary from the corpus and wrap it."""
        return cls(build_vocabulary(corpus))

    @property
    def dimensions(self) -> int:
        return len(self.vocabulary)

    def vectorize_documents(self, documents: Sequence[Document]) -> np.ndarray:
        """Synchronous document matrix; used to build the fallback index eagerly."""
        matrix = np.zeros((len(documents), self.dimensions), dtype=np.float64)
        for i, doc in enumerate(documents):
            matrix[i] = vectorize(tokenize(doc.text()), self.vocabulary)
        return matrix

    def vectorize_query(self, text: str) -> np.ndarray:
        return vectorize(tokenize(text), self.vocabulary)

    async def embed_documents(self, documents: Sequence[Document]) -> np.ndarray:
        return self.vectorize_documents(documents)

    async def embed_query(self, text: str) -> np.ndarray:
        return self.vectorize_query(text)


class ServiceEmbedder:
    """
    Embedder backed by an external EmbeddingService.

    The dimension is fixed by the first successful embed_documents() call;
    later query vectors must match it.
    """

    name = "model"

    def __init__(self, service: EmbeddingService):
        self._service = service
        self.dimensions: int | None = None

    async def embed_documents(self, documents: Sequence[Document]) -> np.ndarray:
        texts = [doc.text() for doc in documents]
        vectors = await self._service.embed(texts)
        if vectors is None or len(vectors) != len(texts):
            got = "none" if vectors is None else len(vectors)
            raise EmbeddingError(f"Expected {len(texts)} embeddings, got {got}")

        if not texts:
            return np.zeros((0, 0), dtype=np.float64)

        checked = [self._check_vector(v) for v in vectors]
        dims = {v.shape[0] for v in checked}
        if len(dims) != 1:
            raise EmbeddingError(f"Embeddings have mismatched dimensions: {sorted(dims)}")

        self.dimensions = dims.pop()
        return normalize(np.vstack(checked))

    async def embed_query(self, text: str) -> np.ndarray:
        vectors = await self._service.embed([text])
        if vectors is None or len(vectors) != 1:
            raise EmbeddingError("Expected exactly one query embedding")

        vector = self._check_vector(vectors[0])
        if self.dimensions is not None and vector.shape[0] != self.dimensions:
            raise EmbeddingError(
                f"Query embedding has {vector.shape[0]} dimensions, index has {self.dimensions}"
            )
        return normalize(vector)

    def _check_vector(self, vector: object) -> np.ndarray:
        try:
            array = np.asarray(vector, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise EmbeddingError(f"Malformed embedding: {e}") from e
        if array.ndim != 1 or array.size == 0:
            raise EmbeddingError(f"Embedding must be a non-empty 1-D vector, got shape {array.shape}")
        if not np.all(np.isfinite(array)):
            raise EmbeddingError("Embedding contains non-finite values")
        return array
