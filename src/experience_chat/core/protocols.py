"""
Core protocols defining the contracts between retrieval components.

The search pipeline only ever talks to these shapes:
- EmbeddingService: the external model, a black box turning texts into vectors
- Embedder: turns the corpus and a query into comparable, normalized vectors
- ScoredResult: one ranked hit handed to the presentation layer

Two embedders exist (keyword and service-backed) and both feed the same
VectorIndex, so the fallback path and the model path rank identically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from experience_chat.knowledge.document import Document


# ---------------------------------------------------------------------------
# EMBEDDING SERVICE PROTOCOL
# ---------------------------------------------------------------------------

@runtime_checkable
class EmbeddingService(Protocol):
    """
    Contract for an external sentence-embedding model.

    Implementations:
    - OpenAIEmbeddingService (production)
    - MockEmbeddingService (testing)
    """

    async def embed(self, texts: Sequence[str]) -> list[np.ndarray]:
        """Embed each text into a fixed-length vector, in order."""
        ...


# ---------------------------------------------------------------------------
# EMBEDDER PROTOCOL
# ---------------------------------------------------------------------------

@runtime_checkable
class Embedder(Protocol):
    """
    Contract for producing L2-normalized document and query vectors.

    Implementations:
    - KeywordEmbedder (TF-IDF over the corpus vocabulary, always available)
    - ServiceEmbedder (wraps an EmbeddingService)
    """

    name: str

    async def embed_documents(self, documents: Sequence[Document]) -> np.ndarray:
        """Return an (n_documents, dim) matrix of normalized rows."""
        ...

    async def embed_query(self, text: str) -> np.ndarray:
        """Return a normalized (dim,) query vector."""
        ...


# ---------------------------------------------------------------------------
# RESULTS
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoredResult:
    """A ranked document. `index` is its position in the source corpus."""
    index: int
    document: Document
    score: float
