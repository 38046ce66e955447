"""
Search orchestrator - the single entry point for answering a query.

Dual-path strategy:
1. Model path: ModelIndex over external embeddings, if it finished building
2. Fallback path: KeywordIndex over TF-IDF vectors, always available

The model index is built at most once, in the background, after the keyword
index is already serving queries. Its status moves ABSENT -> LOADING ->
READY | UNAVAILABLE and never goes back. A model failure on one query falls
back to keywords for that query only; the model stays READY.

search() never raises. Anything unexpected is logged and reported as no
results, which the chat layer turns into its "no match" answer.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from opentelemetry import trace

from experience_chat.config import ChatConfig, get_config
from experience_chat.core.protocols import EmbeddingService, ScoredResult
from experience_chat.knowledge.document import Document
from experience_chat.observability.attributes import (
    SEARCH_MIN_SCORE,
    SEARCH_MODEL_STATUS,
    SEARCH_TOP_K,
    search_attributes,
)
from experience_chat.observability.tracing import get_tracer
from experience_chat.retrieval.tokenizer import tokenize
from experience_chat.search.index import KeywordIndex, ModelIndex

logger = logging.getLogger(__name__)

ServiceFactory = Callable[[], EmbeddingService]


class ModelStatus(str, Enum):
    ABSENT = "absent"
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


@dataclass
class SearchState:
    """
    Everything a search reads. Built once when the corpus loads.

    Only the model fields change afterwards, and only once: model_index is
    assigned before model_status becomes READY.
    """

    corpus: tuple[Document, ...] = ()
    keyword_index: KeywordIndex | None = None
    model_index: ModelIndex | None = None
    model_status: ModelStatus = ModelStatus.ABSENT
    model_error: str | None = None

    @classmethod
    def from_corpus(cls, corpus: Sequence[Document]) -> "SearchState":
        corpus = tuple(corpus)
        return cls(corpus=corpus, keyword_index=KeywordIndex.build(corpus))

    @property
    def loaded(self) -> bool:
        return self.keyword_index is not None


class SearchOrchestrator:
    """
    Routes queries to the model index or the keyword index.

    Dependencies are INJECTED: tests pass a SearchState built from a small
    corpus and a service factory returning a mock.
    """

    def __init__(
        self,
        state: SearchState | None = None,
        top_k: int = 3,
        min_score: float = 0.0,
        tracer: trace.Tracer | None = None,
    ):
        """
        Args:
            state: Corpus-derived state; an empty state serves no results
            top_k: Default number of results per search
            min_score: Results must score strictly above this floor
            tracer: OpenTelemetry tracer (package tracer if not provided)
        """
        self.state = state or SearchState()
        self.top_k = top_k
        self.min_score = min_score
        self._tracer = tracer or get_tracer()
        self._model_task: asyncio.Task[bool] | None = None

    @classmethod
    def from_corpus(
        cls,
        corpus: Sequence[Document],
        config: ChatConfig | None = None,
        tracer: trace.Tracer | None = None,
    ) -> "SearchOrchestrator":
        """Build the keyword index now and take limits from config."""
        config = config or get_config()
        return cls(
            SearchState.from_corpus(corpus),
            top_k=config.top_k,
            min_score=config.min_score,
            tracer=tracer,
        )

    # ------------------------------------------------------------------
    # Model index lifecycle
    # ------------------------------------------------------------------

    @property
    def model_status(self) -> ModelStatus:
        return self.state.model_status

    @property
    def model_ready(self) -> bool:
        return self.state.model_status is ModelStatus.READY and self.state.model_index is not None

    def start_model_build(self, service_factory: ServiceFactory) -> asyncio.Task[bool]:
        """
        Schedule the one-shot model index build on the running loop.

        Queries keep using the keyword index until the task completes.

        Raises:
            RuntimeError: a build was already attempted
        """
        self._claim_model_build()
        self._model_task = asyncio.create_task(self._build_model_index(service_factory))
        return self._model_task

    async def build_model_index(self, service_factory: ServiceFactory) -> bool:
        """Build the model index inline. Returns True if it became READY."""
        self._claim_model_build()
        return await self._build_model_index(service_factory)

    async def wait_for_model(self) -> ModelStatus:
        """Wait for a scheduled build (if any) and return the final status."""
        if self._model_task is not None:
            await self._model_task
        return self.state.model_status

    def _claim_model_build(self) -> None:
        if self.state.model_status is not ModelStatus.ABSENT:
            raise RuntimeError(
                f"Model index build already attempted (status: {self.state.model_status.value})"
            )
        self.state.model_status = ModelStatus.LOADING

    async def _build_model_index(self, service_factory: ServiceFactory) -> bool:
        try:
            if not self.state.loaded:
                raise RuntimeError("corpus not loaded")
            service = service_factory()
            index = await ModelIndex.build(self.state.corpus, service)
        except Exception as e:
            self.state.model_error = str(e) or type(e).__name__
            self.state.model_status = ModelStatus.UNAVAILABLE
            logger.warning(f"Embedding model unavailable, using keyword search only: {self.state.model_error}")
            return False

        self.state.model_index = index
        self.state.model_status = ModelStatus.READY
        logger.info(f"Model index ready: {len(index)} documents, {index.dimensions} dimensions")
        return True

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(self, query: str, top_k: int | None = None) -> list[ScoredResult]:
        """
        Rank the corpus for a free-text query.

        Never raises and never returns more than top_k results. An empty list
        means "no match".
        """
        k = self.top_k if top_k is None else top_k
        with self._tracer.start_as_current_span(
            "experience_chat.search",
            attributes={
                SEARCH_TOP_K: k,
                SEARCH_MIN_SCORE: self.min_score,
                SEARCH_MODEL_STATUS: self.state.model_status.value,
            },
        ) as span:
            try:
                results, path, fell_back = await self._search(query, k)
            except Exception as e:
                logger.exception(f"Search failed for query {query!r}: {e}")
                span.record_exception(e)
                return []

            span.set_attributes(search_attributes(
                path=path,
                fallback=fell_back,
                result_count=len(results),
                top_score=results[0].score if results else None,
            ))
            return results

    def search_keyword(self, query: str, top_k: int | None = None) -> list[ScoredResult]:
        """Synchronous keyword-only search with the same limits and floor."""
        k = self.top_k if top_k is None else top_k
        if not self._searchable(query, k):
            return []
        return self._apply_floor(self.state.keyword_index.search(query, k))

    async def _search(self, query: str, k: int) -> tuple[list[ScoredResult], str, bool]:
        if not self._searchable(query, k):
            return [], "none", False

        fell_back = False
        if self.model_ready:
            try:
                hits = await self.state.model_index.search(query, k)
                return self._apply_floor(hits), "model", False
            except Exception as e:
                logger.warning(f"Model search failed, falling back to keyword search: {e}")
                fell_back = True

        hits = self.state.keyword_index.search(query, k)
        return self._apply_floor(hits), "keyword", fell_back

    def _searchable(self, query: str, k: int) -> bool:
        # A query with no significant terms (empty, punctuation, stop words)
        # matches nothing on either path.
        return k > 0 and self.state.loaded and bool(tokenize(query))

    def _apply_floor(self, hits: list[ScoredResult]) -> list[ScoredResult]:
        return [hit for hit in hits if hit.score > self.min_score]
