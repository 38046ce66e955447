"""
Unit Tests for the Vector Indexes

KeywordIndex is exercised against real corpora; ModelIndex against the
keyword-routed fake service from conftest.
"""

import asyncio

import numpy as np
import pytest

from experience_chat.embeddings.embedders import KeywordEmbedder
from experience_chat.embeddings.services import EmbeddingError
from experience_chat.knowledge.document import Document
from experience_chat.search.index import KeywordIndex, ModelIndex, VectorIndex


# ---------------------------------------------------------------------------
# KEYWORD INDEX
# ---------------------------------------------------------------------------


class TestKeywordIndex:
    """Fallback index built purely from the corpus."""

    def test_scenario_pricing_query_ranks_pricing_first(self, scenario_corpus):
        index = KeywordIndex.build(scenario_corpus)

        results = index.search("pricing discount strategy", top_k=2)

        assert results[0].document.title == "Pricing Optimization"
        assert results[0].index == 0

    def test_every_document_retrieves_itself_by_title(self, seed_corpus):
        index = KeywordIndex.build(seed_corpus)

        for i, doc in enumerate(seed_corpus):
            hits = index.search(doc.title, top_k=3)
            assert i in [hit.index for hit in hits], f"{doc.title!r} not in its own top 3"

    def test_respects_top_k(self, seed_corpus):
        index = KeywordIndex.build(seed_corpus)

        assert len(index.search("pricing marketing causal llm", top_k=2)) <= 2

    def test_non_positive_top_k_returns_nothing(self, seed_corpus):
        index = KeywordIndex.build(seed_corpus)

        assert index.search("pricing", top_k=0) == []
        assert index.search("pricing", top_k=-1) == []

    def test_unknown_terms_return_nothing(self, seed_corpus):
        index = KeywordIndex.build(seed_corpus)

        assert index.search("kubernetes terraform", top_k=3) == []

    def test_scores_descend(self, seed_corpus):
        index = KeywordIndex.build(seed_corpus)

        scores = [hit.score for hit in index.search("experiment pricing uplift", top_k=9)]

        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_corpus_order(self):
        corpus = [
            Document(title="Solver alpha"),
            Document(title="Solver beta"),
            Document(title="Solver gamma"),
        ]
        index = KeywordIndex.build(corpus)

        hits = index.search("solver", top_k=3)

        assert [hit.index for hit in hits] == [0, 1, 2]
        assert hits[0].score == pytest.approx(hits[2].score)

    def test_empty_corpus(self):
        index = KeywordIndex.build([])

        assert len(index) == 0
        assert index.search("pricing", top_k=3) == []

    def test_matrix_is_read_only(self, scenario_corpus):
        index = KeywordIndex.build(scenario_corpus)

        with pytest.raises(ValueError):
            index.matrix[0, 0] = 1.0

    def test_returns_full_documents(self, scenario_corpus):
        index = KeywordIndex.build(scenario_corpus)

        hit = index.search("uplift", top_k=1)[0]

        assert hit.document is scenario_corpus[1]


# ---------------------------------------------------------------------------
# VECTOR INDEX
# ---------------------------------------------------------------------------


class TestVectorIndex:
    """Shared ranking core."""

    def test_from_embedder_matches_keyword_index(self, seed_corpus):
        embedder = KeywordEmbedder.fit(seed_corpus)
        generic = asyncio.run(VectorIndex.from_embedder(seed_corpus, embedder))
        keyword = KeywordIndex.build(seed_corpus)

        query = embedder.vectorize_query("recommendation ranking")

        assert generic.rank(query, 3) == keyword.rank(query, 3)

    def test_rejects_misaligned_matrix(self, scenario_corpus):
        embedder = KeywordEmbedder.fit(scenario_corpus)

        with pytest.raises(ValueError):
            VectorIndex(scenario_corpus, np.zeros((3, 4)), embedder)

    def test_zero_query_vector_returns_nothing(self, scenario_corpus):
        index = KeywordIndex.build(scenario_corpus)

        assert index.rank(np.zeros(index.dimensions), 3) == []


# ---------------------------------------------------------------------------
# MODEL INDEX
# ---------------------------------------------------------------------------


class TestModelIndex:
    """Index over external embeddings."""

    def test_build_embeds_corpus_in_one_batch(self, scenario_corpus, embedding_service):
        index = asyncio.run(ModelIndex.build(scenario_corpus, embedding_service))

        assert len(index) == 2
        assert index.dimensions == 3
        embedding_service.embed.assert_awaited_once()

    def test_search_uses_model_similarity(self, scenario_corpus, embedding_service):
        index = asyncio.run(ModelIndex.build(scenario_corpus, embedding_service))

        # "cost" is unknown to the keyword vocabulary but maps to pricing here
        hits = asyncio.run(index.search("cost levers", top_k=1))

        assert hits[0].document.title == "Pricing Optimization"
        assert hits[0].score == pytest.approx(1.0)

    def test_build_fails_on_wrong_count(self, scenario_corpus, embedding_service):
        embedding_service.embed.side_effect = lambda texts: [np.ones(3)]

        with pytest.raises(EmbeddingError):
            asyncio.run(ModelIndex.build(scenario_corpus, embedding_service))

    def test_build_propagates_service_errors(self, scenario_corpus, embedding_service):
        embedding_service.embed.side_effect = ConnectionError("down")

        with pytest.raises(ConnectionError):
            asyncio.run(ModelIndex.build(scenario_corpus, embedding_service))

    def test_search_rejects_wrong_dimension(self, scenario_corpus, embedding_service):
        index = asyncio.run(ModelIndex.build(scenario_corpus, embedding_service))
        embedding_service.embed.side_effect = lambda texts: [np.ones(5)]

        with pytest.raises(EmbeddingError):
            asyncio.run(index.search("pricing", top_k=1))
