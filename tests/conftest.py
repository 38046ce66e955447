"""Shared fixtures: small corpora and a keyword-routed fake embedding service."""

from unittest.mock import AsyncMock

import numpy as np
import pytest

from experience_chat.config import reset_config
from experience_chat.knowledge.document import Document
from experience_chat.knowledge.seeds import get_experience_documents


@pytest.fixture(autouse=True)
def _reset_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def scenario_corpus():
    """The two-entry corpus used throughout the search tests."""
    return [
        Document(title="Pricing Optimization", summary="dynamic pricing engine"),
        Document(title="Causal Uplift Study", summary="A/B experiment for marketing"),
    ]


@pytest.fixture
def seed_corpus():
    return get_experience_documents()


def fake_embed(text: str) -> np.ndarray:
    """Three-topic embedding: pricing-ish, causal-ish, everything else."""
    lowered = text.lower()
    if "pric" in lowered or "cost" in lowered:
        return np.array([1.0, 0.0, 0.0])
    if "causal" in lowered or "uplift" in lowered:
        return np.array([0.0, 1.0, 0.0])
    return np.array([0.0, 0.0, 1.0])


@pytest.fixture
def embedding_service():
    """AsyncMock service whose embed() routes each text through fake_embed."""
    service = AsyncMock()
    service.embed.side_effect = lambda texts: [fake_embed(t) for t in texts]
    return service
