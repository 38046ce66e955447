"""
Vectorizer - TF-IDF vectors over a fixed vocabulary, plus the similarity math
shared by both search paths.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

import numpy as np

from experience_chat.retrieval.vocabulary import Vocabulary

# Norm floor; an empty or all-unknown input normalizes to the zero vector.
NORM_EPSILON = 1e-9


def normalize(vector: np.ndarray) -> np.ndarray:
    """L2-normalize a vector (or each row of a matrix) with an epsilon floor."""
    vector = np.asarray(vector, dtype=np.float64)
    if vector.ndim == 1:
        return vector / max(float(np.linalg.norm(vector)), NORM_EPSILON)
    norms = np.linalg.norm(vector, axis=1, keepdims=True)
    return vector / np.maximum(norms, NORM_EPSILON)


def vectorize(tokens: Sequence[str], vocabulary: Vocabulary) -> np.ndarray:
    """
    Weight a token list against the vocabulary and L2-normalize it.

    Weight per term is (count / sqrt(len(tokens))) * idf[term]. Terms the
    vocabulary has never seen are skipped.

    Returns:
        (len(vocabulary),) float64 array with norm 1, or all zeros
    """
    vector = np.zeros(len(vocabulary), dtype=np.float64)
    if not tokens:
        return vector

    length_norm = math.sqrt(len(tokens))
    for term, count in Counter(tokens).items():
        j = vocabulary.index_of(term)
        if j is None:
            continue
        vector[j] = (count / length_norm) * vocabulary.idf[j]

    return normalize(vector)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine of two already-normalized vectors, clipped to [-1, 1]."""
    if a.shape != b.shape:
        raise ValueError(f"Vector shapes differ: {a.shape} vs {b.shape}")
    return float(np.clip(np.dot(a, b), -1.0, 1.0))
