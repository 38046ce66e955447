"""
Retrieval module - the text math behind keyword search.

This module provides:
- tokenize(): normalization, stop words, synonym expansion
- build_vocabulary(): term indices and smoothed IDF weights
- vectorize() / normalize() / cosine_similarity(): TF-IDF vectors
"""

from experience_chat.retrieval.tokenizer import (
    STOP_WORDS,
    SYNONYMS,
    expand_synonyms,
    normalize_text,
    tokenize,
)
from experience_chat.retrieval.vocabulary import Vocabulary, build_vocabulary
from experience_chat.retrieval.vectorizer import (
    NORM_EPSILON,
    cosine_similarity,
    normalize,
    vectorize,
)

__all__ = [
    # Tokenizer
    "STOP_WORDS",
    "SYNONYMS",
    "normalize_text",
    "expand_synonyms",
    "tokenize",
    # Vocabulary
    "Vocabulary",
    "build_vocabulary",
    # Vectorizer
    "NORM_EPSILON",
    "normalize",
    "vectorize",
    "cosine_similarity",
]
