"""
Vocabulary and IDF construction.

One pass over the corpus assigns every distinct term a dense index (first
seen, first numbered) and a smoothed inverse-document-frequency weight:

    idf[t] = ln((N + 1) / (df[t] + 1)) + 1

The +1 smoothing keeps weights positive even for terms present in every
document. Built once per corpus load and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from experience_chat.knowledge.document import Document
from experience_chat.retrieval.tokenizer import tokenize


@dataclass(frozen=True)
class Vocabulary:
    """Term index, IDF weights and the token list of every corpus document."""
    term_index: dict[str, int]
    idf: np.ndarray
    document_tokens: tuple[tuple[str, ...], ...]

    def __len__(self) -> int:
        return len(self.term_index)

    def __contains__(self, term: object) -> bool:
        return term in self.term_index

    def index_of(self, term: str) -> int | None:
        """Vocabulary index of a term, or None when out of vocabulary."""
        return self.term_index.get(term)


def build_vocabulary(corpus: Sequence[Document]) -> Vocabulary:
    """
    Tokenize every document and derive the vocabulary and IDF weights.

    Args:
        corpus: Documents in corpus order

    Returns:
        Vocabulary whose document_tokens line up with the corpus
    """
    term_index: dict[str, int] = {}
    document_tokens: list[tuple[str, ...]] = []

    for doc in corpus:
        tokens = tuple(tokenize(doc.text()))
        document_tokens.append(tokens)
        for term in tokens:
            if term not in term_index:
                term_index[term] = len(term_index)

    df = np.zeros(len(term_index), dtype=np.float64)
    for tokens in document_tokens:
        for term in set(tokens):
            df[term_index[term]] += 1

    n_docs = len(corpus)
    idf = np.log((n_docs + 1) / (df + 1)) + 1 if len(df) else df
    idf.flags.writeable = False

    return Vocabulary(
        term_index=term_index,
        idf=idf,
        document_tokens=tuple(document_tokens),
    )
