"""
Retrieval Quality Eval

Checks that the search orchestrator surfaces the RIGHT experience entries
before anything is shown to a user.

Two checks:
1. Golden queries: recruiter-style questions with known target entries
2. Self-retrieval: every entry must come back when queried by its own title

METRICS:
--------
RECALL: fraction of expected entries found in the top-k
  - Formula: |retrieved ∩ expected| / |expected|
  - This is the pass/fail criterion; top-k answers are short by design

PRECISION: fraction of the top-k that was expected
  - Formula: |retrieved ∩ expected| / |retrieved|

F1 SCORE: harmonic mean of recall and precision

RECIPROCAL RANK: 1 / rank of the first expected entry (0 if none)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from experience_chat.evals.golden_queries import GoldenQuery, get_golden_queries

if TYPE_CHECKING:
    from experience_chat.search.orchestrator import SearchOrchestrator


DEFAULT_THRESHOLD = 0.8


@dataclass
class RetrievalMetrics:
    """Retrieval quality metrics for a single query."""
    recall: float
    precision: float
    f1_score: float
    reciprocal_rank: float
    retrieved: list[str]
    expected: list[str]
    missing: list[str]


@dataclass
class RetrievalEvalResult:
    """Result of retrieval eval for a single golden query."""
    case_id: str
    query: str
    passed: bool
    metrics: RetrievalMetrics


@dataclass
class RetrievalEvalReport:
    """Aggregate retrieval eval results."""
    total_cases: int
    passed_cases: int
    failed_cases: int
    avg_recall: float
    avg_precision: float
    avg_f1: float
    mean_reciprocal_rank: float
    threshold: float
    results: list[RetrievalEvalResult]
    self_retrieval_misses: list[str]

    @property
    def all_passed(self) -> bool:
        return self.failed_cases == 0 and not self.self_retrieval_misses


def calculate_retrieval_metrics(
    retrieved: list[str],
    expected: list[str],
) -> RetrievalMetrics:
    """Compare ranked retrieved titles against the expected set."""
    retrieved_set = set(retrieved)
    expected_set = set(expected)

    if not expected_set:
        # Nothing expected: only an empty answer is right
        perfect = 1.0 if not retrieved_set else 0.0
        return RetrievalMetrics(
            recall=1.0,
            precision=perfect,
            f1_score=perfect,
            reciprocal_rank=perfect,
            retrieved=retrieved,
            expected=expected,
            missing=[],
        )

    overlap = retrieved_set & expected_set
    recall = len(overlap) / len(expected_set)
    precision = len(overlap) / len(retrieved_set) if retrieved_set else 0.0
    f1 = 2 * precision * recall / (precision + recall) if precision + recall > 0 else 0.0

    reciprocal_rank = 0.0
    for rank, title in enumerate(retrieved, start=1):
        if title in expected_set:
            reciprocal_rank = 1.0 / rank
            break

    return RetrievalMetrics(
        recall=recall,
        precision=precision,
        f1_score=f1,
        reciprocal_rank=reciprocal_rank,
        retrieved=retrieved,
        expected=expected,
        missing=[t for t in expected if t not in retrieved_set],
    )


async def check_self_retrieval(
    orchestrator: SearchOrchestrator,
    top_k: int | None = None,
) -> list[str]:
    """
    Titles of corpus entries NOT found in the top-k for their own title.

    A title made only of stop words or single letters has no searchable
    terms, so it is always reported here.
    """
    misses = []
    for doc in orchestrator.state.corpus:
        hits = await orchestrator.search(doc.title, top_k)
        if doc.title not in [hit.document.title for hit in hits]:
            misses.append(doc.title)
    return misses


async def evaluate_retrieval(
    orchestrator: SearchOrchestrator,
    cases: list[GoldenQuery] | None = None,
    threshold: float = DEFAULT_THRESHOLD,
    verbose: bool = False,
) -> RetrievalEvalReport:
    """
    Run golden queries and the self-retrieval check against an orchestrator.

    Args:
        orchestrator: Loaded orchestrator (whatever path it is configured for)
        cases: Golden queries. Defaults to the packaged set.
        threshold: Minimum recall for a query to pass
        verbose: Print progress

    Returns:
        RetrievalEvalReport with per-query metrics
    """
    cases = cases if cases is not None else get_golden_queries()
    results: list[RetrievalEvalResult] = []

    for case in cases:
        if verbose:
            print(f"Running retrieval eval: {case.id}...")

        hits = await orchestrator.search(case.query)
        retrieved = [hit.document.title for hit in hits]
        metrics = calculate_retrieval_metrics(retrieved, list(case.expected_titles))

        results.append(RetrievalEvalResult(
            case_id=case.id,
            query=case.query,
            passed=metrics.recall >= threshold,
            metrics=metrics,
        ))

    misses = await check_self_retrieval(orchestrator)

    if results:
        n = len(results)
        avg_recall = sum(r.metrics.recall for r in results) / n
        avg_precision = sum(r.metrics.precision for r in results) / n
        avg_f1 = sum(r.metrics.f1_score for r in results) / n
        mrr = sum(r.metrics.reciprocal_rank for r in results) / n
        passed = sum(1 for r in results if r.passed)
    else:
        avg_recall = avg_precision = avg_f1 = mrr = 0.0
        passed = 0

    return RetrievalEvalReport(
        total_cases=len(results),
        passed_cases=passed,
        failed_cases=len(results) - passed,
        avg_recall=avg_recall,
        avg_precision=avg_precision,
        avg_f1=avg_f1,
        mean_reciprocal_rank=mrr,
        threshold=threshold,
        results=results,
        self_retrieval_misses=misses,
    )


def run_retrieval_eval(
    orchestrator: SearchOrchestrator | None = None,
    cases: list[GoldenQuery] | None = None,
    threshold: float = DEFAULT_THRESHOLD,
    verbose: bool = False,
) -> RetrievalEvalReport:
    """Synchronous wrapper; defaults to a keyword orchestrator over the packaged corpus."""
    if orchestrator is None:
        from experience_chat.knowledge.seeds import get_experience_documents
        from experience_chat.search.orchestrator import SearchOrchestrator

        orchestrator = SearchOrchestrator.from_corpus(get_experience_documents())

    return asyncio.run(evaluate_retrieval(orchestrator, cases, threshold, verbose))
