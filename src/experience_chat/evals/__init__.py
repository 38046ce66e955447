"""
Evals module - retrieval quality gate for the experience corpus.

Example:
    from experience_chat.evals import run_retrieval_eval

    report = run_retrieval_eval()
    assert report.all_passed
"""

from experience_chat.evals.golden_queries import (
    GOLDEN_QUERIES,
    GoldenQuery,
    get_golden_queries,
)
from experience_chat.evals.retrieval_eval import (
    DEFAULT_THRESHOLD,
    RetrievalEvalReport,
    RetrievalEvalResult,
    RetrievalMetrics,
    calculate_retrieval_metrics,
    check_self_retrieval,
    evaluate_retrieval,
    run_retrieval_eval,
)

__all__ = [
    # Golden set
    "GoldenQuery",
    "GOLDEN_QUERIES",
    "get_golden_queries",
    # Eval
    "DEFAULT_THRESHOLD",
    "RetrievalMetrics",
    "RetrievalEvalResult",
    "RetrievalEvalReport",
    "calculate_retrieval_metrics",
    "check_self_retrieval",
    "evaluate_retrieval",
    "run_retrieval_eval",
]
