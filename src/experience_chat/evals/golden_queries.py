"""
Golden queries for the packaged experience corpus.

Each case pairs recruiter-style phrasing with the entries that must come back.
They lean on synonym expansion on purpose ("gpt" -> llm, "discount" ->
pricing) so tokenizer regressions show up here first.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GoldenQuery:
    """A query and the titles expected in its top-k results."""
    id: str
    query: str
    expected_titles: tuple[str, ...]
    description: str = field(default="", compare=False)


GOLDEN_QUERIES: tuple[GoldenQuery, ...] = (
    GoldenQuery(
        id="llm-001",
        query="Have you built anything with GPT or RAG?",
        expected_titles=("LLM Assistant for Merchandising Teams",),
        description="LLM vocabulary via synonyms",
    ),
    GoldenQuery(
        id="pricing-001",
        query="pricing discount strategy",
        expected_titles=("Pricing Optimization Engine",),
        description="'discount' expands to the pricing group",
    ),
    GoldenQuery(
        id="causal-001",
        query="A/B testing and experiments",
        expected_titles=("Experimentation Platform", "Causal Uplift Modeling for Campaigns"),
        description="'a/b' normalizes to 'ab' and expands to causal",
    ),
    GoldenQuery(
        id="reco-001",
        query="recommendation ranking personalization",
        expected_titles=("Personalized Recommendations",),
    ),
    GoldenQuery(
        id="routing-001",
        query="shuttle routing logistics",
        expected_titles=("Shuttle Routing Optimization",),
    ),
    GoldenQuery(
        id="production-001",
        query="deploying models to production",
        expected_titles=("Production ML Platform",),
    ),
    GoldenQuery(
        id="marketing-001",
        query="marketing campaign budget",
        expected_titles=("Marketing Mix and Channel Attribution",),
    ),
)


def get_golden_queries() -> list[GoldenQuery]:
    return list(GOLDEN_QUERIES)
