"""
Sample experience knowledge base.

Used when no knowledge-base file is configured, and as the corpus for the
retrieval eval golden queries. In a real deployment the entries come from a
kb.json maintained next to the site.
"""

from __future__ import annotations

from experience_chat.knowledge.document import Document


def get_experience_documents() -> list[Document]:
    """Get the packaged sample corpus, in a fixed order."""
    return [
        Document(
            title="LLM Assistant for Merchandising Teams",
            area="LLMs",
            tags=("gpt", "rag", "agent", "mcp", "prompt engineering"),
            summary="Built a retrieval-augmented GPT assistant that answers merchandising questions from internal docs.",
            details="Designed the RAG pipeline, evaluation harness and tool-calling agent; cut analyst lookup time by 60%.",
            company="Retail Co",
        ),
        Document(
            title="Pricing Optimization Engine",
            area="Pricing",
            tags=("pricing", "elasticity", "promotion", "optimization"),
            summary="Dynamic pricing engine that sets daily prices and promotion depth across 40k products.",
            details="Demand elasticity models feed a constrained optimizer; margin improved 3% while holding volume.",
            company="Retail Co",
        ),
        Document(
            title="Causal Uplift Modeling for Campaigns",
            area="Causal Inference",
            tags=("uplift", "counterfactual", "a/b testing", "bsts"),
            summary="Uplift models that target customers who respond to a campaign rather than those who buy anyway.",
            details="Combined A/B experiment readouts with BSTS counterfactuals to measure incremental revenue per channel.",
            company="Marketplace Inc",
        ),
        Document(
            title="Experimentation Platform",
            area="Experimentation",
            tags=("experiment", "ab", "variance reduction", "cuped"),
            summary="Self-serve experimentation platform running hundreds of A/B tests per quarter.",
            details="Introduced CUPED variance reduction and sequential testing guardrails for product teams.",
            company="Marketplace Inc",
        ),
        Document(
            title="Personalized Recommendations",
            area="Recommendations",
            tags=("recommendation", "ranking", "personalization", "embeddings"),
            summary="Two-tower retrieval and learning-to-rank model for homepage personalization.",
            details="Served candidates from an approximate nearest neighbour index; lifted click-through by 8%.",
            company="Streaming Ltd",
        ),
        Document(
            title="Shuttle Routing Optimization",
            area="Routing",
            tags=("logistics", "route", "vehicle routing", "shuttle"),
            summary="Route planner for employee shuttles that balances ride time against fleet cost.",
            details="Solved a capacitated vehicle routing problem nightly with live traffic estimates.",
            company="Mobility Co",
        ),
        Document(
            title="Production ML Platform",
            area="MLOps",
            tags=("deployment", "pipeline", "monitoring", "feature store"),
            summary="Standardized how models are trained, deployed and monitored in production.",
            details="Built CI/CD for models, a shared feature store and drift monitoring used by twelve teams.",
            company="Streaming Ltd",
        ),
        Document(
            title="Marketing Mix and Channel Attribution",
            area="Marketing",
            tags=("marketing", "channel", "attribution", "crm"),
            summary="Marketing mix model allocating budget across paid, CRM and organic channels.",
            details="Bayesian media mix model with adstock and saturation curves, refreshed weekly for finance.",
            company="Marketplace Inc",
        ),
        Document(
            title="Profile",
            area="General",
            tags=("background", "education", "hobbies"),
            summary="Ten years deploying ML systems; Master's in Data Science from USF.",
            details="Enjoys cooking, reading and travelling.",
        ),
    ]
