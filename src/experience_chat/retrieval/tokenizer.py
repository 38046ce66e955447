"""
Tokenizer - turns free text into significant, synonym-expanded terms.

Pipeline: lowercase -> acronym normalization -> strip non [a-z0-9] ->
split -> drop short tokens and stop words -> synonym expansion.

Synonym expansion appends the group key after every token that belongs to a
group, so recruiter phrasing ("gpt", "a/b test", "discount") lands on the
same terms the corpus uses ("llm", "causal", "pricing"). Order does not
matter downstream; only term counts do.
"""

from __future__ import annotations

import re

STOP_WORDS = frozenset(
    "a,an,the,and,or,of,in,on,for,to,with,without,by,at,from,as,that,this,is,are,"
    "was,were,be,been,has,have,had,do,does,did,not,if,but,then,so,than,it,its,into,"
    "over,per,via,about,your,my,our,their,them,they,you,we,i".split(",")
)

SYNONYMS: dict[str, tuple[str, ...]] = {
    "llm": ("llm", "language", "gpt", "foundation", "large", "rag", "agent", "mcp"),
    "causal": ("causal", "uplift", "counterfactual", "bsts", "experiment", "ab", "experimentation"),
    "production": ("production", "prod", "deploy", "deployment", "pipeline", "mle", "mlops"),
    "recommendation": ("reco", "recommendation", "personalization", "ranking"),
    "pricing": ("pricing", "promotion", "discount", "price"),
    "marketing": ("marketing", "channel", "campaign", "crm"),
    "routing": ("route", "routing", "logistics", "path", "shuttle"),
}

# Applied before punctuation stripping; "a/b" would otherwise split into two
# single-letter tokens and vanish.
_NORMALIZATIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\ba\s*/\s*b\b"), "ab"),
    (re.compile(r"\bllms\b"), "llm"),
    (re.compile(r"\bgpts\b"), "gpt"),
    (re.compile(r"\bapis\b"), "api"),
    (re.compile(r"\bkpis\b"), "kpi"),
    (re.compile(r"\bmcps\b"), "mcp"),
    (re.compile(r"\brecs\b"), "reco"),
)

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")

_GROUP_KEYS: dict[str, tuple[str, ...]] = {}
for _key, _members in SYNONYMS.items():
    for _member in _members:
        _GROUP_KEYS[_member] = _GROUP_KEYS.get(_member, ()) + (_key,)


def normalize_text(text: str | None) -> str:
    """Lowercase and collapse known acronym variants to their canonical form."""
    normalized = (text or "").lower()
    for pattern, replacement in _NORMALIZATIONS:
        normalized = pattern.sub(replacement, normalized)
    return normalized


def expand_synonyms(tokens: list[str]) -> list[str]:
    """Append each token's synonym-group keys right after it."""
    expanded: list[str] = []
    for token in tokens:
        expanded.append(token)
        expanded.extend(_GROUP_KEYS.get(token, ()))
    return expanded


def tokenize(text: str | None) -> list[str]:
    """
    Split text into significant terms with synonym keys added.

    Examples:
        >>> tokenize("The GPT agents")
        ['gpt', 'llm', 'agents']
        >>> tokenize("Ran an A/B test")
        ['ran', 'ab', 'causal', 'test']
    """
    cleaned = _NON_ALNUM.sub(" ", normalize_text(text))
    tokens = [t for t in cleaned.split() if len(t) > 1 and t not in STOP_WORDS]
    return expand_synonyms(tokens)
