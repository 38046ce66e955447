"""
Unit Tests for the Tokenizer

Covers normalization, stop words, short-token filtering and synonym
expansion. The tokenizer is pure, so every test is a direct call.
"""

import pytest

from experience_chat.retrieval.tokenizer import (
    STOP_WORDS,
    SYNONYMS,
    expand_synonyms,
    normalize_text,
    tokenize,
)


# ---------------------------------------------------------------------------
# BASIC SPLITTING
# ---------------------------------------------------------------------------


class TestBasicTokenization:
    """Lowercasing, punctuation and filtering."""

    def test_lowercases_and_splits(self):
        assert tokenize("Dynamic Engine") == ["dynamic", "engine"]

    def test_punctuation_becomes_whitespace(self):
        assert tokenize("engine,optimizer;solver!") == ["engine", "optimizer", "solver"]

    def test_drops_single_character_tokens(self):
        assert tokenize("x y z engine") == ["engine"]

    def test_drops_stop_words(self):
        assert tokenize("the engine of the future") == ["engine", "future"]

    def test_keeps_digits(self):
        assert tokenize("40k products in 2023") == ["40k", "products", "2023"]

    @pytest.mark.parametrize("text", ["", None, "   ", "?!...", "the and of to"])
    def test_degenerate_input_yields_no_tokens(self, text):
        assert tokenize(text) == []

    def test_stop_words_are_lowercase(self):
        assert all(word == word.lower() for word in STOP_WORDS)


# ---------------------------------------------------------------------------
# NORMALIZATION
# ---------------------------------------------------------------------------


class TestNormalization:
    """Acronym variants collapse before punctuation is stripped."""

    def test_a_slash_b_survives_as_ab(self):
        assert normalize_text("An A/B test") == "an ab test"
        assert "ab" in tokenize("An A/B test")

    def test_spaced_a_slash_b(self):
        assert "ab" in tokenize("a / b experiments")

    def test_plural_acronyms_become_singular(self):
        tokens = tokenize("LLMs and APIs and KPIs")
        assert "llm" in tokens
        assert "api" in tokens
        assert "kpi" in tokens
        assert "llms" not in tokens

    def test_does_not_touch_longer_words(self):
        assert normalize_text("recsys") == "recsys"


# ---------------------------------------------------------------------------
# SYNONYM EXPANSION
# ---------------------------------------------------------------------------


class TestSynonymExpansion:
    """Each member of a group also emits the group key."""

    def test_gpt_adds_llm(self):
        tokens = tokenize("gpt")
        assert "gpt" in tokens
        assert "llm" in tokens

    @pytest.mark.parametrize("key,members", list(SYNONYMS.items()))
    def test_every_member_emits_its_key(self, key, members):
        for member in members:
            assert key in tokenize(member), f"{member!r} should expand to {key!r}"

    def test_key_follows_its_token(self):
        assert tokenize("discount strategy") == ["discount", "pricing", "strategy"]

    def test_key_member_is_counted_twice(self):
        assert tokenize("pricing") == ["pricing", "pricing"]

    def test_unknown_tokens_are_not_expanded(self):
        assert expand_synonyms(["engine"]) == ["engine"]

    def test_a_slash_b_reaches_causal_group(self):
        assert "causal" in tokenize("Ran an A/B test")
