"""
Unit Tests for ChatConfig

Environment parsing, defaults, validation and the global singleton.
"""

import pytest

from experience_chat.config import ChatConfig, get_config, reset_config


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every EXPERIENCE_CHAT_ variable from the environment."""
    import os

    for name in list(os.environ):
        if name.startswith("EXPERIENCE_CHAT_"):
            monkeypatch.delenv(name)
    return monkeypatch


class TestDefaults:
    """Config with nothing set."""

    def test_defaults(self, clean_env):
        config = ChatConfig.from_env()

        assert config.kb_path is None
        assert config.top_k == 3
        assert config.min_score == 0.0
        assert config.embedding_backend == "none"
        assert not config.model_enabled
        assert not config.tracing_enabled
        assert config.log_level == "WARNING"


class TestFromEnv:
    """Environment variable parsing."""

    def test_reads_all_variables(self, clean_env):
        clean_env.setenv("EXPERIENCE_CHAT_KB_PATH", "https://example.com/kb.json")
        clean_env.setenv("EXPERIENCE_CHAT_TOP_K", "5")
        clean_env.setenv("EXPERIENCE_CHAT_MIN_SCORE", "0.2")
        clean_env.setenv("EXPERIENCE_CHAT_EMBEDDING_BACKEND", "OpenAI")
        clean_env.setenv("EXPERIENCE_CHAT_EMBEDDING_MODEL", "text-embedding-3-large")
        clean_env.setenv("EXPERIENCE_CHAT_FETCH_TIMEOUT", "2.5")
        clean_env.setenv("EXPERIENCE_CHAT_TRACING_ENABLED", "yes")
        clean_env.setenv("EXPERIENCE_CHAT_OTLP_ENDPOINT", "http://localhost:4318/v1/traces")
        clean_env.setenv("EXPERIENCE_CHAT_LOG_LEVEL", "debug")

        config = ChatConfig.from_env()

        assert config.kb_path == "https://example.com/kb.json"
        assert config.top_k == 5
        assert config.min_score == pytest.approx(0.2)
        assert config.embedding_backend == "openai"
        assert config.model_enabled
        assert config.embedding_model == "text-embedding-3-large"
        assert config.fetch_timeout == pytest.approx(2.5)
        assert config.tracing_enabled
        assert config.otlp_endpoint == "http://localhost:4318/v1/traces"
        assert config.log_level == "DEBUG"

    def test_invalid_numbers_fall_back_to_defaults(self, clean_env):
        clean_env.setenv("EXPERIENCE_CHAT_TOP_K", "many")
        clean_env.setenv("EXPERIENCE_CHAT_MIN_SCORE", "high")

        config = ChatConfig.from_env()

        assert config.top_k == 3
        assert config.min_score == 0.0

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
    def test_non_finite_min_score_falls_back(self, clean_env, raw):
        clean_env.setenv("EXPERIENCE_CHAT_MIN_SCORE", raw)

        assert ChatConfig.from_env().min_score == 0.0

    def test_empty_kb_path_means_sample_corpus(self, clean_env):
        clean_env.setenv("EXPERIENCE_CHAT_KB_PATH", "")

        assert ChatConfig.from_env().kb_path is None

    @pytest.mark.parametrize("raw", ["false", "0", "no", "off"])
    def test_falsy_tracing_values(self, clean_env, raw):
        clean_env.setenv("EXPERIENCE_CHAT_TRACING_ENABLED", raw)

        assert not ChatConfig.from_env().tracing_enabled


class TestValidation:
    """Values fixed up or rejected on construction."""

    def test_top_k_is_at_least_one(self):
        assert ChatConfig(top_k=0).top_k == 1
        assert ChatConfig(top_k=-4).top_k == 1

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError, match="Unknown embedding backend"):
            ChatConfig(embedding_backend="word2vec")

    def test_non_finite_min_score_rejected(self):
        with pytest.raises(ValueError, match="min_score"):
            ChatConfig(min_score=float("nan"))

    def test_unknown_backend_from_env_rejected(self, clean_env):
        clean_env.setenv("EXPERIENCE_CHAT_EMBEDDING_BACKEND", "bogus")

        with pytest.raises(ValueError):
            ChatConfig.from_env()

    def test_mock_backend_enables_model(self):
        assert ChatConfig(embedding_backend="mock").model_enabled


class TestGlobalConfig:
    """Lazy singleton."""

    def test_get_config_is_cached(self, clean_env):
        assert get_config() is get_config()

    def test_reset_config_reloads(self, clean_env):
        first = get_config()
        clean_env.setenv("EXPERIENCE_CHAT_TOP_K", "7")

        reset_config()

        assert get_config() is not first
        assert get_config().top_k == 7
