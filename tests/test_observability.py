"""
Unit Tests for Observability

Tests tracing setup and the span attribute helpers. The global tracer
provider is never replaced for real; set_tracer_provider is patched.
"""

from unittest.mock import patch

import pytest
from opentelemetry import trace

from experience_chat.config import ChatConfig
from experience_chat.observability import (
    SEARCH_FALLBACK,
    SEARCH_PATH,
    SEARCH_RESULT_COUNT,
    SEARCH_TOP_SCORE,
    get_tracer,
    init_tracing,
    search_attributes,
    shutdown_tracing,
)
from experience_chat.observability import tracing


@pytest.fixture(autouse=True)
def _reset_tracing_flag(monkeypatch):
    monkeypatch.setattr(tracing, "_tracing_initialized", False)


# ---------------------------------------------------------------------------
# SETUP
# ---------------------------------------------------------------------------


class TestInitTracing:
    """Provider installation."""

    def test_disabled_returns_false(self):
        with patch.object(tracing.trace, "set_tracer_provider") as set_provider:
            assert init_tracing(ChatConfig(tracing_enabled=False)) is False

        set_provider.assert_not_called()

    def test_enabled_installs_console_provider(self):
        with patch.object(tracing.trace, "set_tracer_provider") as set_provider:
            assert init_tracing(ChatConfig(tracing_enabled=True)) is True

        (provider,), _ = set_provider.call_args
        assert provider.resource.attributes["service.name"] == tracing.SERVICE_NAME

    def test_second_call_is_noop(self):
        with patch.object(tracing.trace, "set_tracer_provider") as set_provider:
            init_tracing(ChatConfig(tracing_enabled=True))
            assert init_tracing(ChatConfig(tracing_enabled=True)) is True

        set_provider.assert_called_once()

    def test_setup_failure_returns_false(self):
        with patch.object(tracing.trace, "set_tracer_provider", side_effect=RuntimeError("boom")):
            assert init_tracing(ChatConfig(tracing_enabled=True)) is False

        assert tracing._tracing_initialized is False

    def test_shutdown_without_init_is_safe(self):
        shutdown_tracing()

    def test_shutdown_flushes_provider(self):
        with patch.object(tracing.trace, "set_tracer_provider"):
            init_tracing(ChatConfig(tracing_enabled=True))

        with patch.object(tracing.trace, "get_tracer_provider") as get_provider:
            shutdown_tracing()

        get_provider.return_value.shutdown.assert_called_once()
        assert tracing._tracing_initialized is False

    def test_get_tracer(self):
        assert isinstance(get_tracer(), trace.Tracer)


# ---------------------------------------------------------------------------
# ATTRIBUTES
# ---------------------------------------------------------------------------


class TestSearchAttributes:
    """Attributes recorded on the search span."""

    def test_with_results(self):
        attrs = search_attributes(path="model", fallback=False, result_count=2, top_score=0.8)

        assert attrs == {
            SEARCH_PATH: "model",
            SEARCH_FALLBACK: False,
            SEARCH_RESULT_COUNT: 2,
            SEARCH_TOP_SCORE: 0.8,
        }

    def test_without_results_omits_top_score(self):
        attrs = search_attributes(path="none", fallback=False, result_count=0)

        assert SEARCH_TOP_SCORE not in attrs
