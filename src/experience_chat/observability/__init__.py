"""
Observability Module - OpenTelemetry tracing for searches.

USAGE:
------
# At application startup:
from experience_chat.observability import init_tracing

init_tracing()  # Installs an SDK provider if EXPERIENCE_CHAT_TRACING_ENABLED=true

# In code that needs tracing:
from experience_chat.observability import get_tracer

tracer = get_tracer()
with tracer.start_as_current_span("my_operation", attributes={"key": "value"}) as span:
    span.set_attribute("result", "success")
"""

from experience_chat.observability.attributes import (
    KB_DOCUMENT_COUNT,
    KB_SOURCE,
    SEARCH_FALLBACK,
    SEARCH_MIN_SCORE,
    SEARCH_MODEL_STATUS,
    SEARCH_PATH,
    SEARCH_RESULT_COUNT,
    SEARCH_TOP_K,
    SEARCH_TOP_SCORE,
    search_attributes,
)
from experience_chat.observability.tracing import (
    get_tracer,
    init_tracing,
    shutdown_tracing,
)

__all__ = [
    # Setup
    "init_tracing",
    "shutdown_tracing",
    "get_tracer",
    # Attributes - Search
    "SEARCH_PATH",
    "SEARCH_FALLBACK",
    "SEARCH_TOP_K",
    "SEARCH_MIN_SCORE",
    "SEARCH_RESULT_COUNT",
    "SEARCH_TOP_SCORE",
    "SEARCH_MODEL_STATUS",
    # Attributes - Knowledge base
    "KB_DOCUMENT_COUNT",
    "KB_SOURCE",
    # Helpers
    "search_attributes",
]
