"""
OpenTelemetry tracing setup.

Code that wants spans calls get_tracer() and uses the OpenTelemetry API
directly. Until init_tracing() installs an SDK provider, the API hands out
non-recording spans, so instrumented code costs nothing when tracing is off.
"""

from __future__ import annotations

import logging

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from experience_chat.config import ChatConfig, get_config

logger = logging.getLogger(__name__)

SERVICE_NAME = "experience-chat"
INSTRUMENTATION_NAME = "experience_chat"

_tracing_initialized = False


def init_tracing(config: ChatConfig | None = None) -> bool:
    """
    Install a global TracerProvider when tracing is enabled.

    Spans go to the OTLP/HTTP endpoint if one is configured, otherwise to
    the console. Safe to call more than once.

    Returns:
        True if tracing is active, False if disabled or setup failed
    """
    global _tracing_initialized
    if _tracing_initialized:
        return True

    config = config or get_config()

    if not config.tracing_enabled:
        logger.debug("Tracing disabled")
        return False

    try:
        if config.otlp_endpoint:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

            exporter = OTLPSpanExporter(endpoint=config.otlp_endpoint)
            logger.info(f"Exporting spans to {config.otlp_endpoint}")
        else:
            exporter = ConsoleSpanExporter()

        provider = TracerProvider(resource=Resource.create({"service.name": SERVICE_NAME}))
        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
    except Exception as e:
        logger.error(f"Failed to initialize tracing: {e}")
        return False

    _tracing_initialized = True
    return True


def get_tracer() -> trace.Tracer:
    """Tracer for this package (non-recording until init_tracing runs)."""
    return trace.get_tracer(INSTRUMENTATION_NAME)


def shutdown_tracing() -> None:
    """Flush and shut down the provider installed by init_tracing()."""
    global _tracing_initialized

    if not _tracing_initialized:
        return

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        try:
            provider.shutdown()
        except Exception as e:
            logger.warning(f"Error shutting down tracing: {e}")

    _tracing_initialized = False
