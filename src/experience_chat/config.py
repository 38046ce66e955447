"""
Chat configuration

Loads retrieval, embedding and tracing settings from environment variables.
The CLI loads a .env file first, so everything here can live there too.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

ENV_PREFIX = "EXPERIENCE_CHAT_"

EMBEDDING_BACKENDS = ("none", "openai", "mock")


def _env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    try:
        return int(_env(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        value = float(_env(name, str(default)))
    except ValueError:
        return default
    return value if math.isfinite(value) else default


@dataclass
class ChatConfig:
    """Configuration for the experience chatbot.

    Environment Variables:
        EXPERIENCE_CHAT_KB_PATH: Knowledge base JSON file or http(s) URL
            (default: packaged sample corpus)
        EXPERIENCE_CHAT_TOP_K: Results per answer (default: 3)
        EXPERIENCE_CHAT_MIN_SCORE: Results must score strictly above this (default: 0.0)
        EXPERIENCE_CHAT_EMBEDDING_BACKEND: none | openai | mock (default: none)
        EXPERIENCE_CHAT_EMBEDDING_MODEL: Model name for the openai backend
        EXPERIENCE_CHAT_FETCH_TIMEOUT: Seconds to wait for a remote knowledge base
        EXPERIENCE_CHAT_TRACING_ENABLED: Export OpenTelemetry spans (default: false)
        EXPERIENCE_CHAT_OTLP_ENDPOINT: OTLP/HTTP endpoint (console exporter if empty)
        EXPERIENCE_CHAT_LOG_LEVEL: Root log level for the CLI (default: WARNING)
    """

    kb_path: str | None = None
    top_k: int = 3
    min_score: float = 0.0
    embedding_backend: str = "none"
    embedding_model: str = "text-embedding-3-small"
    fetch_timeout: float = 10.0
    tracing_enabled: bool = False
    otlp_endpoint: str | None = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.top_k = max(1, self.top_k)
        if not math.isfinite(self.min_score):
            raise ValueError(f"min_score must be a finite number, got {self.min_score}")
        self.embedding_backend = self.embedding_backend.lower()
        if self.embedding_backend not in EMBEDDING_BACKENDS:
            raise ValueError(
                f"Unknown embedding backend {self.embedding_backend!r}; "
                f"expected one of {', '.join(EMBEDDING_BACKENDS)}"
            )

    @property
    def model_enabled(self) -> bool:
        return self.embedding_backend != "none"

    @classmethod
    def from_env(cls) -> "ChatConfig":
        """Load config from environment variables."""
        return cls(
            kb_path=_env("KB_PATH") or None,
            top_k=_env_int("TOP_K", 3),
            min_score=_env_float("MIN_SCORE", 0.0),
            embedding_backend=_env("EMBEDDING_BACKEND", "none"),
            embedding_model=_env("EMBEDDING_MODEL", "text-embedding-3-small"),
            fetch_timeout=_env_float("FETCH_TIMEOUT", 10.0),
            tracing_enabled=_env_bool("TRACING_ENABLED"),
            otlp_endpoint=_env("OTLP_ENDPOINT") or None,
            log_level=_env("LOG_LEVEL", "WARNING").upper(),
        )


# Global config singleton
_config: ChatConfig | None = None


def get_config() -> ChatConfig:
    """Get the global chat config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = ChatConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
