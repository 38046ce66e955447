"""
Knowledge base loading.

The corpus is a single JSON array of experience records, read once at startup
from a local file or an http(s) URL. Every failure (network, filesystem,
malformed JSON, schema) surfaces as KnowledgeBaseError so callers have one
thing to catch.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import requests
from pydantic import TypeAdapter, ValidationError

from experience_chat.knowledge.document import Document

logger = logging.getLogger(__name__)

_CORPUS_ADAPTER = TypeAdapter(list[Document])


class KnowledgeBaseError(Exception):
    """The knowledge base could not be fetched or parsed."""


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_source(source: str | Path, timeout: float) -> str:
    source_str = str(source)
    if _is_url(source_str):
        try:
            response = requests.get(source_str, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise KnowledgeBaseError(f"Failed to fetch knowledge base from {source_str}: {e}") from e
        return response.text

    try:
        return Path(source_str).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise KnowledgeBaseError(f"Failed to read knowledge base {source_str}: {e}") from e


def parse_knowledge_base(raw: str | bytes) -> list[Document]:
    """Validate a JSON array of records into Documents, preserving order."""
    try:
        return _CORPUS_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise KnowledgeBaseError(f"Invalid knowledge base: {e.error_count()} error(s)\n{e}") from e


def load_knowledge_base(source: str | Path, timeout: float = 10.0) -> list[Document]:
    """
    Load the corpus from a file path or http(s) URL.

    Args:
        source: Local path or URL of the JSON array
        timeout: Network timeout in seconds (URLs only)

    Returns:
        Documents in source order

    Raises:
        KnowledgeBaseError: on any fetch or parse failure
    """
    documents = parse_knowledge_base(_read_source(source, timeout))
    logger.info(f"Loaded {len(documents)} knowledge base entries from {source}")
    return documents


async def aload_knowledge_base(source: str | Path, timeout: float = 10.0) -> list[Document]:
    """Async variant of load_knowledge_base; the blocking read runs off the event loop."""
    return await asyncio.to_thread(load_knowledge_base, source, timeout)
