"""
Knowledge module - the experience corpus.

This module provides:
- Document: one experience entry
- load_knowledge_base() / aload_knowledge_base(): JSON loading from file or URL
- get_experience_documents(): packaged sample corpus
"""

from experience_chat.knowledge.document import Document
from experience_chat.knowledge.loader import (
    KnowledgeBaseError,
    aload_knowledge_base,
    load_knowledge_base,
    parse_knowledge_base,
)
from experience_chat.knowledge.seeds import get_experience_documents

__all__ = [
    # Document
    "Document",
    # Loading
    "KnowledgeBaseError",
    "load_knowledge_base",
    "aload_knowledge_base",
    "parse_knowledge_base",
    # Seeds
    "get_experience_documents",
]
