"""
Seed data for the knowledge base.

Keeps the sample corpus out of the retrieval code so tests and the eval
gate can run against a known, fixed set of entries.
"""

from experience_chat.knowledge.seeds.experience import get_experience_documents

__all__ = ["get_experience_documents"]
