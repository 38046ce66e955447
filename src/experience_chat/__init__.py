"""
experience-chat: answers questions about a small corpus of professional
experience, ranking entries with TF-IDF cosine similarity and, when an
embedding service is available, with model embeddings.
"""

__version__ = "0.1.0"
