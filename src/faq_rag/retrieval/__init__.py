"""
Retrieval — FAQ storage backends and nearest-neighbour search.

This module wraps the vector store behind a clean interface so that
the rest of the system never needs to know which DB is backing it.

Public surface
--------------
- :class:`FAQRetriever` — search entry point.
- :class:`FAQStoreBase` — abstract backend (subclass for Weaviate, etc.).
- :class:`ChromaFAQStore` — default Chroma backend.
- :class:`SearchHit` — result model.
"""

from faq_rag.retrieval.base import FAQStoreBase
from faq_rag.retrieval.models import SearchHit
from faq_rag.retrieval.retriever import FAQRetriever

__all__ = [
    "ChromaFAQStore",
    "FAQRetriever",
    "FAQStoreBase",
    "SearchHit",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaFAQStore to avoid pulling in chromadb at import time."""
    if name == "ChromaFAQStore":
        from faq_rag.retrieval.chroma_store import ChromaFAQStore

        return ChromaFAQStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
