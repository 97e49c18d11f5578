"""
FAQ RAG — extract question/answer pairs from documents and serve them
from a vector store.

Sub-packages
------------
- :mod:`faq_rag.extraction` — text → FAQ records (three-tier parsers).
- :mod:`faq_rag.ingestion` — document loading and batched store ingestion.
- :mod:`faq_rag.retrieval` — vector-store backends and FAQ search.
- :mod:`faq_rag.serving` — FastAPI application.
"""

__version__ = "0.1.0"
